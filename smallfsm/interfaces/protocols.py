# smallfsm/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smallfsm.core.events import TransitionEvent


@runtime_checkable
class StateMachineLogger(Protocol):
    """
    Logger capability used by the state machine to report transitions.

    Methods:
        log_transition(event, from_state, to_state): Called once per successful
            transition, before the exit hook runs and before the current state
            changes.

    Runtime Invariants:
    - Labels are stable and distinct for every enumerated value.
    - The call is synchronous; the machine waits for it to return.

    Error Handling:
    - Exceptions raised by an implementation propagate to the caller of
      ``fire`` and abort the transition before any state mutation.
    """

    def log_transition(self, event: str, from_state: str, to_state: str) -> None:
        """Record that ``event`` moved the machine from ``from_state`` to ``to_state``."""
        ...


# Listener invoked with each TransitionEvent emitted by a notifier.
TransitionListener = Callable[["TransitionEvent"], None]
