# smallfsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Generic, Iterable, Mapping, Optional, TypeVar, Union

from smallfsm.core.errors import ConfigurationError, MachineClosedError
from smallfsm.core.events import TransitionEvent, label_of
from smallfsm.core.transitions import Transition, TransitionTable
from smallfsm.interfaces.protocols import StateMachineLogger, TransitionListener
from smallfsm.runtime.concurrency import get_reentrant_lock, with_lock
from smallfsm.runtime.notifier import Subscription, TransitionNotifier

if TYPE_CHECKING:
    from smallfsm.runtime.async_support import AsyncTransitionStream

_log = logging.getLogger(__name__)

S = TypeVar("S", bound=Enum)
E = TypeVar("E", bound=Enum)

Hook = Callable[[], None]


def _freeze_hooks(hooks: Optional[Mapping[S, Hook]], kind: str) -> Mapping[S, Hook]:
    if hooks is None:
        return MappingProxyType({})
    frozen = dict(hooks)
    for state, hook in frozen.items():
        if not callable(hook):
            raise ConfigurationError(f"{kind} hook for state {state!r} is not callable")
    return MappingProxyType(frozen)


class StateMachine(Generic[S, E]):
    """
    A finite state machine over caller-defined enums of states and events.

    The transition table, the ``on_enter`` / ``on_exit`` hook maps and the
    logger are fixed at construction. The only mutable part is the current
    state, which changes exclusively inside a successful ``fire``. Hooks are
    not run for the initial state.

    Example::

        class State(Enum):
            water = auto()
            ice = auto()

        class Event(Enum):
            freeze = auto()
            melt = auto()

        fsm = StateMachine(
            initial_state=State.water,
            transitions={
                State.water: [Transition(State.ice, Event.freeze)],
                State.ice: [Transition(State.water, Event.melt)],
            },
        )
        fsm.fire(Event.freeze)  # True, fsm.state is State.ice
    """

    def __init__(
        self,
        initial_state: S,
        transitions: Union[TransitionTable[S, E], Mapping[S, Iterable[Transition[S, E]]]],
        on_enter: Optional[Mapping[S, Hook]] = None,
        on_exit: Optional[Mapping[S, Hook]] = None,
        logger: Optional[StateMachineLogger] = None,
    ) -> None:
        """
        :param initial_state: The state in which this machine begins.
        :param transitions: Source state to ordered candidate transitions.
        :param on_enter: Optional hooks run when ``fire`` enters a state.
        :param on_exit: Optional hooks run when ``fire`` leaves a state.
        :param logger: Optional logger capability told about each transition.
        :raises ConfigurationError: If the table or a hook map is malformed.
        """
        if isinstance(transitions, TransitionTable):
            self._transitions = transitions
        else:
            self._transitions = TransitionTable(transitions)
        self._on_enter = _freeze_hooks(on_enter, "on_enter")
        self._on_exit = _freeze_hooks(on_exit, "on_exit")
        if logger is not None and not isinstance(logger, StateMachineLogger):
            raise ConfigurationError("logger must implement log_transition(event, from_state, to_state)")
        self._logger = logger
        self._state = initial_state
        self._lock = get_reentrant_lock()
        self._notifier = TransitionNotifier()
        self._closed = False
        _log.debug("Created state machine in %s with %d source state(s)", initial_state, len(self._transitions))

    @property
    def state(self) -> S:
        """The current state of the machine."""
        return self._state

    @property
    def transitions(self) -> TransitionTable[S, E]:
        """The immutable transition table."""
        return self._transitions

    @property
    def on_transition(self) -> TransitionNotifier:
        """The channel on which a TransitionEvent is emitted after each transition."""
        return self._notifier

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: TransitionListener) -> Subscription:
        """
        Register ``listener`` for transitions completed from now on. Listeners
        run on the notifier's dispatcher thread, after ``fire`` has returned or
        concurrently with the code that follows it.

        :return: A Subscription whose ``cancel()`` removes the listener.
        """
        return self._notifier.subscribe(listener)

    def stream(self) -> "AsyncTransitionStream":
        """
        Return an async iterator of transition events bound to the running loop.
        """
        from smallfsm.runtime.async_support import AsyncTransitionStream

        return AsyncTransitionStream(self._notifier)

    def fire(self, event: E) -> bool:
        """
        Offer ``event`` to the machine and transition if a candidate accepts it.

        The candidates of the current state are scanned in declaration order;
        the first one triggered by ``event`` whose guard does not return
        ``False`` is taken. Taking it runs, in order: the logger, the exit hook
        of the old state, the state change, the enter hook of the new state,
        the transition callback, and the notification.

        Exceptions from guards, hooks, callbacks or the logger propagate to the
        caller. Steps completed before the failure are not rolled back.

        :param event: The event to process.
        :return: True if a transition occurred, False otherwise.
        :raises MachineClosedError: If the machine has been closed.
        """
        with with_lock(self._lock):
            if self._closed:
                raise MachineClosedError(f"Cannot fire {event!r} on a closed state machine")

            previous = self._state
            transition = self._transitions.select(previous, event)
            if transition is None:
                _log.debug("No transition from %s on %s", previous, event)
                return False

            target = transition.state
            if self._logger is not None:
                self._logger.log_transition(label_of(event), label_of(previous), label_of(target))

            exit_hook = self._on_exit.get(previous)
            if exit_hook is not None:
                exit_hook()

            self._state = target

            enter_hook = self._on_enter.get(target)
            if enter_hook is not None:
                enter_hook()

            transition.run_callback()

            if self._closed or self._notifier.closed:
                # Closed by a hook or callback of this transition.
                _log.debug("Machine closed during %s -> %s, notification skipped", previous, target)
                return True

            self._notifier.emit(TransitionEvent(previous, target, event))
            return True

    def close(self) -> None:
        """
        Release the notification channel and every listener subscription.
        Further calls to ``fire`` raise MachineClosedError.
        """
        with with_lock(self._lock):
            if self._closed:
                return
            self._closed = True
        self._notifier.close()

    def __enter__(self) -> "StateMachine[S, E]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state!r})"


# Shorthand version of StateMachine.
FSM = StateMachine
