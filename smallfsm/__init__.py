"""smallfsm: explicit, event-driven finite state machines over enums

This package provides a small finite state machine engine intended to be
embedded in application code.

Responsibilities:
    - Immutable transition tables with guarded alternatives
    - Synchronous, ordered transition side effects
    - Asynchronous broadcast of completed transitions

Interactions:
    - Client code through public API
    - Logging system through a one-method logger capability
    - Operating system threads for notification dispatch

Cross-cutting Concerns:
    Thread Safety:
        - fire() is serialized per machine instance
        - Listeners run on a dedicated dispatcher thread

    Error Handling:
        - "No transition" is a False return, not an exception
        - Errors from caller code propagate without rollback
"""

from smallfsm.core import (
    FSM,
    ConfigurationError,
    FSMError,
    MachineClosedError,
    NotifierClosedError,
    StateMachine,
    Transition,
    TransitionEvent,
    TransitionTable,
    Tx,
)
from smallfsm.interfaces import StateMachineLogger
from smallfsm.plugins import LoggingTransitionLogger
from smallfsm.runtime import AsyncTransitionStream, Subscription, TransitionNotifier

__version__ = "0.1.0"

__all__ = [
    "FSM",
    "StateMachine",
    "Transition",
    "Tx",
    "TransitionTable",
    "TransitionEvent",
    "StateMachineLogger",
    "LoggingTransitionLogger",
    "TransitionNotifier",
    "Subscription",
    "AsyncTransitionStream",
    "FSMError",
    "ConfigurationError",
    "MachineClosedError",
    "NotifierClosedError",
]
