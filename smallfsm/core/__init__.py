# smallfsm/core/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Core package providing the transition table, the notification record and the
state machine engine.
"""

# Import order matters to avoid circular dependencies
from smallfsm.core.errors import ConfigurationError, FSMError, MachineClosedError, NotifierClosedError
from smallfsm.core.events import TransitionEvent, label_of
from smallfsm.core.transitions import Transition, TransitionTable, Tx
from smallfsm.core.state_machine import FSM, StateMachine

__all__ = [
    # Errors
    "FSMError",
    "ConfigurationError",
    "MachineClosedError",
    "NotifierClosedError",
    # Data model
    "Transition",
    "Tx",
    "TransitionTable",
    "TransitionEvent",
    "label_of",
    # Engine
    "StateMachine",
    "FSM",
]
