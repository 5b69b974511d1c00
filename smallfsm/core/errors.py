# smallfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FSMError(Exception):
    """
    Base exception class for errors raised by the state machine library itself.
    Exceptions raised by caller-supplied guards, hooks or callbacks are never
    wrapped in this type.
    """


class ConfigurationError(FSMError):
    """
    Raised when a transition table or hook map is structurally malformed.
    """


class MachineClosedError(FSMError):
    """
    Raised when an event is fired at a state machine that has been closed.
    """


class NotifierClosedError(FSMError):
    """
    Raised when subscribing to, or emitting on, a closed transition notifier.
    """
