# smallfsm/interfaces/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Narrow interfaces the engine depends on and callers implement."""

from smallfsm.interfaces.protocols import StateMachineLogger, TransitionListener

__all__ = ["StateMachineLogger", "TransitionListener"]
