# smallfsm/plugins/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Adapters implementing the narrow interfaces in :mod:`smallfsm.interfaces`."""

from smallfsm.plugins.logging_logger import LoggingTransitionLogger

__all__ = ["LoggingTransitionLogger"]
