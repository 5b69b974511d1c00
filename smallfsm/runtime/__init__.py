# smallfsm/runtime/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Runtime support: transition notification, its asyncio adapter and the
locking helpers shared with the engine.
"""

from smallfsm.runtime.async_support import AsyncTransitionStream
from smallfsm.runtime.notifier import Subscription, TransitionNotifier

__all__ = ["AsyncTransitionStream", "Subscription", "TransitionNotifier"]
