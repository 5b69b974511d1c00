# smallfsm/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager


def get_lock() -> threading.Lock:
    """
    Provide a new lock instance to be used for synchronization.
    """
    return threading.Lock()


def get_reentrant_lock() -> threading.RLock:
    """
    Provide a new reentrant lock. The state machine serializes ``fire`` with one
    of these so a hook running on the firing thread may fire again.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock):
    """
    A convenience context manager that acquires the given lock upon entry and
    releases it upon exit, ensuring safe access to shared resources.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
