# smallfsm/runtime/notifier.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Tuple

from smallfsm.core.errors import NotifierClosedError
from smallfsm.interfaces.protocols import TransitionListener
from smallfsm.runtime.concurrency import get_lock, with_lock

_log = logging.getLogger(__name__)

_STOP = object()


class Subscription:
    """
    Handle for a listener registered on a TransitionNotifier. Cancelling the
    subscription is the only way to stop receiving events; it is safe to call
    more than once and from any thread, including from inside the listener.
    """

    def __init__(
        self,
        notifier: "TransitionNotifier",
        listener: TransitionListener,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        self._notifier = notifier
        self._listener = listener
        self._on_cancel = on_cancel
        self._active = True

    @property
    def listener(self) -> TransitionListener:
        return self._listener

    @property
    def active(self) -> bool:
        """False once the subscription has been cancelled or its notifier closed."""
        return self._active

    def cancel(self) -> None:
        """Remove the listener from its notifier."""
        if self._notifier._discard(self):
            self._deactivate()

    unsubscribe = cancel

    def _deactivate(self) -> None:
        self._active = False
        if self._on_cancel is not None:
            self._on_cancel()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cancel()


class TransitionNotifier:
    """
    Broadcast channel for transition events.

    ``emit`` never calls listeners directly. It snapshots the listeners
    subscribed at that moment and hands the event to a background dispatcher
    thread, which calls each listener in subscription order. Listeners that
    subscribe later never see earlier events. A failing listener is logged and
    skipped; the remaining listeners still receive the event.
    """

    def __init__(self, name: str = "smallfsm-notifier") -> None:
        """
        :param name: Name given to the dispatcher thread.
        """
        self._name = name
        self._lock = get_lock()
        self._ready = threading.Condition(self._lock)
        self._subscriptions: List[Subscription] = []
        self._queue: Deque[Any] = deque()
        self._pending = 0
        self._closed = False
        self._worker: Optional[threading.Thread] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def listener_count(self) -> int:
        with with_lock(self._lock):
            return len(self._subscriptions)

    def subscribe(
        self, listener: TransitionListener, on_cancel: Optional[Callable[[], None]] = None
    ) -> Subscription:
        """
        Register a listener for every event emitted from now on.

        :param listener: Callable receiving a TransitionEvent.
        :param on_cancel: Optional callback run once when the subscription ends,
                          whether cancelled or dropped by ``close``.
        :raises NotifierClosedError: If the notifier has been closed.
        """
        subscription = Subscription(self, listener, on_cancel)
        with with_lock(self._lock):
            if self._closed:
                raise NotifierClosedError("Cannot subscribe to a closed notifier")
            self._subscriptions.append(subscription)
        return subscription

    def _discard(self, subscription: Subscription) -> bool:
        with with_lock(self._lock):
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                return False
            return True

    def emit(self, event: Any) -> None:
        """
        Queue ``event`` for delivery to the listeners currently subscribed.

        :raises NotifierClosedError: If the notifier has been closed.
        """
        with with_lock(self._lock):
            if self._closed:
                raise NotifierClosedError("Cannot emit on a closed notifier")
            targets = tuple(self._subscriptions)
            if not targets:
                return
            self._ensure_worker()
            self._queue.append((event, targets))
            self._pending += 1
            self._ready.notify_all()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every event emitted so far has been delivered.

        :param timeout: Maximum number of seconds to wait, or None to wait forever.
        :return: True if all events were delivered, False on timeout.
        :raises RuntimeError: If called from a listener.
        """
        if threading.current_thread() is self._worker:
            raise RuntimeError("join() cannot be called from a listener")
        with with_lock(self._lock):
            return self._ready.wait_for(lambda: self._pending == 0, timeout)

    def close(self) -> None:
        """
        Stop the dispatcher and drop all subscriptions.

        Events already emitted are delivered first, unless ``close`` is called
        from a listener, in which case events still queued are discarded and
        no longer count towards ``join``.
        """
        with with_lock(self._lock):
            if self._closed:
                return
            self._closed = True
            worker = self._worker
            if worker is not None and worker is threading.current_thread():
                self._pending -= len(self._queue)
                self._queue.clear()
            if worker is not None:
                self._queue.append(_STOP)
                self._ready.notify_all()

        if worker is not None and worker is not threading.current_thread():
            worker.join()

        with with_lock(self._lock):
            dropped = self._subscriptions
            self._subscriptions = []
        for subscription in dropped:
            subscription._deactivate()
        _log.debug("Notifier %s closed, %d subscription(s) dropped", self._name, len(dropped))

    def _ensure_worker(self) -> None:
        # Caller holds self._lock.
        if self._worker is None:
            self._worker = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._worker.start()

    def _next(self) -> Any:
        with with_lock(self._lock):
            self._ready.wait_for(lambda: bool(self._queue))
            return self._queue.popleft()

    def _run(self) -> None:
        while True:
            item = self._next()
            if item is _STOP:
                return
            event, targets = item
            try:
                self._deliver(event, targets)
            finally:
                with with_lock(self._lock):
                    self._pending -= 1
                    self._ready.notify_all()

    def _deliver(self, event: Any, targets: Tuple[Subscription, ...]) -> None:
        for subscription in targets:
            if not subscription.active:
                continue
            try:
                subscription.listener(event)
            except BaseException:
                # Re-raising here would only end the dispatcher thread.
                _log.exception("Transition listener %r failed on %r", subscription.listener, event)
