# smallfsm/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from smallfsm.core.errors import NotifierClosedError
from smallfsm.runtime.notifier import TransitionNotifier

_log = logging.getLogger(__name__)

_CLOSED = object()


class AsyncTransitionStream:
    """
    Asynchronous view of a TransitionNotifier for asyncio applications.

    The stream subscribes on creation and forwards each event from the
    dispatcher thread into an asyncio queue owned by ``loop``. Consume it with
    ``async for`` or ``await stream.get()``. Iteration stops after the stream is
    closed, either by ``aclose`` or by closing the notifier, and every event
    received before that has been consumed.
    """

    def __init__(self, notifier: TransitionNotifier, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        :param notifier: The notifier to subscribe to.
        :param loop: Event loop that receives the events; defaults to the running loop.
        """
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._subscription = notifier.subscribe(self._forward, on_cancel=self._signal_closed)

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    def _put(self, item: Any) -> None:
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            # Event loop already closed; nobody is left to consume.
            _log.debug("Dropping %r, event loop is closed", item)

    def _forward(self, event: Any) -> None:
        self._put(event)

    def _signal_closed(self) -> None:
        self._put(_CLOSED)

    async def get(self) -> Any:
        """
        Wait for the next transition event.

        :raises NotifierClosedError: If the stream is closed and drained.
        """
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the marker for any other waiter.
            self._queue.put_nowait(_CLOSED)
            raise NotifierClosedError("Transition stream is closed")
        return item

    async def aclose(self) -> None:
        """Stop receiving events. Events already received can still be consumed."""
        self._subscription.cancel()

    def __aiter__(self) -> "AsyncTransitionStream":
        return self

    async def __anext__(self) -> Any:
        try:
            return await self.get()
        except NotifierClosedError:
            raise StopAsyncIteration

    async def __aenter__(self) -> "AsyncTransitionStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
