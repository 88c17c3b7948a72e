"""
Cooperative cancellation for the synchronous console flow.

Network calls are aiohttp coroutines; ``run_sync`` drives each one to
completion in its own event loop while a ``CancellationToken`` lets a Ctrl+C
handler stop whichever call is in flight.
"""

import asyncio
import signal
import threading
from contextlib import contextmanager
from typing import Awaitable, Optional, TypeVar

from .errors import OperationCancelled

T = TypeVar("T")


class CancellationToken:
    def __init__(self):
        self._cancelled = False
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def busy(self) -> bool:
        return self._task is not None

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and self._loop is not None:
            if not self._loop.is_closed():
                self._loop.call_soon_threadsafe(self._task.cancel)

    def bind(self, task: asyncio.Task, loop: asyncio.AbstractEventLoop) -> None:
        self._task = task
        self._loop = loop

    def unbind(self) -> None:
        self._task = None
        self._loop = None

    def _on_interrupt(self, signum, frame):
        self.cancel()
        if not self.busy:
            # nothing to cancel, so unblock whatever prompt is waiting
            raise KeyboardInterrupt

    @contextmanager
    def interrupt_handler(self):
        """Route SIGINT to this token while the block runs."""
        if threading.current_thread() is not threading.main_thread():
            yield self
            return

        previous = signal.signal(signal.SIGINT, self._on_interrupt)
        try:
            yield self
        finally:
            signal.signal(signal.SIGINT, previous)


def run_sync(coro: Awaitable[T], token: CancellationToken) -> T:
    """Run ``coro`` to completion unless ``token`` is cancelled first."""
    if token.cancelled:
        close = getattr(coro, "close", None)
        if close is not None:
            close()
        raise OperationCancelled("Operation cancelled before it started")

    async def _runner():
        token.bind(asyncio.current_task(), asyncio.get_running_loop())
        try:
            return await coro
        finally:
            token.unbind()

    try:
        return asyncio.run(_runner())
    except asyncio.CancelledError as e:
        raise OperationCancelled("Operation cancelled by user") from e
