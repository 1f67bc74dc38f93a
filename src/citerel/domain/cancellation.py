"""Cooperative cancellation for relation fetches."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any

from .errors import FetchCancelled

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

log = getLogger(__name__)


class CancellationToken:
    """One-shot cancellation signal handed to a fetch by the coordinator.

    Tokens belong to the event loop thread: ``cancel`` must be called from the
    loop that runs the fetch. Cancelling is idempotent.
    """

    __slots__ = ("_callbacks", "_event")

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._callbacks: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """Signal cancellation; returns ``False`` if the token was already cancelled."""

        if self._event.is_set():
            return False
        self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                log.exception("Cancellation callback %r failed", callback)
        return True

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation, immediately if already cancelled."""

        if self._event.is_set():
            callback()
            return
        self._callbacks.append(callback)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise FetchCancelled("Fetch cancelled")

    async def wait(self) -> None:
        await self._event.wait()

    async def guard[T](self, work: Coroutine[Any, Any, T]) -> T:
        """Await ``work`` unless the token is cancelled first.

        On cancellation the inner task is cancelled and awaited before
        ``FetchCancelled`` is raised, so nothing keeps running behind the caller.
        """

        if self._event.is_set():
            work.close()
            raise FetchCancelled("Fetch cancelled before it started")

        task = asyncio.ensure_future(work)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            waiter.cancel()
            await _unwind(task)
            raise
        finally:
            waiter.cancel()

        if self._event.is_set():
            await _unwind(task)
            raise FetchCancelled("Fetch cancelled while in flight")
        return task.result()


async def _unwind(task: asyncio.Future[Any]) -> None:
    """Cancel ``task`` and wait until it has finished its own cleanup.

    Further cancellation of the caller is held back until then; the caller
    re-raises once the task is done.
    """

    task.cancel()
    while not task.done():
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            continue
    if not task.cancelled() and task.exception() is not None:
        log.debug("Guarded work failed while unwinding", exc_info=task.exception())
