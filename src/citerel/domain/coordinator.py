"""Single-flight fetch coordinator for one pivot entry.

The coordinator owns one slot holding the current fetch cycle. Starting a cycle
(first load or reload) cancels whatever occupied the slot before publishing the
new ``Pending`` state, so observers never see a result of a superseded cycle.

Commands are plain synchronous methods that must be called from the event loop
thread; only the fetch itself runs as a task.
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final, assert_never

from .cancellation import CancellationToken
from .errors import FetchCancelled, FetchError, FetchTimeout
from .results import Cancelled, Failure, NotLoaded, Pending, Success, is_idle

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .results import FetchResult, RelationState

log = getLogger(__name__)

# Fetchers are expected to stop soon after cancellation; one that ignores it
# delays the next cycle by at most this long.
DEFAULT_UNWIND_GRACE_SECONDS: Final[float] = 10.0

type FetchFunction[T] = Callable[[str, CancellationToken], Awaitable[T]]
type StateListener[T] = Callable[[RelationState[T]], None]


@dataclass(slots=True, eq=False)
class _Cycle:
    number: int
    token: CancellationToken = field(default_factory=CancellationToken)
    task: asyncio.Task[None] | None = None
    timer: asyncio.TimerHandle | None = None
    fetching: bool = False
    finished: bool = False


class RelationCoordinator[T]:
    """Owns the fetch lifecycle of one pivot identifier."""

    def __init__(
        self,
        identifier: str | None,
        fetch: FetchFunction[T],
        *,
        timeout_seconds: float | None = None,
        unwind_grace_seconds: float = DEFAULT_UNWIND_GRACE_SECONDS,
        name: str | None = None,
    ) -> None:
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if unwind_grace_seconds <= 0:
            raise ValueError("unwind_grace_seconds must be positive")
        self._identifier = identifier
        self._fetch = fetch
        self._timeout_seconds = timeout_seconds
        self._unwind_grace_seconds = unwind_grace_seconds
        self._name = name or (identifier or "<no identifier>")
        self._state: RelationState[T] = NotLoaded()
        self._current: _Cycle | None = None
        self._cycles_started = 0
        self._listeners: list[StateListener[T]] = []
        self._outbox: deque[RelationState[T]] = deque()
        self._delivering = False

    def __repr__(self) -> str:
        return f"RelationCoordinator({self._name!r}, state={self._state!r})"

    @property
    def identifier(self) -> str | None:
        return self._identifier

    @property
    def can_fetch(self) -> bool:
        return self._identifier is not None

    @property
    def state(self) -> RelationState[T]:
        return self._state

    @property
    def cycles_started(self) -> int:
        return self._cycles_started

    def subscribe(self, listener: StateListener[T]) -> Callable[[], None]:
        """Register ``listener`` for every future state; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load_entries(self) -> bool:
        """Start a cycle unless one is running or already produced a result.

        A completed result stays cached until ``reload_entries``. Returns whether
        a new cycle was started.
        """

        if not self.can_fetch:
            log.debug("Not loading relations for %s: pivot has no identifier", self._name)
            return False
        if not is_idle(self._state):
            return False
        self._start_cycle()
        return True

    def reload_entries(self) -> bool:
        """Discard the current result or in-flight fetch and start over."""

        if not self.can_fetch:
            log.debug("Not reloading relations for %s: pivot has no identifier", self._name)
            return False
        self._start_cycle()
        return True

    def cancel_loading(self) -> bool:
        """Cancel an in-flight fetch and fall back to the idle ``Cancelled`` state.

        Calling this while nothing is in flight does nothing.
        """

        cycle = self._current
        if cycle is None or cycle.finished or not isinstance(self._state, Pending):
            return False
        self._abort(cycle)
        log.debug("Cancelled relation fetch %s#%d", self._name, cycle.number)
        self._set_state(Cancelled())
        return True

    async def wait(self) -> RelationState[T]:
        """Wait until no cycle is in flight and return the resulting state."""

        while True:
            cycle = self._current
            if cycle is None or cycle.task is None or cycle.task.done():
                return self._state
            await asyncio.wait({cycle.task})

    async def aclose(self) -> None:
        """Cancel any in-flight fetch, wait for it to unwind and drop listeners."""

        self.cancel_loading()
        cycle = self._current
        if cycle is not None and cycle.task is not None:
            await asyncio.wait({cycle.task})
        self._listeners.clear()

    def _start_cycle(self) -> None:
        loop = asyncio.get_running_loop()
        previous = self._current
        previous_task = self._abort(previous) if previous is not None else None

        self._cycles_started += 1
        cycle = _Cycle(number=self._cycles_started)
        self._current = cycle
        cycle.task = loop.create_task(
            self._run(cycle, previous_task),
            name=f"relations:{self._name}#{cycle.number}",
        )
        if self._timeout_seconds is not None:
            cycle.timer = loop.call_later(self._timeout_seconds, self._expire, cycle)
        log.debug("Started relation fetch %s#%d", self._name, cycle.number)
        self._set_state(Pending())

    def _abort(self, cycle: _Cycle) -> asyncio.Task[None] | None:
        """Cancel ``cycle``; returns its task if it has not finished yet."""

        first_abort = cycle.token.cancel()
        if cycle.timer is not None:
            cycle.timer.cancel()
            cycle.timer = None
        task = cycle.task
        if task is None or task.done():
            return None
        # A task still waiting for its predecessor stops on the token alone, so
        # the chain of superseded tasks keeps unwinding in order. A task that is
        # already unwinding must not be interrupted again.
        if first_abort and cycle.fetching:
            task.cancel()
        return task

    async def _run(self, cycle: _Cycle, previous: asyncio.Task[None] | None) -> None:
        identifier = self._identifier
        if identifier is None:
            return
        # The superseded fetch has to unwind before this one may start.
        if previous is not None:
            done, _ = await asyncio.wait({previous}, timeout=self._unwind_grace_seconds)
            if not done:
                log.warning(
                    "Superseded relation fetch %s#%d still running after %gs; starting #%d anyway",
                    self._name,
                    cycle.number - 1,
                    self._unwind_grace_seconds,
                    cycle.number,
                )
        if cycle.token.cancelled:
            return

        result: FetchResult[T]
        cycle.fetching = True
        try:
            value = await self._fetch(identifier, cycle.token)
        except FetchCancelled as exc:
            if cycle.token.cancelled:
                log.debug("Relation fetch %s#%d stopped on cancellation", self._name, cycle.number)
                return
            result = Failure(FetchError("Fetch stopped without being cancelled", cause=exc))
        except FetchError as exc:
            result = Failure(exc)
        except Exception as exc:  # noqa: BLE001
            result = Failure(FetchError(f"Unexpected error: {exc}", cause=exc))
        else:
            result = Success(value)
        self._complete(cycle, result)

    def _expire(self, cycle: _Cycle) -> None:
        cycle.timer = None
        if cycle is not self._current or cycle.finished:
            return
        self._abort(cycle)
        error = FetchTimeout(f"No response within {self._timeout_seconds:g} seconds")
        self._complete(cycle, Failure(error), aborted=True)

    def _complete(self, cycle: _Cycle, result: FetchResult[T], *, aborted: bool = False) -> None:
        if cycle is not self._current or cycle.finished:
            log.debug("Dropping stale result of relation fetch %s#%d", self._name, cycle.number)
            return
        if cycle.token.cancelled and not aborted:
            log.debug("Dropping result of cancelled relation fetch %s#%d", self._name, cycle.number)
            return
        cycle.finished = True
        if cycle.timer is not None:
            cycle.timer.cancel()
            cycle.timer = None

        match result:
            case Success():
                log.debug("Relation fetch %s#%d succeeded", self._name, cycle.number)
            case Failure(error=error):
                log.error(
                    "Error while fetching relations of %s: %s",
                    self._name,
                    error.message,
                    exc_info=error.cause,
                )
            case Pending():
                raise AssertionError("A fetch cycle cannot complete as pending")
            case _:
                assert_never(result)
        self._set_state(result)

    def _set_state(self, state: RelationState[T]) -> None:
        self._state = state
        self._outbox.append(state)
        # Listeners may issue commands; states they cause queue up behind this one.
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._outbox:
                pending_state = self._outbox.popleft()
                for listener in tuple(self._listeners):
                    self._notify(listener, pending_state)
        finally:
            self._delivering = False

    def _notify(self, listener: StateListener[T], state: RelationState[T]) -> None:
        try:
            listener(state)
        except Exception:
            log.exception("Relation state listener %r failed", listener)
