"""Tagged result states published by the relation coordinator.

``FetchResult`` is the tri-state outcome of one fetch cycle. ``RelationState``
adds the two idle states an observer has to tell apart from it: nothing was
ever loaded, or the last cycle was cancelled before it completed.

Every state is an immutable snapshot. Consumers should match exhaustively and
end with ``assert_never`` so a new state cannot slip past them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

if TYPE_CHECKING:
    from .errors import FetchError


@dataclass(frozen=True, slots=True)
class NotLoaded:
    """No cycle has been started for the pivot."""


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The last cycle was cancelled before it produced a result."""


@dataclass(frozen=True, slots=True)
class Pending:
    """A fetch is in flight."""


@dataclass(frozen=True, slots=True)
class Success[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    error: FetchError

    @property
    def message(self) -> str:
        return self.error.message


type FetchResult[T] = Pending | Success[T] | Failure
type RelationState[T] = NotLoaded | Cancelled | FetchResult[T]


def is_idle(state: RelationState[object]) -> bool:
    match state:
        case NotLoaded() | Cancelled():
            return True
        case Pending() | Success() | Failure():
            return False
        case _:
            assert_never(state)


def is_terminal(state: RelationState[object]) -> bool:
    match state:
        case Success() | Failure():
            return True
        case NotLoaded() | Cancelled() | Pending():
            return False
        case _:
            assert_never(state)
