"""What a related-entries panel should show for a published state.

No display text lives here; callers localise the kind and the error message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, assert_never

from .results import Cancelled, Failure, NotLoaded, Pending, Success

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .model import RelatedEntry
    from .results import RelationState


class ViewKind(StrEnum):
    NO_IDENTIFIER = "no_identifier"
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    ENTRIES = "entries"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ViewState:
    kind: ViewKind
    entries: tuple[RelatedEntry, ...] = ()
    error_message: str | None = None

    @property
    def show_progress(self) -> bool:
        return self.kind is ViewKind.LOADING

    @property
    def show_cancel(self) -> bool:
        return self.kind is ViewKind.LOADING

    @property
    def show_reload(self) -> bool:
        return self.kind is not ViewKind.LOADING

    @property
    def show_import(self) -> bool:
        return self.kind is not ViewKind.LOADING

    @property
    def selectable(self) -> tuple[RelatedEntry, ...]:
        """Entries that may be ticked for import."""

        return tuple(entry for entry in self.entries if not entry.is_local)


def view_state(
    state: RelationState[Sequence[RelatedEntry]],
    *,
    can_fetch: bool = True,
) -> ViewState:
    if not can_fetch:
        return ViewState(kind=ViewKind.NO_IDENTIFIER)

    match state:
        case NotLoaded() | Cancelled():
            # Cancelling returns silently to the pre-load view.
            return ViewState(kind=ViewKind.IDLE)
        case Pending():
            return ViewState(kind=ViewKind.LOADING)
        case Success(value=entries):
            if not entries:
                return ViewState(kind=ViewKind.EMPTY)
            return ViewState(kind=ViewKind.ENTRIES, entries=tuple(entries))
        case Failure() as failure:
            return ViewState(kind=ViewKind.ERROR, error_message=failure.message)
        case _:
            assert_never(state)
