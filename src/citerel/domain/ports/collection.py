"""Port for the user's active collection of entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from citerel.domain.model import BibEntry


@runtime_checkable
class MembershipLookup(Protocol):
    """Read-only identifier lookup against a collection."""

    def contains(self, identifier: str) -> bool: ...

    def find(self, identifier: str) -> BibEntry | None: ...


@runtime_checkable
class ActiveCollection(MembershipLookup, Protocol):
    """Working set of entries that related entries get imported into.

    Persistence and the undo/redo mechanics belong to the implementation; the
    core only appends batches and registers each batch as one undo unit.
    """

    def contains_entry(self, entry: BibEntry) -> bool: ...

    def append_all(self, entries: Sequence[BibEntry]) -> None: ...

    def remove_all(self, entries: Sequence[BibEntry]) -> None: ...

    def register_undo_unit(
        self,
        description: str,
        inverse: Callable[[], None],
        *,
        redo: Callable[[], None] | None = None,
    ) -> None: ...


__all__ = ["ActiveCollection", "MembershipLookup"]
