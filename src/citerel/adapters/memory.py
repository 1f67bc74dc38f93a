"""In-memory active collection with an undo stack."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from citerel.domain.identity import normalize_doi

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence
    from uuid import UUID

    from citerel.domain.model import BibEntry

log = getLogger(__name__)

DEFAULT_UNDO_LIMIT = 100


@dataclass(frozen=True, slots=True)
class UndoUnit:
    description: str
    undo: Callable[[], None]
    redo: Callable[[], None] | None = None


class UndoManager:
    """Linear undo/redo history; registering a new unit clears the redo stack."""

    def __init__(self, *, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        self._undo: deque[UndoUnit] = deque(maxlen=limit)
        self._redo: list[UndoUnit] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_description(self) -> str | None:
        return self._undo[-1].description if self._undo else None

    def add(self, unit: UndoUnit) -> None:
        self._undo.append(unit)
        self._redo.clear()

    def undo(self) -> str | None:
        if not self._undo:
            return None
        unit = self._undo.pop()
        unit.undo()
        if unit.redo is not None:
            self._redo.append(unit)
        log.debug("Undid %s", unit.description)
        return unit.description

    def redo(self) -> str | None:
        if not self._redo:
            return None
        unit = self._redo.pop()
        if unit.redo is not None:
            unit.redo()
        self._undo.append(unit)
        log.debug("Redid %s", unit.description)
        return unit.description


class InMemoryCollection:
    """``ActiveCollection`` holding entries in insertion order, indexed by DOI."""

    def __init__(
        self,
        entries: Iterable[BibEntry] = (),
        *,
        undo_manager: UndoManager | None = None,
    ) -> None:
        self._entries: list[BibEntry] = []
        self._by_doi: dict[str, BibEntry] = {}
        self._id_counts: Counter[UUID] = Counter()
        self.undo_manager = undo_manager or UndoManager()
        self.append_all(tuple(entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BibEntry]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[BibEntry, ...]:
        return tuple(self._entries)

    def contains(self, identifier: str) -> bool:
        return self.find(identifier) is not None

    def contains_entry(self, entry: BibEntry) -> bool:
        return self._id_counts[entry.id] > 0

    def find(self, identifier: str) -> BibEntry | None:
        doi = normalize_doi(identifier)
        if doi is None:
            return None
        return self._by_doi.get(doi)

    def append_all(self, entries: Sequence[BibEntry]) -> None:
        for entry in entries:
            self._entries.append(entry)
            self._id_counts[entry.id] += 1
            doi = entry.doi
            if doi is not None:
                self._by_doi.setdefault(doi, entry)

    def remove_all(self, entries: Sequence[BibEntry]) -> None:
        """Remove one occurrence of each given entry, newest first."""

        pending = Counter(entry.id for entry in entries)
        kept: list[BibEntry] = []
        for entry in reversed(self._entries):
            if pending[entry.id] > 0:
                pending[entry.id] -= 1
                continue
            kept.append(entry)
        kept.reverse()
        self._entries = kept
        self._reindex()

    def register_undo_unit(
        self,
        description: str,
        inverse: Callable[[], None],
        *,
        redo: Callable[[], None] | None = None,
    ) -> None:
        self.undo_manager.add(UndoUnit(description=description, undo=inverse, redo=redo))

    def _reindex(self) -> None:
        self._by_doi = {}
        self._id_counts = Counter(entry.id for entry in self._entries)
        for entry in self._entries:
            doi = entry.doi
            if doi is not None:
                self._by_doi.setdefault(doi, entry)
