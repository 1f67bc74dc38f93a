"""Bibliographic records exchanged between fetchers, the classifier and collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final
from uuid import UUID, uuid4

from .identity import normalize_doi

DOI_FIELD: Final[str] = "doi"


class RelationDirection(StrEnum):
    """Which side of the citation graph to explore from the pivot."""

    CITATIONS = "citations"  # works citing the pivot
    REFERENCES = "references"  # works cited by the pivot


@dataclass(eq=False, kw_only=True)
class BibEntry:
    """A bibliographic record.

    Equality is identity: two fetched records describing the same work are still
    distinct entries until reconciled by DOI.
    """

    entry_type: str = "misc"
    citation_key: str | None = None
    fields: dict[str, str] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)

    @property
    def doi(self) -> str | None:
        return normalize_doi(self.fields.get(DOI_FIELD))

    @property
    def title(self) -> str | None:
        return self.fields.get("title")

    def get(self, name: str) -> str | None:
        return self.fields.get(name)


@dataclass(frozen=True, slots=True)
class RelatedEntry:
    """A fetched entry tagged with whether the active collection already holds it."""

    entry: BibEntry
    is_local: bool

    @property
    def identifier(self) -> str | None:
        return self.entry.doi
