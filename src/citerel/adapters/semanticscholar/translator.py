"""Translate Semantic Scholar papers into bibliographic entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from citerel.domain.identity import normalize_doi
from citerel.domain.model import BibEntry, RelationDirection

if TYPE_CHECKING:
    from .schema import PaperPayload, RelationEdgePayload, RelationsResponse

_CONFERENCE_TYPES: Final[frozenset[str]] = frozenset({"Conference"})
_ARTICLE_TYPES: Final[frozenset[str]] = frozenset({"JournalArticle", "Review"})


def translate_relations(
    response: RelationsResponse,
    *,
    direction: RelationDirection,
) -> list[BibEntry]:
    """Translate a relation listing, keeping the order Semantic Scholar returned.

    Edges without a paper or without a title carry nothing worth importing and
    are dropped.
    """

    entries: list[BibEntry] = []
    for edge in response.data:
        paper = related_paper(edge, direction=direction)
        if paper is None or paper.title is None:
            continue
        entries.append(translate_paper(paper))
    return entries


def related_paper(
    edge: RelationEdgePayload,
    *,
    direction: RelationDirection,
) -> PaperPayload | None:
    match direction:
        case RelationDirection.CITATIONS:
            return edge.citing_paper
        case RelationDirection.REFERENCES:
            return edge.cited_paper


def translate_paper(paper: PaperPayload) -> BibEntry:
    entry_type = _entry_type(paper.publication_types)
    fields: dict[str, str] = {}

    _put(fields, "title", paper.title)
    _put(fields, "author", " and ".join(a.name for a in paper.authors if a.name) or None)
    _put(fields, "year", str(paper.year) if paper.year is not None else None)

    venue = paper.journal.name if paper.journal and paper.journal.name else paper.venue
    if entry_type == "inproceedings":
        _put(fields, "booktitle", venue)
    elif entry_type == "article":
        _put(fields, "journal", venue)
    else:
        _put(fields, "howpublished", venue)
    if paper.journal is not None:
        _put(fields, "volume", paper.journal.volume)
        _put(fields, "pages", _clean_pages(paper.journal.pages))

    _put(fields, "doi", normalize_doi(paper.doi))
    if paper.external_ids is not None and paper.external_ids.arxiv:
        fields["eprint"] = paper.external_ids.arxiv
        fields["eprinttype"] = "arxiv"
    _put(fields, "abstract", paper.abstract)
    _put(fields, "url", paper.url)

    return BibEntry(entry_type=entry_type, fields=fields)


def _entry_type(publication_types: list[str]) -> str:
    kinds = set(publication_types)
    if kinds & _CONFERENCE_TYPES:
        return "inproceedings"
    if kinds & _ARTICLE_TYPES:
        return "article"
    return "misc"


def _clean_pages(pages: str | None) -> str | None:
    if pages is None:
        return None
    # Semantic Scholar pads page ranges ("  12 - 19 ").
    parts = [part.strip() for part in pages.split("-") if part.strip()]
    return "--".join(parts) or None


def _put(fields: dict[str, str], name: str, value: str | None) -> None:
    if value:
        fields[name] = value
