"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from citerel.adapters.memory import InMemoryCollection
from citerel.adapters.semanticscholar import SemanticScholarRelationFetcher
from citerel.config import get_relations_config, get_semanticscholar_config
from citerel.domain.model import BibEntry, RelationDirection
from citerel.domain.session import RelatedEntriesSession

if TYPE_CHECKING:
    from collections.abc import Iterable

    from citerel.domain.ports.collection import ActiveCollection
    from citerel.domain.ports.fetching import RelationFetcher
    from citerel.domain.results import RelationState
    from citerel.domain.session import RelatedEntries

log = getLogger(__name__)


def build_session(
    pivot: BibEntry,
    *,
    direction: RelationDirection = RelationDirection.CITATIONS,
    collection: ActiveCollection | None = None,
    fetcher: RelationFetcher | None = None,
    timeout_seconds: float | None = None,
) -> RelatedEntriesSession:
    """Wire a session with the configured adapters unless overrides are given."""

    effective_fetcher = fetcher or SemanticScholarRelationFetcher(
        direction=direction,
        config=get_semanticscholar_config(),
    )
    effective_timeout = (
        timeout_seconds if timeout_seconds is not None else get_relations_config().timeout_seconds
    )
    return RelatedEntriesSession(
        pivot,
        fetcher=effective_fetcher,
        collection=collection if collection is not None else InMemoryCollection(),
        direction=direction,
        timeout_seconds=effective_timeout,
    )


def collection_from_dois(dois: Iterable[str]) -> InMemoryCollection:
    return InMemoryCollection(BibEntry(fields={"doi": doi}) for doi in dois)


async def lookup_related_entries(
    doi: str,
    *,
    direction: RelationDirection = RelationDirection.CITATIONS,
    known_dois: Iterable[str] = (),
    fetcher: RelationFetcher | None = None,
    timeout_seconds: float | None = None,
) -> RelationState[RelatedEntries]:
    """Run one fetch cycle for ``doi`` and return its final state."""

    pivot = BibEntry(fields={"doi": doi})
    session = build_session(
        pivot,
        direction=direction,
        collection=collection_from_dois(known_dois),
        fetcher=fetcher,
        timeout_seconds=timeout_seconds,
    )
    log.info("Looking up %s of %s", direction, session.identifier or doi)
    try:
        session.load_entries()
        return await session.wait()
    finally:
        await session.aclose()
