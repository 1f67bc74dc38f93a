"""Relation fetch service backed by Semantic Scholar."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from citerel.adapters.http_resilience import ResilientClient
from citerel.config.semanticscholar import SemanticScholarConfig, get_semanticscholar_config
from citerel.domain.errors import FetchError
from citerel.domain.identity import normalize_doi
from citerel.domain.model import RelationDirection

from .client import SemanticScholarClient
from .translator import translate_relations

if TYPE_CHECKING:
    from collections.abc import Callable

    from citerel.config.http_resilience import ResilienceConfig
    from citerel.domain.cancellation import CancellationToken
    from citerel.domain.model import BibEntry

log = getLogger(__name__)


@dataclass(slots=True)
class SemanticScholarRelationFetcher:
    """``RelationFetcher`` listing the works citing, or cited by, a DOI."""

    direction: RelationDirection = RelationDirection.CITATIONS
    config: SemanticScholarConfig = field(default_factory=get_semanticscholar_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(default=ResilientClient)

    async def __call__(self, identifier: str, token: CancellationToken) -> list[BibEntry]:
        doi = normalize_doi(identifier)
        if doi is None:
            raise FetchError(f"Not a DOI: {identifier!r}")
        token.raise_if_cancelled()

        client = SemanticScholarClient(config=self.config, client_factory=self.client_factory)
        response = await token.guard(client.fetch_relations(doi=doi, direction=self.direction))
        entries = translate_relations(response, direction=self.direction)
        log.debug("Fetched %d %s for %s", len(entries), self.direction, doi)
        return entries
