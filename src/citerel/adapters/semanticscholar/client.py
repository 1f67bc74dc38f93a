"""Semantic Scholar Graph API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from citerel.adapters.http_resilience import ResilientClient
from citerel.domain.errors import FetchError

from .schema import ErrorResponse, RelationsResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from citerel.config.http_resilience import ResilienceConfig
    from citerel.config.semanticscholar import SemanticScholarConfig
    from citerel.domain.model import RelationDirection

log = getLogger(__name__)

DEFAULT_PAPER_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "authors",
    "year",
    "venue",
    "journal",
    "externalIds",
    "abstract",
    "url",
    "publicationTypes",
)
# Hard cap of the Graph API for one relation page.
MAX_PAGE_LIMIT: Final[int] = 1000


class SemanticScholarAPIError(FetchError):
    """Raised when Semantic Scholar cannot be reached or answers unexpectedly."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class SemanticScholarClient:
    """Low-level HTTP client for the Semantic Scholar Graph API."""

    def __init__(
        self,
        *,
        config: SemanticScholarConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_relations(
        self,
        *,
        doi: str,
        direction: RelationDirection,
        limit: int | None = None,
        offset: int = 0,
        fields: tuple[str, ...] = DEFAULT_PAPER_FIELDS,
    ) -> RelationsResponse:
        """Return one page of papers citing (or cited by) the paper with ``doi``."""

        if self._resilience.base_url is None:
            raise SemanticScholarAPIError(
                "Missing Semantic Scholar base_url in resilience configuration"
            )
        page_limit = min(limit or self._config.page_limit, MAX_PAGE_LIMIT)
        params = {
            "fields": ",".join(fields),
            "limit": str(page_limit),
            "offset": str(offset),
        }
        path = f"paper/DOI:{doi}/{direction.value}"

        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.get(path, params=params)
            except httpx.HTTPError as exc:
                raise SemanticScholarAPIError(
                    f"Could not reach Semantic Scholar: {exc}", cause=exc
                ) from exc
            return _parse_relations(response, doi=doi)


def _parse_relations(response: httpx.Response, *, doi: str) -> RelationsResponse:
    if response.status_code == httpx.codes.NOT_FOUND:
        raise SemanticScholarAPIError(
            _error_text(response) or f"Semantic Scholar does not know DOI {doi}",
            status_code=response.status_code,
        )
    if response.is_error:
        detail = _error_text(response) or response.reason_phrase
        raise SemanticScholarAPIError(
            f"Semantic Scholar returned HTTP {response.status_code}: {detail}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise SemanticScholarAPIError(
            "Semantic Scholar returned a malformed response", cause=exc
        ) from exc
    if not isinstance(payload, dict):
        raise SemanticScholarAPIError("Unexpected Semantic Scholar response payload")

    try:
        relations = RelationsResponse.model_validate(payload)
    except ValidationError as exc:
        raise SemanticScholarAPIError(
            "Unexpected Semantic Scholar response payload", cause=exc
        ) from exc
    log.debug("Semantic Scholar returned %d relation(s) for %s", len(relations.data), doi)
    return relations


def _error_text(response: httpx.Response) -> str | None:
    try:
        return ErrorResponse.model_validate(response.json()).text
    except (ValueError, ValidationError):
        return None
