"""Semantic Scholar relation adapter."""

from __future__ import annotations

from .client import SemanticScholarAPIError, SemanticScholarClient
from .fetcher import SemanticScholarRelationFetcher
from .schema import PaperPayload, RelationsResponse
from .translator import translate_paper, translate_relations

__all__ = [
    "PaperPayload",
    "RelationsResponse",
    "SemanticScholarAPIError",
    "SemanticScholarClient",
    "SemanticScholarRelationFetcher",
    "translate_paper",
    "translate_relations",
]
