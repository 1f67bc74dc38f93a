"""Semantic Scholar configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, optional_int_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SEMANTIC_SCHOLAR_BASE_URL: Final[str] = "https://api.semanticscholar.org/graph/v1"
SEMANTIC_SCHOLAR_TIMEOUT_SECONDS: Final[float] = 20.0
DEFAULT_RELATION_LIMIT: Final[int] = 100


@dataclass(frozen=True, slots=True)
class SemanticScholarConfig:
    """Holds Semantic Scholar Graph API configuration values."""

    resilience: ResilienceConfig
    api_key: str | None = None
    page_limit: int = DEFAULT_RELATION_LIMIT


def get_semanticscholar_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> SemanticScholarConfig:
    api_key = optional_env_var("SEMANTIC_SCHOLAR_API_KEY")
    page_limit = optional_int_env_var("CITEREL_RELATION_LIMIT", default=DEFAULT_RELATION_LIMIT)
    headers = {"x-api-key": api_key} if api_key else None

    return SemanticScholarConfig(
        api_key=api_key,
        page_limit=page_limit,
        resilience=resilience
        or ResilienceConfig(
            name="semanticscholar",
            base_url=SEMANTIC_SCHOLAR_BASE_URL,
            timeout_seconds=SEMANTIC_SCHOLAR_TIMEOUT_SECONDS,
            # Unauthenticated access is throttled harder than keyed access.
            ratelimit=RateLimit(max_calls=10 if api_key else 1, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            default_headers=headers,
        ),
    )
