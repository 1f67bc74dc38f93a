"""Resolve the lookup identifier (DOI) of a pivot entry."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .errors import NoIdentifierError

if TYPE_CHECKING:
    from .model import BibEntry

_DOI_URL_PREFIX = re.compile(r"^(https?://)?(dx\.)?doi\.org/", re.IGNORECASE)
_DOI_SCHEME_PREFIX = re.compile(r"^doi:\s*", re.IGNORECASE)


def normalize_doi(value: str | None) -> str | None:
    """Return a DOI in canonical lowercase form, or ``None`` when blank.

    Resolver URLs (``https://doi.org/``) and the ``doi:`` scheme are stripped so
    the same work matches however it was recorded.
    """

    if not value:
        return None
    cleaned = _DOI_URL_PREFIX.sub("", value.strip())
    cleaned = _DOI_SCHEME_PREFIX.sub("", cleaned)
    cleaned = cleaned.strip().lower()
    return cleaned or None


def resolve(pivot: BibEntry) -> str | None:
    return pivot.doi


def can_fetch(pivot: BibEntry) -> bool:
    """Whether relations of ``pivot`` can be looked up at all."""

    return resolve(pivot) is not None


def require_identifier(pivot: BibEntry) -> str:
    identifier = resolve(pivot)
    if identifier is None:
        raise NoIdentifierError("The selected entry does not have a DOI linked to it")
    return identifier
