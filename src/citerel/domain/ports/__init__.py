"""Domain port definitions for adapters."""

from __future__ import annotations

from .collection import ActiveCollection, MembershipLookup
from .fetching import RelationFetcher

__all__ = [
    "ActiveCollection",
    "MembershipLookup",
    "RelationFetcher",
]
