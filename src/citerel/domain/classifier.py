"""Tag fetched entries as local (already in the collection) or candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import RelatedEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import BibEntry
    from .ports.collection import MembershipLookup


def classify(
    raw_entries: Iterable[BibEntry],
    collection: MembershipLookup,
) -> tuple[RelatedEntry, ...]:
    """Wrap each fetched entry, keeping fetch order.

    Entries without a DOI cannot be matched and are never local. Neither
    argument is mutated.
    """

    return tuple(
        RelatedEntry(entry=entry, is_local=is_local(entry, collection)) for entry in raw_entries
    )


def is_local(entry: BibEntry, collection: MembershipLookup) -> bool:
    identifier = entry.doi
    return identifier is not None and collection.contains(identifier)
