"""Merge selected related entries into the active collection."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from .model import BibEntry, RelatedEntry
    from .ports.collection import ActiveCollection, MembershipLookup

log = getLogger(__name__)

DEFAULT_IMPORT_DESCRIPTION: Final[str] = "Import related entries"


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Summary of one import batch."""

    imported: int
    skipped: int
    entries: tuple[BibEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class FocusRequest:
    """Ask the host to show an entry that already lives in the collection."""

    entry: BibEntry


def import_selected(
    selected: Iterable[RelatedEntry],
    collection: ActiveCollection,
    *,
    description: str = DEFAULT_IMPORT_DESCRIPTION,
) -> ImportOutcome:
    """Append the selected entries that are not in ``collection`` yet.

    Membership is checked again here rather than trusting ``is_local``: the
    collection may have changed since the entries were classified. An entry
    instance already in the collection (for example from an earlier import of
    the same result) is skipped even without a DOI. Entries sharing a DOI with
    an earlier one in the same batch are skipped too. The whole batch becomes
    a single undo unit.
    """

    accepted: list[BibEntry] = []
    seen_identifiers: set[str] = set()
    seen_ids: set[UUID] = set()
    skipped = 0

    for related in selected:
        entry = related.entry
        identifier = related.identifier
        if entry.id in seen_ids or collection.contains_entry(entry):
            log.debug("Skipping %r: entry already imported", entry.title)
            skipped += 1
            continue
        if identifier is not None and (
            identifier in seen_identifiers or collection.contains(identifier)
        ):
            log.debug("Skipping %s: already in the collection", identifier)
            skipped += 1
            continue
        seen_ids.add(entry.id)
        if identifier is not None:
            seen_identifiers.add(identifier)
        accepted.append(entry)

    if not accepted:
        return ImportOutcome(imported=0, skipped=skipped)

    batch = tuple(accepted)
    collection.append_all(batch)
    collection.register_undo_unit(
        description,
        lambda: collection.remove_all(batch),
        redo=lambda: collection.append_all(batch),
    )
    return ImportOutcome(imported=len(batch), skipped=skipped, entries=batch)


def focus_entry(related: RelatedEntry, collection: MembershipLookup) -> FocusRequest | None:
    identifier = related.identifier
    if identifier is None:
        return None
    existing = collection.find(identifier)
    if existing is None:
        return None
    return FocusRequest(entry=existing)
