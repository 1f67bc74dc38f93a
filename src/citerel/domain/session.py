"""View-model facade over one pivot entry's related entries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .classifier import classify
from .coordinator import RelationCoordinator
from .identity import resolve
from .importer import DEFAULT_IMPORT_DESCRIPTION, focus_entry, import_selected
from .model import RelatedEntry, RelationDirection

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .cancellation import CancellationToken
    from .coordinator import StateListener
    from .importer import FocusRequest, ImportOutcome
    from .model import BibEntry
    from .ports.collection import ActiveCollection
    from .ports.fetching import RelationFetcher
    from .results import RelationState

log = getLogger(__name__)

type RelatedEntries = tuple[RelatedEntry, ...]


class RelatedEntriesSession:
    """Everything a related-entries panel needs for one pivot and direction.

    Fetch results are classified against the collection before they are
    published, so a ``Success`` carries ``RelatedEntry`` values ready to render.
    """

    def __init__(
        self,
        pivot: BibEntry,
        *,
        fetcher: RelationFetcher,
        collection: ActiveCollection,
        direction: RelationDirection = RelationDirection.CITATIONS,
        timeout_seconds: float | None = None,
    ) -> None:
        self._pivot = pivot
        self._fetcher = fetcher
        self._collection = collection
        self._direction = direction
        identifier = resolve(pivot)
        self._coordinator: RelationCoordinator[RelatedEntries] = RelationCoordinator(
            identifier,
            self._fetch_and_classify,
            timeout_seconds=timeout_seconds,
            name=f"{direction}:{identifier or pivot.citation_key or pivot.id}",
        )

    @property
    def pivot(self) -> BibEntry:
        return self._pivot

    @property
    def direction(self) -> RelationDirection:
        return self._direction

    @property
    def identifier(self) -> str | None:
        return self._coordinator.identifier

    @property
    def can_fetch(self) -> bool:
        return self._coordinator.can_fetch

    @property
    def state(self) -> RelationState[RelatedEntries]:
        return self._coordinator.state

    def subscribe(self, listener: StateListener[RelatedEntries]) -> Callable[[], None]:
        return self._coordinator.subscribe(listener)

    def load_entries(self) -> bool:
        return self._coordinator.load_entries()

    def reload_entries(self) -> bool:
        return self._coordinator.reload_entries()

    def cancel_loading(self) -> bool:
        return self._coordinator.cancel_loading()

    async def wait(self) -> RelationState[RelatedEntries]:
        return await self._coordinator.wait()

    async def aclose(self) -> None:
        await self._coordinator.aclose()

    def import_selected(
        self,
        selected: Iterable[RelatedEntry],
        *,
        description: str = DEFAULT_IMPORT_DESCRIPTION,
    ) -> ImportOutcome:
        outcome = import_selected(selected, self._collection, description=description)
        log.info(
            "Imported %d %s of %s, skipped %d already in the collection",
            outcome.imported,
            self._direction,
            self.identifier,
            outcome.skipped,
        )
        return outcome

    def focus_entry(self, related: RelatedEntry) -> FocusRequest | None:
        """Locate a local entry in the collection; leaving the list stops loading."""

        request = focus_entry(related, self._collection)
        if request is not None:
            self.cancel_loading()
        return request

    async def _fetch_and_classify(
        self,
        identifier: str,
        token: CancellationToken,
    ) -> RelatedEntries:
        raw_entries = await self._fetcher(identifier, token)
        token.raise_if_cancelled()
        return classify(raw_entries, self._collection)
