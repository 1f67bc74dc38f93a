from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from citerel.adapters.memory import InMemoryCollection
from tests.helpers.relations import ScriptedFetcher, make_entry, related, settle

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from citerel.domain.model import BibEntry, RelatedEntry


@pytest.fixture
def entry_factory() -> Callable[..., BibEntry]:
    return make_entry


@pytest.fixture
def related_factory() -> Callable[..., RelatedEntry]:
    return related


@pytest.fixture
def settle_loop() -> Callable[[], Awaitable[None]]:
    return settle


@pytest.fixture
def fetcher_factory() -> Callable[..., ScriptedFetcher]:
    return ScriptedFetcher


@pytest.fixture
def collection() -> InMemoryCollection:
    return InMemoryCollection(
        [
            make_entry("10.1000/local-a", title="Local A"),
            make_entry("10.1000/local-b", title="Local B"),
        ]
    )
