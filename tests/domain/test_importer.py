from __future__ import annotations

from citerel.adapters.memory import InMemoryCollection
from citerel.domain.importer import DEFAULT_IMPORT_DESCRIPTION, focus_entry, import_selected
from tests.helpers.relations import make_entry, related


def test_import_appends_new_entries_as_one_undo_unit(collection: InMemoryCollection) -> None:
    first = make_entry("10.9/new-1", title="New 1")
    second = make_entry("10.9/new-2", title="New 2")

    outcome = import_selected([related(first), related(second)], collection)

    assert outcome.imported == 2
    assert outcome.skipped == 0
    assert outcome.entries == (first, second)
    assert collection.entries[-2:] == (first, second)
    assert collection.undo_manager.undo_description == DEFAULT_IMPORT_DESCRIPTION

    assert collection.undo_manager.undo() == DEFAULT_IMPORT_DESCRIPTION

    assert first not in collection.entries
    assert second not in collection.entries
    assert len(collection) == 2
    assert not collection.undo_manager.can_undo


def test_import_rechecks_membership_at_call_time(collection: InMemoryCollection) -> None:
    arrived = make_entry("10.9/arrived", title="Arrived meanwhile")
    fresh = make_entry("10.9/fresh", title="Fresh")
    # Classified as remote, then added to the collection before the import.
    selection = [related(arrived), related(fresh)]
    collection.append_all([make_entry("10.9/ARRIVED", title="Added by hand")])

    outcome = import_selected(selection, collection)

    assert outcome.imported == 1
    assert outcome.skipped == 1
    assert outcome.entries == (fresh,)
    assert arrived not in collection.entries


def test_import_skips_duplicate_dois_within_batch(collection: InMemoryCollection) -> None:
    first = make_entry("10.9/dup", title="First copy")
    second = make_entry("https://doi.org/10.9/DUP", title="Second copy")

    outcome = import_selected([related(first), related(second), related(first)], collection)

    assert outcome.imported == 1
    assert outcome.skipped == 2
    assert collection.entries.count(first) == 1
    assert second not in collection.entries


def test_entries_without_doi_are_imported(collection: InMemoryCollection) -> None:
    untracked = make_entry(None, title="Grey literature")

    outcome = import_selected([related(untracked)], collection)

    assert outcome.imported == 1
    assert untracked in collection.entries


def test_empty_import_registers_no_undo_unit(collection: InMemoryCollection) -> None:
    before = collection.entries

    outcome = import_selected([related(make_entry("10.1000/local-a"))], collection)

    assert outcome.imported == 0
    assert outcome.skipped == 1
    assert outcome.entries == ()
    assert collection.entries == before
    assert not collection.undo_manager.can_undo


def test_undo_then_redo_restores_batch(collection: InMemoryCollection) -> None:
    entry = make_entry("10.9/redo", title="Redo me")
    import_selected([related(entry)], collection, description="Import citations")

    collection.undo_manager.undo()
    assert collection.undo_manager.redo() == "Import citations"

    assert entry in collection.entries
    assert collection.contains("10.9/redo")


def test_focus_entry_finds_collection_copy(collection: InMemoryCollection) -> None:
    fetched = make_entry("10.1000/LOCAL-A", title="Fetched copy")

    request = focus_entry(related(fetched, is_local=True), collection)

    assert request is not None
    assert request.entry is collection.entries[0]
    assert request.entry is not fetched


def test_focus_entry_without_match(collection: InMemoryCollection) -> None:
    assert focus_entry(related(make_entry("10.9/elsewhere")), collection) is None
    assert focus_entry(related(make_entry(None)), collection) is None


def test_reimporting_same_entry_keeps_undo_to_its_batch(collection: InMemoryCollection) -> None:
    untracked = make_entry(None, title="Grey literature")
    other = make_entry(None, title="Workshop notes")
    import_selected([related(untracked)], collection)

    outcome = import_selected([related(untracked), related(other)], collection)

    assert outcome.imported == 1
    assert outcome.skipped == 1
    assert outcome.entries == (other,)

    collection.undo_manager.undo()

    assert collection.entries.count(untracked) == 1
    assert other not in collection.entries


def test_reimporting_only_known_entry_registers_nothing(collection: InMemoryCollection) -> None:
    untracked = make_entry(None, title="Grey literature")
    import_selected([related(untracked)], collection)

    outcome = import_selected([related(untracked)], collection)

    assert outcome.imported == 0
    assert outcome.skipped == 1
    collection.undo_manager.undo()
    assert untracked not in collection.entries
    assert not collection.undo_manager.can_undo
