from __future__ import annotations

import pytest

from citerel.adapters.semanticscholar import RelationsResponse, translate_relations
from citerel.adapters.semanticscholar.schema import PaperPayload
from citerel.adapters.semanticscholar.translator import translate_paper
from citerel.domain.model import RelationDirection


@pytest.fixture
def journal_paper() -> dict[str, object]:
    return {
        "paperId": "abc123",
        "title": "Graph Methods for Citation Analysis",
        "year": 2021,
        "venue": "J. Informetrics",
        "authors": [
            {"authorId": "1", "name": "Ada Lovelace"},
            {"authorId": "2", "name": "  "},
            {"authorId": "3", "name": "Alan Turing"},
        ],
        "externalIds": {"DOI": "10.1016/J.JOI.2021.1", "ArXiv": "2101.00001", "CorpusId": 42},
        "publicationTypes": ["JournalArticle"],
        "journal": {"name": "Journal of Informetrics", "volume": "15", "pages": " 101 - 117 "},
        "abstract": "",
        "url": "https://www.semanticscholar.org/paper/abc123",
    }


def test_translate_journal_article(journal_paper: dict[str, object]) -> None:
    entry = translate_paper(PaperPayload.model_validate(journal_paper))

    assert entry.entry_type == "article"
    assert entry.fields == {
        "title": "Graph Methods for Citation Analysis",
        "author": "Ada Lovelace and Alan Turing",
        "year": "2021",
        "journal": "Journal of Informetrics",
        "volume": "15",
        "pages": "101--117",
        "doi": "10.1016/j.joi.2021.1",
        "eprint": "2101.00001",
        "eprinttype": "arxiv",
        "url": "https://www.semanticscholar.org/paper/abc123",
    }
    assert entry.doi == "10.1016/j.joi.2021.1"


def test_conference_paper_uses_booktitle() -> None:
    paper = PaperPayload.model_validate(
        {"title": "Fast Joins", "venue": "SIGMOD", "publicationTypes": ["Conference"]}
    )

    entry = translate_paper(paper)

    assert entry.entry_type == "inproceedings"
    assert entry.get("booktitle") == "SIGMOD"
    assert entry.doi is None


def test_unknown_type_falls_back_to_misc() -> None:
    paper = PaperPayload.model_validate(
        {"title": "Some Dataset", "venue": "Zenodo", "publicationTypes": None, "authors": None}
    )

    entry = translate_paper(paper)

    assert entry.entry_type == "misc"
    assert entry.get("howpublished") == "Zenodo"
    assert entry.get("author") is None


def test_translate_relations_picks_side_by_direction() -> None:
    response = RelationsResponse.model_validate(
        {
            "offset": 0,
            "data": [
                {
                    "citingPaper": {"title": "Citing"},
                    "citedPaper": {"title": "Cited"},
                }
            ],
        }
    )

    citations = translate_relations(response, direction=RelationDirection.CITATIONS)
    references = translate_relations(response, direction=RelationDirection.REFERENCES)

    assert [entry.title for entry in citations] == ["Citing"]
    assert [entry.title for entry in references] == ["Cited"]


def test_translate_relations_drops_untitled_and_missing_papers() -> None:
    response = RelationsResponse.model_validate(
        {
            "data": [
                {"citingPaper": {"title": "First"}},
                {"citingPaper": None},
                {"citingPaper": {"paperId": "x", "title": " "}},
                {"citingPaper": {"title": "Second"}},
            ]
        }
    )

    entries = translate_relations(response, direction=RelationDirection.CITATIONS)

    assert [entry.title for entry in entries] == ["First", "Second"]


def test_null_data_means_no_relations() -> None:
    response = RelationsResponse.model_validate({"offset": 0, "data": None})

    assert translate_relations(response, direction=RelationDirection.REFERENCES) == []
