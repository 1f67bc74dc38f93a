"""Pydantic models describing Semantic Scholar Graph API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_empty(value: object) -> object:
    return [] if value is None else value


class SemanticScholarBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AuthorPayload(SemanticScholarBaseModel):
    author_id: str | None = Field(default=None, alias="authorId")
    name: str | None = None

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class ExternalIdsPayload(SemanticScholarBaseModel):
    doi: str | None = Field(default=None, alias="DOI")
    arxiv: str | None = Field(default=None, alias="ArXiv")
    pubmed: str | None = Field(default=None, alias="PubMed")
    corpus_id: int | None = Field(default=None, alias="CorpusId")

    _normalize_ids = field_validator("doi", "arxiv", "pubmed", mode="before")(_blank_to_none)


class JournalPayload(SemanticScholarBaseModel):
    name: str | None = None
    volume: str | None = None
    pages: str | None = None

    _normalize_text = field_validator("name", "volume", "pages", mode="before")(_blank_to_none)


class PaperPayload(SemanticScholarBaseModel):
    paper_id: str | None = Field(default=None, alias="paperId")
    title: str | None = None
    year: int | None = None
    venue: str | None = None
    abstract: str | None = None
    url: str | None = None
    authors: list[AuthorPayload] = Field(default_factory=list)
    external_ids: ExternalIdsPayload | None = Field(default=None, alias="externalIds")
    publication_types: list[str] = Field(default_factory=list, alias="publicationTypes")
    journal: JournalPayload | None = None

    _normalize_text = field_validator("title", "venue", "abstract", "url", mode="before")(
        _blank_to_none
    )
    _normalize_lists = field_validator("authors", "publication_types", mode="before")(
        _none_to_empty
    )

    @property
    def doi(self) -> str | None:
        return self.external_ids.doi if self.external_ids else None


class RelationEdgePayload(SemanticScholarBaseModel):
    """One item of a ``/citations`` or ``/references`` listing."""

    citing_paper: PaperPayload | None = Field(default=None, alias="citingPaper")
    cited_paper: PaperPayload | None = Field(default=None, alias="citedPaper")
    is_influential: bool | None = Field(default=None, alias="isInfluential")


class RelationsResponse(SemanticScholarBaseModel):
    offset: int = 0
    next: int | None = None
    data: list[RelationEdgePayload] = Field(default_factory=list)

    _normalize_data = field_validator("data", mode="before")(_none_to_empty)


class ErrorResponse(SemanticScholarBaseModel):
    error: str | None = None
    message: str | None = None

    @property
    def text(self) -> str | None:
        return self.error or self.message
