"""Schemas for payloads returned by the CV search service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AIExtracted(BaseModel):
    """Profile fields extracted upstream by a language model."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    last_employment: str | None = Field(default=None, alias="lastEmployment")
    required_employment: str | None = Field(default=None, alias="requiredEmployment")
    required_salary: str | None = Field(default=None, alias="requiredSalary")
    availability: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class ScoreComponents(BaseModel):
    """Per-method breakdown of the relevance score."""

    semantic: float | None = None
    bm25: float | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class RawDocument(BaseModel):
    """One source document (a CV file) matched for a subject."""

    document_id: int | str | None = Field(default=None, alias="documentId")
    filename: str | None = None
    score: float | None = None
    snippet: str | None = None
    ai_extracted: AIExtracted | None = Field(default=None, alias="aiExtracted")

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class RawResult(BaseModel):
    """Search hit grouped by subject, documents ordered best first."""

    subject_id: int | str = Field(alias="subjectId")
    name: str | None = None
    best_score: float | None = Field(default=None, alias="bestScore")
    score: float | None = None
    score_components: ScoreComponents | None = Field(default=None, alias="scoreComponents")
    documents: list[RawDocument] = Field(min_length=1)

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    @property
    def best_document(self) -> RawDocument:
        return self.documents[0]


class CvMetadata(BaseModel):
    """Response of the CV metadata enrichment endpoint."""

    cv_id: int | str | None = Field(default=None, alias="cvId")
    ai_extracted: AIExtracted | None = Field(default=None, alias="aiExtracted")

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)
