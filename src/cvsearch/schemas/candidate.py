from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .upstream import AIExtracted

UNKNOWN = "-"


class ContactFields(BaseModel):
    """Contact channels for a candidate, ``"-"`` when unknown."""

    email: str = UNKNOWN
    phone: str = UNKNOWN
    address: str = UNKNOWN

    model_config = ConfigDict(extra="forbid", frozen=True)


class CandidateSummary(BaseModel):
    """Short-form profile text shown on the candidate card."""

    intro: str
    body: str = UNKNOWN
    detail: str = UNKNOWN
    list_title: str = "Highlights"
    highlights: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


class CandidateDocument(BaseModel):
    """Source document attached to a candidate, score in percent."""

    document_id: int | str | None = None
    filename: str | None = None
    score: int = 0
    snippet: str = UNKNOWN
    ai_extracted: AIExtracted | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class TimelineTag(BaseModel):
    label: str
    value: str
    dot: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class TimelineEvent(BaseModel):
    """Presentational event derived from the scoring breakdown."""

    type: str
    title: str
    subtitle: str
    app: str
    date: str
    tag: TimelineTag | None = None
    has_badge: bool = False
    has_expand: bool = False
    email_subject: str | None = None
    email_preview: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class Candidate(BaseModel):
    """Ranked search result representing one person profile."""

    id: int | str
    lead_id: str
    display_name: str
    date: str | None = None
    score: int | None = Field(default=None, ge=0, le=100)
    match_bars: list[bool] = Field(default_factory=list)
    status: str = "Prospect"
    contact: ContactFields = Field(default_factory=ContactFields)
    summary: CandidateSummary
    documents: list[CandidateDocument] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    snippet: str = UNKNOWN
    ai_extracted: AIExtracted | None = None
    matched_criteria: list[str] = Field(default_factory=list)
    missing_criteria: list[str] = Field(default_factory=list)
    explanation: str | None = None
    cv_metadata: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
