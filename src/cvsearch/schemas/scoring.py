"""Schemas for candidate scoring replies and batch statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScoreResult(BaseModel):
    """Score assigned to one candidate for the active query."""

    candidate_id: int | str = Field(alias="candidateId")
    score: float
    matched_criteria: list[str] = Field(default_factory=list, alias="matchedCriteria")
    missing_criteria: list[str] = Field(default_factory=list, alias="missingCriteria")
    explanation: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ScoringResponse(BaseModel):
    """Batch of scores produced by one scoring strategy."""

    success: bool = True
    results: list[ScoreResult] = Field(default_factory=list)
    search_criteria: list[str] = Field(default_factory=list, alias="searchCriteria")
    is_mock: bool = False
    is_fallback: bool = False
    error: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ScoreBuckets(BaseModel):
    poor: int = 0
    weak: int = 0
    moderate: int = 0
    good: int = 0
    excellent: int = 0

    model_config = ConfigDict(extra="forbid")


class SearchStats(BaseModel):
    """Summary of the scores in a candidate collection."""

    total: int = 0
    buckets: ScoreBuckets = Field(default_factory=ScoreBuckets)
    average: int | None = None
    highest: int | None = None
    lowest: int | None = None

    model_config = ConfigDict(extra="forbid")
