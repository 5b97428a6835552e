"""Pydantic schema definitions for upstream payloads and candidates."""

from __future__ import annotations

from .candidate import (
    UNKNOWN,
    Candidate,
    CandidateDocument,
    CandidateSummary,
    ContactFields,
    TimelineEvent,
    TimelineTag,
)
from .scoring import ScoreBuckets, ScoreResult, ScoringResponse, SearchStats
from .upstream import AIExtracted, CvMetadata, RawDocument, RawResult, ScoreComponents

__all__ = [
    "UNKNOWN",
    "AIExtracted",
    "Candidate",
    "CandidateDocument",
    "CandidateSummary",
    "ContactFields",
    "CvMetadata",
    "RawDocument",
    "RawResult",
    "ScoreBuckets",
    "ScoreComponents",
    "ScoreResult",
    "ScoringResponse",
    "SearchStats",
    "TimelineEvent",
    "TimelineTag",
]
