"""Core scoring, parsing and ranking components."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..schemas import Candidate, ScoringResponse
# NOTE: keep imports explicit for export clarity.
from .bars import TOTAL_BARS, bars_to_score, round_half_up, score_category, score_to_bars
from .query import QueryValidationError, validate_query
from .ranking import apply_scores, compute_stats, effective_score, filter_by_min_score, sort_by_score
from .scorers import (
    FallbackScorer,
    ProfileCompletenessScorer,
    RemoteAIScorer,
    ScoringConfig,
    TextMatchScorer,
)
from .snippet import extract_field, first_present, parse_snippet, sanitize_snippet
from .summary import build_summary


@runtime_checkable
class Scorer(Protocol):
    """Scorer contract for rating candidates against a query."""

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        """Return scores for the candidates under the given query."""


__all__ = [
    "TOTAL_BARS",
    "FallbackScorer",
    "ProfileCompletenessScorer",
    "QueryValidationError",
    "RemoteAIScorer",
    "Scorer",
    "ScoringConfig",
    "TextMatchScorer",
    "apply_scores",
    "bars_to_score",
    "build_summary",
    "compute_stats",
    "effective_score",
    "extract_field",
    "filter_by_min_score",
    "first_present",
    "parse_snippet",
    "round_half_up",
    "sanitize_snippet",
    "score_category",
    "score_to_bars",
    "sort_by_score",
    "validate_query",
]
