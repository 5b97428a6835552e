"""Placeholder scoring based on how complete a profile looks."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from ...schemas import Candidate, ScoreResult, ScoringResponse
from ..bars import round_half_up


@dataclass
class ProfileCompletenessConfig:
    """Weights for the completeness heuristic."""

    body_chars_per_point: float = 5.0
    points_per_highlight: float = 10.0
    jitter: float = 20.0
    floor: float = 20.0
    ceiling: float = 100.0


class ProfileCompletenessScorer:
    """Mock scorer for running without any AI endpoint.

    Longer summaries and more structured highlights score higher. A small
    random jitter keeps equal profiles from tying; inject a seeded
    ``random.Random`` for reproducible output.
    """

    method = "profile_completeness"

    def __init__(
        self,
        *,
        config: ProfileCompletenessConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or ProfileCompletenessConfig()
        self._rng = rng or random.Random()

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        results = [self._score_candidate(candidate) for candidate in candidates]
        results.sort(key=lambda result: result.score, reverse=True)
        return ScoringResponse(results=results, search_criteria=[], is_mock=True)

    def _score_candidate(self, candidate: Candidate) -> ScoreResult:
        cfg = self._config
        summary = candidate.summary
        raw = (
            len(summary.body) / cfg.body_chars_per_point
            + len(summary.highlights) * cfg.points_per_highlight
            + self._rng.random() * cfg.jitter
        )
        bounded = min(cfg.ceiling, max(cfg.floor, raw))
        return ScoreResult(
            candidate_id=candidate.id,
            score=round_half_up(bounded),
            matched_criteria=summary.highlights[:2],
            missing_criteria=[],
            explanation="Mock score based on profile completeness.",
        )
