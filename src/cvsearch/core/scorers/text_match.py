"""Keyword overlap scoring used when no AI scorer is reachable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...schemas import Candidate, ScoreResult, ScoringResponse
from ..bars import round_half_up
from ..query import clean_query


@dataclass
class TextMatchConfig:
    """Configuration for keyword overlap scoring."""

    min_word_length: int = 3
    neutral_score: int = 50
    explanation: str = "Text-based search (AI not configured)"


class TextMatchScorer:
    """Score candidates by the share of query words found in their profile."""

    method = "text_match"

    def __init__(self, *, config: TextMatchConfig | None = None) -> None:
        self._config = config or TextMatchConfig()

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        words = self.query_words(query)
        results = [self._score_candidate(words, candidate) for candidate in candidates]
        results.sort(key=lambda result: result.score, reverse=True)
        return ScoringResponse(results=results, search_criteria=words)

    def query_words(self, query: str) -> list[str]:
        return [word for word in clean_query(query).split(" ") if len(word) >= self._config.min_word_length]

    def _score_candidate(self, words: list[str], candidate: Candidate) -> ScoreResult:
        text = searchable_text(candidate)
        matched = [word for word in words if word in text]
        if words:
            score = round_half_up(len(matched) / len(words) * 100)
        else:
            score = self._config.neutral_score
        return ScoreResult(
            candidate_id=candidate.id,
            score=score,
            matched_criteria=matched,
            missing_criteria=[],
            explanation=self._config.explanation,
        )


def searchable_text(candidate: Candidate) -> str:
    summary = candidate.summary
    parts = [
        candidate.display_name,
        summary.intro,
        summary.body,
        summary.detail,
        *summary.highlights,
    ]
    return " ".join(parts).lower()
