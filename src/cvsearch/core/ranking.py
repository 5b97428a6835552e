"""Applying score batches to candidates, ranking and batch statistics."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..schemas import Candidate, ScoreBuckets, ScoreResult, SearchStats
from .bars import bars_to_score, clamp_score, round_half_up, score_to_bars

# Lower bound of each bucket; the top bucket includes 100.
_BUCKET_FLOORS: tuple[tuple[int, str], ...] = (
    (90, "excellent"),
    (70, "good"),
    (50, "moderate"),
    (30, "weak"),
    (0, "poor"),
)


def effective_score(candidate: Candidate) -> int:
    if candidate.score is not None:
        return candidate.score
    return bars_to_score(candidate.match_bars)


def apply_scores(candidates: Iterable[Candidate], results: Iterable[ScoreResult]) -> list[Candidate]:
    """Return candidates with scoring fields replaced from ``results``.

    Candidates without a matching result are returned as-is.
    """
    lookup = {str(result.candidate_id): result for result in results}

    updated: list[Candidate] = []
    for candidate in candidates:
        result = lookup.get(str(candidate.id))
        if result is None:
            updated.append(candidate)
            continue
        score = clamp_score(result.score)
        updated.append(
            candidate.model_copy(
                update={
                    "score": round_half_up(score),
                    "match_bars": score_to_bars(score),
                    "matched_criteria": list(result.matched_criteria),
                    "missing_criteria": list(result.missing_criteria),
                    "explanation": result.explanation,
                }
            )
        )
    return updated


def sort_by_score(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Return a new list ordered by descending effective score (stable)."""
    return sorted(candidates, key=effective_score, reverse=True)


def filter_by_min_score(candidates: Iterable[Candidate], min_score: float) -> list[Candidate]:
    return [candidate for candidate in candidates if effective_score(candidate) >= min_score]


def compute_stats(candidates: Sequence[Candidate]) -> SearchStats:
    scores = [effective_score(candidate) for candidate in candidates]
    if not scores:
        return SearchStats()

    counts = {label: 0 for _, label in _BUCKET_FLOORS}
    for score in scores:
        counts[bucket_for(score)] += 1

    return SearchStats(
        total=len(scores),
        buckets=ScoreBuckets(**counts),
        average=round_half_up(sum(scores) / len(scores)),
        highest=max(scores),
        lowest=min(scores),
    )


def bucket_for(score: float) -> str:
    for floor, label in _BUCKET_FLOORS:
        if score >= floor:
            return label
    return "poor"


__all__ = [
    "apply_scores",
    "bucket_for",
    "compute_stats",
    "effective_score",
    "filter_by_min_score",
    "sort_by_score",
]
