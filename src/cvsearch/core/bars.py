"""Conversion between percentage scores and match bar displays."""

from __future__ import annotations

import math
from typing import Sequence

TOTAL_BARS = 8

_CATEGORIES: tuple[tuple[int, str], ...] = (
    (90, "Excellent"),
    (70, "Good"),
    (50, "Moderate"),
    (30, "Weak"),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up (``2.5 -> 3``)."""
    return math.floor(value + 0.5)


def clamp_score(score: float) -> float:
    if math.isnan(score):
        return 0.0
    return max(0.0, min(100.0, float(score)))


def score_to_bars(score: float, bar_count: int = TOTAL_BARS) -> list[bool]:
    """Return ``bar_count`` flags with the leading ones filled for ``score``.

    Scores outside ``[0, 100]`` are clamped.

    >>> score_to_bars(50)
    [True, True, True, True, False, False, False, False]
    """
    if bar_count <= 0:
        raise ValueError(f"bar_count must be positive, got {bar_count}")
    filled = round_half_up(clamp_score(score) / 100 * bar_count)
    return [index < filled for index in range(bar_count)]


def bars_to_score(bars: Sequence[bool]) -> int:
    """Return the percentage represented by a match bar sequence."""
    if not bars:
        return 0
    filled = sum(1 for bar in bars if bar)
    return round_half_up(filled / len(bars) * 100)


def score_category(score: float) -> str:
    for threshold, label in _CATEGORIES:
        if score >= threshold:
            return label
    return "Poor"


def score_css_class(score: float) -> str:
    return f"score-{score_category(score).lower()}"


__all__ = [
    "TOTAL_BARS",
    "bars_to_score",
    "clamp_score",
    "round_half_up",
    "score_category",
    "score_css_class",
    "score_to_bars",
]
