"""Scoring strategies for ranking candidates against a query."""

from .fallback import FallbackScorer, ScoringConfig
from .profile import ProfileCompletenessConfig, ProfileCompletenessScorer
from .remote import RemoteAIScorer
from .text_match import TextMatchConfig, TextMatchScorer

__all__ = [
    "FallbackScorer",
    "ProfileCompletenessConfig",
    "ProfileCompletenessScorer",
    "RemoteAIScorer",
    "ScoringConfig",
    "TextMatchConfig",
    "TextMatchScorer",
]
