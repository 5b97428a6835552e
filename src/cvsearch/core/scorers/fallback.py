"""Scoring strategy selection with an explicit local fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import structlog

from ...llm import ScoringRequestError
from ...schemas import Candidate, ScoringResponse
from .profile import ProfileCompletenessScorer
from .remote import RemoteAIScorer
from .text_match import TextMatchScorer


@dataclass
class ScoringConfig:
    """Strategy switches for candidate scoring."""

    ai_enabled: bool = True
    fallback_to_local: bool = True
    sort_results: bool = True


class FallbackScorer:
    """Route scoring to the AI endpoint, falling back to local text match.

    * AI disabled: profile completeness mock scores (``is_mock``).
    * AI enabled but without endpoint or key: text match (``is_fallback``).
    * AI request failure: text match when ``fallback_to_local`` is set,
      otherwise an unsuccessful response carrying the error message.
    """

    def __init__(
        self,
        *,
        primary: RemoteAIScorer,
        fallback: TextMatchScorer,
        mock: ProfileCompletenessScorer | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._mock = mock or ProfileCompletenessScorer()
        self._config = config or ScoringConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def config(self) -> ScoringConfig:
        return self._config

    @property
    def ai_configured(self) -> bool:
        return self._config.ai_enabled and self._primary.configured

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        if not self._config.ai_enabled:
            self._logger.info("scoring.ai_disabled", candidates=len(candidates))
            return self._mock.score(query, candidates)

        if not self._primary.configured:
            return self._local(query, candidates)

        try:
            return self._primary.score(query, candidates)
        except ScoringRequestError as exc:
            if not self._config.fallback_to_local:
                self._logger.error("scoring.failed", error=str(exc))
                return ScoringResponse(success=False, error=str(exc))
            self._logger.warning("scoring.fallback", error=str(exc), method=self._fallback.method)
            return self._local(query, candidates)

    def _local(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        response = self._fallback.score(query, candidates)
        return response.model_copy(update={"is_fallback": True})
