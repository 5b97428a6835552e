"""Scoring through the remote AI endpoint."""

from __future__ import annotations

from typing import Sequence

from ...llm import HTTPScoringClient, build_scoring_payload
from ...schemas import Candidate, ScoringResponse


class RemoteAIScorer:
    """Ask the AI scoring endpoint to rate candidates against a query."""

    method = "ai"

    def __init__(self, *, client: HTTPScoringClient | None = None) -> None:
        self._client = client or HTTPScoringClient()

    @property
    def configured(self) -> bool:
        return self._client.configured

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        payload = build_scoring_payload(
            query=query,
            candidates=candidates,
            config=self._client.config,
        )
        response = self._client.score(payload)
        return response.model_copy(update={"success": True})
