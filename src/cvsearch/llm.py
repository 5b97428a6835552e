"""Helpers for constructing AI scoring payloads and clients."""

from __future__ import annotations

import http.client
import json
from dataclasses import dataclass
from typing import Any, Sequence
from urllib import error, request

import structlog
from pydantic import ValidationError

from .schemas import Candidate, ScoringResponse

CANDIDATE_MATCHING_PROMPT = """You are an expert HR assistant that evaluates job candidates based on search criteria.

Given a search query describing ideal candidate requirements and a list of candidates with their profiles, you must:
1. Analyze each candidate against the search criteria
2. Score each candidate from 0 to 100 based on how well they match
3. Provide a brief explanation for each score

Return your response as a JSON object with this structure:
{
  "results": [
    {
      "candidateId": 1,
      "score": 85,
      "matchedCriteria": ["criteria1", "criteria2"],
      "missingCriteria": ["criteria3"],
      "explanation": "Brief explanation of the score"
    }
  ],
  "searchCriteria": ["extracted", "criteria", "from", "query"]
}

Be fair and objective. Consider partial matches. A score of:
- 90-100: Excellent match, meets almost all criteria
- 70-89: Good match, meets most criteria
- 50-69: Moderate match, meets some criteria
- 30-49: Weak match, meets few criteria
- 0-29: Poor match, meets very few or no criteria

Respond ONLY with valid JSON, no markdown code blocks, no extra text."""


@dataclass
class AIScoringConfig:
    """Connection settings for the AI scoring endpoint."""

    endpoint: str | None = None
    api_key: str | None = None
    model: str = "gpt-4"
    temperature: float = 0.3
    max_tokens: int = 1000
    timeout: float = 30.0


class ScoringRequestError(RuntimeError):
    """Raised when the AI scoring endpoint cannot produce a usable reply."""


def format_candidates_for_prompt(candidates: Sequence[Candidate]) -> str:
    blocks = []
    for candidate in candidates:
        summary = candidate.summary
        blocks.append(
            "\n".join(
                [
                    f"Candidate ID: {candidate.id}",
                    f"Name: {candidate.display_name}",
                    f"Status: {candidate.status}",
                    f"Summary: {summary.intro} {summary.body} {summary.detail}",
                    f"Skills/Certifications: {', '.join(summary.highlights)}",
                ]
            )
        )
    return "\n---\n".join(blocks)


def build_scoring_payload(
    *,
    query: str,
    candidates: Sequence[Candidate],
    config: AIScoringConfig,
) -> dict[str, Any]:
    """Construct the request body expected by the scoring endpoint."""

    return {
        "model": config.model,
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
        "system": CANDIDATE_MATCHING_PROMPT,
        "prompt": f'Search Query: "{query}"\n\nCandidates:\n{format_candidates_for_prompt(candidates)}',
        "candidate_ids": [candidate.id for candidate in candidates],
    }


def parse_scoring_reply(text: str) -> ScoringResponse:
    """Parse a scoring reply, tolerating a surrounding markdown code fence."""

    cleaned = _strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ScoringRequestError(f"Malformed scoring reply: {exc}") from exc

    if isinstance(data, dict) and "results" not in data and isinstance(data.get("content"), str):
        return parse_scoring_reply(data["content"])

    try:
        return ScoringResponse.model_validate(data)
    except ValidationError as exc:
        raise ScoringRequestError(f"Malformed scoring reply: {exc}") from exc


class HTTPScoringClient:
    """Simple HTTP client for the AI scoring API."""

    def __init__(self, *, config: AIScoringConfig | None = None):
        self._config = config or AIScoringConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def config(self) -> AIScoringConfig:
        return self._config

    @property
    def configured(self) -> bool:
        return bool(self._config.endpoint and self._config.api_key)

    def score(self, payload: dict[str, Any]) -> ScoringResponse:
        if not self.configured:
            raise ScoringRequestError("AI scoring endpoint is not configured")

        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        req = request.Request(self._config.endpoint, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._config.timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            message = _error_message(exc) or f"API request failed: {exc.code}"
            self._logger.warning("llm.request_failed", status=exc.code, error=message)
            raise ScoringRequestError(message) from exc
        except (OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            self._logger.warning("llm.request_failed", error=str(exc))
            raise ScoringRequestError(f"AI scoring request failed: {exc}") from exc

        return parse_scoring_reply(body)


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _error_message(exc: error.HTTPError) -> str | None:
    try:
        payload = json.loads(exc.read().decode("utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"].get("message")
    return None
