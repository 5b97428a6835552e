from __future__ import annotations

import random
from typing import Any, Sequence

from cvsearch.core.scorers import (
    FallbackScorer,
    ProfileCompletenessScorer,
    RemoteAIScorer,
    ScoringConfig,
    TextMatchScorer,
)
from cvsearch.llm import AIScoringConfig, HTTPScoringClient, ScoringRequestError
from cvsearch.schemas import Candidate, CandidateSummary, ScoringResponse


def build_candidate(candidate_id: int, **summary: Any) -> Candidate:
    defaults: dict[str, Any] = {"intro": "-", "body": "-", "detail": "-", "highlights": []}
    defaults.update(summary)
    return Candidate(
        id=candidate_id,
        lead_id=str(candidate_id),
        display_name=f"Candidate {candidate_id}",
        summary=CandidateSummary(**defaults),
    )


class StubAIClient(HTTPScoringClient):
    def __init__(self, *, reply: ScoringResponse | None = None, error: str | None = None) -> None:
        super().__init__(config=AIScoringConfig(endpoint="http://ai.test/score", api_key="key"))
        self._reply = reply
        self._error = error
        self.payloads: list[dict] = []

    def score(self, payload: dict) -> ScoringResponse:
        self.payloads.append(payload)
        if self._error:
            raise ScoringRequestError(self._error)
        assert self._reply is not None
        return self._reply


def ids(response: ScoringResponse) -> Sequence[int | str]:
    return [result.candidate_id for result in response.results]


def test_text_match_scores_by_word_overlap():
    scorer = TextMatchScorer()
    candidates = [
        build_candidate(1, intro="Senior accountant", highlights=["Location: Prague"]),
        build_candidate(2, intro="Gardener"),
    ]

    response = scorer.score("senior accountant in Prague", candidates)

    assert ids(response) == [1, 2]
    top, bottom = response.results
    assert top.score == 100
    assert top.matched_criteria == ["senior", "accountant", "prague"]
    assert bottom.score == 0
    assert response.search_criteria == ["senior", "accountant", "prague"]


def test_text_match_neutral_score_without_usable_words():
    response = TextMatchScorer().score("a b", [build_candidate(1)])

    assert response.results[0].score == 50


def test_profile_completeness_is_bounded_and_reproducible():
    candidates = [
        build_candidate(1, body="x" * 600, highlights=["a", "b", "c", "d"]),
        build_candidate(2),
    ]

    first = ProfileCompletenessScorer(rng=random.Random(7)).score("any", candidates)
    second = ProfileCompletenessScorer(rng=random.Random(7)).score("any", candidates)

    assert first.is_mock
    assert [r.score for r in first.results] == [r.score for r in second.results]
    assert first.results[0].candidate_id == 1
    assert first.results[0].score == 100
    assert 20 <= first.results[1].score <= 100


def test_remote_scorer_builds_prompt_payload():
    client = StubAIClient(reply=ScoringResponse(results=[{"candidateId": 1, "score": 77}]))
    scorer = RemoteAIScorer(client=client)

    response = scorer.score("tax advisor", [build_candidate(1, intro="Tax expert")])

    assert response.results[0].score == 77
    payload = client.payloads[0]
    assert 'Search Query: "tax advisor"' in payload["prompt"]
    assert "Candidate ID: 1" in payload["prompt"]
    assert payload["candidate_ids"] == [1]


def test_fallback_uses_ai_when_configured():
    client = StubAIClient(reply=ScoringResponse(results=[{"candidateId": 1, "score": 91}]))
    scorer = FallbackScorer(primary=RemoteAIScorer(client=client), fallback=TextMatchScorer())

    response = scorer.score("tax advisor", [build_candidate(1)])

    assert scorer.ai_configured
    assert not response.is_fallback
    assert response.results[0].score == 91


def test_fallback_to_text_match_when_ai_fails():
    client = StubAIClient(error="connection refused")
    scorer = FallbackScorer(primary=RemoteAIScorer(client=client), fallback=TextMatchScorer())

    response = scorer.score("tax advisor", [build_candidate(1, intro="tax advisor")])

    assert response.success
    assert response.is_fallback
    assert response.results[0].score == 100


def test_fallback_disabled_reports_error():
    client = StubAIClient(error="connection refused")
    scorer = FallbackScorer(
        primary=RemoteAIScorer(client=client),
        fallback=TextMatchScorer(),
        config=ScoringConfig(fallback_to_local=False),
    )

    response = scorer.score("tax advisor", [build_candidate(1)])

    assert not response.success
    assert response.error == "connection refused"


def test_unconfigured_ai_goes_straight_to_text_match():
    scorer = FallbackScorer(primary=RemoteAIScorer(), fallback=TextMatchScorer())

    response = scorer.score("tax advisor", [build_candidate(1)])

    assert not scorer.ai_configured
    assert response.is_fallback


def test_ai_disabled_uses_mock_scores():
    client = StubAIClient(reply=ScoringResponse())
    scorer = FallbackScorer(
        primary=RemoteAIScorer(client=client),
        fallback=TextMatchScorer(),
        mock=ProfileCompletenessScorer(rng=random.Random(1)),
        config=ScoringConfig(ai_enabled=False),
    )

    response = scorer.score("tax advisor", [build_candidate(1)])

    assert response.is_mock
    assert not client.payloads
