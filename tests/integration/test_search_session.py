from __future__ import annotations

from typing import Any, Sequence

import pendulum
import pytest

from cvsearch import llm
from cvsearch.core.query import QueryValidationError
from cvsearch.core.scorers import FallbackScorer, RemoteAIScorer, TextMatchScorer
from cvsearch.llm import AIScoringConfig, HTTPScoringClient, ScoringRequestError
from cvsearch.pipeline import HISTORY_SIZE, SearchSession
from cvsearch.schemas import Candidate, CandidateSummary, ScoreResult, ScoringResponse


def build_candidate(candidate_id: int, score: int | None = None) -> Candidate:
    return Candidate(
        id=candidate_id,
        lead_id=str(candidate_id),
        display_name=f"Candidate {candidate_id}",
        score=score,
        summary=CandidateSummary(intro="-"),
    )


def response(**scores: int) -> ScoringResponse:
    return ScoringResponse(
        results=[ScoreResult(candidate_id=int(key[1:]), score=value) for key, value in scores.items()],
        search_criteria=["tax"],
    )


class StubScorer:
    def __init__(self, reply: ScoringResponse | None = None, exc: Exception | None = None) -> None:
        self.reply = reply or ScoringResponse()
        self.exc = exc
        self.calls: list[tuple[str, Sequence[Candidate]]] = []

    def score(self, query: str, candidates: Sequence[Candidate]) -> ScoringResponse:
        self.calls.append((query, candidates))
        if self.exc is not None:
            raise self.exc
        return self.reply


def build_session(scorer: Any = None, **kwargs: Any) -> SearchSession:
    candidates = [build_candidate(1, 10), build_candidate(2, 20), build_candidate(3, 30)]
    fixed = pendulum.datetime(2025, 1, 1, tz="UTC")
    return SearchSession(candidates, scorer=scorer or StubScorer(), now_provider=lambda: fixed, **kwargs)


def test_search_applies_and_sorts_scores():
    scorer = StubScorer(response(c1=95, c3=40))
    session = build_session(scorer)

    assert session.search("  tax advisor  ")

    assert session.query == "tax advisor"
    assert scorer.calls[0][0] == "tax advisor"
    assert [candidate.id for candidate in session.candidates] == [1, 3, 2]
    assert session.candidates[0].score == 95
    assert not session.is_searching
    assert session.history[0].query == "tax advisor"
    assert session.history[0].result_count == 2


def test_search_without_sorting_keeps_original_order():
    session = build_session(StubScorer(response(c1=95)), sort_results=False)

    session.search("tax advisor")

    assert [candidate.id for candidate in session.candidates] == [1, 2, 3]


def test_invalid_query_sets_error_without_touching_candidates():
    scorer = StubScorer()
    session = build_session(scorer)
    before = session.candidates

    with pytest.raises(QueryValidationError):
        session.search("ab")

    assert session.error == "Query too short. Please be more specific."
    assert session.candidates == before
    assert not scorer.calls


def test_stale_completion_is_discarded():
    session = build_session()
    first = session.start("first query")
    second = session.start("second query")

    assert not session.complete(first, response(c1=99))
    assert session.candidates[0].score == 10
    assert session.complete(second, response(c2=80))
    assert session.candidates[0].id == 2
    assert session.query == "second query"


def test_stale_failure_is_discarded():
    session = build_session()
    first = session.start("first query")
    second = session.start("second query")

    assert not session.fail(first, "boom")
    assert session.error is None
    assert session.complete(second, response(c1=50))


def test_clear_cancels_in_flight_and_restores_original():
    session = build_session()
    ticket = session.start("tax advisor")
    original = session.candidates

    session.clear()

    assert not session.complete(ticket, response(c3=100))
    assert session.candidates == original
    assert session.query == ""
    assert session.last_response is None
    assert session.stats() is None


def test_clear_after_results_restores_pre_search_collection():
    session = build_session(StubScorer(response(c3=100)))
    before = session.candidates
    session.search("tax advisor")
    assert session.candidates != before

    session.clear()

    assert session.candidates == before
    assert not session.has_searched


def test_unsuccessful_response_sets_error():
    session = build_session(StubScorer(ScoringResponse(success=False, error="AI down")))

    assert not session.search("tax advisor")

    assert session.error == "AI down"
    assert not session.is_searching
    assert not session.has_searched


def test_scoring_exception_becomes_error_value():
    session = build_session(StubScorer(exc=ScoringRequestError("timeout")))

    assert not session.search("tax advisor")
    assert session.error == "timeout"


def test_history_is_bounded_and_newest_first():
    session = build_session(StubScorer(response(c1=50)))

    for index in range(HISTORY_SIZE + 2):
        session.search(f"query {index}")

    assert len(session.history) == HISTORY_SIZE
    assert session.history[0].query == f"query {HISTORY_SIZE + 1}"


def test_update_candidates_only_replaces_display_before_search():
    session = build_session(StubScorer(response(c4=70)))
    session.update_candidates([build_candidate(4), build_candidate(5)])

    assert [candidate.id for candidate in session.candidates] == [4, 5]

    session.search("tax advisor")
    session.update_candidates([build_candidate(6)])

    assert [candidate.id for candidate in session.candidates] == [4, 5]


def test_select_and_stats():
    session = build_session(StubScorer(response(c1=95, c2=72, c3=50)))
    session.search("tax advisor")

    assert session.select("2").display_name == "Candidate 2"
    assert session.selected.id == 2
    assert session.select(99) is None
    assert session.selected is None

    summary = session.stats()
    assert summary is not None
    assert summary.stats.total == 3
    assert summary.stats.highest == 95
    assert summary.search_criteria == ["tax"]
    assert not summary.is_fallback


def test_connection_reset_falls_back_to_text_match(monkeypatch: pytest.MonkeyPatch):
    def fake_urlopen(req, timeout):
        raise ConnectionResetError("peer reset")

    monkeypatch.setattr(llm.request, "urlopen", fake_urlopen)
    client = HTTPScoringClient(config=AIScoringConfig(endpoint="http://ai.test/score", api_key="key"))
    scorer = FallbackScorer(primary=RemoteAIScorer(client=client), fallback=TextMatchScorer())
    session = build_session(scorer)

    assert session.search("candidate three")

    assert session.last_response is not None
    assert session.last_response.is_fallback
    assert session.error is None
    assert not session.is_searching


def test_unexpected_scorer_error_is_recorded_and_reraised():
    session = build_session(StubScorer(exc=RuntimeError("boom")))

    with pytest.raises(RuntimeError, match="boom"):
        session.search("tax advisor")

    assert session.error == "boom"
    assert not session.is_searching
    assert [candidate.id for candidate in session.candidates] == [1, 2, 3]
