"""Search pipeline assembly and session state."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

import pendulum
import structlog

from . import __version__
from .adapters import CvSearchAdapter, MappingConfig, ResultMappingError, enrich_with_metadata
from .client import SearchClient
from .core import Scorer
from .core.query import QueryValidationError, validate_query
from .core.ranking import apply_scores, compute_stats, sort_by_score
from .llm import ScoringRequestError
from .schemas import Candidate, ScoringResponse, SearchStats

HISTORY_SIZE = 10


@dataclass(frozen=True, slots=True)
class SearchTicket:
    """Handle for one issued search; only the latest ticket may land."""

    token: int
    query: str


@dataclass(frozen=True, slots=True)
class SearchHistoryEntry:
    query: str
    timestamp: str
    result_count: int


@dataclass(slots=True)
class SessionStats:
    """Statistics for the currently displayed search result."""

    stats: SearchStats
    search_criteria: list[str] = field(default_factory=list)
    is_mock: bool = False
    is_fallback: bool = False


class SearchSession:
    """Owns the displayed candidates and serialises search outcomes.

    Every ``start`` replaces the latest ticket. ``complete`` and ``fail`` only
    apply when their ticket is still the latest, so a slower earlier search
    can never overwrite a newer one. ``clear`` invalidates any in-flight
    search and restores the original candidates.
    """

    def __init__(
        self,
        candidates: Iterable[Candidate],
        *,
        scorer: Scorer,
        sort_results: bool = True,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._scorer = scorer
        self._sort_results = sort_results
        self._now_provider = now_provider or pendulum.now
        self._lock = threading.Lock()
        self._logger = structlog.get_logger(__name__)

        self._original: tuple[Candidate, ...] = tuple(candidates)
        self._candidates: tuple[Candidate, ...] = self._original
        self._latest_token = 0
        self._query = ""
        self._error: str | None = None
        self._last_response: ScoringResponse | None = None
        self._history: list[SearchHistoryEntry] = []
        self._selected_id: int | str | None = None
        self._searching = False

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    @property
    def query(self) -> str:
        return self._query

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_searching(self) -> bool:
        return self._searching

    @property
    def last_response(self) -> ScoringResponse | None:
        return self._last_response

    @property
    def has_searched(self) -> bool:
        return self._last_response is not None

    @property
    def history(self) -> list[SearchHistoryEntry]:
        return list(self._history)

    @property
    def selected(self) -> Candidate | None:
        if self._selected_id is None:
            return None
        return self._find(self._selected_id)

    def start(self, query: str) -> SearchTicket:
        """Validate ``query`` and issue the ticket that supersedes all others."""
        try:
            cleaned = validate_query(query.strip() if isinstance(query, str) else query)
        except QueryValidationError as exc:
            with self._lock:
                self._error = str(exc)
            raise

        with self._lock:
            self._latest_token += 1
            ticket = SearchTicket(token=self._latest_token, query=cleaned)
            self._query = cleaned
            self._error = None
            self._searching = True
        return ticket

    def complete(self, ticket: SearchTicket, response: ScoringResponse) -> bool:
        """Land a scoring response; returns False when superseded or failed."""
        if not response.success:
            self.fail(ticket, response.error or "Search failed")
            return False

        with self._lock:
            if ticket.token != self._latest_token:
                self._logger.debug("session.discarded", query=ticket.query, token=ticket.token)
                return False

            updated = apply_scores(self._original, response.results)
            if self._sort_results:
                updated = sort_by_score(updated)

            self._candidates = tuple(updated)
            self._last_response = response
            self._searching = False
            entry = SearchHistoryEntry(
                query=ticket.query,
                timestamp=self._now_provider().to_iso8601_string(),
                result_count=len(response.results),
            )
            self._history = [entry, *self._history[: HISTORY_SIZE - 1]]

        self._logger.info(
            "session.search_completed",
            query=ticket.query,
            results=len(response.results),
            is_mock=response.is_mock,
            is_fallback=response.is_fallback,
        )
        return True

    def fail(self, ticket: SearchTicket, message: str) -> bool:
        with self._lock:
            if ticket.token != self._latest_token:
                self._logger.debug("session.discarded", query=ticket.query, token=ticket.token)
                return False
            self._error = message
            self._searching = False
        self._logger.warning("session.search_failed", query=ticket.query, error=message)
        return True

    def search(self, query: str) -> bool:
        """Run a full search synchronously; returns True when results landed."""
        ticket = self.start(query)
        try:
            response = self._scorer.score(ticket.query, self._original)
        except ScoringRequestError as exc:
            self.fail(ticket, str(exc))
            return False
        except Exception as exc:
            self.fail(ticket, str(exc) or type(exc).__name__)
            raise
        return self.complete(ticket, response)

    def clear(self) -> None:
        with self._lock:
            self._latest_token += 1
            self._candidates = self._original
            self._query = ""
            self._error = None
            self._last_response = None
            self._searching = False

    def update_candidates(self, candidates: Iterable[Candidate]) -> None:
        with self._lock:
            self._original = tuple(candidates)
            if self._last_response is None:
                self._candidates = self._original

    def select(self, candidate_id: int | str | None) -> Candidate | None:
        if candidate_id is None:
            self._selected_id = None
            return None
        candidate = self._find(candidate_id)
        self._selected_id = candidate.id if candidate else None
        return candidate

    def stats(self) -> SessionStats | None:
        response = self._last_response
        if response is None:
            return None
        return SessionStats(
            stats=compute_stats(self._candidates),
            search_criteria=list(response.search_criteria),
            is_mock=response.is_mock,
            is_fallback=response.is_fallback,
        )

    def _find(self, candidate_id: int | str) -> Candidate | None:
        for candidate in self._candidates:
            if str(candidate.id) == str(candidate_id):
                return candidate
        return None


@dataclass(slots=True)
class SearchOutcome:
    """Ranked candidates for one remote query."""

    query: str
    candidates: list[Candidate]
    stats: SearchStats
    errors: list[str] = field(default_factory=list)


class RemoteSearchPipeline:
    """Query the search relay and turn its results into ranked candidates."""

    def __init__(
        self,
        *,
        client: SearchClient,
        adapter: CvSearchAdapter,
        config: MappingConfig | None = None,
    ) -> None:
        self._client = client
        self._adapter = adapter
        self._config = config or MappingConfig()
        self._logger = structlog.get_logger(__name__)

    def run(self, query: str, *, limit: int | None = None, enrich: bool = False) -> SearchOutcome:
        raw_results = self._client.search(query, limit=limit)
        candidates, errors = self.map(raw_results)

        if enrich:
            candidates = [
                enrich_with_metadata(candidate, self._client.fetch_metadata(candidate.id))
                for candidate in candidates
            ]

        ranked = sort_by_score(candidates)
        stats = compute_stats(ranked)
        self._logger.info(
            "search.ranked",
            query=query,
            candidate_count=len(ranked),
            average=stats.average,
            errors=len(errors),
        )
        return SearchOutcome(query=query, candidates=ranked, stats=stats, errors=errors)

    def map(self, raw_results: Any) -> tuple[list[Candidate], list[str]]:
        """Map raw results, honouring the skip-invalid policy."""
        try:
            return self._adapter.map_results(raw_results), []
        except ResultMappingError as exc:
            if not self._config.skip_invalid:
                raise
            self._logger.warning("mapping.partial", errors=exc.errors, kept=len(exc.partial))
            return exc.partial, list(exc.errors)


class OutputWriter:
    """Persist ranked candidates as JSON."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def serialize_outcome(
    query: str,
    candidates: Sequence[Candidate],
    stats: SearchStats,
    *,
    errors: Sequence[str] = (),
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    metadata = {
        "query": query,
        "candidate_count": len(candidates),
        "errors": list(errors),
        "timestamp": pendulum.now().to_iso8601_string(),
        "app_version": __version__,
    }
    if extra:
        metadata.update(extra)
    return {
        "metadata": metadata,
        "stats": stats.model_dump(mode="json"),
        "results": [candidate.model_dump(mode="json") for candidate in candidates],
    }
