"""HTTP client for the CV search relay."""

from __future__ import annotations

import http.client
import json
import os
from dataclasses import dataclass
from typing import Any, Mapping
from urllib import error, parse, request

import structlog
from pydantic import ValidationError

from .core.query import QueryValidationError
from .schemas import CvMetadata

SESSION_HEADER = "X-Atollon-Session"
SESSION_ENV_VAR = "CVSEARCH_SESSION"
DEFAULT_SESSION = "test-session"


@dataclass(frozen=True)
class SessionContext:
    """Opaque session token forwarded with every outbound call."""

    token: str = DEFAULT_SESSION

    @classmethod
    def resolve(cls, token: str | None = None, env: Mapping[str, str] | None = None) -> "SessionContext":
        """Explicit token, then ``CVSEARCH_SESSION``, then the fallback literal."""
        environ = os.environ if env is None else env
        return cls(token=token or environ.get(SESSION_ENV_VAR) or DEFAULT_SESSION)


@dataclass
class SearchServiceConfig:
    """Endpoints and limits for the search relay."""

    endpoint: str = "http://localhost:3000/api/real-search"
    metadata_endpoint: str = "http://localhost:3000/api/cv-metadata"
    limit: int = 50
    timeout: float = 10.0


class SearchRequestError(RuntimeError):
    """Raised when the search relay cannot be reached or rejects a request."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


class SearchClient:
    """Fetch raw search results and CV metadata from the relay."""

    def __init__(
        self,
        *,
        config: SearchServiceConfig | None = None,
        session: SessionContext | None = None,
    ) -> None:
        self._config = config or SearchServiceConfig()
        self._session = session or SessionContext.resolve()
        self._logger = structlog.get_logger(__name__)

    @property
    def config(self) -> SearchServiceConfig:
        return self._config

    @property
    def session(self) -> SessionContext:
        return self._session

    def search(self, query: str, limit: int | None = None) -> list[dict[str, Any]]:
        """Return the raw ``results`` list for ``query``."""
        if not query or not query.strip():
            raise QueryValidationError("Please enter a search query")

        params = parse.urlencode({"q": query, "limit": str(limit or self._config.limit)})
        url = f"{self._config.endpoint}?{params}"
        try:
            with request.urlopen(self._request(url), timeout=self._config.timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            message = _read_text(exc) or f"Real search request failed with status {exc.code}"
            self._logger.warning("search.request_failed", status=exc.code, query=query)
            raise SearchRequestError(message, status=exc.code) from exc
        except (OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            self._logger.warning("search.request_failed", error=str(exc), query=query)
            raise SearchRequestError(f"Failed to reach CV search service: {exc}") from exc

        try:
            payload = json.loads(body) if body else {}
        except json.JSONDecodeError as exc:
            raise SearchRequestError(f"Invalid search response: {exc}") from exc

        results = payload.get("results", []) if isinstance(payload, dict) else []
        self._logger.info("search.completed", query=query, results=len(results) if isinstance(results, list) else 0)
        return results

    def fetch_metadata(self, cv_id: int | str) -> CvMetadata | None:
        """Return AI-extracted metadata for a CV, or None when unavailable."""
        url = f"{self._config.metadata_endpoint}?{parse.urlencode({'cvId': cv_id})}"
        try:
            with request.urlopen(self._request(url), timeout=self._config.timeout) as resp:
                body = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            self._logger.warning("metadata.request_failed", cv_id=cv_id, status=exc.code)
            return None
        except (OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            self._logger.warning("metadata.request_failed", cv_id=cv_id, error=str(exc))
            return None

        try:
            return CvMetadata.model_validate(json.loads(body or "{}"))
        except (json.JSONDecodeError, ValidationError) as exc:
            self._logger.warning("metadata.invalid_payload", cv_id=cv_id, error=str(exc))
            return None

    def _request(self, url: str) -> request.Request:
        return request.Request(url, headers={SESSION_HEADER: self._session.token}, method="GET")


def _read_text(exc: error.HTTPError) -> str:
    try:
        return exc.read().decode("utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return ""
