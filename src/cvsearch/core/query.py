"""Query validation and light-weight parsing of search phrases."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import pendulum

MIN_QUERY_LENGTH = 3
MAX_QUERY_LENGTH = 1000

CRITERIA_KEYWORDS: dict[str, tuple[str, ...]] = {
    "education": (
        "degree", "university", "college", "graduation", "bachelor",
        "master", "phd", "mba", "certified", "certification",
    ),
    "experience": ("years", "experience", "senior", "junior", "mid-level", "expert", "professional"),
    "languages": (
        "english", "french", "german", "spanish", "czech",
        "bilingual", "multilingual", "fluent",
    ),
    "skills": (
        "accounting", "finance", "tax", "audit", "bookkeeping",
        "excel", "sap", "erp", "ifrs", "gaap",
    ),
    "availability": ("available", "immediate", "part-time", "full-time", "remote", "hybrid", "on-site"),
}

POSITIONS: tuple[str, ...] = (
    "accountant",
    "controller",
    "cfo",
    "bookkeeper",
    "auditor",
    "financial analyst",
    "tax specialist",
    "payroll specialist",
    "accounts payable",
    "accounts receivable",
    "finance manager",
)

SUGGESTIONS: tuple[str, ...] = (
    "Find candidates with college graduation",
    "Accountants with 5+ years experience",
    "Bilingual candidates speaking English and French",
    "Senior accountants with CPA certification",
    "Entry-level positions in accounting",
    "Candidates available for immediate start",
    "Remote-friendly finance professionals",
)

_YEARS_PATTERNS = (
    re.compile(r"(\d+)\+?\s*years?\s*(of\s*)?(experience|exp)?", re.IGNORECASE),
    re.compile(r"at\s+least\s+(\d+)\s*years?", re.IGNORECASE),
    re.compile(r"minimum\s+(\d+)\s*years?", re.IGNORECASE),
)
_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^\w\s\-.,+]")


class QueryValidationError(ValueError):
    """Raised when a search query is rejected before any work is done."""


def validate_query(query: object) -> str:
    """Return the query unchanged when it is acceptable, raise otherwise."""
    if not query or not isinstance(query, str):
        raise QueryValidationError("Query must be a non-empty string")
    if len(query) < MIN_QUERY_LENGTH:
        raise QueryValidationError("Query too short. Please be more specific.")
    if len(query) > MAX_QUERY_LENGTH:
        raise QueryValidationError("Query too long. Please be more concise.")
    return query


def clean_query(query: str) -> str:
    collapsed = _WHITESPACE_RE.sub(" ", query.strip())
    return _DISALLOWED_RE.sub("", collapsed).lower()


def extract_criteria(query: str) -> dict[str, list[str]]:
    normalized = query.lower()
    found: dict[str, list[str]] = {}
    for category, keywords in CRITERIA_KEYWORDS.items():
        hits = [keyword for keyword in keywords if keyword in normalized]
        if hits:
            found[category] = hits
    return found


def extract_years_of_experience(query: str) -> int | None:
    for pattern in _YEARS_PATTERNS:
        match = pattern.search(query)
        if match:
            return int(match.group(1))
    return None


def extract_position(query: str) -> str | None:
    normalized = query.lower()
    for position in POSITIONS:
        if position in normalized:
            return position
    return None


def get_suggestions(partial_query: str | None) -> list[str]:
    if not partial_query or len(partial_query) < 2:
        return list(SUGGESTIONS[:3])
    normalized = partial_query.lower()
    return [suggestion for suggestion in SUGGESTIONS if normalized in suggestion.lower()][:5]


@dataclass(slots=True)
class SearchParams:
    """Structured view of a natural-language query."""

    raw_query: str
    cleaned_query: str
    criteria: dict[str, list[str]] = field(default_factory=dict)
    years_experience: int | None = None
    position: str | None = None
    timestamp: str = ""


def build_search_params(query: str, *, now_provider=pendulum.now) -> SearchParams:
    return SearchParams(
        raw_query=query,
        cleaned_query=clean_query(query),
        criteria=extract_criteria(query),
        years_experience=extract_years_of_experience(query),
        position=extract_position(query),
        timestamp=now_provider().to_iso8601_string(),
    )


__all__ = [
    "CRITERIA_KEYWORDS",
    "QueryValidationError",
    "SearchParams",
    "build_search_params",
    "clean_query",
    "extract_criteria",
    "extract_position",
    "extract_years_of_experience",
    "get_suggestions",
    "validate_query",
]
