"""Heuristic parsing of labelled fields out of CV snippets.

Snippets come back from the search service as loosely formatted text, one
``LABEL: value`` pair per line. Nothing here raises on malformed input; a
missing field is ``None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

PLACEHOLDER = "-"

NAME = "NAME"
LOCATION = "LOCATION"
LAST_EMPLOYMENT = "LAST EMPLOYMENT"
REQUIRED_EMPLOYMENT = "REQUIRED EMPLOYMENT"
REQUIRED_SALARY = "REQUIRED SALARY"
AVAILABILITY = "AVAILABILITY"
SUMMARY = "* SUMMARY"

LABELS: tuple[str, ...] = (
    NAME,
    LOCATION,
    LAST_EMPLOYMENT,
    REQUIRED_EMPLOYMENT,
    REQUIRED_SALARY,
    AVAILABILITY,
    SUMMARY,
)

_MULTI_SPACE_RE = re.compile(r" {2,}")


@dataclass(frozen=True, slots=True)
class SnippetFields:
    """Labelled values found in a snippet."""

    name: str | None = None
    location: str | None = None
    last_employment: str | None = None
    required_employment: str | None = None
    required_salary: str | None = None
    availability: str | None = None
    summary_intro: str | None = None


def sanitize_snippet(snippet: str | None) -> str:
    if not snippet:
        return PLACEHOLDER
    cleaned = snippet.replace("\r", "").replace("\t", " ")
    cleaned = _MULTI_SPACE_RE.sub(" ", cleaned).strip()
    return cleaned or PLACEHOLDER


def split_lines(snippet: str) -> list[str]:
    """Split a sanitized snippet into trimmed, non-empty lines."""
    return [line.strip() for line in snippet.split("\n") if line.strip()]


def extract_field(lines: Sequence[str], label: str) -> str | None:
    """Return the value of the first line starting with ``label``.

    Matching is case-insensitive. The value is whatever follows the first
    colon on that line.
    """
    target = label.strip().lower()
    for line in lines:
        if line.lower().startswith(target):
            _, _, remainder = line.partition(":")
            return remainder.strip() or None
    return None


def extract_fields(lines: Sequence[str]) -> SnippetFields:
    return SnippetFields(
        name=extract_field(lines, NAME),
        location=extract_field(lines, LOCATION),
        last_employment=extract_field(lines, LAST_EMPLOYMENT),
        required_employment=extract_field(lines, REQUIRED_EMPLOYMENT),
        required_salary=extract_field(lines, REQUIRED_SALARY),
        availability=extract_field(lines, AVAILABILITY),
        summary_intro=extract_field(lines, SUMMARY),
    )


def parse_snippet(snippet: str | None) -> tuple[str, list[str], SnippetFields]:
    """Sanitize a raw snippet and extract its lines and labelled fields."""
    sanitized = sanitize_snippet(snippet)
    lines = split_lines(sanitized)
    return sanitized, lines, extract_fields(lines)


def first_present(*values: str | None, default: str | None = None) -> str | None:
    """Return the first value that is set, non-blank and not the placeholder."""
    for value in values:
        if value is None:
            continue
        stripped = value.strip()
        if stripped and stripped != PLACEHOLDER:
            return value
    return default


__all__ = [
    "LABELS",
    "PLACEHOLDER",
    "SnippetFields",
    "extract_field",
    "extract_fields",
    "first_present",
    "parse_snippet",
    "sanitize_snippet",
    "split_lines",
]
