"""Short display summary derived from a parsed snippet."""

from __future__ import annotations

from typing import Sequence

from ..schemas import CandidateSummary
from .snippet import PLACEHOLDER, SnippetFields, first_present

NO_SUMMARY = "No summary available."
NO_HIGHLIGHTS = "No structured data provided."


def build_summary(lines: Sequence[str], fields: SnippetFields) -> CandidateSummary:
    paragraphs = [line for line in lines if line]

    intro = first_present(
        fields.summary_intro,
        paragraphs[0] if paragraphs else None,
        fields.name,
        default=NO_SUMMARY,
    )
    body = first_present(
        " ".join(paragraphs[1:3]),
        fields.last_employment,
        default=PLACEHOLDER,
    )
    detail = first_present(
        " ".join(paragraphs[3:]),
        fields.required_employment,
        default=PLACEHOLDER,
    )

    return CandidateSummary(
        intro=intro,
        body=body,
        detail=detail,
        highlights=build_highlights(fields),
    )


def build_highlights(fields: SnippetFields) -> list[str]:
    labelled = (
        ("Location", fields.location),
        ("Last employment", fields.last_employment),
        ("Role preference", fields.required_employment),
        ("Salary expectation", fields.required_salary),
    )
    highlights = [f"{label}: {value}" for label, value in labelled if value is not None]
    return highlights or [NO_HIGHLIGHTS]


__all__ = ["NO_HIGHLIGHTS", "NO_SUMMARY", "build_highlights", "build_summary"]
