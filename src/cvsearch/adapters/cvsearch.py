"""CV search service result adapter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

import pendulum
from pydantic import ValidationError

from ..core.bars import clamp_score, round_half_up, score_to_bars
from ..core.snippet import PLACEHOLDER, SnippetFields, first_present, parse_snippet, sanitize_snippet
from ..core.summary import build_summary
from ..schemas import (
    AIExtracted,
    Candidate,
    CandidateDocument,
    ContactFields,
    CvMetadata,
    RawDocument,
    RawResult,
    TimelineEvent,
    TimelineTag,
)

EXPECTED_SHAPE = "{subjectId, name?, bestScore?, documents: [{documentId, filename, score, snippet, aiExtracted?}]}"
PREVIEW_CHARS = 280


@dataclass
class MappingConfig:
    """Batch handling policy for malformed records."""

    skip_invalid: bool = False


class ResultMappingError(ValueError):
    """Raised when one or more raw results do not have the expected shape."""

    def __init__(self, errors: list[str], partial: list[Candidate]):
        super().__init__("Result mapping failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Result mapping failed: {self.errors}"


class CvSearchAdapter:
    """Adapter converting CV search results into Candidate records."""

    provider = "cvsearch"

    def __init__(self, *, clock: Callable[[], pendulum.DateTime] | None = None) -> None:
        self._clock = clock or pendulum.now

    def can_handle(self, payload: Any) -> bool:
        if isinstance(payload, Mapping):
            payload = payload.get("results")
        return isinstance(payload, list) and all(
            isinstance(item, Mapping) and "subjectId" in item for item in payload
        )

    def map_results(self, raw_results: Any) -> list[Candidate]:
        """Map every raw result, preserving input order.

        Invalid records are collected; if any exist a ``ResultMappingError``
        is raised after the whole batch was examined, carrying the valid
        candidates in ``partial``.
        """
        if not isinstance(raw_results, list):
            return []

        today = self._clock().to_date_string()
        candidates: list[Candidate] = []
        errors: list[str] = []
        for index, record in enumerate(raw_results):
            try:
                result = self.validate(record, index)
            except ValueError as exc:
                errors.append(str(exc))
                continue
            candidates.append(self.to_candidate(result, today=today))

        if errors:
            raise ResultMappingError(errors, candidates)
        return candidates

    @staticmethod
    def validate(record: Any, index: int) -> RawResult:
        if not isinstance(record, Mapping):
            raise ValueError(f"result[{index}]: expected an object shaped {EXPECTED_SHAPE}")
        if record.get("subjectId") is None:
            raise ValueError(f"result[{index}]: missing 'subjectId'; expected {EXPECTED_SHAPE}")
        documents = record.get("documents")
        if not isinstance(documents, list) or not documents:
            raise ValueError(f"result[{index}]: missing or empty 'documents' array; expected {EXPECTED_SHAPE}")
        try:
            return RawResult.model_validate(record)
        except ValidationError as exc:
            raise ValueError(f"result[{index}]: {exc}") from exc

    def to_candidate(self, result: RawResult, *, today: str | None = None) -> Candidate:
        today = today or self._clock().to_date_string()
        best = result.best_document
        ai = best.ai_extracted

        snippet, lines, fields = parse_snippet(best.snippet)
        score = percent(result.best_score if result.best_score is not None else best.score)
        ai_name = ai.name if ai else None

        return Candidate(
            id=result.subject_id,
            lead_id=str(result.subject_id),
            display_name=first_present(
                result.name,
                ai_name,
                fields.name,
                default=f"Candidate {result.subject_id}",
            ),
            date=today,
            score=score,
            match_bars=score_to_bars(score),
            status=first_present(
                ai.required_employment if ai else None,
                fields.required_employment,
                default="Prospect",
            ),
            contact=resolve_contact(ai, fields),
            summary=build_summary(lines, fields),
            documents=[to_document(doc) for doc in result.documents],
            timeline=build_timeline(result, fields, snippet, today=today),
            snippet=snippet,
            ai_extracted=ai,
        )


def percent(fraction: float | None) -> int:
    """Convert an upstream ``[0, 1]`` score into a bounded percentage."""
    return round_half_up(clamp_score((fraction or 0.0) * 100))


def resolve_contact(ai: AIExtracted | None, fields: SnippetFields) -> ContactFields:
    return ContactFields(
        email=first_present(ai.email if ai else None, default=PLACEHOLDER),
        phone=first_present(ai.phone if ai else None, default=PLACEHOLDER),
        address=first_present(ai.location if ai else None, fields.location, default=PLACEHOLDER),
    )


def to_document(doc: RawDocument) -> CandidateDocument:
    return CandidateDocument(
        document_id=doc.document_id,
        filename=doc.filename,
        score=percent(doc.score),
        snippet=sanitize_snippet(doc.snippet),
        ai_extracted=doc.ai_extracted,
    )


def build_timeline(result: RawResult, fields: SnippetFields, snippet: str, *, today: str) -> list[TimelineEvent]:
    components = result.score_components
    fraction = result.score if result.score is not None else result.best_score
    if fraction is None:
        fraction = result.best_document.score
    overall = percent(fraction)
    semantic = percent(components.semantic if components else None)
    bm25 = percent(components.bm25 if components else None)

    return [
        TimelineEvent(
            type="form",
            title="Semantic relevance",
            subtitle="Vector search",
            app="Search Engine",
            date=today,
            tag=TimelineTag(label="Score", value=f"{overall}%", dot="green"),
            has_badge=True,
        ),
        TimelineEvent(
            type="email",
            title="BM25 component",
            subtitle="Keyword match",
            app="Search Engine",
            date=today,
            tag=TimelineTag(label="Score", value=f"{bm25}%"),
        ),
        TimelineEvent(
            type="email-sent",
            title=first_present(fields.name, default=f"Candidate {result.subject_id}"),
            subtitle="Profile snippet",
            app="Dataset",
            date=today,
            email_subject=first_present(fields.required_employment, default="Profile overview"),
            email_preview=snippet[:PREVIEW_CHARS],
            has_expand=True,
        ),
        TimelineEvent(
            type="form",
            title="Semantic score (raw)",
            subtitle="Model output",
            app="Search Engine",
            date=today,
            tag=TimelineTag(label="Semantic", value=f"{semantic}%", dot="blue"),
        ),
    ]


def enrich_with_metadata(candidate: Candidate, metadata: CvMetadata | None) -> Candidate:
    """Return a copy of ``candidate`` overlaid with AI-extracted metadata."""
    if metadata is None or metadata.ai_extracted is None:
        return candidate

    ai = metadata.ai_extracted
    contact = candidate.contact
    return candidate.model_copy(
        update={
            "display_name": first_present(ai.name, default=candidate.display_name),
            "contact": ContactFields(
                email=first_present(ai.email, default=contact.email),
                phone=first_present(ai.phone, default=contact.phone),
                address=first_present(ai.location, default=contact.address),
            ),
            "ai_extracted": ai,
            "cv_metadata": metadata.model_dump(mode="json", by_alias=True),
        }
    )


def map_results(raw_results: Any) -> list[Candidate]:
    """Map raw results with a default adapter."""
    return CvSearchAdapter().map_results(raw_results)
