"""Adapters turning upstream search payloads into candidates."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import Candidate
from .cvsearch import (
    CvSearchAdapter,
    MappingConfig,
    ResultMappingError,
    enrich_with_metadata,
    map_results,
)


@runtime_checkable
class ResultAdapter(Protocol):
    """Search-service result adapter contract.

    Implementations transform a provider's raw result list into Candidate
    records, keeping the input order.
    """

    provider: str

    def can_handle(self, payload: Any) -> bool:
        """Return True when the adapter understands the given payload."""

    def map_results(self, raw_results: Any) -> list[Candidate]:
        """Map raw results into candidates."""


__all__ = [
    "CvSearchAdapter",
    "MappingConfig",
    "ResultAdapter",
    "ResultMappingError",
    "enrich_with_metadata",
    "map_results",
]
