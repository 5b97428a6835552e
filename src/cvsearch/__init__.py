"""Candidate search core: result mapping, scoring and ranking."""

__version__ = "0.1.0"
