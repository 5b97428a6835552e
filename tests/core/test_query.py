from __future__ import annotations

import pendulum
import pytest

from cvsearch.core.query import (
    QueryValidationError,
    build_search_params,
    clean_query,
    extract_criteria,
    extract_position,
    extract_years_of_experience,
    get_suggestions,
    validate_query,
)


def test_validate_query_accepts_reasonable_input():
    assert validate_query("tax advisor") == "tax advisor"


@pytest.mark.parametrize(
    ("query", "message"),
    [
        ("", "non-empty"),
        (None, "non-empty"),
        ("ab", "too short"),
        ("x" * 1001, "too long"),
    ],
)
def test_validate_query_rejects(query, message):
    with pytest.raises(QueryValidationError) as exc:
        validate_query(query)
    assert message in str(exc.value)


def test_clean_query_normalizes():
    assert clean_query("  Senior   Accountant (CPA)!  ") == "senior accountant cpa"


def test_extract_criteria_groups_keywords():
    criteria = extract_criteria("Find accountants with 5 years experience who speak English")

    assert criteria["experience"] == ["years", "experience"]
    assert criteria["languages"] == ["english"]
    assert "education" not in criteria


def test_extract_years_of_experience():
    assert extract_years_of_experience("5+ years of experience") == 5
    assert extract_years_of_experience("at least 3 years") == 3
    assert extract_years_of_experience("no numbers here") is None


def test_extract_position():
    assert extract_position("Looking for a Finance Manager in Prague") == "finance manager"
    assert extract_position("gardener") is None


def test_get_suggestions():
    assert len(get_suggestions("")) == 3
    assert get_suggestions("remote") == ["Remote-friendly finance professionals"]


def test_build_search_params_uses_clock():
    fixed = pendulum.datetime(2025, 1, 2, 3, 4, 5, tz="UTC")

    params = build_search_params("Senior auditor, 4 years", now_provider=lambda: fixed)

    assert params.cleaned_query == "senior auditor, 4 years"
    assert params.years_experience == 4
    assert params.position == "auditor"
    assert params.timestamp.startswith("2025-01-02T03:04:05")
