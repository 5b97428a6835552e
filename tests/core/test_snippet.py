from __future__ import annotations

from cvsearch.core.snippet import (
    PLACEHOLDER,
    extract_field,
    extract_fields,
    first_present,
    parse_snippet,
    sanitize_snippet,
    split_lines,
)


def test_extract_field_is_case_insensitive():
    lines = ["Name: Jane Doe", "Location: Prague"]

    assert extract_field(lines, "NAME") == "Jane Doe"
    assert extract_field(lines, "location") == "Prague"


def test_extract_field_returns_none_for_absent_or_empty():
    lines = ["NAME:   ", "LOCATION Prague"]

    assert extract_field(lines, "AVAILABILITY") is None
    assert extract_field(lines, "NAME") is None
    assert extract_field(lines, "LOCATION") is None
    assert extract_field([], "NAME") is None


def test_extract_field_keeps_text_after_first_colon():
    lines = ["AVAILABILITY: from 09:00 daily"]

    assert extract_field(lines, "AVAILABILITY") == "from 09:00 daily"


def test_extract_field_uses_first_matching_line():
    lines = ["NAME: First", "NAME: Second"]

    assert extract_field(lines, " name ") == "First"


def test_sanitize_snippet_normalizes_whitespace():
    raw = "  NAME:\tJane    Doe\r\nLOCATION:  Prague  "

    assert sanitize_snippet(raw) == "NAME: Jane Doe\nLOCATION: Prague"


def test_sanitize_snippet_placeholder_for_missing():
    assert sanitize_snippet(None) == PLACEHOLDER
    assert sanitize_snippet("") == PLACEHOLDER
    assert sanitize_snippet("   ") == PLACEHOLDER


def test_split_lines_drops_blank_lines():
    assert split_lines("a\n\n  b  \n") == ["a", "b"]


def test_extract_fields_recognizes_all_labels():
    snippet = "\n".join(
        [
            "* SUMMARY: Seasoned accountant",
            "NAME: Jane Doe",
            "LOCATION: Prague",
            "LAST EMPLOYMENT: Deloitte",
            "REQUIRED EMPLOYMENT: Controller",
            "REQUIRED SALARY: 80k",
            "AVAILABILITY: immediate",
        ]
    )

    fields = extract_fields(split_lines(snippet))

    assert fields.summary_intro == "Seasoned accountant"
    assert fields.name == "Jane Doe"
    assert fields.location == "Prague"
    assert fields.last_employment == "Deloitte"
    assert fields.required_employment == "Controller"
    assert fields.required_salary == "80k"
    assert fields.availability == "immediate"


def test_parse_snippet_never_fails_on_garbage():
    sanitized, lines, fields = parse_snippet(":::\n\t\t\n??")

    assert sanitized == ":::\n \n??"
    assert lines == [":::", "??"]
    assert fields.name is None


def test_first_present_skips_blank_and_placeholder():
    assert first_present(None, "", "  ", "-", "value") == "value"
    assert first_present(None, default="fallback") == "fallback"
    assert first_present() is None
