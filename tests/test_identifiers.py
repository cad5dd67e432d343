"""Tests for identifier classification."""

import pytest

from linearis.errors import ValidationError
from linearis.identifiers import (
    IssueIdentifier,
    is_uuid,
    looks_like_email,
    looks_like_team_key,
    parse_issue_identifier,
    try_parse_issue_identifier,
)


class TestIsUuid:
    def test_accepts_lowercase_and_uppercase(self):
        assert is_uuid("0a1b2c3d-4e5f-6789-abcd-ef0123456789")
        assert is_uuid("0A1B2C3D-4E5F-6789-ABCD-EF0123456789")

    @pytest.mark.parametrize(
        "value",
        ["ENG-123", "Engineering", "", "0a1b2c3d4e5f6789abcdef0123456789", None, 42],
    )
    def test_rejects_human_values(self, value):
        assert is_uuid(value) is False


class TestIssueIdentifier:
    def test_parses_team_and_number(self):
        assert parse_issue_identifier("ENG-123") == IssueIdentifier("ENG", 123)

    def test_uppercases_team_key(self):
        assert parse_issue_identifier("eng-7").team_key == "ENG"

    def test_str_round_trips(self):
        assert str(IssueIdentifier("ABC", 5)) == "ABC-5"

    @pytest.mark.parametrize("value", ["ENG", "ENG-", "-12", "ENG-12a", "my project"])
    def test_invalid_shapes_raise(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_issue_identifier(value)
        assert value in str(exc_info.value)

    def test_try_parse_returns_none(self):
        assert try_parse_issue_identifier("not an issue") is None
        assert try_parse_issue_identifier(None) is None


class TestHeuristics:
    def test_team_key(self):
        assert looks_like_team_key("ENG")
        assert looks_like_team_key("ab12")
        assert not looks_like_team_key("Engineering")
        assert not looks_like_team_key("EN G")

    def test_email(self):
        assert looks_like_email("ada@example.com")
        assert not looks_like_email("Ada Lovelace")
