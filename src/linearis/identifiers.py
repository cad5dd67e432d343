"""Lexical classification of user-supplied identifiers.

Pure functions only: nothing here talks to the network.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from linearis.errors import ValidationError

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
ISSUE_IDENTIFIER_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9]*)-(\d+)$")
TEAM_KEY_PATTERN = re.compile(r"^[A-Za-z0-9]{1,5}$")


class IssueIdentifier(NamedTuple):
    team_key: str
    number: int

    def __str__(self) -> str:
        return f"{self.team_key}-{self.number}"


def is_uuid(value: str | None) -> bool:
    """True when value has the opaque 8-4-4-4-12 hex shape Linear uses for ids."""
    if not isinstance(value, str):
        return False
    return bool(UUID_PATTERN.match(value))


def try_parse_issue_identifier(value: str | None) -> IssueIdentifier | None:
    if not isinstance(value, str):
        return None
    match = ISSUE_IDENTIFIER_PATTERN.match(value.strip())
    if not match:
        return None
    return IssueIdentifier(match.group(1).upper(), int(match.group(2)))


def parse_issue_identifier(value: str) -> IssueIdentifier:
    """Parse ``ABC-123`` into (team key, number).

    Raises:
        ValidationError: if the value is not in TEAM-NUMBER form
    """
    parsed = try_parse_issue_identifier(value)
    if parsed is None:
        raise ValidationError(
            f'Invalid issue identifier "{value}": expected TEAM-123 format or a UUID'
        )
    return parsed


def looks_like_team_key(value: str) -> bool:
    """Team keys are short alphanumeric strings (usually 2-5 chars)."""
    return bool(TEAM_KEY_PATTERN.match(value))


def looks_like_email(value: str) -> bool:
    return "@" in value
