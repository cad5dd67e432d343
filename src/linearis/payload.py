"""
Typed command arguments and partial-update payload composition.

Argument models are pydantic models built only from the options the user
actually passed, so ``model_fields_set`` tells "not provided" apart from an
explicit ``None`` (clear). compose_input() turns the set fields into the
mutation input, renaming them to their wire names.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from linearis.errors import ValidationError

ArgsT = TypeVar("ArgsT", bound="MutationArgs")


class LabelMode(StrEnum):
    """How requested labels combine with an issue's current labels."""

    ADDING = "adding"
    OVERWRITING = "overwriting"


class MutationArgs(BaseModel):
    """Base for create/update argument models."""

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def build(cls: type[ArgsT], **values: Any) -> ArgsT:
        """Validate values, converting pydantic errors into ValidationError."""
        try:
            return cls(**values)
        except pydantic.ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"Invalid arguments: {details}") from None

    def is_set(self, name: str) -> bool:
        return name in self.model_fields_set

    def explicit(self) -> dict[str, Any]:
        """Only the fields the caller set, explicit None included."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# --- Issues ---


class IssueCreateArgs(MutationArgs):
    title: str = Field(min_length=1)
    team: str
    description: str | None = None
    assignee: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    project: str | None = None
    status: str | None = None
    labels: list[str] | None = None
    estimate: float | None = None
    parent: str | None = None
    milestone: str | None = None
    cycle: str | None = None


class IssueUpdateArgs(MutationArgs):
    id: str
    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    assignee: str | None = None
    project: str | None = None
    labels: list[str] | None = None
    label_mode: LabelMode = LabelMode.OVERWRITING
    estimate: float | None = None
    parent: str | None = None
    milestone: str | None = None
    cycle: str | None = None


class IssueSearchArgs(MutationArgs):
    query: str | None = None
    team: str | None = None
    assignee: str | None = None
    project: str | None = None
    status: list[str] | None = None
    limit: int = Field(default=10, ge=1)


ISSUE_CREATE_FIELDS = {
    "title": "title",
    "team": "teamId",
    "description": "description",
    "assignee": "assigneeId",
    "priority": "priority",
    "project": "projectId",
    "status": "stateId",
    "labels": "labelIds",
    "estimate": "estimate",
    "parent": "parentId",
    "milestone": "projectMilestoneId",
    "cycle": "cycleId",
}

ISSUE_UPDATE_FIELDS = {key: value for key, value in ISSUE_CREATE_FIELDS.items() if key != "team"}


# --- Projects ---


class ProjectCreateArgs(MutationArgs):
    name: str = Field(min_length=1)
    team: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    lead: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    start_date: str | None = None
    target_date: str | None = None


class ProjectUpdateArgs(MutationArgs):
    id: str
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    lead: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    start_date: str | None = None
    target_date: str | None = None
    team: str | None = None


PROJECT_FIELDS = {
    "name": "name",
    "description": "description",
    "icon": "icon",
    "color": "color",
    "lead": "leadId",
    "priority": "priority",
    "start_date": "startDate",
    "target_date": "targetDate",
}


# --- Milestones ---


class MilestoneCreateArgs(MutationArgs):
    name: str = Field(min_length=1)
    project: str
    description: str | None = None
    target_date: str | None = None


class MilestoneUpdateArgs(MutationArgs):
    id: str
    project: str | None = None
    name: str | None = None
    description: str | None = None
    target_date: str | None = None
    sort_order: float | None = None


MILESTONE_FIELDS = {
    "name": "name",
    "description": "description",
    "target_date": "targetDate",
    "sort_order": "sortOrder",
}


# --- Documents / attachments ---


class DocumentCreateArgs(MutationArgs):
    title: str = Field(min_length=1)
    content: str | None = None
    project: str | None = None
    team: str | None = None
    icon: str | None = None
    color: str | None = None


class DocumentUpdateArgs(MutationArgs):
    id: str
    title: str | None = None
    content: str | None = None
    project: str | None = None
    icon: str | None = None
    color: str | None = None


DOCUMENT_FIELDS = {
    "title": "title",
    "content": "content",
    "project": "projectId",
    "team": "teamId",
    "icon": "icon",
    "color": "color",
}


class AttachmentCreateArgs(MutationArgs):
    issue: str
    url: str = Field(min_length=1)
    title: str = Field(min_length=1)
    subtitle: str | None = None
    comment: str | None = None
    icon_url: str | None = None


ATTACHMENT_FIELDS = {
    "issue": "issueId",
    "url": "url",
    "title": "title",
    "subtitle": "subtitle",
    "comment": "commentBody",
    "icon_url": "iconUrl",
}


# --- Composition ---


def compose_input(
    args: MutationArgs,
    field_map: Mapping[str, str],
    resolved: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a mutation input from explicitly set fields only.

    ``resolved`` overrides user values with resolved ids (keyed by argument
    name). Unset fields never appear; fields set to None are sent as null.
    """
    resolved = resolved or {}
    payload: dict[str, Any] = {}
    for name, wire_name in field_map.items():
        if not args.is_set(name):
            continue
        payload[wire_name] = resolved[name] if name in resolved else getattr(args, name)
    return payload


def merge_label_ids(
    current: Iterable[str],
    requested: Iterable[str],
    mode: LabelMode,
) -> list[str]:
    """Combine label ids: ADDING keeps current ones first, OVERWRITING replaces."""
    if mode is LabelMode.OVERWRITING:
        return list(dict.fromkeys(requested))
    return list(dict.fromkeys([*current, *requested]))


def exclusive(first_flag: str, first_value: Any, second_flag: str, second_value: Any) -> None:
    """Reject a mutually exclusive flag pair given together."""
    if first_value not in (None, False) and second_value not in (None, False):
        raise ValidationError(f"Cannot use {first_flag} and {second_flag} together")


def parse_positive_int(flag: str, value: str | int | None, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {flag} "{value}": must be a positive number') from None
    if number < 1:
        raise ValidationError(f'Invalid {flag} "{value}": must be a positive number')
    return number


def parse_non_negative_int(flag: str, value: str | int | None, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {flag} "{value}": must be a non-negative number') from None
    if number < 0:
        raise ValidationError(f'Invalid {flag} "{value}": must be a non-negative number')
    return number


def split_list(value: str | None) -> list[str] | None:
    """Split a comma-separated option into trimmed, non-empty items."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]
