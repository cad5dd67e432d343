"""
Reshape Linear GraphQL responses into flat, stable JSON objects.

- ``{"nodes": [...]}`` connections become plain lists
- optional relationships missing on the wire are omitted from the output
- timestamps are emitted as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` whatever the input
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

# Signed upload URLs in markdown stay valid for about an hour
EMBED_URL_TTL = timedelta(hours=1)
UPLOADS_HOST = "uploads.linear.app"
MARKDOWN_LINK_PATTERN = re.compile(r"!?\[([^\]]*)\]\((https?://[^\s)]+)\)")


def nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Flatten a GraphQL connection; missing connections flatten to []."""
    if not connection:
        return []
    return list(connection.get("nodes") or [])


def optional_nodes(connection: dict[str, Any] | None) -> list[dict[str, Any]] | None:
    """Like nodes(), but a missing connection stays missing."""
    if connection is None:
        return None
    return nodes(connection)


def compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None (absent optional relationships)."""
    return {key: value for key, value in data.items() if value is not None}


def iso_timestamp(value: Any, default_now: bool = True) -> str | None:
    """Normalise a timestamp to ISO-8601 UTC with millisecond precision.

    Accepts ISO strings (any offset, optional fraction, trailing Z),
    datetime objects and epoch milliseconds. Unparseable strings are returned
    unchanged.
    """
    if value is None or value == "":
        if not default_now:
            return None
        moment = datetime.now(UTC)
    elif isinstance(value, datetime):
        moment = value
    elif isinstance(value, int | float) and not isinstance(value, bool):
        moment = datetime.fromtimestamp(value / 1000, tz=UTC)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return str(value)

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _ref(node: dict[str, Any] | None, *fields: str) -> dict[str, Any] | None:
    if not node:
        return None
    return {name: node.get(name) for name in fields}


# --- Embeds ---


def extract_embeds(markdown: str | None, now: datetime | None = None) -> list[dict[str, str]]:
    """Find uploaded-file links (uploads.linear.app) in markdown."""
    if not markdown:
        return []
    expires_at = iso_timestamp((now or datetime.now(UTC)) + EMBED_URL_TTL)
    embeds = []
    for label, url in MARKDOWN_LINK_PATTERN.findall(markdown):
        try:
            host = urlsplit(url).hostname or ""
        except ValueError:
            continue
        if host != UPLOADS_HOST:
            continue
        embeds.append({"label": label, "url": url, "expiresAt": expires_at})
    return embeds


# --- Document links ---


def extract_document_slug(url: str) -> str | None:
    """Return the slug id of a Linear document URL, or None.

    Document URLs look like https://linear.app/<workspace>/document/<title>-<slugId>.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        logger.debug("Skipping malformed attachment URL %r", url)
        return None
    if host != "linear.app" and not host.endswith(".linear.app"):
        return None
    segments = [s for s in parts.path.split("/") if s]
    if "document" not in segments:
        return None
    index = segments.index("document")
    if index + 1 >= len(segments):
        return None
    return segments[index + 1].rsplit("-", 1)[-1] or None


def extract_document_slugs(urls: Iterable[str]) -> list[str]:
    """Slug ids for every document URL in ``urls``; other URLs are skipped."""
    slugs: list[str] = []
    for url in urls:
        if not isinstance(url, str):
            continue
        slug = extract_document_slug(url)
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


# --- Entities ---


def transform_comment(comment: dict[str, Any]) -> dict[str, Any]:
    return compact(
        {
            "id": comment.get("id"),
            "body": comment.get("body"),
            "embeds": extract_embeds(comment.get("body")),
            "user": _ref(comment.get("user"), "id", "name"),
            "createdAt": iso_timestamp(comment.get("createdAt")),
            "updatedAt": iso_timestamp(comment.get("updatedAt")),
        }
    )


def transform_issue(issue: dict[str, Any]) -> dict[str, Any]:
    """Flatten an issue with its relationships into the CLI output shape."""
    try:
        return _transform_issue(issue)
    except (AttributeError, KeyError, TypeError):
        logger.error("Issue transform failed for raw issue data: %r", issue, exc_info=True)
        raise


def _transform_issue(issue: dict[str, Any]) -> dict[str, Any]:
    description = issue.get("description") or None
    milestone = issue.get("projectMilestone")
    children = issue.get("children")
    comments = issue.get("comments")
    return compact(
        {
            "id": issue["id"],
            "identifier": issue.get("identifier"),
            "title": issue.get("title"),
            "description": description,
            "branchName": issue.get("branchName") or None,
            "embeds": extract_embeds(description) if description else None,
            "state": _ref(issue.get("state"), "id", "name"),
            "assignee": _ref(issue.get("assignee"), "id", "name"),
            "team": _ref(issue.get("team"), "id", "key", "name"),
            "project": _ref(issue.get("project"), "id", "name"),
            "cycle": _ref(issue.get("cycle"), "id", "name", "number"),
            "projectMilestone": compact(
                {
                    "id": milestone.get("id"),
                    "name": milestone.get("name"),
                    "targetDate": milestone.get("targetDate") or None,
                }
            )
            if milestone
            else None,
            "priority": issue.get("priority"),
            "estimate": issue.get("estimate"),
            "labels": [_ref(label, "id", "name") for label in nodes(issue.get("labels"))],
            "parentIssue": _ref(issue.get("parent"), "id", "identifier", "title"),
            "subIssues": [_ref(child, "id", "identifier", "title") for child in nodes(children)]
            if children is not None
            else None,
            "comments": [transform_comment(c) for c in nodes(comments)],
            "createdAt": iso_timestamp(issue.get("createdAt")),
            "updatedAt": iso_timestamp(issue.get("updatedAt")),
        }
    )


def transform_project(project: dict[str, Any] | None) -> dict[str, Any] | None:
    if not project:
        return project
    issues = optional_nodes(project.get("issues"))
    return compact(
        {
            **project,
            "lead": _ref(project.get("lead"), "id", "name"),
            "teams": nodes(project.get("teams")),
            "members": optional_nodes(project.get("members")),
            "projectMilestones": optional_nodes(project.get("projectMilestones")),
            "issues": [transform_issue(i) for i in issues] if issues is not None else None,
            "createdAt": iso_timestamp(project.get("createdAt"), default_now=False),
            "updatedAt": iso_timestamp(project.get("updatedAt"), default_now=False),
        }
    )


def transform_cycle(cycle: dict[str, Any]) -> dict[str, Any]:
    issues = optional_nodes(cycle.get("issues"))
    return compact(
        {
            **cycle,
            "startsAt": iso_timestamp(cycle.get("startsAt"), default_now=False),
            "endsAt": iso_timestamp(cycle.get("endsAt"), default_now=False),
            "team": _ref(cycle.get("team"), "id", "key", "name"),
            "issues": [transform_issue(i) for i in issues] if issues is not None else None,
        }
    )


def transform_milestone(milestone: dict[str, Any]) -> dict[str, Any]:
    issues = optional_nodes(milestone.get("issues"))
    return compact(
        {
            **milestone,
            "project": _ref(milestone.get("project"), "id", "name"),
            "issues": [transform_issue(i) for i in issues] if issues is not None else None,
            "createdAt": iso_timestamp(milestone.get("createdAt"), default_now=False),
            "updatedAt": iso_timestamp(milestone.get("updatedAt"), default_now=False),
        }
    )


def transform_label(label: dict[str, Any]) -> dict[str, Any]:
    team = label.get("team")
    return compact(
        {
            "id": label.get("id"),
            "name": label.get("name"),
            "color": label.get("color"),
            "description": label.get("description") or None,
            "isGroup": label.get("isGroup"),
            "scope": "team" if team else "workspace",
            "team": _ref(team, "id", "key", "name"),
            "group": _ref(label.get("parent"), "id", "name"),
        }
    )


def transform_document(document: dict[str, Any]) -> dict[str, Any]:
    return compact(
        {
            **document,
            "creator": _ref(document.get("creator"), "id", "name"),
            "project": _ref(document.get("project"), "id", "name"),
            "createdAt": iso_timestamp(document.get("createdAt"), default_now=False),
            "updatedAt": iso_timestamp(document.get("updatedAt"), default_now=False),
        }
    )


def transform_attachment(attachment: dict[str, Any]) -> dict[str, Any]:
    return compact(
        {
            **attachment,
            "issue": _ref(attachment.get("issue"), "id", "identifier", "title"),
            "creator": _ref(attachment.get("creator"), "id", "name"),
            "createdAt": iso_timestamp(attachment.get("createdAt"), default_now=False),
            "updatedAt": iso_timestamp(attachment.get("updatedAt"), default_now=False),
        }
    )
