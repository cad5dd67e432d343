"""Read-only workspace listings (labels, teams, users) and comment creation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linearis.errors import RemoteFailureError
from linearis.queries.comments import CREATE_COMMENT_MUTATION
from linearis.queries.labels import LIST_LABELS_QUERY
from linearis.queries.teams import LIST_TEAMS_QUERY
from linearis.queries.users import LIST_USERS_QUERY
from linearis.resolve import Resolver
from linearis.transform import compact, nodes, transform_comment, transform_label

if TYPE_CHECKING:
    from linearis.client import LinearClient


class LabelsService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def list(self, team: str | None = None, limit: int = 250) -> list[dict[str, Any]]:
        """Labels visible to a team (its own plus workspace labels), or all labels."""
        variables: dict[str, Any] = {"first": limit}
        if team:
            team_id = await self._resolver.team_id(team)
            variables["filter"] = {
                "or": [{"team": {"id": {"eq": team_id}}}, {"team": {"null": True}}]
            }
        result = await self._client.request(LIST_LABELS_QUERY, variables, operation="list labels")
        return [transform_label(label) for label in nodes(result.get("issueLabels"))]


class TeamsService:
    def __init__(self, client: LinearClient):
        self._client = client

    async def list(self, limit: int = 100) -> list[dict[str, Any]]:
        result = await self._client.request(LIST_TEAMS_QUERY, {"first": limit}, operation="list teams")
        return [compact(team) for team in nodes(result.get("teams"))]


class UsersService:
    def __init__(self, client: LinearClient):
        self._client = client

    async def list(self, active_only: bool = False, limit: int = 250) -> list[dict[str, Any]]:
        variables: dict[str, Any] = {"first": limit}
        if active_only:
            variables["filter"] = {"active": {"eq": True}}
        result = await self._client.request(LIST_USERS_QUERY, variables, operation="list users")
        return [compact(user) for user in nodes(result.get("users"))]


class CommentsService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def create(self, issue: str, body: str) -> dict[str, Any]:
        issue_id = await self._resolver.issue_id(issue)
        result = await self._client.request(
            CREATE_COMMENT_MUTATION,
            {"input": {"issueId": issue_id, "body": body}},
            operation=f'create comment on issue "{issue}"',
        )
        payload = result.get("commentCreate") or {}
        if not payload.get("success") or not payload.get("comment"):
            raise RemoteFailureError("create comment", f"on issue {issue}")
        return transform_comment(payload["comment"])
