"""Project milestone list/read/create/update."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linearis.errors import NotFoundError, RemoteFailureError
from linearis.payload import MILESTONE_FIELDS, MilestoneCreateArgs, MilestoneUpdateArgs, compose_input
from linearis.queries.milestones import (
    CREATE_PROJECT_MILESTONE_MUTATION,
    GET_PROJECT_MILESTONE_BY_ID_QUERY,
    LIST_PROJECT_MILESTONES_QUERY,
    UPDATE_PROJECT_MILESTONE_MUTATION,
)
from linearis.resolve import Resolver
from linearis.transform import nodes, transform_milestone

if TYPE_CHECKING:
    from linearis.client import LinearClient


class MilestonesService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def list(self, project: str, limit: int = 50) -> list[dict[str, Any]]:
        project_id = await self._resolver.project_id(project)
        result = await self._client.request(
            LIST_PROJECT_MILESTONES_QUERY,
            {"projectId": project_id, "first": limit},
            operation=f'list milestones of project "{project}"',
        )
        found = result.get("project")
        if not found:
            raise NotFoundError("Project", project)
        return [transform_milestone(m) for m in nodes(found.get("projectMilestones"))]

    async def get(self, ref: str, project: str | None = None, issues_first: int = 50) -> dict[str, Any]:
        milestone_id = await self._resolver.milestone_id(ref, project)
        result = await self._client.request(
            GET_PROJECT_MILESTONE_BY_ID_QUERY,
            {"id": milestone_id, "issuesFirst": issues_first},
            operation=f'read milestone "{ref}"',
        )
        milestone = result.get("projectMilestone")
        if not milestone:
            raise NotFoundError("Milestone", ref)
        return transform_milestone(milestone)

    async def create(self, args: MilestoneCreateArgs) -> dict[str, Any]:
        milestone_input = compose_input(args, MILESTONE_FIELDS)
        milestone_input["projectId"] = await self._resolver.project_id(args.project)
        result = await self._client.request(
            CREATE_PROJECT_MILESTONE_MUTATION,
            {"input": milestone_input},
            operation=f'create milestone "{args.name}"',
        )
        payload = result.get("projectMilestoneCreate") or {}
        if not payload.get("success") or not payload.get("projectMilestone"):
            raise RemoteFailureError("create milestone", f'"{args.name}"')
        return transform_milestone(payload["projectMilestone"])

    async def update(self, args: MilestoneUpdateArgs) -> dict[str, Any]:
        milestone_id = await self._resolver.milestone_id(args.id, args.project)
        result = await self._client.request(
            UPDATE_PROJECT_MILESTONE_MUTATION,
            {"id": milestone_id, "input": compose_input(args, MILESTONE_FIELDS)},
            operation=f'update milestone "{args.id}"',
        )
        payload = result.get("projectMilestoneUpdate") or {}
        if not payload.get("success") or not payload.get("projectMilestone"):
            raise RemoteFailureError("update milestone", args.id)
        return transform_milestone(payload["projectMilestone"])
