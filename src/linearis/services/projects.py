"""Project list/read/create/update/archive."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linearis.errors import NotFoundError, RemoteFailureError
from linearis.identifiers import is_uuid
from linearis.payload import PROJECT_FIELDS, ProjectCreateArgs, ProjectUpdateArgs, compose_input
from linearis.queries.projects import (
    ARCHIVE_PROJECT_MUTATION,
    CREATE_PROJECT_MUTATION,
    GET_PROJECT_BY_ID_QUERY,
    LIST_PROJECTS_QUERY,
    UPDATE_PROJECT_MUTATION,
)
from linearis.resolve import Resolver
from linearis.transform import nodes, transform_project

if TYPE_CHECKING:
    from linearis.client import LinearClient


class ProjectsService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def list(self, limit: int = 100, include_archived: bool = False) -> list[dict[str, Any]]:
        result = await self._client.request(
            LIST_PROJECTS_QUERY,
            {"first": limit, "includeArchived": include_archived},
            operation="list projects",
        )
        return [transform_project(p) for p in nodes(result.get("projects"))]

    async def get(
        self,
        ref: str,
        milestones_first: int = 50,
        issues_first: int = 50,
    ) -> dict[str, Any]:
        """Read a project with its milestones and issues; a zero limit skips that connection."""
        project_id = await self._resolver.project_id(ref)
        result = await self._client.request(
            GET_PROJECT_BY_ID_QUERY,
            {
                "id": project_id,
                "milestonesFirst": milestones_first or None,
                "issuesFirst": issues_first or None,
                "skipMilestones": milestones_first == 0,
                "skipIssues": issues_first == 0,
            },
            operation=f'read project "{ref}"',
        )
        project = result.get("project")
        if not project:
            raise NotFoundError("Project", ref)
        return transform_project(project)

    async def create(self, args: ProjectCreateArgs) -> dict[str, Any]:
        team_id = await self._resolver.team_id(args.team)
        resolved: dict[str, Any] = {}
        if args.lead and not is_uuid(args.lead):
            resolved["lead"] = await self._resolver.user_id(args.lead)

        project_input = compose_input(args, PROJECT_FIELDS, resolved)
        project_input["teamIds"] = [team_id]
        result = await self._client.request(
            CREATE_PROJECT_MUTATION,
            {"input": project_input},
            operation=f'create project "{args.name}"',
        )
        payload = result.get("projectCreate") or {}
        if not payload.get("success") or not payload.get("project"):
            raise RemoteFailureError("create project", f'"{args.name}"')
        return transform_project(payload["project"])

    async def update(self, args: ProjectUpdateArgs) -> dict[str, Any]:
        project_id = await self._resolver.project_id(args.id)
        resolved: dict[str, Any] = {}
        if args.lead and not is_uuid(args.lead):
            resolved["lead"] = await self._resolver.user_id(args.lead)

        project_input = compose_input(args, PROJECT_FIELDS, resolved)
        if args.team:
            project_input["teamIds"] = [await self._resolver.team_id(args.team)]

        result = await self._client.request(
            UPDATE_PROJECT_MUTATION,
            {"id": project_id, "input": project_input},
            operation=f'update project "{args.id}"',
        )
        payload = result.get("projectUpdate") or {}
        if not payload.get("success") or not payload.get("project"):
            raise RemoteFailureError("update project", args.id)
        return transform_project(payload["project"])

    async def archive(self, ref: str) -> dict[str, Any]:
        project_id = await self._resolver.project_id(ref)
        result = await self._client.request(
            ARCHIVE_PROJECT_MUTATION, {"id": project_id}, operation=f'archive project "{ref}"'
        )
        if not (result.get("projectArchive") or {}).get("success"):
            raise RemoteFailureError("archive project", ref)
        return {"archived": True, "id": project_id}
