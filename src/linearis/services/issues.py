"""
Issue operations with batched identifier resolution.

create/update/search resolve every human reference they carry (team,
status, labels, project, milestone, cycle, parent, assignee) in one batch
query, then send one mutation or search: two round trips in total.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from linearis.errors import NotFoundError, RemoteFailureError, ValidationError
from linearis.identifiers import is_uuid, parse_issue_identifier, try_parse_issue_identifier
from linearis.payload import (
    ISSUE_CREATE_FIELDS,
    ISSUE_UPDATE_FIELDS,
    IssueCreateArgs,
    IssueSearchArgs,
    IssueUpdateArgs,
    LabelMode,
    compose_input,
    merge_label_ids,
)
from linearis.queries import batch as sections
from linearis.queries.issues import (
    CREATE_ISSUE_MUTATION,
    DELETE_ISSUE_MUTATION,
    FILTERED_SEARCH_ISSUES_QUERY,
    GET_ISSUE_BY_ID_QUERY,
    GET_ISSUE_BY_IDENTIFIER_QUERY,
    GET_ISSUES_QUERY,
    SEARCH_ISSUES_QUERY,
    UPDATE_ISSUE_MUTATION,
)
from linearis.resolve import (
    BatchQuery,
    Resolver,
    add_cycle_lookup,
    add_issue_lookup,
    add_team_lookup,
    add_user_lookup,
    cycle_from,
    issue_from,
    pick_label,
    pick_milestone,
    pick_project,
    pick_state,
    pick_user,
    team_from,
)
from linearis.transform import nodes, transform_issue

if TYPE_CHECKING:
    from linearis.client import LinearClient

logger = logging.getLogger(__name__)


def _is_name(value: str | None) -> bool:
    """A non-empty reference that still needs a lookup."""
    return bool(value) and not is_uuid(value)


def _label_names(labels: list[str] | None) -> list[str]:
    return [label for label in labels or [] if not is_uuid(label)]


def _with_project(milestones: list[dict[str, Any]], project: dict[str, Any] | None) -> list[dict]:
    if not project:
        return []
    ref = {"id": project.get("id"), "name": project.get("name")}
    return [{**m, "project": ref} for m in milestones]


class IssuesService:
    """Issue list/read/search/create/update/delete."""

    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def list(self, limit: int = 25) -> list[dict[str, Any]]:
        result = await self._client.request(
            GET_ISSUES_QUERY,
            {"first": limit, "orderBy": "updatedAt"},
            operation="list issues",
        )
        return [transform_issue(issue) for issue in nodes(result.get("issues"))]

    async def get(self, ref: str) -> dict[str, Any]:
        """Read one issue by UUID or TEAM-123 identifier, comments included."""
        if is_uuid(ref):
            result = await self._client.request(
                GET_ISSUE_BY_ID_QUERY, {"id": ref}, operation=f'read issue "{ref}"'
            )
            issue = result.get("issue")
        else:
            identifier = parse_issue_identifier(ref)
            result = await self._client.request(
                GET_ISSUE_BY_IDENTIFIER_QUERY,
                {"teamKey": identifier.team_key, "number": identifier.number},
                operation=f'read issue "{ref}"',
            )
            found = nodes(result.get("issues"))
            issue = found[0] if found else None
        if not issue:
            raise NotFoundError("Issue", ref)
        return transform_issue(issue)

    async def delete(self, ref: str) -> dict[str, Any]:
        issue_id = await self._resolver.issue_id(ref)
        result = await self._client.request(
            DELETE_ISSUE_MUTATION, {"id": issue_id}, operation=f'delete issue "{ref}"'
        )
        if not (result.get("issueDelete") or {}).get("success"):
            raise RemoteFailureError("delete issue", ref)
        return {"deleted": True, "id": issue_id}

    # --- create ---

    async def create(self, args: IssueCreateArgs) -> dict[str, Any]:
        batch = BatchQuery("BatchResolveForCreate")

        needs_team_node = _is_name(args.team) or _is_name(args.status)
        if needs_team_node:
            add_team_lookup(batch, args.team)
        if _is_name(args.project):
            batch.add(sections.PROJECT_BY_NAME, projectName=args.project)
        elif args.project and _is_name(args.milestone):
            batch.add(sections.PROJECT_BY_ID, projectId=args.project)
        if _is_name(args.milestone):
            batch.add(sections.MILESTONES_BY_NAME, milestoneName=args.milestone)
        label_names = _label_names(args.labels)
        if label_names:
            batch.add(sections.LABELS_BY_NAME, labelNames=label_names)
        if _is_name(args.parent):
            parent = try_parse_issue_identifier(args.parent)
            if parent is None:
                raise ValidationError(
                    f'Invalid parent issue "{args.parent}": expected TEAM-123 format or a UUID'
                )
            batch.add(
                sections.PARENT_ISSUE_BY_IDENTIFIER,
                parentTeamKey=parent.team_key,
                parentNumber=parent.number,
            )
        if _is_name(args.assignee):
            add_user_lookup(batch, args.assignee)
        if _is_name(args.cycle):
            add_cycle_lookup(batch, args.cycle, args.team)

        result = await batch.execute(self._client, f'resolve references for new issue "{args.title}"')

        resolved: dict[str, Any] = {}
        team_id = args.team
        if needs_team_node:
            team = team_from(result, args.team)
            team_id = team["id"]
            resolved["team"] = team_id
            if _is_name(args.status):
                resolved["status"] = pick_state(
                    nodes(team.get("states")), args.status, team.get("key")
                )["id"]

        project = None
        if _is_name(args.project):
            project = pick_project(nodes(result.get("projects")), args.project, team_id)
            resolved["project"] = project["id"]
        elif "project" in batch:
            project = result.get("project")
            if not project:
                raise NotFoundError("Project", args.project)

        if args.labels is not None:
            label_nodes = nodes(result.get("labels"))
            label_ids = [
                label if is_uuid(label) else pick_label(label_nodes, label, team_id)["id"]
                for label in args.labels
            ]
            resolved["labels"] = list(dict.fromkeys(label_ids))

        if _is_name(args.parent):
            parents = nodes(result.get("parentIssues"))
            if not parents:
                raise NotFoundError("Parent issue", args.parent)
            resolved["parent"] = parents[0]["id"]

        if _is_name(args.assignee):
            resolved["assignee"] = pick_user(nodes(result.get("users")), args.assignee)["id"]

        if _is_name(args.milestone):
            resolved["milestone"] = pick_milestone(
                args.milestone,
                _with_project(nodes((project or {}).get("projectMilestones")), project),
                nodes(result.get("milestones")),
                project_given=bool(args.project),
            )["id"]

        if _is_name(args.cycle):
            resolved["cycle"] = cycle_from(result, args.cycle, team_id)["id"]

        issue_input = compose_input(args, ISSUE_CREATE_FIELDS, resolved)
        # empty values mean "not given" on create
        for key in ("description", "labelIds"):
            if key in issue_input and not issue_input[key]:
                del issue_input[key]
        issue_input = {k: v for k, v in issue_input.items() if v is not None}

        mutation = await self._client.request(
            CREATE_ISSUE_MUTATION,
            {"input": issue_input},
            operation=f'create issue "{args.title}"',
        )
        payload = mutation.get("issueCreate") or {}
        if not payload.get("success"):
            raise RemoteFailureError("create issue", f'"{args.title}"')
        if not payload.get("issue"):
            raise RemoteFailureError("retrieve created issue", f'"{args.title}"')
        return transform_issue(payload["issue"])

    # --- update ---

    async def update(self, args: IssueUpdateArgs) -> dict[str, Any]:
        label_names = _label_names(args.labels)
        needs_context = (
            not is_uuid(args.id)
            or _is_name(args.status)
            or bool(label_names)
            or (args.labels is not None and args.label_mode is LabelMode.ADDING)
            or _is_name(args.milestone)
            or _is_name(args.cycle)
        )

        batch = BatchQuery("BatchResolveForUpdate")
        if needs_context:
            add_issue_lookup(batch, args.id)
        if label_names:
            batch.add(sections.LABELS_BY_NAME, labelNames=label_names)
        if _is_name(args.project):
            batch.add(sections.PROJECT_BY_NAME, projectName=args.project)
        elif args.project and _is_name(args.milestone):
            batch.add(sections.PROJECT_BY_ID, projectId=args.project)
        if _is_name(args.milestone):
            batch.add(sections.MILESTONES_BY_NAME, milestoneName=args.milestone)
        if _is_name(args.cycle):
            identifier = None if is_uuid(args.id) else try_parse_issue_identifier(args.id)
            add_cycle_lookup(batch, args.cycle, identifier.team_key if identifier else None)
        if _is_name(args.assignee):
            add_user_lookup(batch, args.assignee)
        if _is_name(args.parent):
            parent = parse_issue_identifier(args.parent)
            batch.add(
                sections.PARENT_ISSUE_BY_IDENTIFIER,
                parentTeamKey=parent.team_key,
                parentNumber=parent.number,
            )

        result = await batch.execute(self._client, f'resolve references for issue "{args.id}"')

        issue: dict[str, Any] = {}
        issue_id = args.id
        if needs_context:
            issue = issue_from(result, args.id)
            issue_id = issue["id"]
        team = issue.get("team") or {}
        team_id = team.get("id")

        resolved: dict[str, Any] = {}
        if _is_name(args.status):
            resolved["status"] = pick_state(nodes(team.get("states")), args.status, team.get("key"))[
                "id"
            ]

        if args.labels is not None:
            label_nodes = nodes(result.get("labels"))
            requested = [
                label if is_uuid(label) else pick_label(label_nodes, label, team_id)["id"]
                for label in args.labels
            ]
            current = [label["id"] for label in nodes(issue.get("labels"))]
            resolved["labels"] = merge_label_ids(current, requested, args.label_mode)

        target_project = None
        if _is_name(args.project):
            target_project = pick_project(nodes(result.get("projects")), args.project, team_id)
            resolved["project"] = target_project["id"]
        elif "project" in batch:
            target_project = result.get("project")
            if not target_project:
                raise NotFoundError("Project", args.project)

        if _is_name(args.milestone):
            current_project = issue.get("project")
            resolved["milestone"] = pick_milestone(
                args.milestone,
                _with_project(nodes((target_project or {}).get("projectMilestones")), target_project),
                _with_project(nodes((current_project or {}).get("projectMilestones")), current_project),
                nodes(result.get("milestones")),
                project_given=bool(args.project),
            )["id"]

        if _is_name(args.cycle):
            resolved["cycle"] = cycle_from(result, args.cycle, team_id)["id"]

        if _is_name(args.assignee):
            resolved["assignee"] = pick_user(nodes(result.get("users")), args.assignee)["id"]

        if _is_name(args.parent):
            parents = nodes(result.get("parentIssues"))
            if not parents:
                raise NotFoundError("Parent issue", args.parent)
            resolved["parent"] = parents[0]["id"]

        update_input = compose_input(args, ISSUE_UPDATE_FIELDS, resolved)
        logger.debug("issue update fields: %s", sorted(update_input))

        mutation = await self._client.request(
            UPDATE_ISSUE_MUTATION,
            {"id": issue_id, "input": update_input},
            operation=f'update issue "{args.id}"',
        )
        payload = mutation.get("issueUpdate") or {}
        if not payload.get("success"):
            raise RemoteFailureError("update issue", args.id)
        if not payload.get("issue"):
            raise RemoteFailureError("retrieve updated issue", args.id)
        return transform_issue(payload["issue"])

    # --- search ---

    async def search(self, args: IssueSearchArgs) -> list[dict[str, Any]]:
        batch = BatchQuery("BatchResolveForSearch")
        if _is_name(args.team):
            add_team_lookup(batch, args.team)
        if _is_name(args.project):
            batch.add(sections.PROJECT_BY_NAME, projectName=args.project)
        if _is_name(args.assignee):
            add_user_lookup(batch, args.assignee)

        result = await batch.execute(self._client, "resolve search filters")

        team_id = args.team
        if _is_name(args.team):
            team_id = team_from(result, args.team)["id"]
        project_id = args.project
        if _is_name(args.project):
            project_id = pick_project(nodes(result.get("projects")), args.project, team_id)["id"]
        assignee_id = args.assignee
        if _is_name(args.assignee):
            assignee_id = pick_user(nodes(result.get("users")), args.assignee)["id"]

        if args.query:
            found = await self._client.request(
                SEARCH_ISSUES_QUERY,
                {"term": args.query, "first": args.limit},
                operation=f'search issues for "{args.query}"',
            )
            issues = [transform_issue(i) for i in nodes(found.get("searchIssues"))]
            # text search has no filter argument: narrow client-side
            if team_id:
                issues = [i for i in issues if (i.get("team") or {}).get("id") == team_id]
            if assignee_id:
                issues = [i for i in issues if (i.get("assignee") or {}).get("id") == assignee_id]
            if project_id:
                issues = [i for i in issues if (i.get("project") or {}).get("id") == project_id]
            if args.status:
                issues = [i for i in issues if (i.get("state") or {}).get("name") in args.status]
            return issues

        issue_filter: dict[str, Any] = {}
        if team_id:
            issue_filter["team"] = {"id": {"eq": team_id}}
        if assignee_id:
            issue_filter["assignee"] = {"id": {"eq": assignee_id}}
        if project_id:
            issue_filter["project"] = {"id": {"eq": project_id}}
        if args.status:
            issue_filter["state"] = {"name": {"in": args.status}}

        variables: dict[str, Any] = {"first": args.limit, "orderBy": "updatedAt"}
        if issue_filter:
            variables["filter"] = issue_filter
        found = await self._client.request(
            FILTERED_SEARCH_ISSUES_QUERY, variables, operation="search issues"
        )
        return [transform_issue(i) for i in nodes(found.get("issues"))]
