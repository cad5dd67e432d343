"""
Document operations.

Linear documents hang off projects or teams. ``--attach-to`` and
``documents list --issue`` bridge to issues through attachments whose URL
points at the document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from linearis.errors import LinearisError, NotFoundError, RemoteFailureError
from linearis.identifiers import is_uuid
from linearis.payload import (
    DOCUMENT_FIELDS,
    AttachmentCreateArgs,
    DocumentCreateArgs,
    DocumentUpdateArgs,
    compose_input,
)
from linearis.queries import batch as sections
from linearis.queries.documents import (
    CREATE_DOCUMENT_MUTATION,
    DELETE_DOCUMENT_MUTATION,
    GET_DOCUMENT_QUERY,
    LIST_DOCUMENTS_QUERY,
    UPDATE_DOCUMENT_MUTATION,
)
from linearis.resolve import BatchQuery, Resolver, add_team_lookup, pick_project, team_from
from linearis.services.attachments import AttachmentsService
from linearis.transform import extract_document_slugs, nodes, transform_document

if TYPE_CHECKING:
    from linearis.client import LinearClient

logger = logging.getLogger(__name__)


class DocumentsService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)
        self._attachments = AttachmentsService(client)

    async def _resolve_scope(self, project: str | None, team: str | None) -> dict[str, Any]:
        """Resolve --project and --team in one batch; the team scopes the project match."""
        batch = BatchQuery("ResolveDocumentScope")
        if project and not is_uuid(project):
            batch.add(sections.PROJECT_BY_NAME, projectName=project)
        if team and not is_uuid(team):
            add_team_lookup(batch, team)
        result = await batch.execute(self._client, "resolve document scope")

        resolved: dict[str, Any] = {}
        team_id = None
        if team:
            team_id = team if is_uuid(team) else team_from(result, team)["id"]
        if project:
            resolved["project"] = (
                project
                if is_uuid(project)
                else pick_project(nodes(result.get("projects")), project, team_id)["id"]
            )
        if team_id:
            resolved["team"] = team_id
        return resolved

    async def create(self, args: DocumentCreateArgs, attach_to: str | None = None) -> dict[str, Any]:
        resolved = await self._resolve_scope(args.project, args.team)
        document_input = compose_input(args, DOCUMENT_FIELDS, resolved)

        result = await self._client.request(
            CREATE_DOCUMENT_MUTATION,
            {"input": document_input},
            operation=f'create document "{args.title}"',
        )
        payload = result.get("documentCreate") or {}
        if not payload.get("success") or not payload.get("document"):
            raise RemoteFailureError("create document", f'"{args.title}"')
        document = payload["document"]

        if attach_to:
            try:
                await self._attachments.create(
                    AttachmentCreateArgs.build(
                        issue=attach_to, url=document["url"], title=document["title"]
                    )
                )
            except LinearisError as e:
                raise LinearisError(
                    f'Document "{document["title"]}" was created ({document["id"]}) '
                    f'but attaching it to issue "{attach_to}" failed: {e.message}. '
                    f"Retry with: linearis attachments create --issue {attach_to} "
                    f'--url "{document["url"]}" --title "{document["title"]}"'
                ) from e
        return transform_document(document)

    async def update(self, args: DocumentUpdateArgs) -> dict[str, Any]:
        resolved = await self._resolve_scope(args.project, None)
        document_input = compose_input(args, DOCUMENT_FIELDS, resolved)
        result = await self._client.request(
            UPDATE_DOCUMENT_MUTATION,
            {"id": args.id, "input": document_input},
            operation=f'update document "{args.id}"',
        )
        payload = result.get("documentUpdate") or {}
        if not payload.get("success") or not payload.get("document"):
            raise RemoteFailureError("update document", args.id)
        return transform_document(payload["document"])

    async def get(self, document_id: str) -> dict[str, Any]:
        result = await self._client.request(
            GET_DOCUMENT_QUERY, {"id": document_id}, operation=f'read document "{document_id}"'
        )
        document = result.get("document")
        if not document:
            raise NotFoundError("Document", document_id)
        return transform_document(document)

    async def list(
        self,
        project: str | None = None,
        issue: str | None = None,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """List documents, optionally scoped to a project or to an issue's linked documents."""
        document_filter: dict[str, Any] = {}
        if issue:
            attachments = await self._attachments.list(issue)
            slugs = extract_document_slugs(a.get("url") for a in attachments)
            if not slugs:
                return []
            document_filter["slugId"] = {"in": slugs}
        if project:
            project_id = await self._resolver.project_id(project)
            document_filter["project"] = {"id": {"eq": project_id}}

        variables: dict[str, Any] = {"first": limit}
        if document_filter:
            variables["filter"] = document_filter
        result = await self._client.request(
            LIST_DOCUMENTS_QUERY, variables, operation="list documents"
        )
        return [transform_document(d) for d in nodes(result.get("documents"))]

    async def delete(self, document_id: str) -> dict[str, Any]:
        result = await self._client.request(
            DELETE_DOCUMENT_MUTATION, {"id": document_id}, operation=f'delete document "{document_id}"'
        )
        if not (result.get("documentDelete") or {}).get("success"):
            raise RemoteFailureError("delete document", document_id)
        return {"deleted": True, "id": document_id}
