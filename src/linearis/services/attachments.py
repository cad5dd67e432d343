"""Attachment create/list/delete. Attachments are keyed upstream by url + issue."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linearis.errors import NotFoundError, RemoteFailureError
from linearis.payload import ATTACHMENT_FIELDS, AttachmentCreateArgs, compose_input
from linearis.queries.attachments import (
    CREATE_ATTACHMENT_MUTATION,
    DELETE_ATTACHMENT_MUTATION,
    LIST_ATTACHMENTS_QUERY,
)
from linearis.resolve import Resolver
from linearis.transform import nodes, transform_attachment

if TYPE_CHECKING:
    from linearis.client import LinearClient


class AttachmentsService:
    def __init__(self, client: LinearClient):
        self._client = client
        self._resolver = Resolver(client)

    async def create(self, args: AttachmentCreateArgs) -> dict[str, Any]:
        issue_id = await self._resolver.issue_id(args.issue)
        attachment_input = compose_input(args, ATTACHMENT_FIELDS, {"issue": issue_id})
        result = await self._client.request(
            CREATE_ATTACHMENT_MUTATION,
            {"input": attachment_input},
            operation=f'create attachment on issue "{args.issue}"',
        )
        payload = result.get("attachmentCreate") or {}
        if not payload.get("success") or not payload.get("attachment"):
            raise RemoteFailureError("create attachment", f'"{args.title}" on issue {args.issue}')
        return transform_attachment(payload["attachment"])

    async def list(self, issue: str) -> list[dict[str, Any]]:
        issue_id = await self._resolver.issue_id(issue)
        result = await self._client.request(
            LIST_ATTACHMENTS_QUERY,
            {"issueId": issue_id},
            operation=f'list attachments of issue "{issue}"',
        )
        found = result.get("issue")
        if found is None:
            raise NotFoundError("Issue", issue)
        return [transform_attachment(a) for a in nodes(found.get("attachments"))]

    async def delete(self, attachment_id: str) -> dict[str, Any]:
        result = await self._client.request(
            DELETE_ATTACHMENT_MUTATION,
            {"id": attachment_id},
            operation=f'delete attachment "{attachment_id}"',
        )
        if not (result.get("attachmentDelete") or {}).get("success"):
            raise RemoteFailureError("delete attachment", attachment_id)
        return {"deleted": True, "id": attachment_id}
