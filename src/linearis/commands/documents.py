"""``linearis documents`` and ``linearis attachments`` commands."""

import click

from linearis.payload import (
    AttachmentCreateArgs,
    DocumentCreateArgs,
    DocumentUpdateArgs,
    parse_positive_int,
)
from linearis.output import handle_command
from linearis.services import AttachmentsService, DocumentsService


def _given(**options):
    return {k: v for k, v in options.items() if v is not None}


@click.group(invoke_without_command=True)
@click.pass_context
def documents(ctx):
    """Work with Linear documents."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@documents.command()
@click.option("--title", required=True, help="Document title")
@click.option("-c", "--content", help="Markdown content")
@click.option("--project", help="Project name or ID")
@click.option("--team", help="Team key, name or ID")
@click.option("--icon", help="Icon name")
@click.option("--color", help="Hex color")
@click.option("--attach-to", help="Link the document to this issue")
@handle_command("documents create")
def create(title, content, project, team, icon, color, attach_to):
    """Create a document, optionally linked to an issue."""
    args = DocumentCreateArgs.build(
        **_given(title=title, content=content, project=project, team=team, icon=icon, color=color)
    )
    return lambda client: DocumentsService(client).create(args, attach_to=attach_to)


@documents.command()
@click.argument("document_id")
@click.option("--title", help="New title")
@click.option("-c", "--content", help="New markdown content")
@click.option("--project", help="Move to project (name or ID)")
@click.option("--icon", help="Icon name")
@click.option("--color", help="Hex color")
@handle_command("documents update")
def update(document_id, title, content, project, icon, color):
    """Update a document; only the given fields change."""
    args = DocumentUpdateArgs.build(
        id=document_id,
        **_given(title=title, content=content, project=project, icon=icon, color=color),
    )
    return lambda client: DocumentsService(client).update(args)


@documents.command()
@click.argument("document_id")
@handle_command("documents read")
def read(document_id):
    """Read a document by ID or slug."""
    return lambda client: DocumentsService(client).get(document_id)


@documents.command("list")
@click.option("--project", help="Only documents of this project")
@click.option("--issue", help="Only documents linked from this issue's attachments")
@click.option("-l", "--limit", default=None, help="Maximum number of documents (default: 50)")
@handle_command("documents list")
def list_documents(project, issue, limit):
    """List documents."""
    first = parse_positive_int("--limit", limit, 50)
    return lambda client: DocumentsService(client).list(project=project, issue=issue, limit=first)


@documents.command()
@click.argument("document_id")
@handle_command("documents delete")
def delete(document_id):
    """Move a document to the trash."""
    return lambda client: DocumentsService(client).delete(document_id)


@click.group(invoke_without_command=True)
@click.pass_context
def attachments(ctx):
    """Work with issue attachments (links to external resources)."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@attachments.command("create")
@click.option("--issue", required=True, help="Issue ID or identifier")
@click.option("--url", required=True, help="URL to attach")
@click.option("--title", required=True, help="Attachment title")
@click.option("--subtitle", help="Attachment subtitle")
@click.option("--comment", help="Comment body posted with the attachment")
@click.option("--icon-url", help="Icon URL")
@handle_command("attachments create")
def create_attachment(issue, url, title, subtitle, comment, icon_url):
    """Attach a URL to an issue (same URL on the same issue updates in place)."""
    args = AttachmentCreateArgs.build(
        **_given(
            issue=issue, url=url, title=title, subtitle=subtitle, comment=comment, icon_url=icon_url
        )
    )
    return lambda client: AttachmentsService(client).create(args)


@attachments.command("list")
@click.option("--issue", required=True, help="Issue ID or identifier")
@handle_command("attachments list")
def list_attachments(issue):
    """List the attachments of an issue."""
    return lambda client: AttachmentsService(client).list(issue)


@attachments.command("delete")
@click.argument("attachment_id")
@handle_command("attachments delete")
def delete_attachment(attachment_id):
    """Delete an attachment."""
    return lambda client: AttachmentsService(client).delete(attachment_id)
