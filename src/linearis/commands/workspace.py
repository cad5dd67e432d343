"""Small command groups: comments, labels, teams, users, embeds."""

import click

from linearis.output import handle_command
from linearis.services import (
    CommentsService,
    EmbedsService,
    LabelsService,
    TeamsService,
    UsersService,
)


def _group(name, help_text):
    @click.group(name, invoke_without_command=True, help=help_text)
    @click.pass_context
    def group(ctx):
        if ctx.invoked_subcommand is None:
            click.echo(ctx.get_help())

    return group


comments = _group("comments", "Comment on issues.")
labels = _group("labels", "List issue labels.")
teams = _group("teams", "List teams.")
users = _group("users", "List workspace users.")
embeds = _group("embeds", "Download files embedded in issues and comments.")


@comments.command("create")
@click.argument("issue")
@click.option("--body", required=True, help="Markdown comment body")
@handle_command("comments create")
def create_comment(issue, body):
    """Add a comment to an issue."""
    return lambda client: CommentsService(client).create(issue, body)


@labels.command("list")
@click.option("--team", help="Only labels usable in this team (its own and workspace labels)")
@handle_command("labels list")
def list_labels(team):
    """List labels."""
    return lambda client: LabelsService(client).list(team)


@teams.command("list")
@handle_command("teams list")
def list_teams():
    """List teams."""
    return lambda client: TeamsService(client).list()


@users.command("list")
@click.option("--active", is_flag=True, help="Only active users")
@handle_command("users list")
def list_users(active):
    """List users."""
    return lambda client: UsersService(client).list(active_only=active)


@embeds.command()
@click.argument("url")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Target file path")
@click.option("--overwrite", is_flag=True, help="Replace an existing file")
@handle_command("embeds download")
def download(url, output, overwrite):
    """Download an uploaded file (uploads.linear.app) with the API token."""
    return lambda client: EmbedsService(client).download(url, output, overwrite)
