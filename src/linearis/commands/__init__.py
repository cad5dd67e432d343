"""Command groups, one module per area."""

import click

from linearis.commands.cycles import cycles, project_milestones
from linearis.commands.documents import attachments, documents
from linearis.commands.issues import issues
from linearis.commands.projects import projects
from linearis.commands.workspace import comments, embeds, labels, teams, users


def register_commands(cli: click.Group) -> None:
    """Attach every command group to the root group."""
    for group in (
        issues,
        comments,
        labels,
        teams,
        users,
        projects,
        cycles,
        project_milestones,
        documents,
        attachments,
        embeds,
    ):
        cli.add_command(group)
