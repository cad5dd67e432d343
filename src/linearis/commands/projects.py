"""``linearis projects`` commands."""

import click

from linearis.payload import (
    ProjectCreateArgs,
    ProjectUpdateArgs,
    exclusive,
    parse_non_negative_int,
    parse_positive_int,
)
from linearis.output import handle_command
from linearis.services import ProjectsService


@click.group(invoke_without_command=True)
@click.pass_context
def projects(ctx):
    """Work with Linear projects."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@projects.command("list")
@click.option("-l", "--limit", default=None, help="Maximum number of projects (default: 100)")
@click.option("--include-archived", is_flag=True, help="Include archived projects")
@handle_command("projects list")
def list_projects(limit, include_archived):
    """List projects, most recently updated first."""
    first = parse_positive_int("--limit", limit, 100)
    return lambda client: ProjectsService(client).list(first, include_archived)


@projects.command()
@click.argument("project")
@click.option("--milestones-first", default=None, help="Milestones to include, 0 to skip (default: 50)")
@click.option("--issues-first", default=None, help="Issues to include, 0 to skip (default: 50)")
@handle_command("projects read")
def read(project, milestones_first, issues_first):
    """Read a project by ID or name."""
    milestones = parse_non_negative_int("--milestones-first", milestones_first, 50)
    issues = parse_non_negative_int("--issues-first", issues_first, 50)
    return lambda client: ProjectsService(client).get(project, milestones, issues)


def _project_options(func):
    for decorator in reversed(
        [
            click.option("-d", "--description", help="Project description"),
            click.option("--icon", help="Icon name"),
            click.option("--color", help="Hex color"),
            click.option("--lead", help="Lead e-mail, name or ID"),
            click.option("-p", "--priority", help="Priority 0-4"),
            click.option("--start-date", help="Start date (YYYY-MM-DD)"),
            click.option("--target-date", help="Target date (YYYY-MM-DD)"),
        ]
    ):
        func = decorator(func)
    return func


@projects.command()
@click.argument("name")
@click.option("--team", required=True, help="Team key, name or ID")
@_project_options
@handle_command("projects create")
def create(name, team, description, icon, color, lead, priority, start_date, target_date):
    """Create a project in a team."""
    options = {
        "name": name,
        "team": team,
        "description": description,
        "icon": icon,
        "color": color,
        "lead": lead,
        "priority": priority,
        "start_date": start_date,
        "target_date": target_date,
    }
    args = ProjectCreateArgs.build(**{k: v for k, v in options.items() if v is not None})
    return lambda client: ProjectsService(client).create(args)


@projects.command()
@click.argument("project")
@click.option("-n", "--name", help="New name")
@click.option("--team", help="Move to team (key, name or ID)")
@_project_options
@click.option("--clear-lead", is_flag=True, help="Remove the lead")
@click.option("--clear-start-date", is_flag=True, help="Remove the start date")
@click.option("--clear-target-date", is_flag=True, help="Remove the target date")
@handle_command("projects update")
def update(
    project,
    name,
    team,
    description,
    icon,
    color,
    lead,
    priority,
    start_date,
    target_date,
    clear_lead,
    clear_start_date,
    clear_target_date,
):
    """Update a project; only the given fields change."""
    exclusive("--lead", lead, "--clear-lead", clear_lead)
    exclusive("--start-date", start_date, "--clear-start-date", clear_start_date)
    exclusive("--target-date", target_date, "--clear-target-date", clear_target_date)

    options = {
        "name": name,
        "team": team,
        "description": description,
        "icon": icon,
        "color": color,
        "lead": lead,
        "priority": priority,
        "start_date": start_date,
        "target_date": target_date,
    }
    values = {k: v for k, v in options.items() if v is not None}
    if clear_lead:
        values["lead"] = None
    if clear_start_date:
        values["start_date"] = None
    if clear_target_date:
        values["target_date"] = None

    args = ProjectUpdateArgs.build(id=project, **values)
    return lambda client: ProjectsService(client).update(args)


@projects.command()
@click.argument("project")
@handle_command("projects archive")
def archive(project):
    """Archive a project (Linear's project soft delete)."""
    return lambda client: ProjectsService(client).archive(project)
