"""``linearis cycles`` and ``linearis project-milestones`` commands."""

import click

from linearis.payload import (
    MilestoneCreateArgs,
    MilestoneUpdateArgs,
    parse_non_negative_int,
    parse_positive_int,
)
from linearis.output import handle_command
from linearis.services import CyclesService, MilestonesService


@click.group(invoke_without_command=True)
@click.pass_context
def cycles(ctx):
    """Work with team cycles."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cycles.command("list")
@click.option("--team", help="Team key, name or ID")
@click.option("--active", is_flag=True, help="Only the active cycle")
@click.option("--around-active", default=None, help="Active cycle +/- N cycles (requires --team)")
@handle_command("cycles list")
def list_cycles(team, active, around_active):
    """List cycles."""
    window = None
    if around_active is not None:
        window = parse_non_negative_int("--around-active", around_active, 0)
    return lambda client: CyclesService(client).list(team=team, active=active, around_active=window)


@cycles.command("read")
@click.argument("cycle")
@click.option("--team", help="Scope a cycle name to this team")
@click.option("--issues-first", default=None, help="Issues to include (default: 50)")
@handle_command("cycles read")
def read_cycle(cycle, team, issues_first):
    """Read a cycle by ID or name, with its issues."""
    first = parse_positive_int("--issues-first", issues_first, 50)
    return lambda client: CyclesService(client).get(cycle, team=team, issues_first=first)


@click.group("project-milestones", invoke_without_command=True)
@click.pass_context
def project_milestones(ctx):
    """Work with project milestones."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@project_milestones.command("list")
@click.option("--project", required=True, help="Project name or ID")
@click.option("-l", "--limit", default=None, help="Maximum number of milestones (default: 50)")
@handle_command("project-milestones list")
def list_milestones(project, limit):
    """List the milestones of a project."""
    first = parse_positive_int("--limit", limit, 50)
    return lambda client: MilestonesService(client).list(project, first)


@project_milestones.command("read")
@click.argument("milestone")
@click.option("--project", help="Scope a milestone name to this project")
@click.option("--issues-first", default=None, help="Issues to include (default: 50)")
@handle_command("project-milestones read")
def read_milestone(milestone, project, issues_first):
    """Read a milestone by ID or name, with its issues."""
    first = parse_positive_int("--issues-first", issues_first, 50)
    return lambda client: MilestonesService(client).get(milestone, project, first)


@project_milestones.command("create")
@click.argument("name")
@click.option("--project", required=True, help="Project name or ID")
@click.option("-d", "--description", help="Milestone description")
@click.option("--target-date", help="Target date (YYYY-MM-DD)")
@handle_command("project-milestones create")
def create_milestone(name, project, description, target_date):
    """Create a milestone in a project."""
    options = {"name": name, "project": project, "description": description, "target_date": target_date}
    args = MilestoneCreateArgs.build(**{k: v for k, v in options.items() if v is not None})
    return lambda client: MilestonesService(client).create(args)


@project_milestones.command("update")
@click.argument("milestone")
@click.option("--project", help="Scope a milestone name to this project")
@click.option("-n", "--name", help="New name")
@click.option("-d", "--description", help="New description")
@click.option("--target-date", help="Target date (YYYY-MM-DD)")
@click.option("--sort-order", help="Position among the project's milestones")
@handle_command("project-milestones update")
def update_milestone(milestone, project, name, description, target_date, sort_order):
    """Update a milestone; only the given fields change."""
    options = {
        "project": project,
        "name": name,
        "description": description,
        "target_date": target_date,
        "sort_order": sort_order,
    }
    args = MilestoneUpdateArgs.build(id=milestone, **{k: v for k, v in options.items() if v is not None})
    return lambda client: MilestonesService(client).update(args)
