"""``linearis issues`` commands."""

import click

from linearis.errors import ValidationError
from linearis.payload import (
    IssueCreateArgs,
    IssueSearchArgs,
    IssueUpdateArgs,
    LabelMode,
    exclusive,
    parse_positive_int,
    split_list,
)
from linearis.output import handle_command
from linearis.services import IssuesService


@click.group(invoke_without_command=True)
@click.pass_context
def issues(ctx):
    """Work with Linear issues."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@issues.command("list")
@click.option("-l", "--limit", default=None, help="Maximum number of issues (default: 25)")
@handle_command("issues list")
def list_issues(limit):
    """List recently updated issues."""
    first = parse_positive_int("--limit", limit, 25)
    return lambda client: IssuesService(client).list(first)


@issues.command()
@click.argument("query", required=False)
@click.option("--team", help="Team key, name or ID")
@click.option("--assignee", help="Assignee e-mail, name or ID")
@click.option("--project", help="Project name or ID")
@click.option("--status", help="Comma-separated status names")
@click.option("-l", "--limit", default=None, help="Maximum number of results (default: 10)")
@handle_command("issues search")
def search(query, team, assignee, project, status, limit):
    """Search issues by text and/or filters."""
    args = IssueSearchArgs.build(
        query=query,
        team=team,
        assignee=assignee,
        project=project,
        status=split_list(status),
        limit=parse_positive_int("--limit", limit, 10),
    )
    return lambda client: IssuesService(client).search(args)


@issues.command()
@click.argument("issue_id")
@handle_command("issues read")
def read(issue_id):
    """Read an issue by ID or identifier (ABC-123), with comments."""
    return lambda client: IssuesService(client).get(issue_id)


@issues.command()
@click.argument("title")
@click.option("--team", required=True, help="Team key, name or ID")
@click.option("-d", "--description", help="Markdown description")
@click.option("-a", "--assignee", help="Assignee e-mail, name or ID")
@click.option("-p", "--priority", help="Priority 0-4 (0 none, 1 urgent, 4 low)")
@click.option("--project", help="Project name or ID")
@click.option("--labels", help="Comma-separated label names or IDs")
@click.option("--estimate", help="Estimate points")
@click.option("--parent-ticket", help="Parent issue ID or identifier")
@click.option("--status", help="Workflow state name or ID")
@click.option("--project-milestone", help="Milestone name or ID")
@click.option("--cycle", help="Cycle name or ID")
@handle_command("issues create")
def create(
    title,
    team,
    description,
    assignee,
    priority,
    project,
    labels,
    estimate,
    parent_ticket,
    status,
    project_milestone,
    cycle,
):
    """Create an issue."""
    options = {
        "title": title,
        "team": team,
        "description": description,
        "assignee": assignee,
        "priority": priority,
        "project": project,
        "labels": split_list(labels),
        "estimate": estimate,
        "parent": parent_ticket,
        "status": status,
        "milestone": project_milestone,
        "cycle": cycle,
    }
    args = IssueCreateArgs.build(**{k: v for k, v in options.items() if v is not None})
    return lambda client: IssuesService(client).create(args)


@issues.command()
@click.argument("issue_id")
@click.option("-t", "--title", help="New title")
@click.option("-d", "--description", help="New markdown description")
@click.option("-s", "--status", help="Workflow state name or ID")
@click.option("-p", "--priority", help="Priority 0-4")
@click.option("-a", "--assignee", help="Assignee e-mail, name or ID")
@click.option("--project", help="Project name or ID")
@click.option("--labels", help="Comma-separated label names or IDs")
@click.option(
    "--label-by",
    type=click.Choice([mode.value for mode in LabelMode]),
    help="Add to the current labels or replace them (default: overwriting)",
)
@click.option("--clear-labels", is_flag=True, help="Remove every label")
@click.option("--estimate", help="Estimate points")
@click.option("--parent-ticket", help="Parent issue ID or identifier")
@click.option("--clear-parent-ticket", is_flag=True, help="Detach from the parent issue")
@click.option("--project-milestone", help="Milestone name or ID")
@click.option("--clear-project-milestone", is_flag=True, help="Remove the milestone")
@click.option("--cycle", help="Cycle name or ID")
@click.option("--clear-cycle", is_flag=True, help="Remove from its cycle")
@handle_command("issues update")
def update(
    issue_id,
    title,
    description,
    status,
    priority,
    assignee,
    project,
    labels,
    label_by,
    clear_labels,
    estimate,
    parent_ticket,
    clear_parent_ticket,
    project_milestone,
    clear_project_milestone,
    cycle,
    clear_cycle,
):
    """Update an issue; only the given fields change."""
    exclusive("--labels", labels, "--clear-labels", clear_labels)
    exclusive("--parent-ticket", parent_ticket, "--clear-parent-ticket", clear_parent_ticket)
    exclusive(
        "--project-milestone", project_milestone, "--clear-project-milestone", clear_project_milestone
    )
    exclusive("--cycle", cycle, "--clear-cycle", clear_cycle)
    if label_by and labels is None:
        raise ValidationError("--label-by requires --labels")

    options = {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "assignee": assignee,
        "project": project,
        "labels": split_list(labels),
        "estimate": estimate,
        "parent": parent_ticket,
        "milestone": project_milestone,
        "cycle": cycle,
    }
    values = {k: v for k, v in options.items() if v is not None}
    if label_by:
        values["label_mode"] = label_by
    if clear_labels:
        values["labels"] = []
    if clear_parent_ticket:
        values["parent"] = None
    if clear_project_milestone:
        values["milestone"] = None
    if clear_cycle:
        values["cycle"] = None

    args = IssueUpdateArgs.build(id=issue_id, **values)
    return lambda client: IssuesService(client).update(args)


@issues.command()
@click.argument("issue_id")
@handle_command("issues delete")
def delete(issue_id):
    """Delete (trash) an issue."""
    return lambda client: IssuesService(client).delete(issue_id)
