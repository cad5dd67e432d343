"""
Command-line interface for linearis.

Usage:
    linearis issues list -l 10
    linearis issues create "Fix login" --team ENG --labels Bug,Backend
    linearis issues update ENG-123 --status Done --label-by adding --labels Urgent
    linearis projects read "Mobile App" --issues-first 0
    linearis documents list --issue ENG-123
    linearis usage

Every command prints one JSON value on stdout. Errors print
``{"error": "..."}`` and exit with status 1. Logs go to stderr.
"""

import sys

import click

from linearis import __version__
from linearis.commands import register_commands
from linearis.config import get_log_level
from linearis.errors import ValidationError
from linearis.observability import configure_logging
from linearis.output import output_error


@click.group(invoke_without_command=True)
@click.option("--api-token", default=None, help="Linear API token (overrides environment)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for stderr diagnostics (default: LINEARIS_LOG_LEVEL or WARNING)",
)
@click.version_option(version=__version__, prog_name="linearis")
@click.pass_context
def cli(ctx, api_token, log_level):
    """linearis - Linear.app from the command line, JSON in and out."""
    configure_logging(level=log_level or get_log_level())
    ctx.ensure_object(dict)
    ctx.obj["api_token"] = api_token
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _walk(command: click.Command, path: list[str]):
    yield path, command
    if isinstance(command, click.Group):
        for name in sorted(command.commands):
            yield from _walk(command.commands[name], [*path, name])


@cli.command()
@click.pass_context
def usage(ctx):
    """Print the help of every command in one listing."""
    root = ctx.find_root().command
    for path, command in _walk(root, ["linearis"]):
        if command is ctx.command:
            continue
        with click.Context(command, info_name=" ".join(path)) as sub_ctx:
            click.echo(command.get_help(sub_ctx))
            click.echo()


register_commands(cli)


def main(argv=None):
    """Console entry point.

    click usage errors are reported as JSON error objects like every other
    failure.
    """
    try:
        cli.main(args=argv, prog_name="linearis", standalone_mode=False)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.Abort:
        output_error(ValidationError("Aborted"))
        sys.exit(1)
    except click.ClickException as e:
        output_error(ValidationError(e.format_message()))
        sys.exit(1)


if __name__ == "__main__":
    main()
