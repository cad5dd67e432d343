"""
Command boundary: run an async service call, print JSON, map errors.

Every command body is a coroutine that receives an open LinearClient and
returns a JSON-serialisable value. LinearisError subclasses become a single
``{"error": "..."}`` object on stdout and exit code 1.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import sys
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import click

from linearis.client import LinearClient
from linearis.config import ClientConfig, get_api_token
from linearis.errors import LinearisError
from linearis.observability import clear_trace_context, set_trace_context

logger = logging.getLogger(__name__)


def output_success(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def output_error(error: LinearisError) -> None:
    click.echo(json.dumps(error.to_dict(), indent=2))


def fail(error: LinearisError) -> None:
    """Print the error object and exit 1."""
    logger.info("%s", error.message, extra={"entity": getattr(error, "entity", None)})
    output_error(error)
    sys.exit(1)


async def _run_with_client(
    api_token: str | None,
    body: Callable[[LinearClient], Awaitable[Any]],
) -> Any:
    config = ClientConfig(api_token=get_api_token(api_token))
    async with LinearClient(config) as client:
        return await body(client)


def handle_command(command_name: str) -> Callable:
    """Decorate a click callback whose return value is ``async (client) -> result``.

    The decorated function builds its service call from the parsed options
    (raising LinearisError for invalid input); this wrapper supplies the
    client, runs the event loop and prints the outcome.
    """

    def decorator(func: Callable[..., Callable[[LinearClient], Awaitable[Any]]]) -> Callable:
        @functools.wraps(func)
        @click.pass_context
        def wrapper(ctx: click.Context, *args: Any, **kwargs: Any) -> None:
            set_trace_context(command=command_name, trace_id=uuid.uuid4().hex[:12])
            api_token = (ctx.find_root().obj or {}).get("api_token")
            try:
                body = func(*args, **kwargs)
                result = asyncio.run(_run_with_client(api_token, body))
            except LinearisError as e:
                fail(e)
            finally:
                clear_trace_context()
            output_success(result)

        return wrapper

    return decorator
