"""
Shared helpers for CLI commands.

Commands get the active configuration and a PipelineController through the
click context object set up by the ``pdfchain`` group, and route controller
results through ``handle_result`` or ``emit``.
"""

import json
from typing import Any, Dict, TypeVar

import click

from pdfchain.controllers.base import ControllerResult
from pdfchain.controllers.pipeline import PipelineController
from pdfchain.core.config import Config, get_config

T = TypeVar("T")


def get_context_config(ctx: click.Context) -> Config:
    """Configuration loaded by the command group, or the global one."""
    obj: Dict[str, Any] = ctx.find_root().obj or {}
    return obj.get("config") or get_config()


def wants_json(ctx: click.Context) -> bool:
    """True when --json was given or the configured output format is json."""
    obj: Dict[str, Any] = ctx.find_root().obj or {}
    if obj.get("json"):
        return True
    return get_context_config(ctx).get("output", "format", "table") == "json"


def get_controller(ctx: click.Context) -> PipelineController:
    """A fresh pipeline controller built from the active configuration."""
    return PipelineController(config=get_context_config(ctx))


def emit_json(data: Any) -> None:
    """Write a JSON document to stdout."""
    click.echo(json.dumps(data, indent=2))


def handle_result(result: ControllerResult[T]) -> T:
    """
    Handle a controller result, exiting with error if failed.

    Args:
        result: Controller result to handle

    Returns:
        The result data if successful

    Raises:
        SystemExit: If result indicates failure (exits with code 1)
    """
    if not result.success:
        exit_with_error(result.error or "Unknown error")
    return result.data


def exit_with_error(message: str, code: int = 1) -> None:
    """
    Print error message and exit.

    Args:
        message: Error message to display
        code: Exit code (default: 1)

    Raises:
        SystemExit: Always exits with specified code
    """
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)
