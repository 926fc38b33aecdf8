"""Shared plumbing for CLI commands."""

from __future__ import annotations

import click
import structlog

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container, default_container

logger = structlog.get_logger(__name__)


def get_container() -> Container:
    """The container set on the click context, or the environment's one.

    Tests put their own container in ``ctx.obj``.
    """
    ctx = click.get_current_context()
    root = ctx.find_root()
    if not isinstance(root.obj, Container):
        root.obj = default_container()
    return root.obj


def command_failed(exc: DomainException) -> click.ClickException:
    """Log a domain error at the CLI boundary and wrap it for click."""
    logger.warning(
        "command.failed",
        command=click.get_current_context().command_path,
        error=type(exc).__name__,
        message=str(exc),
    )
    return click.ClickException(str(exc))
