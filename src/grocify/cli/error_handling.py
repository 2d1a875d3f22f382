"""Rendering of grocify errors on the command line."""

import click

from grocify.domain.errors import (
    DecodeError,
    DomainError,
    MissingDestinationError,
    ShapeError,
)
from grocify.utils.logging_config import get_logger

logger = get_logger(__name__)

# Follow-up advice printed after the message, keyed by error type
HINTS = {
    MissingDestinationError: "Use 'grocify save-as LIST PATH' to pick a file.",
    DecodeError: "The file is not a grocery list written by grocify.",
    ShapeError: "The file must hold a JSON array of items with a 'name' each.",
}


def hint_for(error: Exception) -> str | None:
    for error_type, hint in HINTS.items():
        if isinstance(error, error_type):
            return hint
    return None


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print error, plus a hint when one applies, and exit with status 1."""
    logger.debug("Command '%s' failed: %r", ctx.info_name, error)
    click.echo(f"Error: {error}", err=True)
    hint = hint_for(error)
    if hint:
        click.echo(hint, err=True)
    ctx.exit(1)
