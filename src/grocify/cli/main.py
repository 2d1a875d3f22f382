"""Main CLI entry point."""

import logging

import click

from grocify.domain.errors import StorageError
from grocify.domain.session import SessionManager
from grocify.storage.factories import create_local_storage, default_session_path
from grocify.utils.logging_config import configure_logging, get_logger, set_log_level

# Import and register all commands at module level
from grocify.cli.commands import document, item

logger = get_logger(__name__)


@click.group()
@click.option(
    "--session-path",
    type=click.Path(dir_okay=False),
    help="Path to session manifest (overrides GROCIFY_SESSION_PATH environment variable)",
    envvar="GROCIFY_SESSION_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, session_path: str | None, verbose: bool):
    """Grocify - Edit itemized shopping lists.

    Lists are stored as JSON files. The files that were open last time are
    reopened automatically, so a list stays open until it is closed.
    """
    ctx.ensure_object(dict)
    configure_logging()
    if verbose:
        set_log_level(logging.DEBUG)

    # Restore the session only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        manifest_path = default_session_path(session_path)
        session = SessionManager(create_local_storage())
        session.restore_session(manifest_path)
        ctx.obj["session"] = session
        ctx.obj["manifest_path"] = manifest_path
        ctx.call_on_close(lambda: _persist(session, manifest_path))


def _persist(session: SessionManager, manifest_path) -> None:
    try:
        session.persist_session(manifest_path)
    except StorageError as e:
        logger.error("Could not save session: %s", e)


# Register all commands
document.register_commands(cli)
item.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
