"""Document and session commands."""

from pathlib import Path

import click

from grocify.cli.document_resolution import resolve_document_or_exit
from grocify.cli.error_handling import handle_domain_error
from grocify.domain.errors import DomainError


def format_price(value) -> str:
    return "" if value is None else str(value)


@click.command("list")
@click.pass_context
def list_documents(ctx):
    """List open documents."""
    session = ctx.obj["session"]

    click.echo("\nOpen lists:")
    click.echo("-" * 60)
    for index, doc in enumerate(session.documents):
        marker = "*" if index == session.active_index else " "
        location = str(doc.file) if doc.file is not None else "(not saved)"
        click.echo(f"{marker}{index + 1:3d} | {doc.name:20s} | {len(doc.items):3d} items | {location}")


@click.command("new")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def new_document(ctx, path: str):
    """Create an empty list and save it to PATH.

    The list is named after the file, e.g. groceries.json becomes "groceries".

    Examples:
        grocify new ~/lists/groceries.json
    """
    session = ctx.obj["session"]
    target = Path(path)

    if session.storage.exists(target) and not click.confirm(f"'{path}' already exists. Overwrite it?"):
        click.echo("Cancelled.")
        return

    session.new_document()
    try:
        saved_to = session.save_active_document_as(target)
    except DomainError as e:
        session.close_document(session.active_index)
        handle_domain_error(ctx, e)
    click.echo(f"Created list '{session.active_document.name}' at {saved_to}")


@click.command("open")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def open_document(ctx, path: str):
    """Open the list stored at PATH.

    Examples:
        grocify open groceries.json
    """
    session = ctx.obj["session"]
    try:
        doc = session.open_document(Path(path))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Opened '{doc.name}' ({len(doc.items)} items)")


@click.command("close")
@click.argument("document", metavar="LIST")
@click.option("--yes", "-y", is_flag=True, help="Discard unsaved changes without asking")
@click.pass_context
def close_document(ctx, document: str, yes: bool):
    """Close a list.

    LIST can be a list name or its position from 'grocify list'.
    The file itself is left on disk.
    """
    session = ctx.obj["session"]
    index = resolve_document_or_exit(ctx, session, document)
    doc = session.documents[index]

    if doc.dirty and not yes:
        if not click.confirm(f"'{doc.name}' has unsaved changes. Close anyway?"):
            click.echo("Close cancelled.")
            return

    session.close_document(index)
    click.echo(f"Closed '{doc.name}'")


@click.command("save")
@click.argument("document", metavar="LIST")
@click.pass_context
def save_document(ctx, document: str):
    """Save a list to its file."""
    session = ctx.obj["session"]
    resolve_document_or_exit(ctx, session, document)
    try:
        path = session.save_active_document()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved '{session.active_document.name}' to {path}")


@click.command("save-as")
@click.argument("document", metavar="LIST")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def save_document_as(ctx, document: str, path: str):
    """Save a list to a new file and rename it after that file.

    Examples:
        grocify save-as groceries ~/lists/weekend.json
    """
    session = ctx.obj["session"]
    resolve_document_or_exit(ctx, session, document)
    try:
        saved_to = session.save_active_document_as(Path(path))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved '{session.active_document.name}' to {saved_to}")


@click.command("show")
@click.argument("document", metavar="LIST")
@click.pass_context
def show_document(ctx, document: str):
    """Show the items of a list."""
    session = ctx.obj["session"]
    index = resolve_document_or_exit(ctx, session, document)
    doc = session.documents[index]

    if not doc.items:
        click.echo(f"'{doc.name}' is empty.")
        return

    click.echo(f"\n{doc.name}:")
    click.echo(f"{'#':>3s} | {'Name':20s} | {'Amount':>6s} | {'Price per Unit':>14s}")
    click.echo("-" * 60)
    for row, entry in enumerate(doc.items, start=1):
        amount = "" if entry.amount is None else str(entry.amount)
        click.echo(f"{row:3d} | {entry.name:20s} | {amount:>6s} | {format_price(entry.unit_price):>14s}")


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(list_documents)
    cli.add_command(new_document)
    cli.add_command(open_document)
    cli.add_command(close_document)
    cli.add_command(save_document)
    cli.add_command(save_document_as)
    cli.add_command(show_document)
