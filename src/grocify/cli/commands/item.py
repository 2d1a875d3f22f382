"""Item editing commands.

Every command saves the list afterwards, so only lists with a file can be
edited from the command line.
"""

import click

from grocify.cli.document_resolution import resolve_document_or_exit
from grocify.cli.error_handling import handle_domain_error
from grocify.domain.entities import Item
from grocify.domain.errors import DomainError, MissingDestinationError, no_destination
from grocify.utils.number_parser import parse_amount, parse_price

# CLI field names mapped to Item attributes
FIELD_MAP = {"name": "name", "amount": "amount", "price": "unit_price"}


def _editable_document(ctx, document: str):
    session = ctx.obj["session"]
    index = resolve_document_or_exit(ctx, session, document)
    doc = session.documents[index]
    if doc.file is None:
        handle_domain_error(ctx, MissingDestinationError(no_destination(doc.name)))
    return session, doc


def _save(ctx, session) -> None:
    try:
        session.save_active_document()
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def item_group():
    """Edit the items of a list."""
    pass


@item_group.command("add")
@click.argument("document", metavar="LIST")
@click.argument("name")
@click.option("--amount", help="Quantity (whole number)")
@click.option("--price", help="Price per unit (e.g., 1.50)")
@click.pass_context
def add_item(ctx, document: str, name: str, amount: str | None, price: str | None):
    """Add an item to a list.

    Examples:
        grocify item add groceries Milk --amount 2 --price 1.50
        grocify item add 1 "Rye bread"
    """
    session, doc = _editable_document(ctx, document)

    if not name.strip():
        click.echo("Error: Item name cannot be empty", err=True)
        ctx.exit(1)

    try:
        new_item = Item(name, parse_amount(amount or ""), parse_price(price or ""))
    except DomainError as e:
        handle_domain_error(ctx, e)

    doc.add_item(new_item)
    _save(ctx, session)
    click.echo(f"Added '{new_item.name}' to '{doc.name}' (row {len(doc.items)})")


@item_group.command("edit")
@click.argument("document", metavar="LIST")
@click.argument("row", type=int)
@click.argument("field", type=click.Choice(list(FIELD_MAP), case_sensitive=False))
@click.argument("value")
@click.pass_context
def edit_item(ctx, document: str, row: int, field: str, value: str):
    """Change one field of an item.

    ROW is the item number shown by 'grocify show'. An empty VALUE clears the
    field; an item with every field cleared is removed.

    Examples:
        grocify item edit groceries 2 price 2.35
        grocify item edit groceries 2 amount ""
    """
    session, doc = _editable_document(ctx, document)
    field = field.lower()

    try:
        if field == "amount":
            new_value = parse_amount(value)
        elif field == "price":
            new_value = parse_price(value)
        else:
            new_value = value
        removed = doc.edit_field(row - 1, FIELD_MAP[field], new_value)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _save(ctx, session)
    if removed:
        click.echo(f"Row {row} was left empty and has been removed")
    else:
        click.echo(f"Updated {field} of row {row}")


@item_group.command("remove")
@click.argument("document", metavar="LIST")
@click.argument("row", type=int)
@click.pass_context
def remove_item(ctx, document: str, row: int):
    """Remove an item from a list."""
    session, doc = _editable_document(ctx, document)
    try:
        removed = doc.remove_item(row - 1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _save(ctx, session)
    click.echo(f"Removed '{removed.name}' from '{doc.name}'")


def register_commands(cli):
    """Register item commands with main CLI."""
    cli.add_command(item_group, name="item")
