"""CLI helpers for resolving which open document a command targets."""

from __future__ import annotations

import click

from grocify.cli.error_handling import handle_domain_error
from grocify.domain.errors import DomainError, NotFoundError, ValidationError
from grocify.domain.session import SessionManager


def resolve_document(session: SessionManager, document: str | int) -> int:
    """Resolve a document name or 1-based position to a 0-based session index.

    Args:
        session: SessionManager instance
        document: Document name, or its position as shown by ``grocify list``
            (int or string representation of int)

    Returns:
        Index into ``session.documents``

    Raises:
        NotFoundError: If no open document matches
        ValidationError: If a name matches more than one open document
    """
    count = len(session.documents)

    if isinstance(document, int):
        position = document
    else:
        try:
            position = int(document)
        except (ValueError, TypeError):
            position = None

    if position is not None:
        if not 1 <= position <= count:
            raise NotFoundError(f"No document at position {position} ({count} open)")
        return position - 1

    matches = [index for index, doc in enumerate(session.documents) if doc.name == document]
    if not matches:
        raise NotFoundError(f"Document '{document}' is not open")
    if len(matches) > 1:
        raise ValidationError(
            f"Several open documents are named '{document}'; use the position instead"
        )
    return matches[0]


def resolve_document_or_exit(ctx: click.Context, session: SessionManager, document: str) -> int:
    """Resolve a document and make it active, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        index = resolve_document(session, document)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
    session.set_active(index)
    return index
