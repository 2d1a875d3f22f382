"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only care that something was rejected.
    """


class ValidationError(DomainError):
    """Invalid caller input, rejected before any state is mutated."""


class NotFoundError(DomainError):
    """Requested document or item does not exist."""


class DecodeError(DomainError):
    """Document or manifest data is not well-formed JSON."""


class ShapeError(DomainError):
    """Well-formed JSON that does not have the expected structure."""


class StorageError(DomainError):
    """Reading or writing a file failed."""


class MissingDestinationError(DomainError):
    """A save was requested for a document that has no backing file yet."""


def empty_document_name() -> str:
    """Return message for a blank document name."""
    return "Document name cannot be empty"


def unknown_item_field(field: str) -> str:
    """Return message for an item field that cannot be edited."""
    return f"Unknown item field '{field}' (expected name, amount or unit_price)"


def item_index_out_of_range(index: int, count: int) -> str:
    """Return message for a row index outside the document."""
    return f"Item index {index} out of range (document has {count} item{'s' if count != 1 else ''})"


def document_index_out_of_range(index: int, count: int) -> str:
    """Return message for a document index outside the session."""
    return f"Document index {index} out of range ({count} document{'s' if count != 1 else ''} open)"


def no_active_document() -> str:
    """Return message when an operation needs an active document."""
    return "No document is open"


def no_destination(name: str) -> str:
    """Return message when a document has never been saved."""
    return f"Document '{name}' has no file yet; choose a destination with save-as"


def element_shape(index: int, problem: str) -> str:
    """Return message for a malformed element of a document array."""
    return f"Item {index}: {problem}"
