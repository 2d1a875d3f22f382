"""Domain layer for grocify application."""

from grocify.domain.entities import Item
from grocify.domain.document import Document
from grocify.domain.codec import ItemCodec
from grocify.domain.session import SessionManager

__all__ = [
    "Item",
    "Document",
    "ItemCodec",
    "SessionManager",
]
