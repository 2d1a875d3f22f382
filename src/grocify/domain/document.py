"""Document: an ordered, dirty-tracked, file-backed list of items."""

from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from grocify.domain.codec import ItemCodec
from grocify.domain.entities import Item
from grocify.domain.errors import (
    ValidationError,
    empty_document_name,
    item_index_out_of_range,
    unknown_item_field,
)
from grocify.storage.base import Storage
from grocify.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_NAME = "Untitled"
FILE_EXTENSION = ".json"
EDITABLE_FIELDS = ("name", "amount", "unit_price")

ItemRef = Union[int, Item]


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(empty_document_name())
    return name


def _check_field_value(field: str, value: Any) -> None:
    if field == "name":
        if not isinstance(value, str):
            raise ValidationError(f"Item name must be a string, got {type(value).__name__}")
    elif field == "amount":
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Amount must be a whole number, got {value!r}")
        if value < 0:
            raise ValidationError(f"Amount cannot be negative ({value})")
    elif field == "unit_price":
        if value is None:
            return
        # floats are refused so money never carries binary rounding error
        if not isinstance(value, Decimal):
            raise ValidationError(f"Unit price must be a Decimal, got {type(value).__name__}")
        if not value.is_finite():
            raise ValidationError(f"Unit price must be finite, got {value}")
    else:
        raise ValidationError(unknown_item_field(field))


class Document:
    """One open list of items with its own name, backing file and dirty flag.

    Every mutating method marks the document dirty itself; only a successful
    save clears the flag and a successful load resets it. The ``items``
    property returns a snapshot, so edits must go through the document.
    """

    def __init__(self, name: str = DEFAULT_NAME, items: Optional[Iterable[Item]] = None):
        """Initialize a document.

        Args:
            name: Display name (non-empty)
            items: Optional initial items; the document starts clean

        Raises:
            ValidationError: If name is empty
        """
        self._name = _check_name(name)
        self._items: list[Item] = list(items) if items is not None else []
        self._file: Optional[Path] = None
        self._dirty = False

    def __repr__(self) -> str:
        return f"Document(name={self._name!r}, items={len(self._items)}, file={self._file}, dirty={self._dirty})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def file_name(self) -> str:
        """Conventional file name for this document on disk."""
        return self._name + FILE_EXTENSION

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def file(self) -> Optional[Path]:
        return self._file

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_name(self, name: str) -> None:
        """Rename the document.

        Raises:
            ValidationError: If name is empty after trimming
        """
        self._name = _check_name(name)

    def index_of(self, item: Item) -> int:
        """Return the position of item, matched by identity.

        Raises:
            ValidationError: If item does not belong to this document
        """
        for index, candidate in enumerate(self._items):
            if candidate is item:
                return index
        raise ValidationError(f"Item '{item.name}' is not part of document '{self._name}'")

    def _resolve(self, ref: ItemRef) -> int:
        if isinstance(ref, Item):
            return self.index_of(ref)
        if isinstance(ref, bool) or not isinstance(ref, int):
            raise ValidationError(f"Expected an item or a row index, got {type(ref).__name__}")
        if not 0 <= ref < len(self._items):
            raise ValidationError(item_index_out_of_range(ref, len(self._items)))
        return ref

    def add_item(self, item: Item, index: Optional[int] = None) -> Item:
        """Add an item at the end, or at index when given.

        Returns:
            The added item

        Raises:
            ValidationError: If item is not an Item, is already in this
                document, or index is not a position 0..len(items)
        """
        if not isinstance(item, Item):
            raise ValidationError(f"Expected an Item, got {type(item).__name__}")
        if any(candidate is item for candidate in self._items):
            raise ValidationError(f"Item '{item.name}' is already part of document '{self._name}'")
        if index is not None and (
            isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= len(self._items)
        ):
            raise ValidationError(item_index_out_of_range(index, len(self._items)))
        if index is None:
            self._items.append(item)
        else:
            self._items.insert(index, item)
        self._dirty = True
        return item

    def remove_item(self, ref: ItemRef) -> Item:
        """Remove an item by row index or by identity.

        Returns:
            The removed item

        Raises:
            ValidationError: If the index is out of range or the item is not here
        """
        index = self._resolve(ref)
        item = self._items.pop(index)
        self._dirty = True
        return item

    def edit_field(self, ref: ItemRef, field: str, value: Any) -> bool:
        """Set one field of an item.

        An item left blank by the edit is removed from the document.

        Args:
            ref: Row index or the item itself
            field: One of "name", "amount", "unit_price"
            value: New value (None clears amount or unit_price)

        Returns:
            True if the item became blank and was removed

        Raises:
            ValidationError: If the item, field or value is invalid
        """
        index = self._resolve(ref)
        _check_field_value(field, value)

        item = self._items[index]
        setattr(item, field, value)
        self._dirty = True

        if item.is_blank():
            del self._items[index]
            logger.debug("Removed blank row %d from '%s'", index, self._name)
            return True
        return False

    def load(self, source: Path, storage: Storage, codec: Optional[ItemCodec] = None) -> None:
        """Replace the items with the contents of source.

        The file is decoded into a fresh list before anything is swapped in,
        so a failure leaves the document exactly as it was.

        Raises:
            StorageError: If the file cannot be read
            DecodeError: If the file is not valid JSON
            ShapeError: If the JSON is not a list of items
        """
        codec = codec or ItemCodec()
        source = Path(source)
        items = codec.decode(storage.read_bytes(source))

        self._items = items
        self._file = source
        self._dirty = False
        logger.info("Loaded %d item(s) into '%s' from %s", len(items), self._name, source)

    def save(self, destination: Path, storage: Storage, codec: Optional[ItemCodec] = None) -> None:
        """Write the items to destination.

        Raises:
            StorageError: If the file cannot be written; dirty is left as is
            ValidationError: If an item cannot be encoded
        """
        codec = codec or ItemCodec()
        destination = Path(destination)
        storage.write_bytes(destination, codec.encode(self._items))

        self._file = destination
        self._dirty = False
        logger.info("Saved '%s' (%d item(s)) to %s", self._name, len(self._items), destination)
