"""JSON codec for document files and the session manifest.

A document file is a JSON array with one object per item::

    [{"name": "Milk", "amount": 2, "price": 1.50}, ...]

Prices are exact decimals. simplejson is used with ``use_decimal`` so they are
read straight into :class:`~decimal.Decimal` and written back from its textual
form, never passing through a binary float.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

import simplejson

from grocify.domain.entities import Item
from grocify.domain.errors import (
    DecodeError,
    ShapeError,
    ValidationError,
    element_shape,
)

ENCODING = "utf-8"

# Upper bound for quantities; larger values are treated as corrupt data
MAX_AMOUNT = 10**18


def _parse(data: bytes | str, what: str) -> Any:
    """Parse raw JSON text, mapping syntax problems to DecodeError."""
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"{what} is not valid UTF-8: {e}") from e
    try:
        return simplejson.loads(data, use_decimal=True)
    except simplejson.JSONDecodeError as e:
        raise DecodeError(f"{what} is not valid JSON: {e}") from e
    except RecursionError as e:
        raise DecodeError(f"{what} is nested too deeply to decode") from e
    except ValueError as e:
        # e.g. integer literals beyond the interpreter's digit limit
        raise DecodeError(f"{what} contains an unreadable value: {e}") from e


def _dump(tree: Any) -> bytes:
    text = simplejson.dumps(tree, use_decimal=True, indent=2, ensure_ascii=False)
    return (text + "\n").encode(ENCODING)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but a JSON true/false is not a number
    return isinstance(value, (int, Decimal, float)) and not isinstance(value, bool)


def _decode_amount(index: int, value: Any) -> Optional[int]:
    if value is None:
        return None
    if not _is_number(value):
        raise ShapeError(element_shape(index, f"'amount' must be a number, got {type(value).__name__}"))
    if isinstance(value, float) or (isinstance(value, Decimal) and not value.is_finite()):
        raise ShapeError(element_shape(index, "'amount' must be a finite number"))
    if value < 0:
        raise ShapeError(element_shape(index, f"'amount' cannot be negative ({value})"))
    if value >= MAX_AMOUNT:
        raise ShapeError(element_shape(index, f"'amount' is too large ({value})"))
    # Fractional amounts are truncated toward zero
    return int(value)


def _decode_price(index: int, value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if not _is_number(value):
        raise ShapeError(element_shape(index, f"'price' must be a number, got {type(value).__name__}"))
    if isinstance(value, float) or (isinstance(value, Decimal) and not value.is_finite()):
        raise ShapeError(element_shape(index, "'price' must be a finite number"))
    if isinstance(value, int):
        return Decimal(value)
    return value


class ItemCodec:
    """Translate between an item sequence and its JSON file representation."""

    def encode(self, items: Iterable[Item]) -> bytes:
        """Encode items as a JSON array of objects.

        Args:
            items: Items in display order

        Returns:
            UTF-8 encoded JSON document

        Raises:
            ValidationError: If an item holds a value that has no JSON form
                (a non-finite price, a non-integer amount)
        """
        tree = []
        for index, item in enumerate(items):
            if item.amount is not None and (
                isinstance(item.amount, bool) or not isinstance(item.amount, int)
            ):
                raise ValidationError(element_shape(index, f"amount {item.amount!r} is not an integer"))
            price = item.unit_price
            if price is not None:
                if not isinstance(price, Decimal):
                    raise ValidationError(element_shape(index, f"price {price!r} is not a Decimal"))
                if not price.is_finite():
                    raise ValidationError(element_shape(index, f"price {price} is not finite"))
            tree.append({"name": item.name, "amount": item.amount, "price": price})
        return _dump(tree)

    def decode(self, data: bytes | str) -> list[Item]:
        """Decode a JSON document into a fresh list of items.

        Unknown keys on an item object are ignored.

        Args:
            data: Raw file contents

        Returns:
            New Item instances in array order

        Raises:
            DecodeError: If the data is not well-formed JSON
            ShapeError: If the JSON is not an array of item objects
        """
        tree = _parse(data, "Document")
        if not isinstance(tree, list):
            raise ShapeError(f"Document must be a JSON array, got {type(tree).__name__}")

        items = []
        for index, element in enumerate(tree):
            if not isinstance(element, dict):
                raise ShapeError(element_shape(index, f"expected an object, got {type(element).__name__}"))
            if "name" not in element:
                raise ShapeError(element_shape(index, "missing 'name'"))
            name = element["name"]
            if not isinstance(name, str):
                raise ShapeError(element_shape(index, f"'name' must be a string, got {type(name).__name__}"))
            items.append(
                Item(
                    name=name,
                    amount=_decode_amount(index, element.get("amount")),
                    unit_price=_decode_price(index, element.get("price")),
                )
            )
        return items


def encode_manifest(paths: Sequence[Path]) -> bytes:
    """Encode an ordered list of document paths as a JSON array of strings."""
    return _dump([str(path) for path in paths])


def decode_manifest(data: bytes | str) -> list[Path]:
    """Decode a session manifest into document paths.

    Raises:
        DecodeError: If the data is not well-formed JSON
        ShapeError: If the JSON is not an array of strings
    """
    tree = _parse(data, "Session manifest")
    if not isinstance(tree, list):
        raise ShapeError(f"Session manifest must be a JSON array, got {type(tree).__name__}")
    paths = []
    for index, entry in enumerate(tree):
        if not isinstance(entry, str) or not entry:
            raise ShapeError(f"Session manifest entry {index} must be a non-empty path string")
        paths.append(Path(entry))
    return paths
