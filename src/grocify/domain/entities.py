"""Domain model entities for grocify.

Items are plain mutable records owned by a Document. They carry no identity
or lifecycle of their own; the owning Document decides when an item is added,
edited or dropped.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional


@dataclass
class Item:
    """A single line of a list: name, optional quantity, optional unit price."""

    name: str
    amount: Optional[int] = None
    unit_price: Optional[Decimal] = None

    def is_blank(self) -> bool:
        """Return True when every field is empty.

        A blank row is dropped by its Document after an edit.
        """
        return (
            (self.name is None or not self.name.strip())
            and self.amount is None
            and self.unit_price is None
        )

    def copy(self) -> "Item":
        """Return an independent item with the same field values."""
        return replace(self)
