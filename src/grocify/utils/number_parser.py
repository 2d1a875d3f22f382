"""Validation and parsing of numeric cell input.

Each format is an immutable description; checking a candidate string is a
pure function of the format and the text.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from grocify.domain.errors import ValidationError


@dataclass(frozen=True)
class NumberFormat:
    """Accepted shape of a numeric input field."""

    name: str
    pattern: str

    def matches(self, text: str) -> bool:
        return re.fullmatch(self.pattern, text) is not None


# Whole, non-negative quantities: "3", "12"
AMOUNT_FORMAT = NumberFormat(name="amount", pattern=r"\d+")

# Decimal prices: "12", "1.50", ".5", "-0.25"
PRICE_FORMAT = NumberFormat(name="price", pattern=r"-?(\d+(\.\d*)?|\.\d+)")


def accepts(fmt: NumberFormat, text: str) -> bool:
    """Check whether text is acceptable input for fmt.

    Empty text is always accepted; it means the value is being cleared.

    Args:
        fmt: Number format to check against
        text: Candidate input

    Returns:
        True if the input may be committed
    """
    text = text.strip()
    return not text or fmt.matches(text)


def parse_amount(text: str) -> Optional[int]:
    """Parse a quantity string.

    Args:
        text: Amount string, e.g. "3"; empty means no amount

    Returns:
        Integer amount, or None if text is empty

    Raises:
        ValidationError: If text is not a whole non-negative number
    """
    text = text.strip()
    if not text:
        return None
    if not AMOUNT_FORMAT.matches(text):
        raise ValidationError(f"Could not parse amount '{text}': expected a whole number")
    return int(text)


def parse_price(text: str) -> Optional[Decimal]:
    """Parse a unit price string into an exact Decimal.

    Handles:
    - "1.50" (trailing zeros are kept)
    - "$1.50" (currency symbol stripped)
    - "1,299.00" (thousands separators stripped)

    Args:
        text: Price string; empty means no price

    Returns:
        Decimal price, or None if text is empty

    Raises:
        ValidationError: If text is not a decimal number
    """
    text = text.strip()
    if not text:
        return None

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"[$€£¥]", "", text).replace(",", "").strip()

    if not PRICE_FORMAT.matches(cleaned):
        raise ValidationError(f"Could not parse price '{text}': expected a decimal number")
    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse price '{text}': {e}") from e
