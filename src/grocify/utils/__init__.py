"""Utility functions for grocify."""

from grocify.utils.number_parser import accepts, parse_amount, parse_price

__all__ = ["accepts", "parse_amount", "parse_price"]
