"""Utility functions for spendlog."""

from spendlog.utils.date_parser import parse_date, get_date_range
from spendlog.utils.amount_input import AmountInput, AmountInputError

__all__ = ["parse_date", "get_date_range", "AmountInput", "AmountInputError"]
