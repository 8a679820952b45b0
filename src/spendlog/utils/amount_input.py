"""Amount entry guard for the client.

Two stages over a text buffer:

- ``type`` runs on every keystroke and accepts any partial decimal (``""``,
  ``"12"``, ``"12."``, ``"."``), ASCII or full-width. Anything else is refused
  and the last good buffer stays in place while ``error`` is set.
- ``commit`` runs on submit and requires at least one digit and a value
  strictly greater than zero.

The client refuses zero even though the server validator accepts it. This is
intentional: a hand-entered zero is almost always a typo, while stored or
imported records may legitimately carry zero.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from spendlog.domain.errors import DomainError, INVALID_AMOUNT, NON_POSITIVE_AMOUNT

# \d matches any Unicode decimal digit, full-width ones included
PARTIAL_PATTERN = re.compile(r"\d*[.．]?\d*")
COMPLETE_PATTERN = re.compile(r"\d+(?:[.．]\d*)?|[.．]\d+")

INVALID_FORMAT_MESSAGE = "Enter a valid number (a decimal point is allowed)"
INVALID_AMOUNT_MESSAGE = "Enter a valid amount (digits with an optional decimal point)"
NON_POSITIVE_MESSAGE = "Amount must be greater than zero"


class AmountInputError(DomainError):
    """Submitted amount text was rejected."""

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


def is_partial_amount(text: str) -> bool:
    """Return True if text is empty or could still become a valid amount."""
    return text == "" or PARTIAL_PATTERN.fullmatch(text) is not None


def parse_amount_text(text: str) -> Decimal:
    """Parse complete amount text, full-width separator allowed.

    Raises:
        AmountInputError: If the text has no digits or is malformed
    """
    if COMPLETE_PATTERN.fullmatch(text) is None:
        raise AmountInputError(INVALID_AMOUNT, INVALID_AMOUNT_MESSAGE)
    try:
        return Decimal(text.replace("．", "."))
    except InvalidOperation as e:
        raise AmountInputError(INVALID_AMOUNT, INVALID_AMOUNT_MESSAGE) from e


class AmountInput:
    """Text buffer for an amount being typed."""

    def __init__(self, initial: str = ""):
        self.buffer = initial if is_partial_amount(initial) else ""
        self.error: Optional[str] = None

    def type(self, text: str) -> bool:
        """Offer the new full text of the field after a keystroke.

        Returns:
            True if accepted (buffer updated, error cleared), False if refused
            (buffer unchanged, error set)
        """
        if is_partial_amount(text):
            self.buffer = text
            self.error = None
            return True
        self.error = INVALID_FORMAT_MESSAGE
        return False

    def type_text(self, text: str) -> bool:
        """Type ``text`` one character at a time, stopping at the first refusal."""
        for end in range(1, len(text) + 1):
            if not self.type(text[:end]):
                return False
        return True

    def commit(self) -> Decimal:
        """Validate the buffer for submission.

        Returns:
            The amount as a Decimal

        Raises:
            AmountInputError: ``InvalidAmount`` for text without digits,
                ``NonPositiveAmount`` for zero
        """
        try:
            amount = parse_amount_text(self.buffer)
        except AmountInputError as e:
            self.error = str(e)
            raise
        if amount <= 0:
            self.error = NON_POSITIVE_MESSAGE
            raise AmountInputError(NON_POSITIVE_AMOUNT, NON_POSITIVE_MESSAGE)
        self.error = None
        return amount

    def reset(self) -> None:
        """Clear buffer and error."""
        self.buffer = ""
        self.error = None
