"""Expense record validation.

Maps an untrusted input mapping (a decoded JSON body or CLI payload) to
either a normalized ``ExpenseDraft`` or the list of every violated field.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from spendlog.domain.entities import AMOUNT_PRECISION, AMOUNT_SCALE, ExpenseDraft, RecordType
from spendlog.domain.errors import invalid_amount, invalid_date, invalid_type

DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

RECORD_TYPES = {t.value: t for t in RecordType}

AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)
MAX_AMOUNT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE) - AMOUNT_QUANTUM


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one input object."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    normalized: Optional[ExpenseDraft] = None

    @property
    def fields(self) -> set[str]:
        """Names of the fields that failed validation."""
        return {error.split(":", 1)[0] for error in self.errors}


def parse_record_date(value: Any) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` string into a date.

    Returns None when the text does not match the pattern or does not name a
    real calendar day (``2024-02-30``).
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def coerce_amount(value: Any) -> Optional[Decimal]:
    """Coerce an amount to a non-negative Decimal that the store holds exactly.

    Returns None for anything non-numeric, negative, above ``MAX_AMOUNT`` or
    with more than ``AMOUNT_SCALE`` decimal places.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        return None
    if amount != amount.quantize(AMOUNT_QUANTUM):
        return None
    return amount


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def validate_expense(raw: Mapping[str, Any]) -> ValidationResult:
    """Validate an input object and normalize it into a draft.

    Every rule is evaluated, so the result lists all violated fields at once.

    Args:
        raw: Input mapping using wire names (``amountText``; ``amount_text``
            is accepted too)

    Returns:
        ValidationResult with ``normalized`` set only when valid
    """
    errors: list[str] = []

    amount = coerce_amount(raw.get("amount"))
    if amount is None:
        errors.append(invalid_amount())

    raw_date = raw.get("date")
    record_date = parse_record_date(raw_date)
    if record_date is None:
        errors.append(invalid_date(raw_date))

    raw_type = raw.get("type")
    if raw_type is None:
        raw_type = RecordType.EXPENSE.value
    if isinstance(raw_type, RecordType):
        record_type = raw_type
    elif isinstance(raw_type, str):
        record_type = RECORD_TYPES.get(raw_type)
    else:
        record_type = None
    if record_type is None:
        errors.append(invalid_type(raw_type))

    if errors:
        return ValidationResult(valid=False, errors=errors)

    amount_text = raw.get("amountText", raw.get("amount_text"))
    currency = _optional_text(raw.get("currency"))

    draft = ExpenseDraft(
        amount=amount,
        amount_text=_optional_text(amount_text),
        category=_optional_text(raw.get("category")),
        date=record_date,
        notes=_optional_text(raw.get("notes")),
        currency=currency.upper() if currency is not None else None,
        type=record_type,
    )
    return ValidationResult(valid=True, normalized=draft)
