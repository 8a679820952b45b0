"""Domain model entities for spendlog.

These are pure data classes representing business concepts, independent of
database schema. Storage implementations convert to and from them, so the
schema can grow new columns without touching the service or HTTP layers.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

# Amounts are stored as NUMERIC(15, 2): whole cents below 10**13.
AMOUNT_PRECISION = 15
AMOUNT_SCALE = 2


class RecordType(str, Enum):
    """Kind of money movement a record represents."""

    EXPENSE = "expense"
    INCOME = "income"


def now_millis() -> int:
    """Return the current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ExpenseDraft:
    """Validated record payload that has not been persisted yet.

    Every field is always present; absent optional text is ``None``.
    """

    amount: Decimal
    amount_text: Optional[str]
    category: Optional[str]
    date: date
    notes: Optional[str]
    currency: Optional[str]
    type: RecordType = RecordType.EXPENSE


@dataclass(frozen=True)
class ExpenseRecord:
    """Persisted expense or income record."""

    id: int
    amount: Decimal
    amount_text: Optional[str]
    category: Optional[str]
    date: date
    notes: Optional[str]
    currency: Optional[str]
    type: RecordType
    created_at: int

    @classmethod
    def from_draft(cls, record_id: int, draft: ExpenseDraft, created_at: int) -> "ExpenseRecord":
        """Build a record from a draft plus its store-assigned identity."""
        return cls(
            id=record_id,
            amount=draft.amount,
            amount_text=draft.amount_text,
            category=draft.category,
            date=draft.date,
            notes=draft.notes,
            currency=draft.currency,
            type=draft.type,
            created_at=created_at,
        )

    def to_draft(self) -> ExpenseDraft:
        """Return the mutable part of the record."""
        return ExpenseDraft(
            amount=self.amount,
            amount_text=self.amount_text,
            category=self.category,
            date=self.date,
            notes=self.notes,
            currency=self.currency,
            type=self.type,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the record in its JSON wire shape."""
        return {
            "id": self.id,
            "amount": float(self.amount),
            "amountText": self.amount_text,
            "category": self.category,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "currency": self.currency,
            "type": self.type.value,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ExpenseQuery:
    """Bounded, validated filter and page selection for listing records."""

    start: Optional[date] = None
    end: Optional[date] = None
    category: Optional[str] = None
    type: Optional[RecordType] = None
    page: int = 1
    page_size: int = 50

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class RecordPage:
    """One page of records plus the filtered total, if it was computed."""

    records: list[ExpenseRecord] = field(default_factory=list)
    total: Optional[int] = None
