"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so columns added by later
migrations only need handling here.
"""

from spendlog.domain import entities as domain
from spendlog.database.models import Expense as ORMExpense


def record_type_from_column(value) -> domain.RecordType:
    """Read a stored type; rows from before the column existed are expenses."""
    if value is None:
        return domain.RecordType.EXPENSE
    return domain.RecordType(value)


def expense_to_domain(orm_expense: ORMExpense) -> domain.ExpenseRecord:
    """Convert SQLAlchemy Expense model to domain ExpenseRecord entity."""
    return domain.ExpenseRecord(
        id=orm_expense.id,
        amount=orm_expense.amount,
        amount_text=orm_expense.amount_text,
        category=orm_expense.category,
        date=orm_expense.date,
        notes=orm_expense.notes,
        currency=orm_expense.currency,
        type=record_type_from_column(orm_expense.type),
        created_at=orm_expense.created_at,
    )


def apply_draft(orm_expense: ORMExpense, draft: domain.ExpenseDraft) -> ORMExpense:
    """Copy every mutable field of a draft onto an ORM row."""
    orm_expense.amount = draft.amount
    orm_expense.amount_text = draft.amount_text
    orm_expense.category = draft.category
    orm_expense.date = draft.date
    orm_expense.notes = draft.notes
    orm_expense.currency = draft.currency
    orm_expense.type = draft.type.value
    return orm_expense
