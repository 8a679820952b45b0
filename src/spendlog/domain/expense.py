"""Expense domain service."""

import logging
from typing import Any, Mapping

from spendlog.database.base import Database
from spendlog.domain.entities import ExpenseDraft, ExpenseQuery, ExpenseRecord, RecordPage
from spendlog.domain.errors import (
    NotFoundError,
    StorageError,
    ValidationError,
    expense_not_found,
)
from spendlog.domain.validation import validate_expense

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for managing expense records.

    Every write goes through ``validate_expense``; updates are full replaces
    and are validated exactly like creates.
    """

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validated(self, raw: Mapping[str, Any]) -> ExpenseDraft:
        result = validate_expense(raw)
        if not result.valid:
            raise ValidationError(result.errors)
        return result.normalized

    def create(self, raw: Mapping[str, Any]) -> ExpenseRecord:
        """Validate and persist a new record.

        Raises:
            ValidationError: If any field is invalid
        """
        record = self.db.create_expense(self._validated(raw))
        logger.info("Created expense %d", record.id)
        return record

    def get(self, expense_id: int) -> ExpenseRecord:
        """Get a record by ID.

        Raises:
            NotFoundError: If no record has that ID
        """
        record = self.db.get_expense(expense_id)
        if record is None:
            raise NotFoundError(expense_not_found(expense_id))
        return record

    def update(self, expense_id: int, raw: Mapping[str, Any]) -> ExpenseRecord:
        """Replace every mutable field of a record.

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If no record has that ID
        """
        draft = self._validated(raw)
        record = self.db.update_expense(expense_id, draft)
        if record is None:
            raise NotFoundError(expense_not_found(expense_id))
        logger.info("Updated expense %d", expense_id)
        return record

    def delete(self, expense_id: int) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If no record has that ID, including one already deleted
        """
        if not self.db.delete_expense(expense_id):
            raise NotFoundError(expense_not_found(expense_id))
        logger.info("Deleted expense %d", expense_id)

    def list_expenses(self, query: ExpenseQuery) -> list[ExpenseRecord]:
        """List one page of records matching the query."""
        return self.db.list_expenses(query)

    def count_expenses(self, query: ExpenseQuery) -> int:
        """Count records matching the query filters."""
        return self.db.count_expenses(query)

    def list_page(self, query: ExpenseQuery, require_total: bool = False) -> RecordPage:
        """List a page together with the filtered total.

        Args:
            query: Filter and page selection
            require_total: If True, a failed count propagates. Otherwise the
                page is still returned with ``total=None``.

        Raises:
            StorageError: If listing fails, or counting fails with require_total
        """
        records = self.list_expenses(query)
        try:
            total = self.count_expenses(query)
        except StorageError:
            if require_total:
                raise
            logger.warning("Count failed; returning page without total", exc_info=True)
            total = None
        return RecordPage(records=records, total=total)
