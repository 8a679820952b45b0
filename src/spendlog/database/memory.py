"""In-memory database implementation.

Useful for tests and throwaway sessions. Nothing survives the process.
"""

import threading
from typing import Optional

from spendlog.database.base import Database
from spendlog.database.migrations import LATEST_VERSION
from spendlog.domain.entities import (
    ExpenseDraft,
    ExpenseQuery,
    ExpenseRecord,
    now_millis,
)


class InMemoryDatabase(Database):
    """Dict-backed implementation of Database interface."""

    def __init__(self):
        self._rows: dict[int, ExpenseRecord] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Nothing to migrate; records always carry every field."""
        pass

    def schema_version(self) -> int:
        return LATEST_VERSION

    # Expense operations
    def create_expense(self, draft: ExpenseDraft) -> ExpenseRecord:
        """Persist a draft. IDs increase monotonically and are never reused."""
        with self._lock:
            self._last_id += 1
            record = ExpenseRecord.from_draft(self._last_id, draft, now_millis())
            self._rows[record.id] = record
            return record

    def get_expense(self, expense_id: int) -> Optional[ExpenseRecord]:
        """Get expense by ID."""
        with self._lock:
            return self._rows.get(expense_id)

    def update_expense(self, expense_id: int, draft: ExpenseDraft) -> Optional[ExpenseRecord]:
        """Replace every mutable field of an expense."""
        with self._lock:
            existing = self._rows.get(expense_id)
            if existing is None:
                return None
            record = ExpenseRecord.from_draft(existing.id, draft, existing.created_at)
            self._rows[expense_id] = record
            return record

    def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense. Returns False if no row has that ID."""
        with self._lock:
            return self._rows.pop(expense_id, None) is not None

    def _matching(self, query: ExpenseQuery) -> list[ExpenseRecord]:
        with self._lock:
            rows = list(self._rows.values())

        def matches(record: ExpenseRecord) -> bool:
            if query.start is not None and record.date < query.start:
                return False
            if query.end is not None and record.date > query.end:
                return False
            if query.category is not None and record.category != query.category:
                return False
            if query.type is not None and record.type != query.type:
                return False
            return True

        return [r for r in rows if matches(r)]

    def list_expenses(self, query: ExpenseQuery) -> list[ExpenseRecord]:
        """List one page of expenses matching the query, newest first."""
        rows = sorted(self._matching(query), key=lambda r: (r.date, r.id), reverse=True)
        return rows[query.offset:query.offset + query.limit]

    def count_expenses(self, query: ExpenseQuery) -> int:
        """Count expenses matching the query filters, ignoring pagination."""
        return len(self._matching(query))
