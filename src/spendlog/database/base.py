"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from spendlog.domain.entities import ExpenseDraft, ExpenseQuery, ExpenseRecord

# Largest id a SQLite INTEGER PRIMARY KEY can hold
MAX_ROW_ID = 2**63 - 1


class Database(ABC):
    """Abstract record store for spendlog."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Bring the schema up to date by applying pending migrations."""
        pass

    @abstractmethod
    def schema_version(self) -> int:
        """Return the schema version currently recorded by the store."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(self, draft: ExpenseDraft) -> ExpenseRecord:
        """Persist a draft. Assigns ``id`` and ``created_at``."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[ExpenseRecord]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def update_expense(self, expense_id: int, draft: ExpenseDraft) -> Optional[ExpenseRecord]:
        """Replace every mutable field of an expense.

        Returns the updated record, or None if no row has that ID.
        ``id`` and ``created_at`` are never altered.
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense. Returns False if no row has that ID."""
        pass

    @abstractmethod
    def list_expenses(self, query: ExpenseQuery) -> list[ExpenseRecord]:
        """List one page of expenses matching the query.

        Ordered by date descending, then ID descending.
        """
        pass

    @abstractmethod
    def count_expenses(self, query: ExpenseQuery) -> int:
        """Count expenses matching the query filters, ignoring pagination."""
        pass
