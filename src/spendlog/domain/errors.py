"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Input failed validation on one or more fields.

    ``errors`` holds one message per violated field, never just the first.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid input")


class NotFoundError(DomainError):
    """Requested record does not exist."""


class StorageError(DomainError):
    """Unexpected failure in the persistence layer."""


class UpstreamUnavailable(DomainError):
    """The exchange-rate service could not be reached or answered badly."""


INVALID_AMOUNT = "InvalidAmount"
INVALID_DATE = "InvalidDate"
INVALID_TYPE = "InvalidType"
NON_POSITIVE_AMOUNT = "NonPositiveAmount"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense record."""
    return f"Expense {expense_id} not found"


def invalid_amount() -> str:
    """Return message for an amount the store cannot hold exactly."""
    return f"amount: {INVALID_AMOUNT} (must be a number >= 0 with at most 2 decimal places, below 10^13)"


def invalid_date(value: object) -> str:
    """Return message for a date that is malformed or not a real calendar day."""
    return f"date: {INVALID_DATE} ({value!r} is not a valid YYYY-MM-DD date)"


def invalid_type(value: object) -> str:
    """Return message for a record type outside the allowed set."""
    return f"type: {INVALID_TYPE} ({value!r} must be 'expense' or 'income')"
