"""FastAPI dependencies.

Services are created once per application in ``create_app`` and stored on
``app.state``; routes receive them through these providers.
"""

from fastapi import Request

from spendlog.domain.expense import ExpenseService
from spendlog.domain.rates import RateService


def get_expense_service(request: Request) -> ExpenseService:
    """Return the expense service bound to this application."""
    return request.app.state.expense_service


def get_rate_service(request: Request) -> RateService:
    """Return the rate service bound to this application."""
    return request.app.state.rate_service
