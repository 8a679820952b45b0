"""Expense record endpoints.

Routes only parse transport details. Query-string scalars go to
``build_expense_query``; bodies go to ``ExpenseService``, which validates
every write.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from spendlog.api.deps import get_expense_service
from spendlog.domain.expense import ExpenseService
from spendlog.domain.query import build_expense_query

router = APIRouter(prefix="/expenses")

TOTAL_COUNT_HEADER = "X-Total-Count"


@router.get("")
def list_expenses(
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: ExpenseService = Depends(get_expense_service),
):
    """List records newest first; the filtered total rides in a header."""
    query = build_expense_query(
        start=start,
        end=end,
        category=category,
        type=type,
        page=page,
        page_size=page_size,
    )
    result = service.list_page(query)
    if result.total is not None:
        response.headers[TOTAL_COUNT_HEADER] = str(result.total)
    return [record.to_dict() for record in result.records]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
):
    """Create a record."""
    return service.create(payload).to_dict()


@router.put("/{expense_id}")
def update_expense(
    expense_id: int,
    payload: dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
):
    """Replace a record."""
    return service.update(expense_id, payload).to_dict()


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    service: ExpenseService = Depends(get_expense_service),
):
    """Delete a record."""
    service.delete(expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
