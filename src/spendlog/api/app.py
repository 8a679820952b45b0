"""FastAPI application factory.

The store is chosen by the caller and injected here, so the same routes serve
an in-memory store in tests and a SQLite store in production.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from spendlog.api.routes_expenses import router as expenses_router
from spendlog.api.routes_root import router as root_router
from spendlog.database.base import Database
from spendlog.domain.errors import NotFoundError, StorageError, ValidationError
from spendlog.domain.expense import ExpenseService
from spendlog.domain.rates import RateService

logger = logging.getLogger(__name__)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies (not a JSON object) and bad path ids count as bad input
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "not found"})


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal storage failure"},
    )


def create_app(db: Database, rate_service: Optional[RateService] = None) -> FastAPI:
    """Build the HTTP application around an injected store.

    Args:
        db: Initialized database (schema already migrated)
        rate_service: Exchange-rate collaborator; defaults to the public service

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title="spendlog")

    app.state.db = db
    app.state.expense_service = ExpenseService(db)
    app.state.rate_service = rate_service if rate_service is not None else RateService()

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(StorageError, _storage_error)

    app.include_router(root_router)
    app.include_router(expenses_router)

    return app
