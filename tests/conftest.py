"""Shared pytest fixtures for spendlog tests."""

import tempfile
import os
import pytest
import httpx
from fastapi.testclient import TestClient

from spendlog.api.app import create_app
from spendlog.database.factories import create_memory_database, create_sqlite_database
from spendlog.domain.expense import ExpenseService
from spendlog.domain.rates import RateService


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an empty in-memory database."""
    db = create_memory_database()
    db.connect()
    db.initialize_schema()
    return db


@pytest.fixture(params=["sqlite", "memory"])
def any_db(request):
    """Run a test against every store implementation."""
    return request.getfixturevalue("temp_db" if request.param == "sqlite" else "memory_db")


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def offline_rate_service():
    """Rate service whose upstream always fails."""

    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    return RateService(url="http://rates.test/latest", client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.fixture
def api_client(temp_db, offline_rate_service):
    """Create a TestClient for the HTTP API over a temporary database."""
    app = create_app(temp_db, rate_service=offline_rate_service)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sample_expenses(expense_service):
    """Create a handful of records across dates, categories and types."""
    payloads = [
        {"amount": "12.50", "date": "2024-01-05", "category": "food", "currency": "cny"},
        {"amount": 30, "date": "2024-01-20", "category": "transportation"},
        {"amount": "3000", "date": "2024-01-31", "category": "salary", "type": "income"},
        {"amount": "8", "date": "2024-02-01", "category": "food", "notes": "coffee"},
        {"amount": "45.10", "date": "2024-02-14", "category": "entertainment"},
    ]
    return [expense_service.create(p) for p in payloads]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def db_path(tmp_path):
    """Return a fresh database file path for CLI tests."""
    return str(tmp_path / "cli.db")
