"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from spendlog.api.app import create_app
from spendlog.domain.errors import StorageError
from spendlog.domain.rates import FALLBACK_RATES


def post(client, **body):
    return client.post("/expenses", json=body)


def test_health(api_client):
    """Test the liveness endpoint."""
    response = api_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert isinstance(body["timestamp"], int)


def test_rates_fall_back_when_upstream_is_down(api_client):
    """Test that an unreachable rate service still answers 200."""
    response = api_client.get("/rates", params={"base": "usd"})

    assert response.status_code == 200
    assert response.json() == FALLBACK_RATES


class TestCreate:
    """Tests for POST /expenses."""

    def test_create_minimal(self, api_client):
        """Test creating a record from a string amount."""
        response = post(api_client, amount="12.50", date="2024-05-01")

        assert response.status_code == 201
        body = response.json()
        assert body["amount"] == 12.5
        assert body["type"] == "expense"
        assert body["currency"] is None
        assert body["amountText"] is None
        assert body["category"] is None
        assert body["notes"] is None
        assert body["date"] == "2024-05-01"
        assert body["id"] > 0
        assert isinstance(body["created_at"], int)

    def test_create_full(self, api_client):
        """Test that every field round-trips through the wire shape."""
        response = post(
            api_client,
            amount=3000,
            amountText="3000",
            category="salary",
            date="2024-05-31",
            notes="may",
            currency="eur",
            type="income",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["currency"] == "EUR"
        assert body["type"] == "income"
        assert body["amountText"] == "3000"

    def test_create_zero_amount_is_accepted(self, api_client):
        """Test that the server accepts zero, unlike the client input guard."""
        response = post(api_client, amount=0, date="2024-05-01")
        assert response.status_code == 201
        assert response.json()["amount"] == 0

    def test_create_invalid_lists_every_field(self, api_client):
        """Test that a 400 carries one error per violated field."""
        response = post(api_client, amount=-1, date="2024-13-01", type="loan")

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert len(errors) == 3
        assert {e.split(":", 1)[0] for e in errors} == {"amount", "date", "type"}

    def test_create_non_object_body(self, api_client):
        """Test that a body that is not a JSON object is a 400."""
        response = api_client.post("/expenses", json=[1, 2, 3])
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_create_out_of_range_amount(self, api_client):
        """Test that an amount too large for a JSON number is a 400 and stores nothing."""
        response = post(api_client, amount="1e400", date="2024-05-01")

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("amount: InvalidAmount")

        listing = api_client.get("/expenses")
        assert listing.status_code == 200
        assert listing.json() == []

    def test_create_sub_cent_amount(self, api_client):
        """Test that amounts with more than two decimal places are a 400."""
        response = post(api_client, amount="0.123456789012345", date="2024-05-01")
        assert response.status_code == 400


class TestUpdate:
    """Tests for PUT /expenses/{id}."""

    def test_update(self, api_client):
        """Test that update replaces the record and keeps identity."""
        created = post(api_client, amount="5", date="2024-05-01", notes="x").json()

        response = api_client.put(
            f"/expenses/{created['id']}", json={"amount": "7.25", "date": "2024-05-02", "type": "income"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["created_at"] == created["created_at"]
        assert body["amount"] == 7.25
        assert body["notes"] is None
        assert body["type"] == "income"

    def test_update_missing(self, api_client):
        """Test that update of an unknown id is a 404."""
        response = api_client.put("/expenses/999", json={"amount": 1, "date": "2024-05-01"})
        assert response.status_code == 404

    def test_update_id_beyond_row_range(self, api_client):
        """Test that an id too large for the store is a 404."""
        response = api_client.put("/expenses/100000000000000000000", json={"amount": 1, "date": "2024-05-01"})
        assert response.status_code == 404

    def test_update_invalid(self, api_client):
        """Test that update validates its body."""
        created = post(api_client, amount="5", date="2024-05-01").json()

        response = api_client.put(f"/expenses/{created['id']}", json={"amount": 1, "date": "2024-02-30"})

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("date:")


class TestDelete:
    """Tests for DELETE /expenses/{id}."""

    def test_delete(self, api_client):
        """Test delete, then a second delete of the same id."""
        created = post(api_client, amount="5", date="2024-05-01").json()

        first = api_client.delete(f"/expenses/{created['id']}")
        second = api_client.delete(f"/expenses/{created['id']}")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404

    @pytest.mark.parametrize("expense_id", ["0", "-5", "100000000000000000000"])
    def test_delete_id_without_a_row(self, api_client, expense_id):
        """Test that ids no row can carry are a 404."""
        response = api_client.delete(f"/expenses/{expense_id}")
        assert response.status_code == 404
        assert response.json() == {"error": "not found"}


class TestList:
    """Tests for GET /expenses."""

    @pytest.fixture
    def seeded(self, api_client):
        bodies = [
            {"amount": 1, "date": "2024-01-05", "category": "food"},
            {"amount": 2, "date": "2024-01-20", "category": "transport"},
            {"amount": 3, "date": "2024-02-01", "category": "food"},
        ]
        return [post(api_client, **b).json() for b in bodies]

    def test_list_all_newest_first(self, api_client, seeded):
        """Test the unfiltered listing and its total header."""
        response = api_client.get("/expenses")

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [seeded[2]["id"], seeded[1]["id"], seeded[0]["id"]]
        assert response.headers["X-Total-Count"] == "3"

    def test_list_income_is_empty(self, api_client, seeded):
        """Test that filtering by income with no income rows returns []."""
        response = api_client.get("/expenses", params={"type": "income"})

        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

    def test_list_filters_and_pages(self, api_client, seeded):
        """Test category filter with pagination parameters."""
        response = api_client.get("/expenses", params={"category": "food", "page": "2", "pageSize": "1"})

        assert [r["id"] for r in response.json()] == [seeded[0]["id"]]
        assert response.headers["X-Total-Count"] == "2"

    def test_list_inverted_range(self, api_client, seeded):
        """Test that start after end is an empty 200."""
        response = api_client.get("/expenses", params={"start": "2024-02-01", "end": "2024-01-01"})

        assert response.status_code == 200
        assert response.json() == []

    def test_list_huge_page_is_empty(self, api_client, seeded):
        """Test that a page far past the end is an empty 200."""
        response = api_client.get("/expenses", params={"page": "1000000000000000000"})

        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "3"

    def test_list_ignores_malformed_parameters(self, api_client, seeded):
        """Test that bad filter and page values never fail the request."""
        response = api_client.get(
            "/expenses", params={"start": "jan", "type": "loan", "page": "zero", "pageSize": "-4"}
        )

        assert response.status_code == 200
        assert len(response.json()) == 3


class BrokenDatabase:
    """Store whose every call fails like a lost database."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise StorageError("disk I/O error")

        return fail


def test_storage_failure_is_a_500(offline_rate_service):
    """Test that storage errors become a generic 500 instead of crashing."""
    app = create_app(BrokenDatabase(), rate_service=offline_rate_service)
    with TestClient(app) as client:
        response = client.get("/expenses")

    assert response.status_code == 500
    assert response.json() == {"error": "internal storage failure"}
