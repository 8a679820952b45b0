"""Tests for the query filter and paginator."""

import pytest
from datetime import date

from spendlog.domain.entities import RecordType
from spendlog.domain.query import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    build_expense_query,
    clamp_page,
    clamp_page_size,
)


def test_defaults():
    """Test that no parameters means no filters, page 1 of 50."""
    query = build_expense_query()

    assert query.start is None
    assert query.end is None
    assert query.category is None
    assert query.type is None
    assert query.page == 1
    assert query.page_size == DEFAULT_PAGE_SIZE
    assert query.offset == 0


def test_valid_filters_are_applied():
    """Test that well-formed filter values are parsed."""
    query = build_expense_query(
        start="2024-01-01", end="2024-01-31", category="food", type="income", page="3", page_size="20"
    )

    assert query.start == date(2024, 1, 1)
    assert query.end == date(2024, 1, 31)
    assert query.category == "food"
    assert query.type is RecordType.INCOME
    assert query.page == 3
    assert query.page_size == 20
    assert query.offset == 40
    assert query.limit == 20


@pytest.mark.parametrize("value", ["2024-1-1", "yesterday", "2024-02-30", ""])
def test_malformed_dates_are_ignored(value):
    """Test that malformed date bounds are dropped rather than rejected."""
    query = build_expense_query(start=value, end=value)
    assert query.start is None
    assert query.end is None


def test_empty_category_is_ignored():
    """Test that an empty category string applies no filter."""
    assert build_expense_query(category="").category is None


@pytest.mark.parametrize("value", ["loan", "Income", ""])
def test_unknown_type_is_ignored(value):
    """Test that a type outside the allowed set applies no filter."""
    assert build_expense_query(type=value).type is None


@pytest.mark.parametrize("value,expected", [(None, 1), ("0", 1), ("-3", 1), ("abc", 1), ("2", 2), (7, 7)])
def test_clamp_page(value, expected):
    """Test that page numbers are clamped up to 1."""
    assert clamp_page(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(None, DEFAULT_PAGE_SIZE), ("abc", DEFAULT_PAGE_SIZE), ("0", DEFAULT_PAGE_SIZE), ("10", 10), ("500", MAX_PAGE_SIZE), (200, 200)],
)
def test_clamp_page_size(value, expected):
    """Test that page sizes default and are capped at the maximum."""
    assert clamp_page_size(value) == expected


@pytest.mark.parametrize("value", [10**18, "1000000000000000000", 2**70])
def test_huge_page_is_capped(value):
    """Test that the offset of the largest page still fits in 64 bits."""
    query = build_expense_query(page=value, page_size=MAX_PAGE_SIZE)

    assert query.page == MAX_PAGE
    assert query.offset < 2**63
