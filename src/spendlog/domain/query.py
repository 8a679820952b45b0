"""Query filter and paginator for listing records.

Untrusted query-string scalars are turned into a bounded ``ExpenseQuery``.
Malformed filter values are dropped rather than rejected; page numbers and
sizes are clamped into range.
"""

from typing import Any, Optional

from spendlog.domain.entities import ExpenseQuery, RecordType
from spendlog.domain.validation import RECORD_TYPES, parse_record_date

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
# Keeps offset = (page - 1) * page_size inside a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def clamp_page(value: Any) -> int:
    """Return a page number in ``1..MAX_PAGE``; non-numeric values fall back to page 1.

    Pages past ``MAX_PAGE`` are past the end of any store, so capping them
    still yields an empty page.
    """
    page = _parse_int(value)
    if page is None or page < 1:
        return DEFAULT_PAGE
    return min(page, MAX_PAGE)


def clamp_page_size(value: Any) -> int:
    """Return a page size in ``1..MAX_PAGE_SIZE``.

    Missing, non-numeric or non-positive values use ``DEFAULT_PAGE_SIZE``.
    """
    size = _parse_int(value)
    if size is None or size < 1:
        return DEFAULT_PAGE_SIZE
    return min(size, MAX_PAGE_SIZE)


def build_expense_query(
    start: Any = None,
    end: Any = None,
    category: Any = None,
    type: Any = None,
    page: Any = None,
    page_size: Any = None,
) -> ExpenseQuery:
    """Build a conjunctive filter plus page selection.

    Args:
        start: Inclusive lower date bound, ``YYYY-MM-DD``; ignored if malformed
        end: Inclusive upper date bound, ``YYYY-MM-DD``; ignored if malformed
        category: Exact category match; ignored if empty
        type: ``expense`` or ``income``; ignored otherwise
        page: 1-based page number
        page_size: Records per page, at most ``MAX_PAGE_SIZE``

    Returns:
        ExpenseQuery ready to hand to a store
    """
    record_type = None
    if isinstance(type, RecordType):
        record_type = type
    elif isinstance(type, str):
        record_type = RECORD_TYPES.get(type)

    return ExpenseQuery(
        start=parse_record_date(start),
        end=parse_record_date(end),
        category=category if isinstance(category, str) and category != "" else None,
        type=record_type,
        page=clamp_page(page),
        page_size=clamp_page_size(page_size),
    )
