"""Root endpoints: liveness and exchange rates."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from spendlog.api.deps import get_rate_service
from spendlog.domain.entities import now_millis
from spendlog.domain.rates import RateService

router = APIRouter()


@router.get("/health")
def health():
    """Liveness check."""
    return {"ok": True, "timestamp": now_millis()}


@router.get("/rates")
def rates(
    base: Optional[str] = Query(None),
    rate_service: RateService = Depends(get_rate_service),
):
    """Currency multipliers relative to ``base``.

    Always 200: upstream failures are answered with the fallback table.
    """
    return rate_service.get_rates(base)
