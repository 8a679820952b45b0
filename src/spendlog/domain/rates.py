"""Exchange-rate collaborator.

Fetches currency multipliers relative to a base currency from an external
service. Failures never reach the caller: they are logged and replaced by a
fixed fallback table.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Mapping, Optional

import httpx

from spendlog.config import DEFAULT_RATES_TIMEOUT, DEFAULT_RATES_URL
from spendlog.domain.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE = "CNY"
SYMBOLS = ("USD", "EUR", "GBP", "JPY", "CNY")

FALLBACK_RATES: dict[str, float] = {
    "USD": 0.137,
    "EUR": 0.129,
    "GBP": 0.109,
    "JPY": 20.0,
    "CNY": 1,
}


def normalize_base(base: Optional[str]) -> str:
    """Upper-case a base currency code; empty means the default base."""
    if base is None or not base.strip():
        return DEFAULT_BASE
    return base.strip().upper()


def convert_amount(
    amount: Decimal,
    to: str,
    rates: Mapping[str, float],
    source: Optional[str] = None,
    base: str = DEFAULT_BASE,
) -> Optional[Decimal]:
    """Convert an amount between currencies.

    Args:
        amount: Amount in ``source`` currency
        to: Target currency code
        rates: Multipliers relative to ``base``, as returned by ``get_rates``
        source: Currency the amount is in; records without one are in ``base``
        base: Base currency of ``rates``

    Returns:
        Converted amount, or None if either currency has no usable rate
    """
    base = base.upper()
    source = (source or base).upper()
    to = to.upper()
    if source == to:
        return amount

    def rate(code: str) -> Optional[Decimal]:
        value = 1 if code == base else rates.get(code)
        if not value:
            return None
        return Decimal(str(value))

    source_rate, to_rate = rate(source), rate(to)
    if source_rate is None or to_rate is None:
        return None
    return amount / source_rate * to_rate


def parse_rates(payload: Any) -> dict[str, float]:
    """Extract the ``rates`` mapping from a response body.

    Raises:
        UpstreamUnavailable: If the body has no usable mapping of code to number
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("rates"), dict):
        raise UpstreamUnavailable("response has no rates mapping")

    rates = {}
    for code, value in payload["rates"].items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise UpstreamUnavailable(f"rate for {code!r} is not a number")
        rates[str(code)] = value

    if not rates:
        raise UpstreamUnavailable("response rates mapping is empty")
    return rates


class RateService:
    """Service for currency multipliers with a bounded timeout."""

    def __init__(
        self,
        url: str = DEFAULT_RATES_URL,
        timeout: float = DEFAULT_RATES_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize rate service.

        Args:
            url: Endpoint returning ``{"rates": {...}}`` for ``base``/``symbols`` params
            timeout: Seconds allowed for connect and read
            client: Optional preconfigured httpx client (tests pass a mock transport)
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    def fetch_rates(self, base: str) -> dict[str, float]:
        """Fetch rates from the upstream service.

        Raises:
            UpstreamUnavailable: On timeout, network error, bad status or malformed body
        """
        params = {"base": base, "symbols": ",".join(SYMBOLS)}
        try:
            if self._client is not None:
                response = self._client.get(self.url, params=params, timeout=self.timeout)
            else:
                response = httpx.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamUnavailable(f"rate request failed: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"rate response is not JSON: {e}") from e
        return parse_rates(payload)

    def get_rates(self, base: Optional[str] = None) -> dict[str, float]:
        """Return multipliers relative to ``base``, or the fallback table."""
        base = normalize_base(base)
        try:
            return self.fetch_rates(base)
        except UpstreamUnavailable as e:
            logger.warning("Using fallback rates for %s: %s", base, e)
            return dict(FALLBACK_RATES)
