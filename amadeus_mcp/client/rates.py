"""
Exchange rate cache and USD price annotation.

The public rate table is quoted as USD -> X; the cache stores the inverse
(X -> USD, i.e. how many dollars one unit of X buys) so prices can be
converted with a single multiplication.
"""

import math
import time
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Optional

import httpx

from ..config import Config
from ..errors import RefreshError

logger = logging.getLogger(__name__)

DEFAULT_RATES: Dict[str, float] = {
    "EUR": 1.10,
    "GBP": 1.27,
    "JPY": 0.0071,
    "IDR": 0.000063,
    "USD": 1.0,
}


class ExchangeRateCache:
    """
    Currency code -> USD-per-unit table, refreshed at most once per interval.

    Starts from DEFAULT_RATES and keeps them for the life of the process if
    no refresh ever succeeds.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        url: str = Config.EXCHANGE_RATE_URL,
        refresh_seconds: float = Config.RATE_REFRESH_SECONDS,
        clock: Callable[[], float] = time.time,
        initial_rates: Optional[Dict[str, float]] = None,
    ):
        self._http = http
        self._url = url
        self._refresh_seconds = refresh_seconds
        self._clock = clock
        self.rates: Dict[str, float] = dict(initial_rates or DEFAULT_RATES)
        self.last_updated: Optional[float] = None

    def is_stale(self) -> bool:
        if self.last_updated is None:
            return True
        return self._clock() - self.last_updated >= self._refresh_seconds

    async def refresh_if_stale(self) -> Optional[RefreshError]:
        """
        Fetch a new table if the current one is older than the refresh interval.

        Never raises. On failure the previous table is kept and the error is
        returned for the caller to log.
        """
        if not self.is_stale():
            return None

        try:
            response = await self._http.get(self._url)
            response.raise_for_status()
            new_rates = _invert_usd_table(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch exchange rates, using cached values: {e}")
            return RefreshError(f"Exchange rate refresh failed: {e}")

        self.rates = new_rates
        self.last_updated = self._clock()
        logger.info(f"Exchange rates updated ({len(new_rates)} currencies)")
        return None


def _invert_usd_table(payload: Any) -> Dict[str, float]:
    """Turn a {"rates": {code: units-per-USD}} body into {code: USD-per-unit}."""
    rates = payload.get("rates") if isinstance(payload, dict) else None
    if not isinstance(rates, dict) or not rates:
        raise ValueError("response has no rates table")

    inverted = {}
    for code, value in rates.items():
        try:
            value = float(value)
        except (TypeError, ValueError):
            continue
        if value > 0:
            inverted[code] = 1 / value
    inverted["USD"] = 1.0
    return inverted


def convert_to_usd(amount: float, currency_code: str, rates: Dict[str, float]) -> float:
    return amount * (rates.get(currency_code) or 1.0)


def round_cents(value: float) -> float:
    """Round to two decimals with ties going up, on the exact binary value of the float."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def annotate_prices(body: Any, rates: Dict[str, float]) -> Any:
    """
    Add usdAmount, originalAmount and originalCurrency to each priced item.

    Items are read from body["data"]. Anything without a usable
    price.amount / price.currencyCode is left untouched.
    """
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        return body

    for item in body["data"]:
        price = item.get("price") if isinstance(item, dict) else None
        if not isinstance(price, dict):
            continue
        amount = price.get("amount")
        currency = price.get("currencyCode")
        if not amount or not currency:
            continue
        try:
            original_amount = float(amount)
        except (TypeError, ValueError):
            continue
        if not math.isfinite(original_amount):
            continue

        price["usdAmount"] = round_cents(convert_to_usd(original_amount, currency, rates))
        price["originalAmount"] = original_amount
        price["originalCurrency"] = currency

    return body
