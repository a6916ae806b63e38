"""
Swap-rate calculator backed by a remote price feed.

The feed is a JSON array of ``{"currency", "price", "date"}`` records and
may contain several entries per currency; only the latest-dated one is
used.  A rate is how much of ``to`` one unit of ``from`` buys::

    rate = price[from] / price[to]

Swapping a currency for itself is always 1:1, whatever the feed says.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

import requests

from crud_api.app.core.errors import NotFoundError, PriceFeedError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class TokenPrice:
    currency: str
    price: float
    date: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SwapQuote:
    from_currency: str
    to_currency: str
    rate: float
    input_amount: float
    output_amount: float
    reverse: bool
    info: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def latest_prices(records: Iterable[Dict[str, Any]]) -> Dict[str, TokenPrice]:
    """Keep the latest-dated usable price for each currency.

    Records without a currency, or whose price is not a positive number,
    are skipped.  Dates are ISO strings and compare lexicographically.
    """
    prices: Dict[str, TokenPrice] = {}
    for item in records:
        if not isinstance(item, dict):
            continue
        currency = str(item.get("currency") or "").strip()
        if not currency:
            continue
        try:
            price = float(item.get("price"))
        except (TypeError, ValueError):
            logger.debug("Skipping %s: unusable price %r", currency, item.get("price"))
            continue
        if not price > 0:
            continue
        date = str(item.get("date") or "")
        current = prices.get(currency)
        if current is None or date > current.date:
            prices[currency] = TokenPrice(currency=currency, price=price, date=date)
    return prices


def exchange_rate(prices: Dict[str, TokenPrice], from_currency: str, to_currency: str) -> float:
    if from_currency == to_currency:
        return 1.0
    for currency in (from_currency, to_currency):
        if currency not in prices:
            raise NotFoundError(f"No price available for {currency}")
    return prices[from_currency].price / prices[to_currency].price


def quote(
    prices: Dict[str, TokenPrice],
    from_currency: str,
    to_currency: str,
    amount: float,
    reverse: bool = False,
) -> SwapQuote:
    """Compute a swap quote.

    With ``reverse=False`` ``amount`` is what is sent and the quote holds
    the amount received; with ``reverse=True`` ``amount`` is what should be
    received and the quote holds the amount to send.
    """
    if not from_currency or not to_currency:
        raise ValidationError("Both currencies are required")
    if not amount or not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Please enter a valid amount")
    rate = exchange_rate(prices, from_currency, to_currency)
    if reverse:
        input_amount, output_amount = amount / rate, amount
    else:
        input_amount, output_amount = amount, amount * rate
    if from_currency == to_currency:
        info = "1:1 exchange rate"
    else:
        info = f"1 {from_currency} = {rate:.6f} {to_currency}"
    return SwapQuote(
        from_currency=from_currency,
        to_currency=to_currency,
        rate=rate,
        input_amount=input_amount,
        output_amount=output_amount,
        reverse=reverse,
        info=info,
    )


class PriceFeed:
    """Client for the remote ``prices.json`` feed."""

    def __init__(self, url: str, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_records(self) -> List[Dict[str, Any]]:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            logger.warning("Price feed request to %s failed: %s", self.url, exc)
            raise PriceFeedError(f"Failed to load token prices: {exc}") from exc
        except ValueError as exc:
            raise PriceFeedError(f"Price feed returned invalid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise PriceFeedError("Price feed returned an unexpected payload")
        logger.debug("Fetched %d price records from %s", len(data), self.url)
        return data

    def latest_prices(self) -> Dict[str, TokenPrice]:
        return latest_prices(self.fetch_records())
