# backend-services/currency-service/market_fetcher.py
"""
Client for the upstream exchange ticker endpoint.

The endpoint returns every ticker the exchange quotes as a JSON object keyed by
symbol. The response is validated against the MarketSnapshot contract before it
is handed to the cache.
"""

import logging
import os
from typing import Optional

import requests
from pydantic import TypeAdapter, ValidationError

from shared.contracts import MarketSnapshot, SymbolList

logger = logging.getLogger(__name__)

UPSTREAM_TICKER_URL = os.getenv("UPSTREAM_TICKER_URL", "https://api.hitbtc.com/api/2/public/ticker")

_timeout_raw = os.getenv("UPSTREAM_HTTP_TIMEOUT_SECONDS", "").strip()
# None means requests waits for the upstream as long as it takes.
UPSTREAM_TIMEOUT: Optional[float] = float(_timeout_raw) if _timeout_raw else None

_SNAPSHOT_ADAPTER = TypeAdapter(MarketSnapshot)


class FetchError(Exception):
    """Raised when the upstream ticker data cannot be retrieved or parsed."""
    pass


def fetch_markets(
    symbols: SymbolList,
    url: str = UPSTREAM_TICKER_URL,
    timeout: Optional[float] = UPSTREAM_TIMEOUT,
) -> MarketSnapshot:
    """
    Fetches the current ticker for every market the exchange lists.

    Args:
        symbols: The configured symbols. The endpoint has no filter, so this is
            only used for logging; all tickers are returned.
        url: Upstream ticker endpoint.
        timeout: Request timeout in seconds, or None to wait indefinitely.

    Returns:
        A mapping of symbol to TickerSnapshot.

    Raises:
        FetchError: On network failure, a non-success status, a body that is
            not JSON, or JSON that violates the MarketSnapshot contract.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        # requests' JSONDecodeError is a ValueError subclass
        raise FetchError(f"Invalid JSON response from {url}: {e}") from e

    try:
        snapshot = _SNAPSHOT_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise FetchError(f"Data contract violation from {url}: {e}") from e

    logger.debug(f"Fetched {len(snapshot)} tickers ({len(symbols)} symbols configured).")
    return snapshot
