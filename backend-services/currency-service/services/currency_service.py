# backend-services/currency-service/services/currency_service.py
"""
Read-only queries over the cached market snapshot.

Each query reads the cache's snapshot reference once, so a refresh that lands
mid-request cannot mix old and new tickers in one response.
"""

from typing import Optional

from services.market_cache import MarketCache
from shared.contracts import FEE_CURRENCY, CurrencyList, CurrencyRecord, TickerSnapshot


class BadRequestError(Exception):
    """Base class for client errors reported as HTTP 400."""
    pass


class SymbolNotSpecifiedError(BadRequestError):
    def __init__(self):
        super().__init__("No symbol specified")


class UnknownSymbolError(BadRequestError):
    def __init__(self, symbol: str):
        super().__init__("Invalid symbol specified")
        self.symbol = symbol


def to_currency_record(symbol: str, ticker: TickerSnapshot) -> CurrencyRecord:
    """Projects one ticker into the served record. Price fields are copied verbatim."""
    return CurrencyRecord(
        id=symbol,
        fullName=symbol,
        ask=ticker.ask,
        bid=ticker.bid,
        last=ticker.last,
        open=ticker.open,
        low=ticker.low,
        high=ticker.high,
        feeCurrency=FEE_CURRENCY,
    )


class CurrencyService:
    def __init__(self, market_cache: MarketCache):
        self.market_cache = market_cache

    def get_one(self, symbol: Optional[str]) -> CurrencyRecord:
        if not symbol:
            raise SymbolNotSpecifiedError()
        snapshot = self.market_cache.snapshot()
        ticker = snapshot.get(symbol)
        if ticker is None:
            raise UnknownSymbolError(symbol)
        return to_currency_record(symbol, ticker)

    def get_all(self) -> CurrencyList:
        snapshot = self.market_cache.snapshot()
        return CurrencyList(
            currencies=[to_currency_record(symbol, ticker) for symbol, ticker in snapshot.items()]
        )
