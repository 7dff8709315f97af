# backend-services/shared/contracts.py
"""
This module defines the Pydantic models that serve as the formal data contracts
for the currency-service: the upstream ticker payload it consumes, the startup
configuration it reads, and the currency records it serves.

Price fields are kept as the exchange-supplied decimal text. Nothing here parses
or rounds them.
"""

from typing import Dict, List, Optional, TypeAlias
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fee currency reported for every record. It is a fixed value, not derived from the symbol.
FEE_CURRENCY = "BTC"

# --- Contract 1: SymbolList ---
SymbolList: TypeAlias = List[str]
"""An ordered list of exchange symbols (e.g., ["BTCUSD", "ETHBTC"])."""


# --- Contract 2: ServiceConfig ---
class ServiceConfig(BaseModel):
    """Shape of the startup configuration file."""
    symbols: SymbolList


# --- Contract 3: TickerSnapshot ---
class TickerSnapshot(BaseModel):
    """One exchange-reported quote for a symbol."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    ask: str = ""
    bid: str = ""
    last: str = ""
    open: str = ""
    low: str = ""
    high: str = ""
    volume: str = ""

    @field_validator('ask', 'bid', 'last', 'open', 'low', 'high', 'volume', mode='before')
    @classmethod
    def _null_as_empty(cls, value):
        # The exchange sends null for fields it has no quote for
        return "" if value is None else value


# --- Contract 4: MarketSnapshot ---
MarketSnapshot: TypeAlias = Dict[str, TickerSnapshot]
"""Mapping from exchange symbol to its ticker, as returned by the upstream API."""


# --- Contract 5: CurrencyRecord ---
class CurrencyRecord(BaseModel):
    """The externally visible projection of one ticker."""
    id: str
    fullName: str
    ask: str
    bid: str
    last: str
    open: str
    low: str
    high: str
    feeCurrency: str = FEE_CURRENCY
    # Part of the response shape; the upstream ticker does not supply them.
    volume: str = ""
    quoteVolume: str = ""
    change: str = ""
    percentChange: str = ""


# --- Contract 6: CurrencyList ---
class CurrencyList(BaseModel):
    """Response body of GET /currency/all."""
    currencies: List[CurrencyRecord] = Field(default_factory=list)


# --- Contract 7: HealthStatus ---
class HealthStatus(BaseModel):
    """Response body of GET /health; symbols is the size of the cached snapshot."""
    status: str
    symbols: Optional[int] = None
