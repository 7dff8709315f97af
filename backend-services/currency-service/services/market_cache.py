# backend-services/currency-service/services/market_cache.py
"""
In-memory holder for the current market snapshot.

The refresher is the only writer; request handlers read. A snapshot is never
edited in place: replace() builds a new read-only mapping and swaps the
reference, so a reader holds either the complete old snapshot or the complete
new one.
"""

import logging
import threading
from types import MappingProxyType
from typing import Mapping, Optional

from shared.contracts import MarketSnapshot, TickerSnapshot

logger = logging.getLogger(__name__)


class MarketCache:
    def __init__(self, snapshot: Optional[MarketSnapshot] = None):
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, TickerSnapshot] = MappingProxyType(dict(snapshot or {}))

    def snapshot(self) -> Mapping[str, TickerSnapshot]:
        """Returns the current snapshot. Callers should read it once per request."""
        with self._lock:
            return self._snapshot

    def replace(self, snapshot: MarketSnapshot) -> None:
        """Swaps in a new snapshot as a whole."""
        frozen = MappingProxyType(dict(snapshot))
        with self._lock:
            self._snapshot = frozen
        logger.info(f"Market snapshot replaced, count={len(frozen)}")

    def __len__(self) -> int:
        return len(self.snapshot())
