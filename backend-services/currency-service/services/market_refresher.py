# backend-services/currency-service/services/market_refresher.py
import logging
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from market_fetcher import FetchError, fetch_markets
from services.market_cache import MarketCache
from shared.contracts import MarketSnapshot, SymbolList

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh-markets"
DEFAULT_REFRESH_INTERVAL_SECONDS = 10


class MarketRefresher:
    """
    Periodically re-fetches the market snapshot and swaps it into the cache.

    A failed fetch is logged and the previous snapshot stays in place; there is
    no retry or backoff beyond the next scheduled run.
    """

    def __init__(
        self,
        market_cache: MarketCache,
        symbols: SymbolList,
        fetch: Callable[[SymbolList], MarketSnapshot] = fetch_markets,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.market_cache = market_cache
        self.symbols = list(symbols)
        self.fetch = fetch
        self.interval_seconds = interval_seconds
        self._scheduler = scheduler or BackgroundScheduler()

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def refresh_once(self) -> bool:
        """Runs a single refresh. Returns True if the cache was replaced."""
        logger.info("Updating markets...")
        try:
            snapshot = self.fetch(self.symbols)
        except FetchError as e:
            logger.error(f"Error updating markets: {e}")
            return False
        self.market_cache.replace(snapshot)
        return True

    def start(self) -> None:
        """Schedules refresh_once every interval; the first run is one interval from now."""
        if self._scheduler.running:
            return
        self._scheduler.add_job(
            self.refresh_once,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REFRESH_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(f"Market refresher started (interval={self.interval_seconds}s).")

    def stop(self, wait: bool = True) -> None:
        """Cancels future runs. With wait=True, blocks until a running refresh finishes."""
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=wait)
        logger.info("Market refresher stopped.")
