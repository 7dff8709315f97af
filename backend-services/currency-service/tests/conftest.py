# backend-services/currency-service/tests/conftest.py
"""
Pytest configuration and shared fixtures for currency-service tests.
Centralizes path setup, sample ticker payloads, and the Flask test client.
"""

import os
import sys

import pytest

# Dynamically find the service root (the folder containing 'tests/')
# This works whether the test is in tests/, tests/unit/, or tests/integration/
service_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if service_root not in sys.path:
    sys.path.insert(0, service_root)

# Also add backend-services so 'shared.contracts' resolves
backend_root = os.path.abspath(os.path.join(service_root, '..'))
if backend_root not in sys.path:
    sys.path.insert(0, backend_root)

from shared.contracts import TickerSnapshot  # noqa: E402
from services.market_cache import MarketCache  # noqa: E402


# --- Environment Configuration ---
def pytest_configure(config):
    """Register custom markers to avoid warnings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated, no network).")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (Flask routes against an in-memory cache).",
    )


def pytest_collection_modifyitems(config, items):
    # auto-tag tests by folder so `-m unit|integration` works consistently
    for item in items:
        path = str(item.fspath)
        if f"{os.sep}integration{os.sep}" in path:
            item.add_marker(pytest.mark.integration)
        elif f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)


# -------------------------------------------------------------------
# Sample data
# -------------------------------------------------------------------

# Mirrors the upstream ticker endpoint: symbol -> ticker fields, all strings
SAMPLE_TICKER_PAYLOAD = {
    "BTCUSD": {
        "ask": "10", "bid": "9", "last": "9.5", "open": "9",
        "low": "8", "high": "11", "volume": "100",
    },
    "ETHBTC": {
        "ask": "0.034120", "bid": "0.034110", "last": "0.034115", "open": "0.033900",
        "low": "0.033500", "high": "0.034500", "volume": "5421.1230",
    },
}


@pytest.fixture
def ticker_payload():
    return {symbol: dict(fields) for symbol, fields in SAMPLE_TICKER_PAYLOAD.items()}


@pytest.fixture
def market_snapshot(ticker_payload):
    return {symbol: TickerSnapshot(**fields) for symbol, fields in ticker_payload.items()}


@pytest.fixture
def market_cache(market_snapshot):
    return MarketCache(market_snapshot)


# -------------------------------------------------------------------
# Flask app and client fixtures
# -------------------------------------------------------------------

@pytest.fixture
def app(market_cache):
    from app import create_app
    flask_app = create_app(market_cache)
    flask_app.config["TESTING"] = True
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
