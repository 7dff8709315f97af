# backend-services/currency-service/app.py
# Re-serves the exchange's ticker data from an in-memory snapshot refreshed in the background
import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify, redirect

from config_loader import ConfigError, load_symbols
from market_fetcher import FetchError, fetch_markets
from services.currency_service import BadRequestError, CurrencyService
from services.market_cache import MarketCache
from services.market_refresher import DEFAULT_REFRESH_INTERVAL_SECONDS, MarketRefresher
from shared.contracts import HealthStatus

# --- Configuration ---
PORT = int(os.getenv("PORT", 8080))
HOST = os.getenv("HOST", "0.0.0.0")
REFRESH_INTERVAL_SECONDS = float(os.getenv("REFRESH_INTERVAL_SECONDS", DEFAULT_REFRESH_INTERVAL_SECONDS))

_TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}


# --- Logging Setup ---
# Module loggers that write through the service handlers
LOGGER_NAMES = [
    "config_loader",
    "market_fetcher",
    "services.market_cache",
    "services.market_refresher",
    "services.currency_service",
    "apscheduler",
]


def setup_logging(app):
    """Sends app and module logs to the console and to a rotating currency_service.log."""
    log_level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    log_directory = os.environ.get("LOG_DIRECTORY", "/app/logs")
    os.makedirs(log_directory, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(
            os.path.join(log_directory, "currency_service.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)

    for target in [app.logger] + [logging.getLogger(name) for name in LOGGER_NAMES]:
        target.setLevel(log_level)
        target.propagate = False
        target.handlers = list(handlers)

    app.logger.info("Currency service logging initialized.")
# --- End of Logging Setup ---


def create_app(market_cache: MarketCache) -> Flask:
    """Builds the Flask app serving queries against the given cache."""
    app = Flask(__name__)
    currency_service = CurrencyService(market_cache)

    def _json_response(payload):
        try:
            return jsonify(payload), 200
        except (TypeError, ValueError) as e:
            app.logger.error(f"Failed to serialize response: {e}")
            return str(e), 500, _TEXT_HEADERS

    @app.route('/currency', methods=['GET'])
    def currency_root():
        return redirect('/currency/all', code=301)

    @app.route('/currency/all', methods=['GET'])
    def get_all_currencies():
        return _json_response(currency_service.get_all().model_dump())

    @app.route('/currency/', defaults={'symbol': ''}, methods=['GET'])
    @app.route('/currency/<path:symbol>', methods=['GET'])
    def get_currency(symbol):
        try:
            record = currency_service.get_one(symbol)
        except BadRequestError as e:
            return str(e), 400, _TEXT_HEADERS
        return _json_response(record.model_dump())

    @app.route('/health', methods=['GET'])
    def health_check():
        """Standard health check endpoint."""
        return jsonify(HealthStatus(status="healthy", symbols=len(market_cache)).model_dump()), 200

    return app


def main():
    market_cache = MarketCache()
    app = create_app(market_cache)
    setup_logging(app)

    try:
        symbols = load_symbols()
    except ConfigError as e:
        app.logger.critical(f"Error loading configuration: {e}")
        sys.exit(1)

    try:
        market_cache.replace(fetch_markets(symbols))
    except FetchError as e:
        app.logger.critical(f"Error getting initial markets: {e}")
        sys.exit(1)

    refresher = MarketRefresher(
        market_cache, symbols, fetch=fetch_markets, interval_seconds=REFRESH_INTERVAL_SECONDS
    )
    refresher.start()

    app.logger.info("Starting server...")
    try:
        app.run(host=HOST, port=PORT)
    finally:
        refresher.stop()


if __name__ == '__main__':
    main()
