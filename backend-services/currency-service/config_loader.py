# backend-services/currency-service/config_loader.py
import json
import logging
import os

from pydantic import ValidationError

from shared.contracts import ServiceConfig, SymbolList

# Get a child logger
logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")


class ConfigError(Exception):
    """Raised when the startup configuration cannot be loaded."""
    pass


def load_symbols(path: str = CONFIG_PATH) -> SymbolList:
    """
    Reads the service configuration file and returns its symbol list.

    Args:
        path: Location of the JSON configuration file.

    Returns:
        The symbols in the order they appear in the file.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON, or
            does not contain a "symbols" list of strings.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise ConfigError(f"Could not read config file '{path}': {e}") from e

    try:
        config = ServiceConfig.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file '{path}' is not valid JSON: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Config file '{path}' has an invalid structure: {e}") from e

    logger.info(f"Loaded {len(config.symbols)} symbols from {path}.")
    return config.symbols
