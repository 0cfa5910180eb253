"""Logging configuration for the gateway process and the client session."""

import logging
import sys
from typing import Optional

from cryptosim.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every request or statement at INFO/DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "urllib3", "urllib3.connectionpool", "requests")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    `level` overrides settings.log_level. Cache hits, stale fallbacks and
    upstream errors are all logged under the `cryptosim` namespace.
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("cryptosim").setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    logging.getLogger(__name__).debug(
        f"Logging configured at {level_name}; upstream={settings.coingecko_api_url} "
        f"cache_ttl={settings.market_data_cache_ttl_seconds}s"
    )
