"""
Logging helpers for sfdx-config.

Each component logs through a prefixed adapter so store and aggregator
messages are easy to tell apart in one stream:

    logger = get_logger(__name__, prefix="Store")
    logger.debug("Loaded 3 keys")  # [Store] Loaded 3 keys
"""

import logging
from typing import Optional

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class PrefixedLogger(logging.LoggerAdapter):
    """Prepends "[<component>]" to every message."""

    def __init__(self, logger: logging.Logger, prefix: str):
        super().__init__(logger, {})
        self.prefix = f"[{prefix}]"

    def process(self, msg, kwargs):
        return f"{self.prefix} {msg}", kwargs


def get_logger(name: str, prefix: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module, wrapped in PrefixedLogger when *prefix* is given.

    Args:
        name: Module name (typically __name__)
        prefix: Component tag, e.g. "Store" or "Aggregator"
    """
    base_logger = logging.getLogger(name)
    return PrefixedLogger(base_logger, prefix) if prefix else base_logger


def configure_logging(level: str = "WARNING") -> None:
    """
    Set up stderr logging for the command line.

    Unknown level names fall back to WARNING; the sfdx_config package
    logger follows the requested level even if logging was configured
    earlier by a host application.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("sfdx_config").setLevel(numeric_level)
