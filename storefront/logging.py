"""
Logging for the storefront client.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

Ids and server messages reach the log through the sanitize helpers so a
hostile API response cannot forge log lines.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure_root_logger() -> None:
    """Attach a stdout handler unless the host application already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    is_production = os.environ.get("STOREFRONT_ENV") == "production"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
    root.addHandler(handler)

    # One line per cart request otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: int | str | None) -> str:
    """Cart item / product id, control chars escaped, cut to 8 chars ("N/A" if missing)."""
    if id_value is None or id_value == "":
        return "N/A"
    return str(id_value).translate(_CONTROL_CHARS)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Server-provided text (error bodies, messages), escaped and truncated."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_CONTROL_CHARS)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
