"""
Logging setup for the storefront.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart updated: %s", describe_items(items))

The root logger is configured on first import; the API entry point calls
configure_logging() again with force=True so LOG_LEVEL changes in a .env
file are picked up.
"""

import logging
import os
import sys
from functools import cache
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Third-party loggers that log every outbound request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "stripe", "upstash_redis")

_HANDLER_NAME = "storefront"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(
    level: Optional[str] = None,
    production: Optional[bool] = None,
    force: bool = False,
) -> None:
    """
    Attach the storefront stdout handler to the root logger.

    Args:
        level: Level name; defaults to LOG_LEVEL or INFO
        production: Short format without timestamps; defaults to
            STOREFRONT_ENV == "production"
        force: Replace a previously attached storefront handler
    """
    root = logging.getLogger()
    existing = [h for h in root.handlers if h.get_name() == _HANDLER_NAME]
    if existing and not force:
        return
    if not existing and root.handlers and not force:
        # Someone else (pytest, uvicorn) owns logging already
        return
    for handler in existing:
        root.removeHandler(handler)

    if production is None:
        production = os.environ.get("STOREFRONT_ENV") == "production"

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if production else LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_string_for_logging(value: object, max_length: int = 50) -> str:
    """
    Make a user-controlled value (product id, item name, toast text) safe to log.

    Control characters are escaped so a value cannot forge extra log lines
    (CWE-117), and long values are truncated.
    """
    if value is None or value == "":
        return "N/A"
    safe_value = (
        str(value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def describe_items(items: Iterable) -> str:
    """Short cart description for logs: line and unit counts, never names or prices."""
    lines = 0
    units = 0
    for item in items:
        lines += 1
        units += getattr(item, "quantity", 0) or 0
    return f"{lines} line item(s), {units} unit(s)"


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "describe_items",
    "get_logger",
    "sanitize_string_for_logging",
]
