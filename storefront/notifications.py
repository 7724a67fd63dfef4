"""User-facing notifications (the storefront's toast messages)."""
from typing import Protocol

from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        ...


class LogNotifier:
    """Notifier that only records messages in the application log."""

    def notify(self, message: str) -> None:
        if not message:
            return
        logger.info("Notify: %s", sanitize_string_for_logging(message, max_length=120))
