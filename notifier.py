import logging

logger = logging.getLogger(__name__)

_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class LoggingNotifier:
    """Surfaces toast-style notifications through the log."""

    def notify(self, title: str, message: str, severity: str = "info") -> None:
        level = _LEVELS.get(severity, logging.INFO)
        logger.log(level, f"{title}: {message}")
