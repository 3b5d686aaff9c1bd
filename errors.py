from typing import Optional


class JobFinderError(Exception):
    """Recoverable collaborator failure, optionally carrying a structured body."""

    def __init__(self, message: str = "", body: Optional[dict] = None):
        super().__init__(message)
        self.body = body if isinstance(body, dict) else None


class FetchError(JobFinderError):
    """Page Source failed to return a page."""


class CreateError(JobFinderError):
    """Bulk create sink failed to persist the selected jobs."""


def error_message(exc: BaseException, fallback: Optional[str] = None) -> Optional[str]:
    """Most specific message available: structured body, then the exception text."""
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = str(exc)
    if text:
        return text
    return fallback
