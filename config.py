"""Configuration derived from settings.json, exposed as module-level constants."""

import os

from settings import get_settings, validate_settings


def _load():
    """Load all config values from the current settings."""
    global JOOBLE_API_URL, JOOBLE_API_KEY, PAGE_SIZE, REQUEST_TIMEOUT, DB_PATH
    global KEYWORDS, LOCATION, MIN_SALARY

    # Validate again: the cached settings may have been swapped in directly
    _s = validate_settings(get_settings())
    JOOBLE_API_URL = _s["jooble_api_url"]
    JOOBLE_API_KEY = os.environ.get("JOOBLE_API_KEY") or _s["jooble_api_key"]
    PAGE_SIZE = _s["page_size"]
    REQUEST_TIMEOUT = _s["request_timeout"]
    DB_PATH = _s["db_path"]

    search = _s["default_search"]
    KEYWORDS = search["keywords"]
    LOCATION = search["location"]
    MIN_SALARY = search["min_salary"]


# Initial load
_load()


def reload():
    """Re-read settings.json and refresh all module-level constants."""
    _load()
