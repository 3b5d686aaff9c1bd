"""Load and validate settings.json, falling back to built-in defaults for anything missing or malformed."""

import json
import logging
import os
import threading

logger = logging.getLogger(__name__)

_dir = os.path.dirname(__file__)
SETTINGS_PATH = os.path.join(_dir, "settings.json")

DEFAULTS = {
    "jooble_api_url": "https://jooble.org/api",
    "jooble_api_key": "",
    "page_size": 25,
    "request_timeout": 30,
    "db_path": "job_applications.db",
    "default_search": {"keywords": "", "location": "", "min_salary": None},
}

_settings = None
_lock = threading.Lock()


def _positive_int(value, default: int, name: str) -> int:
    try:
        number = int(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid {name} {value!r} in settings, using {default}")
        return default
    if number < 1:
        logger.warning(f"{name} must be positive, got {number}; using {default}")
        return default
    return number


def _positive_number(value, default: float, name: str) -> float:
    try:
        number = float(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid {name} {value!r} in settings, using {default}")
        return default
    return number if number > 0 else default


def _text(value, default: str) -> str:
    return value.strip() if isinstance(value, str) else default


def _salary(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid default min_salary {value!r} in settings, ignoring it")
        return None


def validate_settings(raw) -> dict:
    """Merge raw settings over DEFAULTS, coercing every key config reads.

    Unknown keys pass through untouched. Bad values are logged and replaced
    by their default so a broken settings.json never stops the app loading.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning(f"Settings must be a JSON object, got {type(raw).__name__}")
        raw = {}

    search = raw.get("default_search")
    if not isinstance(search, dict):
        search = {}
    search_defaults = DEFAULTS["default_search"]

    merged = dict(raw)
    merged.update({
        "jooble_api_url": _text(raw.get("jooble_api_url"), DEFAULTS["jooble_api_url"]).rstrip("/")
        or DEFAULTS["jooble_api_url"],
        "jooble_api_key": _text(raw.get("jooble_api_key"), DEFAULTS["jooble_api_key"]),
        "page_size": _positive_int(raw.get("page_size", DEFAULTS["page_size"]), DEFAULTS["page_size"], "page_size"),
        "request_timeout": _positive_number(
            raw.get("request_timeout", DEFAULTS["request_timeout"]), DEFAULTS["request_timeout"], "request_timeout"
        ),
        "db_path": _text(raw.get("db_path"), "") or DEFAULTS["db_path"],
        "default_search": {
            "keywords": _text(search.get("keywords"), search_defaults["keywords"]),
            "location": _text(search.get("location"), search_defaults["location"]),
            "min_salary": _salary(search.get("min_salary")),
        },
    })
    return merged


def get_settings(path: str = SETTINGS_PATH) -> dict:
    """Get the cached, validated settings, loading from disk on first access.

    A missing settings.json means all defaults; settings.example.json documents the keys.
    """
    global _settings
    with _lock:
        if _settings is None:
            raw = {}
            if os.path.exists(path):
                try:
                    with open(path) as f:
                        raw = json.load(f)
                except json.JSONDecodeError as e:
                    logger.warning(f"Could not parse {path}: {e}; using defaults")
            _settings = validate_settings(raw)
        return _settings


def reload_settings():
    """Clear the cached settings so the next get_settings() re-reads from disk."""
    global _settings
    with _lock:
        _settings = None
