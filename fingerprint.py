import re

KEY_PREFIX = "k:"
FIELD_SEPARATOR = "|"
FALLBACK_FIELDS = ("title", "company", "location", "type", "salary")

_QUERY_OR_FRAGMENT = re.compile(r"[?#]")


def _clean(value) -> str:
    """Coerce a field to a trimmed, lower-cased string. None and absent are ''."""
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_link(link) -> str:
    """Drop query string and fragment, trailing slashes, and case from a link."""
    raw = "" if link is None else str(link).strip()
    if not raw:
        return ""
    base = _QUERY_OR_FRAGMENT.split(raw, maxsplit=1)[0]
    return base.rstrip("/").lower()


def fingerprint(record: dict) -> str:
    """Stable identity for a job record that carries no trustworthy id.

    Prefers the normalized link. Records without a usable link fall back to
    the secondary fields, so two link-less records with the same title,
    company, location, type and salary share a fingerprint.
    """
    if not isinstance(record, dict):
        record = {}
    link = normalize_link(record.get("link"))
    if link:
        return f"{KEY_PREFIX}{link}"

    parts = [_clean(record.get(name)) for name in FALLBACK_FIELDS]
    return f"{KEY_PREFIX}{FIELD_SEPARATOR.join(parts)}"
