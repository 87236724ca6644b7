from datetime import datetime, timezone
from urllib.parse import urlparse

from itinerary import parse_coordinate

IDEA_SOURCES = ("TIKTOK", "INSTAGRAM", "OTHER", "TEXT")
IDEA_CATEGORIES = ("DATE", "GIFT", "MEAL")
IDEA_STATUSES = ("SAVED", "PLANNED", "DONE")


class ValidationError(ValueError):
    """Raised for a request value that cannot be accepted; the message is user-facing."""


def parse_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ["1", "true", "yes", "on"]


def clean_text(raw):
    """Strip a string value; empty or missing becomes None."""
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def normalize_choice(raw, allowed, field, default=None):
    """Upper-case an enum value and check it against the allowed set."""
    if raw is None or str(raw).strip() == "":
        return default
    value = str(raw).strip().upper()
    if value not in allowed:
        raise ValidationError(f"Invalid {field}")
    return value


def parse_url(raw, field="url"):
    """Accept an absolute http(s) URL or nothing."""
    value = clean_text(raw)
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid {field}")
    return value


def parse_request_coordinate(raw, field):
    """
    Coordinates in request bodies must be JSON numbers or null.
    The itinerary code is more forgiving; stored values are always clean floats.
    """
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f"Invalid {field}")
    value = parse_coordinate(raw)
    if value is None:
        raise ValidationError(f"Invalid {field}")
    return value


def parse_datetime_iso(value):
    """Parse an ISO 8601 datetime; offsets (including 'Z') are converted to naive UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        s = str(value).strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except (TypeError, ValueError):
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_id_list(raw):
    """Integer ids from a JSON list, first occurrence wins; None when the payload is not a list."""
    if not isinstance(raw, list):
        return None
    ids = []
    seen = set()
    for val in raw:
        item_id = parse_int(val)
        if item_id is None:
            continue
        if item_id not in seen:
            seen.add(item_id)
            ids.append(item_id)
    return ids


def json_object(request):
    """Parsed JSON body when it is an object; an empty body counts as {}. None for arrays and scalars."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


def parse_int(value):
    """Integer from an int, integral float or digit string; bools and fractions give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None
