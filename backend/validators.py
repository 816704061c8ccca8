"""Pure checks run before any write reaches the database.

Each function returns ``None`` when the payload is acceptable, or a short
message describing why it was rejected.
"""

import re
from datetime import datetime

from models import ENTRY_TYPES, MOODS

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATE_PATTERN = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
TIME_PATTERN = r"[0-9]{2}:[0-9]{2}"

UPDATABLE_FIELDS = ("content", "mood")


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _matches(value, pattern, fmt) -> bool:
    # strptime alone accepts unpadded fields such as "9:5"
    if not isinstance(value, str) or not re.fullmatch(pattern, value):
        return False
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True


def validate_new_entry(payload: dict):
    if _is_blank(payload.get("content")):
        return "Content is required"
    if payload.get("type") not in ENTRY_TYPES:
        return "Invalid entry type"
    if payload.get("mood") not in MOODS:
        return "Invalid mood"
    # date/time are optional: the store stamps them when absent
    if payload.get("date") is not None and not _matches(payload["date"], DATE_PATTERN, DATE_FORMAT):
        return "Invalid date"
    if payload.get("time") is not None and not _matches(payload["time"], TIME_PATTERN, TIME_FORMAT):
        return "Invalid time"
    return None


def validate_entry_update(fields: dict):
    """Partial update: only the supplied fields are checked."""
    if "type" in fields:
        return "Entry type cannot be changed"
    if "content" in fields and _is_blank(fields["content"]):
        return "Content cannot be empty"
    if "mood" in fields and fields["mood"] not in MOODS:
        return "Invalid mood"
    return None


def validate_entry_id(entry_id):
    if isinstance(entry_id, bool) or not isinstance(entry_id, int) or entry_id <= 0:
        return "Entry ID is required"
    return None


def validate_entry_type(entry_type):
    if entry_type not in ENTRY_TYPES:
        return "Invalid entry type"
    return None
