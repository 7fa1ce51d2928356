import re
from calendar import monthrange
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

KEY_FORMAT = "%Y-%m-%d"
_KEY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# ---------- helpers ----------
def _zone(tz: str | None):
    return ZoneInfo(tz) if tz else None

def today(tz: str | None = None) -> str:
    """Current local day as a date key. Never cache the result."""
    now = datetime.now(_zone(tz)) if tz else datetime.now()
    return now.strftime(KEY_FORMAT)

def is_date_key(value) -> bool:
    if not isinstance(value, str) or not _KEY_RE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, KEY_FORMAT)
    except ValueError:
        return False
    return True

def to_date_key(instant: date) -> str:
    # datetime is a date subclass, so both work; time of day is dropped
    return instant.strftime(KEY_FORMAT)

def parse_date_key(key: str, tz: str | None = None) -> datetime:
    """Local midnight for `key` (naive when no zone is given)."""
    if not is_date_key(key):
        raise ValueError(f"Bad date key {key!r}, expected YYYY-MM-DD")
    d = datetime.strptime(key, KEY_FORMAT)
    return d.replace(tzinfo=_zone(tz))

def _as_date(key: str) -> date:
    return parse_date_key(key).date()

def add_days(key: str, n: int) -> str:
    return to_date_key(_as_date(key) + timedelta(days=n))

def days_in_month(year: int, month: int) -> int:
    # month is 1-based
    return monthrange(year, month)[1]

def format_display_date(key: str | None) -> str:
    """'2024-01-05' -> '05 Jan 2024'."""
    if not key:
        return ""
    return _as_date(key).strftime("%d %b %Y")
