import re, logging
from dataclasses import dataclass, asdict
from datetime import date, datetime, timedelta, timezone

from ..config import settings

log = logging.getLogger("healthcounters.counters")

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Counter:
    key: str
    start_date: str
    days: int

    def to_json(self) -> dict:
        d = asdict(self)
        d["startDate"] = d.pop("start_date")
        return d


def parse_start_date(value) -> date | None:
    """Strict YYYY-MM-DD parse. Returns None for anything else (no time part allowed)."""
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not ISO_DATE.match(s):
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None


def _as_date(now) -> date:
    if now is None:
        return datetime.now().date()
    if isinstance(now, datetime):
        # local calendar day of the caller; tz-aware values keep their own offset
        return now.date()
    return now


def days_between(start_date_iso: str, now=None) -> int:
    """
    Whole calendar days from start_date_iso to now, both truncated to midnight.

    Subtraction happens on dates, not timestamps, so a 23- or 25-hour DST day
    still counts as one. Invalid input is logged and yields 0; future start
    dates clamp to 0.
    """
    start = parse_start_date(start_date_iso)
    if start is None:
        log.error(f"Invalid start date: {start_date_iso!r}")
        return 0
    return max(0, (_as_date(now) - start).days)


def seconds_until_midnight(now=None) -> float:
    """
    Elapsed seconds from now until the next midnight in now's zone.

    Naive values are read as system local time. Both ends are compared as UTC
    instants, so the 23- and 25-hour DST days come out as 82800 and 90000.
    """
    now = now or datetime.now()
    midnight = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    return (midnight.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()


def build_counters(now=None) -> list[Counter]:
    return [
        Counter(key=key, start_date=start, days=days_between(start, now))
        for key, start in settings.start_dates().items()
    ]
