from datetime import datetime

# Format SQLite's datetime('now','localtime') writes
VISIT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_local() -> datetime:
    """Return a naive local datetime, matching what the store records."""
    return datetime.now()


def parse_visit_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, VISIT_TIME_FORMAT)
    except ValueError:
        return None


def minutes_waiting(visit_time: str | None, now: datetime | None = None) -> int | None:
    """Whole minutes since visit_time, or None if it can't be read.

    Clock skew never produces a negative wait.
    """
    arrived = parse_visit_time(visit_time)
    if arrived is None:
        return None
    now = now or now_local()
    return max(0, int((now - arrived).total_seconds() // 60))
