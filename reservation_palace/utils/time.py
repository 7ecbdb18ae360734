import re
from datetime import date, datetime, time

_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp])\.?[Mm]\.?$")


def parse_time_of_day(value: str, today: date | None = None) -> datetime | None:
    """Anchors a time-of-day string to a calendar day (today by default).

    Time slots carry no date, so the value is combined with today's date to
    get a datetime that can be formatted. Returns None when the string is not
    an ISO time of day.
    """
    if not value:
        return None
    day = today or date.today()
    try:
        return datetime.fromisoformat(f"{day.isoformat()}T{value.strip()}")
    except ValueError:
        return None


def format_clock(dt: datetime) -> str:
    """12-hour clock without a leading zero, e.g. 2:30 PM."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def format_time_of_day(value: str, today: date | None = None) -> str | None:
    """Formats a slot time ("14:30:00") for display ("2:30 PM")."""
    dt = parse_time_of_day(value, today)
    if dt is None:
        return None
    return format_clock(dt)


def normalize_time_of_day(value: str) -> str | None:
    """Turns user input into the HH:MM:SS form the backend stores.

    Accepts ISO times ("18:30", "18:30:00") and the 12-hour form the slot
    edit form is prefilled with ("6:30 PM").
    """
    value = value.strip()
    m = _TWELVE_HOUR.match(value)
    if m:
        hour, minute, second = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if m.group(4).lower() == "p" else 0)
        try:
            return time(hour, minute, second).isoformat()
        except ValueError:
            return None
    try:
        return time.fromisoformat(value).replace(microsecond=0, tzinfo=None).isoformat()
    except ValueError:
        return None
