from datetime import date, datetime, timezone
from typing import Optional

from fastapi import HTTPException, status

# Shift dates travel as day-month-year strings, e.g. "24-06-2025"
SHIFT_DATE_FORMAT = "%d-%m-%Y"


def get_now_utc() -> datetime:
    """Get current datetime in UTC"""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert an aware datetime to UTC or localize a naive one"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime_safe(dt_str: str) -> datetime:
    """
    Parse an ISO timestamp as returned by Supabase.

    Handles a trailing 'Z', explicit offsets and naive values (assumed UTC),
    and fractional seconds of any length. Always returns a UTC-aware datetime.
    """
    if not dt_str:
        raise ValueError("Empty datetime string")

    dt_str = dt_str.strip()
    if dt_str.endswith("Z"):
        dt_str = dt_str[:-1] + "+00:00"

    # fromisoformat on older interpreters only accepts 3 or 6 fractional digits
    if "." in dt_str:
        base, rest = dt_str.split(".", 1)
        tz_part = ""
        for sign in ("+", "-"):
            if sign in rest:
                rest, tz = rest.split(sign, 1)
                tz_part = sign + tz
                break
        dt_str = f"{base}.{(rest + '000000')[:6]}{tz_part}"

    try:
        return to_utc(datetime.fromisoformat(dt_str))
    except ValueError as e:
        raise ValueError(f"Failed to parse datetime '{dt_str}': {e}")


def parse_shift_date(value: str) -> date:
    """Parse a DD-MM-YYYY shift date. Raises ValueError on bad input."""
    return datetime.strptime(value.strip(), SHIFT_DATE_FORMAT).date()


def format_shift_date(value: date) -> str:
    return value.strftime(SHIFT_DATE_FORMAT)


def parse_date_filter(value: Optional[str], name: str) -> Optional[date]:
    """
    Parse an optional DD-MM-YYYY query parameter.

    Raises:
        HTTPException: 400 if the value is not a valid date
    """
    if not value:
        return None
    try:
        return parse_shift_date(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {name} date, expected DD-MM-YYYY"
        )
