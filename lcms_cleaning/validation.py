from datetime import date, datetime

import pytz

from .config import LOCAL_TIMEZONE
from .errors import ServerError

local_tz = pytz.timezone(LOCAL_TIMEZONE)


def is_integer(value) -> bool:
    # bool is a subclass of int but never a valid identifier
    return isinstance(value, int) and not isinstance(value, bool)


def check_integer(value, name: str):
    if not is_integer(value):
        raise ServerError(f"{name} must be an integer", 400)


def check_optional_integer(value, name: str):
    if value is not None and not is_integer(value):
        raise ServerError(f"{name} must be an integer or undefined", 400)


def check_non_empty_string(value, name: str):
    if not isinstance(value, str) or value == "":
        raise ServerError(f"{name} must be a non-empty string", 400)


def check_boolean(value, name: str):
    if not isinstance(value, bool):
        raise ServerError(f"{name} must be a boolean", 400)


def check_integer_list(value, name: str):
    if not isinstance(value, (list, tuple)) or not all(is_integer(item) for item in value):
        raise ServerError(f"{name} must be a list containing only integers", 400)


def today_local() -> date:
    """Today's date in the centre's timezone."""
    return datetime.now(local_tz).date()


def to_local_date(value) -> date:
    """Normalise a date or datetime to a calendar date in the centre's timezone."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(local_tz)
        return value.date()
    if isinstance(value, date):
        return value
    raise ServerError("date must be a valid date", 400)


def check_date_not_in_past(value) -> date:
    """Validate `value` and return it as a date; anything before local midnight today fails."""
    day = to_local_date(value)
    if day < today_local():
        raise ServerError("date cannot be in the past", 400)
    return day
