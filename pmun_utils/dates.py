"""Date and time helpers.

Every helper accepts a `DateLike`: a `datetime`, a `date`, a date string
(parsed with `dateutil.parser`), or a millisecond timestamp. Ten-digit
integers are treated as second timestamps and scaled to milliseconds.

Results are naive local-time datetimes unless a timezone is configured with
`pmun_utils.configure(tz=...)`, in which case they are aware datetimes in
that zone. Calendar arithmetic (months, quarters, years) uses
`dateutil.relativedelta`, so month ends are clamped rather than overflowing.
"""

import calendar
import math
import re
import time
from datetime import date, datetime, timedelta, timezone
from typing import Literal, TypeAlias
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from pmun_utils.config import get_settings, resolve_locale
from pmun_utils.locales import Locale, RelativeKey
from pmun_utils.predicates import is_number
from pmun_utils.util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

DateLike: TypeAlias = datetime | date | str | int | float

Unit: TypeAlias = Literal[
    "year",
    "quarter",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
]

_UNITS: tuple[str, ...] = (
    "year",
    "quarter",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
)

# Short forms accepted in addition to singular and plural names
_UNIT_ALIASES = {
    "y": "year",
    "Q": "quarter",
    "M": "month",
    "w": "week",
    "d": "day",
    "date": "day",
    "h": "hour",
    "m": "minute",
    "s": "second",
    "ms": "millisecond",
}

_ABSOLUTE_UNIT_MS = {
    "hour": HOUR,
    "minute": MINUTE,
    "second": SECOND,
    "millisecond": MILLISECOND,
}

_INVALID_DATE = "Invalid date format"

# Bracketed text is emitted literally; longer tokens are tried first.
_FORMAT_TOKENS = re.compile(
    r"\[([^\]]+)]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|dd|d"
    r"|HH|H|hh|h|a|A|mm|m|ss|s|SSS|ZZ|Z|X|x"
)

# Relative-time thresholds: (key, upper bound, unit to measure in).
# A None unit keeps the previous measurement; a None bound always matches.
_RELATIVE_THRESHOLDS: tuple[tuple[RelativeKey, int | None, str | None], ...] = (
    ("s", 44, "second"),
    ("m", 89, None),
    ("mm", 44, "minute"),
    ("h", 89, None),
    ("hh", 21, "hour"),
    ("d", 35, None),
    ("dd", 25, "day"),
    ("M", 45, None),
    ("MM", 10, "month"),
    ("y", 17, None),
    ("yy", None, "year"),
)


def _normalize_unit(unit: str, allowed: tuple[str, ...] = _UNITS) -> str:
    name = _UNIT_ALIASES.get(unit, unit.lower())
    name = _UNIT_ALIASES.get(name, name)
    if name.endswith("s") and name[:-1] in allowed:
        name = name[:-1]
    if name not in allowed:
        valid = ", ".join(allowed)
        raise ValueError(f"Invalid unit '{unit}'. Valid units: {valid}")
    return name


def _digits(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def is_millisecond_timestamp(value: object) -> bool:
    """
    Check whether a value is a 13-digit millisecond timestamp.

    Strings, dates and 10-digit second timestamps are not.

    Example:
        >>> is_millisecond_timestamp(1673740800000)
        True
        >>> is_millisecond_timestamp(1673740800)
        False
    """
    if not is_number(value):
        return False
    return len(_digits(value)) == 13


def normalize_timestamp(value: DateLike) -> DateLike:
    """Scale 10-digit second timestamps to milliseconds; return anything else unchanged."""
    if is_millisecond_timestamp(value):
        return value
    if is_number(value) and len(_digits(value)) == 10:
        return value * 1000
    return value


def _resolve_zone(tz: str | None) -> ZoneInfo | None:
    if tz is not None:
        return ZoneInfo(tz)
    return get_settings().zone


def _from_timestamp(ms: int | float, zone: ZoneInfo | None) -> datetime:
    if math.isnan(ms) or math.isinf(ms):
        raise TypeError(_INVALID_DATE)
    seconds, millis = divmod(ms, 1000)
    try:
        return datetime.fromtimestamp(seconds, zone) + timedelta(milliseconds=millis)
    except (OverflowError, OSError, ValueError) as exc:
        raise TypeError(_INVALID_DATE) from exc


def _parse_string(text: str, zone: ZoneInfo | None) -> datetime:
    text = text.strip()
    if not text:
        raise TypeError(_INVALID_DATE)
    # Missing fields fall back to January 1st of the current year at midnight
    default = datetime(datetime.now().year, 1, 1)
    try:
        parsed = date_parser.parse(text, default=default)
    except (date_parser.ParserError, ValueError, OverflowError) as exc:
        raise TypeError(_INVALID_DATE) from exc
    return _in_zone(parsed, zone)


def _in_zone(dt: datetime, zone: ZoneInfo | None) -> datetime:
    if zone is None:
        if dt.tzinfo is None:
            return dt
        return dt.astimezone().replace(tzinfo=None)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def _coerce(
    value: DateLike | None, zone: ZoneInfo | None, normalize: bool
) -> datetime:
    if value is None:
        return datetime.now(zone)
    if isinstance(value, bool):
        raise TypeError(
            f"Cannot convert a boolean ({value!r}) to a date.\n"
            f"Hint: pass a datetime, a date string or a millisecond timestamp."
        )
    if isinstance(value, datetime):
        return value if zone is None else _in_zone(value, zone)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=zone)
    if isinstance(value, (int, float)):
        ms = normalize_timestamp(value) if normalize else value
        return _from_timestamp(ms, zone)  # type: ignore[arg-type]
    if isinstance(value, str):
        return _parse_string(value, zone)
    raise TypeError(
        f"Cannot convert {type(value).__name__} to a date.\n"
        f"Hint: pass a datetime, a date string or a millisecond timestamp."
    )


def to_datetime(value: DateLike | None = None, *, tz: str | None = None) -> datetime:
    """
    Coerce a date-like value to a datetime.

    Args:
        value: A datetime, date, date string or timestamp; None means now.
               Ten-digit numbers are read as second timestamps.
        tz: IANA timezone for the result (defaults to the configured one)

    Returns:
        A naive local datetime, or an aware one when a timezone applies

    Raises:
        TypeError: "Invalid date format" for unparseable strings or numbers,
                   or a message naming the type for unsupported values

    Example:
        >>> to_datetime(1673740800, tz="UTC")
        datetime.datetime(2023, 1, 15, 0, 0, tzinfo=zoneinfo.ZoneInfo(key='UTC'))
    """
    return _coerce(value, _resolve_zone(tz), normalize=True)


def create_date(value: DateLike | None = None, *, tz: str | None = None) -> datetime:
    """Create a datetime; numbers are always read as milliseconds."""
    return _coerce(value, _resolve_zone(tz), normalize=False)


def to_timestamp(value: DateLike) -> int:
    """Return the millisecond timestamp for a date-like value."""
    return round(to_datetime(value).timestamp() * 1000)


def now() -> int:
    """Current time as a millisecond timestamp."""
    return time.time_ns() // 1_000_000


def parse_date(text: str) -> datetime:
    """
    Parse a date string.

    Raises:
        TypeError: "Invalid date format" when the text is not a date
    """
    if not isinstance(text, str):
        raise TypeError(
            f"parse_date expects a string, got {type(text).__name__}.\n"
            f"Hint: use to_datetime for timestamps and date objects."
        )
    return _parse_string(text, get_settings().zone)


def _offset_ms(dt: datetime) -> int:
    aware = dt if dt.tzinfo is not None else dt.astimezone()
    offset = aware.utcoffset() or timedelta(0)
    return int(offset.total_seconds() * 1000)


def _timestamp_ms(dt: datetime) -> float:
    return dt.timestamp() * 1000


def _wall(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None)


def _month_diff(a: datetime, b: datetime) -> float:
    # Whole months from a to b plus the fraction of the month around b
    if a.day < b.day:
        return -_month_diff(b, a)
    whole = (b.year - a.year) * 12 + (b.month - a.month)
    anchor = a + relativedelta(months=whole)
    behind = b < anchor
    anchor2 = a + relativedelta(months=whole + (-1 if behind else 1))
    span = (anchor - anchor2) if behind else (anchor2 - anchor)
    fraction = (b - anchor) / span if span else 0.0
    return -(whole + fraction) or 0.0


def diff(
    a: DateLike, b: DateLike, unit: Unit | str = "day", precise: bool = False
) -> int | float:
    """
    Return how far `a` is from `b` in the given unit (positive when `a` is later).

    Months, quarters and years are measured on the calendar, so
    2023-01-31 to 2023-02-28 is a whole month. Days and weeks follow wall-clock
    time across DST changes. The result is truncated toward zero unless
    `precise` is set.

    Raises:
        ValueError: If the unit is unknown

    Example:
        >>> diff("2023-05-15", "2023-05-10")
        5
        >>> diff("2023-05-15", "2023-06-15", "month")
        -1
    """
    unit = _normalize_unit(unit)
    first = to_datetime(a)
    second = to_datetime(b)

    if unit in ("year", "quarter", "month"):
        months = _month_diff(_wall(first), _wall(second))
        result = months / {"year": 12, "quarter": 3, "month": 1}[unit]
    else:
        delta = _timestamp_ms(first) - _timestamp_ms(second)
        if unit in ("week", "day"):
            delta += _offset_ms(first) - _offset_ms(second)
            result = delta / (WEEK if unit == "week" else DAY)
        else:
            result = delta / _ABSOLUTE_UNIT_MS[unit]

    if precise:
        return result
    return math.trunc(result)


def add(value: DateLike, amount: int | float, unit: Unit | str = "day") -> datetime:
    """
    Add an amount of time to a date (negative amounts subtract).

    Calendar units clamp to the month end: adding a month to January 31st
    gives the last day of February.

    Example:
        >>> add("2023-05-15", -1, "month")
        datetime.datetime(2023, 4, 15, 0, 0)
    """
    unit = _normalize_unit(unit)
    dt = to_datetime(value)
    if unit in _ABSOLUTE_UNIT_MS:
        step = timedelta(milliseconds=amount * _ABSOLUTE_UNIT_MS[unit])
        if dt.tzinfo is None:
            return dt + step
        # Aware arithmetic in UTC so an hour is always 3600 seconds
        return (dt.astimezone(timezone.utc) + step).astimezone(dt.tzinfo)
    if unit == "year":
        return dt + relativedelta(years=amount)
    if unit == "quarter":
        return dt + relativedelta(months=amount * 3)
    if unit == "month":
        return dt + relativedelta(months=amount)
    if unit == "week":
        return dt + relativedelta(weeks=amount)
    return dt + relativedelta(days=amount)


def add_days(value: DateLike, days: int) -> datetime:
    return add(value, days, "day")


def add_months(value: DateLike, months: int) -> datetime:
    return add(value, months, "month")


def add_years(value: DateLike, years: int) -> datetime:
    return add(value, years, "year")


def get_day_of_week(value: DateLike, start_on_monday: bool = False) -> int:
    """
    Return the weekday index of a date.

    Sunday is 0 and Saturday 6 by default; with `start_on_monday`,
    Monday is 0 and Sunday 6.
    """
    weekday = to_datetime(value).weekday()
    if start_on_monday:
        return weekday
    return (weekday + 1) % 7


def is_date_in_range(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """True when the date lies strictly between start and end."""
    moment = _timestamp_ms(to_datetime(value))
    return (
        _timestamp_ms(to_datetime(start)) < moment < _timestamp_ms(to_datetime(end))
    )


def get_days_in_month(year: int, month: int) -> int:
    """
    Return the number of days in a month.

    Args:
        year: Four-digit year
        month: Month number, 1 (January) to 12 (December)

    Example:
        >>> get_days_in_month(2024, 2)
        29
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    return calendar.monthrange(year, month)[1]


def start_of(
    value: DateLike, unit: Unit | str, *, locale: str | Locale | None = None
) -> datetime:
    """
    Return the first instant of the unit containing the date.

    Weeks start on the locale's first weekday (Sunday for "en",
    Monday for "zh-cn").
    """
    unit = _normalize_unit(unit, _UNITS[:-1])
    dt = to_datetime(value)
    if unit == "second":
        return dt.replace(microsecond=0)
    if unit == "minute":
        return dt.replace(second=0, microsecond=0)
    if unit == "hour":
        return dt.replace(minute=0, second=0, microsecond=0)

    day = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "day":
        return day
    if unit == "week":
        week_start = resolve_locale(locale).week_start
        back = (get_day_of_week(day) - week_start) % 7
        return day - relativedelta(days=back)
    if unit == "month":
        return day.replace(day=1)
    if unit == "quarter":
        first_month = (dt.month - 1) // 3 * 3 + 1
        return day.replace(month=first_month, day=1)
    return day.replace(month=1, day=1)


def end_of(
    value: DateLike, unit: Unit | str, *, locale: str | Locale | None = None
) -> datetime:
    """Return the last millisecond of the unit containing the date."""
    unit = _normalize_unit(unit, _UNITS[:-1])
    start = start_of(value, unit, locale=locale)
    step = {
        "year": relativedelta(years=1),
        "quarter": relativedelta(months=3),
        "month": relativedelta(months=1),
        "week": relativedelta(weeks=1),
        "day": relativedelta(days=1),
        "hour": relativedelta(hours=1),
        "minute": relativedelta(minutes=1),
        "second": relativedelta(seconds=1),
    }[unit]
    return start + step - timedelta(milliseconds=1)


def _zone_offset(dt: datetime, separator: str) -> str:
    minutes = _offset_ms(dt) // MINUTE
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _format_token(token: str, dt: datetime, loc: Locale) -> str:
    if token == "YYYY":
        return f"{dt.year:04d}"
    if token == "YY":
        return f"{dt.year % 100:02d}"
    if token == "MMMM":
        return loc.months[dt.month - 1]
    if token == "MMM":
        return loc.months_short[dt.month - 1]
    if token in ("MM", "M"):
        return str(dt.month).zfill(len(token))
    if token in ("DD", "D"):
        return str(dt.day).zfill(len(token))
    if token.startswith("d"):
        weekday = (dt.weekday() + 1) % 7
        if token == "d":
            return str(weekday)
        names = {"dd": loc.weekdays_min, "ddd": loc.weekdays_short}
        return names.get(token, loc.weekdays)[weekday]
    if token in ("HH", "H"):
        return str(dt.hour).zfill(len(token))
    if token in ("hh", "h"):
        return str(dt.hour % 12 or 12).zfill(len(token))
    if token in ("a", "A"):
        return loc.meridiem(dt.hour, dt.minute, lowercase=token == "a")
    if token in ("mm", "m"):
        return str(dt.minute).zfill(len(token))
    if token in ("ss", "s"):
        return str(dt.second).zfill(len(token))
    if token == "SSS":
        return f"{dt.microsecond // 1000:03d}"
    if token == "Z":
        return _zone_offset(dt, ":")
    if token == "ZZ":
        return _zone_offset(dt, "")
    if token == "X":
        return str(int(dt.timestamp()))
    # x
    return str(round(_timestamp_ms(dt)))


def format_date(
    value: DateLike,
    fmt: str = "YYYY-MM-DD",
    *,
    locale: str | Locale | None = None,
) -> str:
    """
    Format a date with dayjs-style tokens.

    Supported tokens:
        YYYY, YY          year
        M, MM, MMM, MMMM  month number, padded number, short and full name
        D, DD             day of month
        d, dd, ddd, dddd  weekday index (Sunday = 0) and min, short, full names
        H, HH, h, hh      24-hour and 12-hour clock
        A, a              meridiem (upper/lower case)
        m, mm, s, ss, SSS minutes, seconds, milliseconds
        Z, ZZ             UTC offset as +08:00 or +0800
        X, x              unix timestamp in seconds or milliseconds

    Text in square brackets is copied literally: "[Today is] dddd".

    Example:
        >>> format_date("2023-05-15 14:30:45", "YYYY年MM月DD日 HH:mm")
        '2023年05月15日 14:30'
    """
    dt = to_datetime(value)
    loc = resolve_locale(locale)

    def substitute(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return match.group(1)
        return _format_token(match.group(0), dt, loc)

    return _FORMAT_TOKENS.sub(substitute, fmt)


def format_full_time(value: DateLike) -> str:
    """Format as "YYYY-MM-DD HH:mm:ss"."""
    return format_date(value, "YYYY-MM-DD HH:mm:ss")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def from_now(
    value: DateLike,
    base: DateLike | None = None,
    *,
    locale: str | Locale | None = None,
) -> str:
    """
    Describe a date relative to `base` (default: now).

    Follows the dayjs thresholds: up to 44 seconds is "a few seconds",
    up to 89 seconds "a minute", up to 44 minutes "N minutes", then hours up
    to 21, days up to 25, months up to 10, and years beyond that.

    Example:
        >>> from_now("2023-01-11", "2023-01-15")
        '4 days ago'
        >>> from_now("2023-01-11", "2023-01-15", locale="zh-cn")
        '4 天前'
    """
    loc = resolve_locale(locale)
    moment = to_datetime(value)
    reference = to_datetime(base)

    result = 0.0
    phrase = ""
    for index, (key, bound, unit) in enumerate(_RELATIVE_THRESHOLDS):
        if unit is not None:
            result = float(diff(moment, reference, unit, precise=True))
        amount = _round_half_up(abs(result))
        if bound is None or amount <= bound:
            if amount <= 1 and index > 0:
                key = _RELATIVE_THRESHOLDS[index - 1][0]
            phrase = loc.relative(key, amount)
            break

    return loc.with_direction(phrase, future=result > 0)


def _same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def format_human_readable(
    value: DateLike,
    base: DateLike | None = None,
    *,
    locale: str | Locale | None = None,
) -> str:
    """
    Format a date the way people say it.

    Today, yesterday and tomorrow are named ("Today 14:30"); other dates in
    the current year omit the year, and older or later ones include it.
    """
    loc = resolve_locale(locale)
    moment = to_datetime(value)
    reference = to_datetime(base)
    clock = format_date(moment, "HH:mm", locale=loc)

    if _same_day(moment, reference):
        return f"{loc.today} {clock}"
    if _same_day(moment, reference - timedelta(days=1)):
        return f"{loc.yesterday} {clock}"
    if _same_day(moment, reference + timedelta(days=1)):
        return f"{loc.tomorrow} {clock}"
    if moment.year == reference.year:
        return format_date(moment, loc.human_this_year, locale=loc)
    return format_date(moment, loc.human_other_year, locale=loc)


def format_chat_time(
    value: DateLike,
    base: DateLike | None = None,
    *,
    locale: str | Locale | None = None,
) -> str:
    """
    Format a date for a chat list.

    - same day: "HH:mm"
    - previous day: "Yesterday HH:mm"
    - 2 to 6 whole days ago: the weekday name
    - earlier this year: month and day
    - other years: full date
    """
    loc = resolve_locale(locale)
    moment = to_datetime(value)
    reference = to_datetime(base)

    if _same_day(moment, reference):
        return format_date(moment, "HH:mm", locale=loc)
    if _same_day(moment, reference - timedelta(days=1)):
        return f"{loc.yesterday} {format_date(moment, 'HH:mm', locale=loc)}"

    days_ago = diff(reference, moment, "day")
    if 2 <= days_ago < 7:
        return loc.weekdays[get_day_of_week(moment)]

    if moment.year == reference.year:
        return format_date(moment, loc.chat_this_year, locale=loc)
    return format_date(moment, loc.chat_other_year, locale=loc)
