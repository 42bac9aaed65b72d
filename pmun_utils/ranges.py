"""Date ranges for report filters and date-picker shortcuts.

Each range covers whole days: it starts at 00:00:00.000 of its first day and
ends at 23:59:59.999 of its last, expressed as millisecond timestamps.
Every helper takes an optional `base` date so callers (and tests) can pin
"today" instead of reading the clock.
"""

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import TypeAlias

from dateutil.relativedelta import relativedelta

from pmun_utils.dates import (
    DateLike,
    end_of,
    format_date,
    format_full_time,
    start_of,
    to_datetime,
    to_timestamp,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DateRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"DateRange start ({self.start}) must be <= end ({self.end})"
            )

    def __iter__(self) -> Iterator[int]:
        """Unpack as ``start, end = date_range``."""
        yield self.start
        yield self.end

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return False
        return self.start <= value <= self.end

    def __str__(self) -> str:
        """Human-friendly string showing both ends in local time."""
        return f"DateRange({format_full_time(self.start)}→{format_full_time(self.end)})"


ShortcutFn: TypeAlias = Callable[[], DateRange]
ShortcutConfig: TypeAlias = (
    Mapping[str, ShortcutFn] | Sequence[str | Mapping[str, str | ShortcutFn]]
)


def _span(first: DateLike, last: DateLike) -> DateRange:
    return DateRange(
        start=to_timestamp(start_of(first, "day")),
        end=to_timestamp(end_of(last, "day")),
    )


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


def get_date_by_offset(offset: int = 0, base: DateLike | None = None) -> datetime:
    """
    Return the date `offset` days from `base` (default: now), keeping the time of day.

    Example:
        >>> get_date_by_offset(-1, "2023-05-15 12:00")
        datetime.datetime(2023, 5, 14, 12, 0)
    """
    return to_datetime(base) + relativedelta(days=offset)


def get_today_str(base: DateLike | None = None) -> str:
    return format_date(get_date_by_offset(0, base), "YYYY-MM-DD")


def get_yesterday_str(base: DateLike | None = None) -> str:
    return format_date(get_date_by_offset(-1, base), "YYYY-MM-DD")


def get_today_range(base: DateLike | None = None) -> DateRange:
    today = to_datetime(base)
    return _span(today, today)


def get_this_week_range(base: DateLike | None = None) -> DateRange:
    """Monday through Sunday of the current week, whatever the locale."""
    today = to_datetime(base)
    monday = today - relativedelta(days=today.weekday())
    return _span(monday, monday + relativedelta(days=6))


def get_this_month_range(base: DateLike | None = None) -> DateRange:
    today = to_datetime(base)
    return _span(start_of(today, "month"), end_of(today, "month"))


def get_this_quarter_range(base: DateLike | None = None) -> DateRange:
    """Calendar quarter: Jan-Mar, Apr-Jun, Jul-Sep or Oct-Dec."""
    today = to_datetime(base)
    return _span(start_of(today, "quarter"), end_of(today, "quarter"))


def get_this_half_year_range(base: DateLike | None = None) -> DateRange:
    """January-June or July-December."""
    today = to_datetime(base)
    first = today.replace(month=1 if today.month <= 6 else 7, day=1)
    last = first + relativedelta(months=6, days=-1)
    return _span(first, last)


def get_this_year_range(base: DateLike | None = None) -> DateRange:
    today = to_datetime(base)
    return _span(start_of(today, "year"), end_of(today, "year"))


def get_last_days_range(days: int, base: DateLike | None = None) -> DateRange:
    """
    The last `days` days, today included.

    Example:
        >>> start, end = get_last_days_range(7, "2023-05-15 12:00")
        >>> format_date(start), format_date(end)
        ('2023-05-09', '2023-05-15')
    """
    _require_positive("days", days)
    today = to_datetime(base)
    return _span(today - relativedelta(days=days - 1), today)


def get_last_weeks_range(weeks: int, base: DateLike | None = None) -> DateRange:
    """From the same weekday `weeks` weeks ago through today."""
    _require_positive("weeks", weeks)
    today = to_datetime(base)
    return _span(today - relativedelta(weeks=weeks), today)


def get_last_months_range(months: int, base: DateLike | None = None) -> DateRange:
    """From the same day `months` months ago (clamped to month end) through today."""
    _require_positive("months", months)
    today = to_datetime(base)
    return _span(today - relativedelta(months=months), today)


COMMON_DATE_SHORTCUTS: dict[str, ShortcutFn] = {
    "today": get_today_range,
    "this_week": get_this_week_range,
    "this_month": get_this_month_range,
    "this_quarter": get_this_quarter_range,
    "this_half_year": get_this_half_year_range,
    "this_year": get_this_year_range,
    "last_7_days": partial(get_last_days_range, 7),
    "last_30_days": partial(get_last_days_range, 30),
    "last_3_months": partial(get_last_months_range, 3),
    "last_6_months": partial(get_last_months_range, 6),
    "last_year": partial(get_last_months_range, 12),
}


def _lookup_shortcut(name: str) -> ShortcutFn | None:
    fn = COMMON_DATE_SHORTCUTS.get(name)
    if fn is None:
        logger.warning('[create_date_shortcuts] shortcut not found: "%s"', name)
    return fn


def create_date_shortcuts(config: ShortcutConfig) -> Mapping[str, ShortcutFn]:
    """
    Build a label -> range-function mapping for a date picker.

    Args:
        config: One of
            - a list of built-in names: ``["today", "this_month"]``
            - a list of ``{label: name_or_function}`` dicts to relabel
              built-ins or add custom ranges
            - a mapping, returned unchanged

    Unknown built-in names are skipped with a warning.

    Example:
        >>> shortcuts = create_date_shortcuts([{"Today": "today"}, "this_week"])
        >>> list(shortcuts)
        ['Today', 'this_week']
    """
    if isinstance(config, Mapping):
        return config

    shortcuts: dict[str, ShortcutFn] = {}
    for item in config:
        if isinstance(item, str):
            fn = _lookup_shortcut(item)
            if fn is not None:
                shortcuts[item] = fn
            continue
        for label, target in item.items():
            if callable(target):
                shortcuts[label] = target
                continue
            fn = _lookup_shortcut(target)
            if fn is not None:
                shortcuts[label] = fn
    return shortcuts
