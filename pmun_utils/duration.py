"""Duration formatting on a fixed-ratio calendar.

A duration is a millisecond count split into years, months, days, hours,
minutes and seconds using fixed unit sizes (a month is always 30 days and a
year always 365 days). This is a display model, not calendar arithmetic: use
`pmun_utils.dates.diff` when real month lengths matter.
"""

import re
from dataclasses import dataclass
from typing import overload

from pmun_utils.config import resolve_locale
from pmun_utils.locales import DurationUnit, Locale
from pmun_utils.util import DAY, HOUR, MINUTE, MONTH, SECOND, YEAR

# Token letter -> unit size in milliseconds
_TOKEN_SCALES: dict[str, int] = {
    "Y": YEAR,
    "M": MONTH,
    "D": DAY,
    "H": HOUR,
    "m": MINUTE,
    "s": SECOND,
}

# Alternation tries the doubled form first at each position
_TOKEN_PATTERN = re.compile(r"YY|MM|DD|HH|mm|ss|Y|M|D|H|m|s")
_SINGLE_UNIT = re.compile(r"(Y{1,2}|M{1,2}|D{1,2}|H{1,2}|m{1,2}|s{1,2})")

_UNIT_ORDER: tuple[DurationUnit, ...] = (
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
)


@dataclass(frozen=True, kw_only=True)
class DurationParts:
    """A duration decomposed into fixed-size units."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def __post_init__(self) -> None:
        for unit in _UNIT_ORDER:
            value = getattr(self, f"{unit}s")
            if value < 0:
                raise ValueError(f"Duration {unit}s must be >= 0, got {value}")

    def by_token(self, letter: str) -> int:
        return {
            "Y": self.years,
            "M": self.months,
            "D": self.days,
            "H": self.hours,
            "m": self.minutes,
            "s": self.seconds,
        }[letter]

    def items(self) -> list[tuple[DurationUnit, int]]:
        """Return (unit, value) pairs from largest to smallest unit."""
        return [(unit, getattr(self, f"{unit}s")) for unit in _UNIT_ORDER]

    def to_milliseconds(self) -> int:
        return (
            self.years * YEAR
            + self.months * MONTH
            + self.days * DAY
            + self.hours * HOUR
            + self.minutes * MINUTE
            + self.seconds * SECOND
        )


def decompose_duration(ms: int | float) -> DurationParts:
    """Split a millisecond count into fixed-size units.

    The sign is dropped and anything below one second is discarded.

    Example:
        >>> decompose_duration(90061000)
        DurationParts(years=0, months=0, days=1, hours=1, minutes=1, seconds=1)
    """
    remaining = int(abs(ms))
    years, remaining = divmod(remaining, YEAR)
    months, remaining = divmod(remaining, MONTH)
    days, remaining = divmod(remaining, DAY)
    hours, remaining = divmod(remaining, HOUR)
    minutes, remaining = divmod(remaining, MINUTE)
    seconds = remaining // SECOND
    return DurationParts(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def _total_in_unit(ms: int | float, letter: str) -> int | float:
    total = round(abs(ms) / _TOKEN_SCALES[letter], 3)
    return int(total) if float(total).is_integer() else total


@overload
def format_duration(
    ms: int | float, template: None = None, *, locale: "str | Locale | None" = None
) -> str: ...


@overload
def format_duration(
    ms: int | float, template: str, *, locale: "str | Locale | None" = None
) -> str | int | float: ...


def format_duration(
    ms: int | float,
    template: str | None = None,
    *,
    locale: "str | Locale | None" = None,
) -> str | int | float:
    """
    Format a millisecond duration.

    Three modes, chosen by the template:

    - No template, or an empty one: a readable string naming only the non-zero
      units, largest first ("1 hour 1 minute 1 second"). Seconds are shown
      when everything else is zero, so 0 renders as "0 seconds".
    - A single unit token (``Y``, ``MM``, ``H``, ``ss``...): the total duration
      in that unit as a number, rounded to 3 decimals (an int when whole).
    - Anything else: every token is replaced by that unit's remainder,
      zero-padded to the token's length; other characters are kept.

    Units: s=second, m=minute, H=hour, D=day, M=month (30 days), Y=year (365 days).
    The sign of ``ms`` is ignored.

    Args:
        ms: Duration in milliseconds
        template: Optional format template
        locale: Locale for unit labels (defaults to the active settings)

    Returns:
        A string, or a number for single-unit templates

    Example:
        >>> format_duration(3661000, "HH:mm:ss")
        '01:01:01'
        >>> format_duration(5400000, "H")
        1.5
        >>> format_duration(90061000)
        '1 day 1 hour 1 minute 1 second'
    """
    if template:
        single = _SINGLE_UNIT.fullmatch(template.strip())
        if single:
            return _total_in_unit(ms, single.group(0)[0])

        parts = decompose_duration(ms)

        def substitute(match: re.Match[str]) -> str:
            token = match.group(0)
            return str(parts.by_token(token[0])).zfill(len(token))

        return _TOKEN_PATTERN.sub(substitute, template)

    loc = resolve_locale(locale)
    parts = decompose_duration(ms)
    labels = [loc.duration_unit(unit, value) for unit, value in parts.items() if value]
    if not labels:
        labels = [loc.duration_unit("second", 0)]
    return loc.duration_separator.join(labels)
