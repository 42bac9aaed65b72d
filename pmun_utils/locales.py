"""Locale tables for human-facing formatters.

A locale bundles the words and layouts used by the duration formatter,
relative-time descriptions, date tokens such as ``MMMM`` and ``dddd``, and the
friendly "today/yesterday" formats. Locales are plain objects: nothing is
registered globally, callers pick one by name through `get_locale` or let the
active `pmun_utils.config.Settings` decide.
"""

from typing import Literal, TypeAlias

from typing_extensions import override

DurationUnit: TypeAlias = Literal["year", "month", "day", "hour", "minute", "second"]

# Relative-time keys in dayjs order: singular keys have no number,
# plural keys carry a %d placeholder.
RelativeKey: TypeAlias = Literal[
    "s", "m", "mm", "h", "hh", "d", "dd", "M", "MM", "y", "yy"
]


class Locale:
    """Base class for locale tables."""

    name: str = ""
    week_start: int = 0  # 0 = Sunday, 1 = Monday

    months: tuple[str, ...] = ()
    months_short: tuple[str, ...] = ()
    weekdays: tuple[str, ...] = ()  # Sunday first
    weekdays_short: tuple[str, ...] = ()
    weekdays_min: tuple[str, ...] = ()

    future: str = "%s"
    past: str = "%s"
    relative_time: dict[str, str] = {}

    duration_separator: str = " "

    today: str = ""
    yesterday: str = ""
    tomorrow: str = ""
    human_this_year: str = ""
    human_other_year: str = ""
    chat_this_year: str = ""
    chat_other_year: str = ""

    all_option_label: str = ""

    def meridiem(self, hour: int, minute: int, lowercase: bool = False) -> str:
        """Return the AM/PM marker for a time of day."""
        raise NotImplementedError

    def duration_unit(self, unit: DurationUnit, value: int) -> str:
        """Return the labelled amount for one duration unit, e.g. "2 hours"."""
        raise NotImplementedError

    def relative(self, key: RelativeKey, amount: int) -> str:
        return self.relative_time[key].replace("%d", str(amount))

    def with_direction(self, phrase: str, future: bool) -> str:
        return (self.future if future else self.past).replace("%s", phrase)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class EnLocale(Locale):
    name = "en"
    week_start = 0

    months = (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    )
    months_short = (
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    )
    weekdays = (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    )
    weekdays_short = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
    weekdays_min = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")

    future = "in %s"
    past = "%s ago"
    relative_time = {
        "s": "a few seconds",
        "m": "a minute",
        "mm": "%d minutes",
        "h": "an hour",
        "hh": "%d hours",
        "d": "a day",
        "dd": "%d days",
        "M": "a month",
        "MM": "%d months",
        "y": "a year",
        "yy": "%d years",
    }

    duration_separator = " "

    today = "Today"
    yesterday = "Yesterday"
    tomorrow = "Tomorrow"
    human_this_year = "MMM D HH:mm"
    human_other_year = "MMM D, YYYY HH:mm"
    chat_this_year = "MMM DD"
    chat_other_year = "MMM DD, YYYY"

    all_option_label = "All"

    @override
    def meridiem(self, hour: int, minute: int, lowercase: bool = False) -> str:
        marker = "AM" if hour < 12 else "PM"
        return marker.lower() if lowercase else marker

    @override
    def duration_unit(self, unit: DurationUnit, value: int) -> str:
        return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


class ZhCnLocale(Locale):
    name = "zh-cn"
    week_start = 1

    months = (
        "一月",
        "二月",
        "三月",
        "四月",
        "五月",
        "六月",
        "七月",
        "八月",
        "九月",
        "十月",
        "十一月",
        "十二月",
    )
    months_short = (
        "1月", "2月", "3月", "4月", "5月", "6月",
        "7月", "8月", "9月", "10月", "11月", "12月",
    )
    weekdays = ("星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六")
    weekdays_short = ("周日", "周一", "周二", "周三", "周四", "周五", "周六")
    weekdays_min = ("日", "一", "二", "三", "四", "五", "六")

    future = "%s内"
    past = "%s前"
    relative_time = {
        "s": "几秒",
        "m": "1 分钟",
        "mm": "%d 分钟",
        "h": "1 小时",
        "hh": "%d 小时",
        "d": "1 天",
        "dd": "%d 天",
        "M": "1 个月",
        "MM": "%d 个月",
        "y": "1 年",
        "yy": "%d 年",
    }

    duration_separator = ""

    today = "今天"
    yesterday = "昨天"
    tomorrow = "明天"
    human_this_year = "M月D日 HH:mm"
    human_other_year = "YYYY年M月D日 HH:mm"
    chat_this_year = "MM月DD日"
    chat_other_year = "YYYY年MM月DD日"

    all_option_label = "全部"

    _UNIT_LABELS: dict[str, str] = {
        "year": "年",
        "month": "个月",
        "day": "天",
        "hour": "小时",
        "minute": "分钟",
        "second": "秒",
    }

    @override
    def meridiem(self, hour: int, minute: int, lowercase: bool = False) -> str:
        hm = hour * 100 + minute
        if hm < 600:
            return "凌晨"
        if hm < 900:
            return "早上"
        if hm < 1100:
            return "上午"
        if hm < 1300:
            return "中午"
        if hm < 1800:
            return "下午"
        return "晚上"

    @override
    def duration_unit(self, unit: DurationUnit, value: int) -> str:
        return f"{value}{self._UNIT_LABELS[unit]}"


_LOCALES: dict[str, Locale] = {
    "en": EnLocale(),
    "zh-cn": ZhCnLocale(),
}


def available_locales() -> list[str]:
    return list(_LOCALES)


def get_locale(name: "str | Locale") -> Locale:
    """
    Look up a locale by name (case-insensitive, "_" and "-" interchangeable).

    Args:
        name: Locale name such as "en", "zh-cn" or "zh_CN", or a Locale instance
              which is returned unchanged

    Raises:
        ValueError: If no locale with that name is bundled
    """
    if isinstance(name, Locale):
        return name
    key = name.lower().replace("_", "-")
    if key not in _LOCALES:
        valid = ", ".join(_LOCALES.keys())
        raise ValueError(f"Invalid locale '{name}'. Valid locales: {valid}")
    return _LOCALES[key]
