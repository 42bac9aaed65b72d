"""Formatter configuration.

Locale-sensitive helpers read their defaults from the active `Settings`.
Nothing is configured at import time: the defaults are English output and
naive local-time datetimes until `configure` is called explicitly. Every
affected helper also accepts per-call overrides, so configuration is a
convenience rather than a requirement.

Example:
    >>> from pmun_utils import configure, format_duration
    >>> configure(locale="zh-cn")
    Settings(locale='zh-cn', tz=None)
    >>> format_duration(3661000)
    '1小时1分钟1秒'
"""

from dataclasses import dataclass, replace
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pmun_utils.locales import Locale, get_locale


@dataclass(frozen=True, kw_only=True)
class Settings:
    """Defaults shared by the formatting helpers.

    Attributes:
        locale: Name of the bundled locale used for labels and names
        tz: IANA timezone used when turning timestamps into datetimes;
            None keeps naive local time
    """

    locale: str = "en"
    tz: str | None = None

    def __post_init__(self) -> None:
        # Raises ValueError for unknown names
        get_locale(self.locale)
        if self.tz is not None:
            try:
                ZoneInfo(self.tz)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(
                    f"Invalid timezone {self.tz!r}.\n"
                    f"Hint: use an IANA name such as 'UTC', 'Asia/Shanghai' "
                    f"or 'US/Pacific', or None for local time."
                ) from exc

    @property
    def zone(self) -> ZoneInfo | None:
        return ZoneInfo(self.tz) if self.tz is not None else None

    def get_locale(self) -> Locale:
        return get_locale(self.locale)


_DEFAULTS = Settings()
_active: Settings = _DEFAULTS


def get_settings() -> Settings:
    """Return the active settings."""
    return _active


def configure(**changes: Any) -> Settings:
    """Replace fields of the active settings and return the new settings.

    Raises:
        ValueError: If a locale or timezone name is unknown
        TypeError: If a field name is not a Settings field
    """
    global _active
    _active = replace(_active, **changes)
    return _active


def reset_settings() -> Settings:
    """Restore the default settings."""
    global _active
    _active = _DEFAULTS
    return _active


def resolve_locale(locale: "str | Locale | None") -> Locale:
    """Return the given locale, or the active default when None."""
    if locale is None:
        return _active.get_locale()
    return get_locale(locale)
