"""Number helpers: rounding, locale-aware formatting, clamping and ratios.

Grouping separators, decimal marks and currency symbols come from the CLDR
data shipped with Babel, so output matches what browsers produce for the
same locale.
"""

import copy
import math
import random
from decimal import ROUND_HALF_UP, Decimal, localcontext

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel.numbers import format_decimal

from pmun_utils.config import resolve_locale


def _babel_locale(name: str) -> BabelLocale:
    try:
        return BabelLocale.parse(name.replace("_", "-"), sep="-")
    except (UnknownLocaleError, ValueError) as exc:
        raise ValueError(
            f"Invalid locale '{name}' for number formatting.\n"
            f"Hint: use a BCP 47 tag such as 'en-US', 'zh-CN' or 'de-DE'."
        ) from exc


def round_number(num: float, precision: int = 0) -> float:
    """
    Round to `precision` decimals with halves rounded up (toward +infinity).

    Example:
        >>> round_number(1.235, 2)
        1.24
        >>> round_number(-1.5)
        -1.0
    """
    factor = 10**precision
    return math.floor(num * factor + 0.5) / factor


def format_thousands(num: float, locale: str | None = None) -> str:
    """
    Format a number with locale grouping separators (up to 3 decimals).

    Args:
        num: Number to format
        locale: BCP 47 tag such as "de-DE"; defaults to the configured locale

    Example:
        >>> format_thousands(1234567.891)
        '1,234,567.891'
        >>> format_thousands(1234567.891, "de-DE")
        '1.234.567,891'
    """
    name = locale if locale is not None else resolve_locale(None).name
    return format_decimal(num, locale=_babel_locale(name))


def format_currency(
    value: float,
    *,
    currency: str = "CNY",
    locale: str = "zh-CN",
    minimum_fraction_digits: int = 2,
    maximum_fraction_digits: int = 2,
) -> str:
    """
    Format an amount of money for a locale.

    Halves round away from zero, and the fraction digit limits override the
    currency's own precision.

    Args:
        value: Amount
        currency: ISO 4217 code
        locale: BCP 47 tag deciding the symbol position and separators
        minimum_fraction_digits: Digits always shown after the decimal mark
        maximum_fraction_digits: Digits kept after rounding

    Raises:
        ValueError: If the digit limits are inconsistent or the locale is unknown

    Example:
        >>> format_currency(1234.567)
        '¥1,234.57'
        >>> format_currency(1234.5, currency="USD", locale="en-US")
        '$1,234.50'
    """
    if not 0 <= minimum_fraction_digits <= maximum_fraction_digits:
        raise ValueError(
            f"Fraction digits must satisfy 0 <= minimum <= maximum, got "
            f"minimum={minimum_fraction_digits}, maximum={maximum_fraction_digits}"
        )
    babel_locale = _babel_locale(locale)
    pattern = copy.copy(babel_locale.currency_formats["standard"])
    pattern.frac_prec = (minimum_fraction_digits, maximum_fraction_digits)
    with localcontext() as ctx:
        ctx.rounding = ROUND_HALF_UP
        return pattern.apply(
            Decimal(str(value)),
            babel_locale,
            currency=currency,
            currency_digits=False,
        )


def clamp(num: float, minimum: float, maximum: float) -> float:
    """Limit a number to the range [minimum, maximum]."""
    return min(max(num, minimum), maximum)


def random_int(minimum: float, maximum: float) -> int:
    """
    Return a random integer in the inclusive range, bounds rounded inward.

    When rounding leaves no integer in between, as for ``(1.5, 1.7)``, the
    rounded-up minimum is returned.
    """
    low, high = math.ceil(minimum), math.floor(maximum)
    if low > high:
        return low
    return random.randint(low, high)


def is_even(num: float) -> bool:
    return num % 2 == 0


def is_odd(num: float) -> bool:
    return not is_even(num)


def percentage(value: float, total: float, precision: int = 2) -> float:
    """
    Return `value` as a percentage of `total`, or 0 when the total is 0.

    Example:
        >>> percentage(1, 3)
        33.33
    """
    if total == 0:
        return 0
    return round_number(value / total * 100, precision)


def format_number_with_ten_thousand(num: float, fraction_digits: int = 2) -> str:
    """
    Abbreviate large numbers in units of ten thousand (万).

    Example:
        >>> format_number_with_ten_thousand(12345)
        '1.23万'
        >>> format_number_with_ten_thousand(9999)
        '9999'
    """
    if not num:
        return "0"
    if num >= 10000:
        return f"{num / 10000:.{fraction_digits}f}万"
    if isinstance(num, float) and num.is_integer():
        return str(int(num))
    return str(num)
