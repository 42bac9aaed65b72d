"""Tests for number helpers."""

import pytest

from pmun_utils import (
    clamp,
    configure,
    format_currency,
    format_number_with_ten_thousand,
    format_thousands,
    is_even,
    is_odd,
    percentage,
    random_int,
    round_number,
)


def test_round_number_rounds_halves_up():
    assert round_number(1.235, 2) == 1.24
    assert round_number(2.5) == 3
    assert round_number(-1.5) == -1
    assert round_number(1234.5678, 1) == 1234.6


class TestFormatThousands:
    def test_english_grouping(self):
        assert format_thousands(1234567.891) == "1,234,567.891"
        assert format_thousands(1000) == "1,000"
        assert format_thousands(999) == "999"
        assert format_thousands(-1234.5) == "-1,234.5"

    def test_explicit_locale(self):
        assert format_thousands(1234567.891, "de-DE") == "1.234.567,891"
        assert format_thousands(1234567.891, "zh_CN") == "1,234,567.891"

    def test_configured_locale(self):
        configure(locale="zh-cn")
        assert format_thousands(1234567) == "1,234,567"

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match="Invalid locale 'not-a-locale'"):
            format_thousands(1, "not-a-locale")


class TestFormatCurrency:
    def test_defaults_to_yuan(self):
        assert format_currency(1234.567) == "¥1,234.57"
        assert format_currency(0) == "¥0.00"

    def test_other_currency_and_locale(self):
        assert format_currency(1234.5, currency="USD", locale="en-US") == "$1,234.50"
        assert format_currency(-1234.5, currency="USD", locale="en-US") == "-$1,234.50"

    def test_halves_round_up(self):
        assert format_currency(0.125) == "¥0.13"
        assert format_currency(1234.5, minimum_fraction_digits=0, maximum_fraction_digits=0) == "¥1,235"

    def test_fraction_digit_range(self):
        assert format_currency(1.5, minimum_fraction_digits=0, maximum_fraction_digits=3) == "¥1.5"
        assert format_currency(1.23456, minimum_fraction_digits=0, maximum_fraction_digits=3) == "¥1.235"

    def test_inconsistent_fraction_digits(self):
        with pytest.raises(ValueError, match="minimum <= maximum"):
            format_currency(1, minimum_fraction_digits=3, maximum_fraction_digits=2)

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match="Hint"):
            format_currency(1, locale="xx-not-real")


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-5, 0, 10) == 0
    assert clamp(15, 0, 10) == 10


def test_random_int_stays_in_inclusive_bounds():
    values = {random_int(1, 3) for _ in range(200)}
    assert values <= {1, 2, 3}
    assert random_int(0.5, 1.5) == 1


def test_random_int_collapsed_bounds_return_the_rounded_minimum():
    assert random_int(1.5, 1.7) == 2
    assert random_int(2.2, 2.9) == 3


def test_parity():
    assert is_even(4)
    assert not is_even(3)
    assert is_even(0)
    assert is_odd(-3)
    assert not is_odd(2)


def test_percentage():
    assert percentage(1, 3) == 33.33
    assert percentage(50, 200) == 25
    assert percentage(1, 3, 0) == 33
    assert percentage(5, 0) == 0


@pytest.mark.parametrize(
    "num,expected",
    [
        (0, "0"),
        (None, "0"),
        (9999, "9999"),
        (123.45, "123.45"),
        (100.0, "100"),
        (10000, "1.00万"),
        (12345, "1.23万"),
        (123456789, "12345.68万"),
    ],
)
def test_format_number_with_ten_thousand(num, expected):
    assert format_number_with_ten_thousand(num) == expected


def test_format_number_with_ten_thousand_fraction_digits():
    assert format_number_with_ten_thousand(15000, 1) == "1.5万"
    assert format_number_with_ten_thousand(15000, 0) == "2万"
