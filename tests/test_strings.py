"""Tests for string helpers."""

import logging
from types import SimpleNamespace

import pytest

from pmun_utils import (
    camel_to_kebab,
    capitalize,
    ensure_rpx_unit,
    escape_html,
    is_empty_string,
    is_valid_email,
    is_valid_url,
    kebab_to_camel,
    parse_json_str,
    random_string,
    render_template,
    replace_nbsp,
    truncate,
)
from pmun_utils.strings import ALNUM


def test_capitalize():
    assert capitalize("hello") == "Hello"
    assert capitalize("hELLO") == "HELLO"
    assert capitalize("") == ""


@pytest.mark.parametrize(
    "text,expected",
    [
        ("helloWorld", "hello-world"),
        ("HelloWorld", "hello-world"),
        ("APIVersion", "api-version"),
        ("XMLHttpRequest", "xml-http-request"),
        ("version2Beta", "version2-beta"),
        ("plain", "plain"),
    ],
)
def test_camel_to_kebab(text, expected):
    assert camel_to_kebab(text) == expected


def test_kebab_to_camel():
    assert kebab_to_camel("hello-world") == "helloWorld"
    assert kebab_to_camel("background-color-dark") == "backgroundColorDark"
    assert kebab_to_camel("plain") == "plain"


class TestTruncate:
    def test_long_text_is_cut_with_ellipsis(self):
        assert truncate("12345678901234567890", 10) == "1234567..."

    def test_short_text_is_unchanged(self):
        assert truncate("short", 10) == "short"
        assert truncate("exactly10!", 10) == "exactly10!"

    def test_custom_ellipsis(self):
        assert truncate("hello world", 8, "…") == "hello w…"

    def test_length_shorter_than_ellipsis(self):
        assert truncate("abcdef", 2) == "..."


def test_random_string():
    text = random_string(16)
    assert len(text) == 16
    assert set(text) <= set(ALNUM)
    assert set(random_string(50, "ab")) <= {"a", "b"}
    assert random_string(0) == ""


def test_random_string_requires_characters():
    with pytest.raises(ValueError, match="chars must not be empty"):
        random_string(5, "")


def test_escape_html():
    assert (
        escape_html("<a href=\"/x\">Tom & 'Jerry'</a>")
        == "&lt;a href&#x3D;&quot;&#x2F;x&quot;&gt;Tom &amp; &#39;Jerry&#39;&lt;&#x2F;a&gt;"
    )
    assert escape_html("`code`") == "&#x60;code&#x60;"
    assert escape_html("plain text") == "plain text"


class TestUrlValidation:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "http://localhost:3000/path?q=1#top",
            "ftp://files.example.com/pub",
            "wss://socket.example.com",
            "mailto:someone@example.com",
        ],
    )
    def test_valid(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "example.com",
            "http://",
            "http:foo",
            "http://example.com:abc",
            "https://exa mple.com",
            "mailto:",
            "",
        ],
    )
    def test_invalid(self, url):
        assert not is_valid_url(url)

    def test_web_schemes_need_a_host_after_slashes(self):
        assert not is_valid_url("http:foo")
        assert not is_valid_url("https:example.com/path")
        assert is_valid_url("http://foo")
        assert is_valid_url("urn:isbn:0451450523")

    def test_non_strings(self):
        assert not is_valid_url(None)  # type: ignore[arg-type]


class TestEmailValidation:
    @pytest.mark.parametrize(
        "email", ["user@example.com", "first.last+tag@sub.example.co", "A_B@EXAMPLE.ORG"]
    )
    def test_valid(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["user@", "@example.com", "user@example", "a b@c.com", "user@exa_mple.com", ""],
    )
    def test_invalid(self, email):
        assert not is_valid_email(email)


def test_is_empty_string():
    assert is_empty_string("")
    assert is_empty_string("  \t\n")
    assert not is_empty_string(" a ")


class TestRpxUnit:
    def test_numbers_gain_the_unit(self):
        assert ensure_rpx_unit(100) == "100rpx"
        assert ensure_rpx_unit(1.5) == "1.5rpx"
        assert ensure_rpx_unit("50") == "50rpx"

    def test_other_values_are_unchanged(self):
        assert ensure_rpx_unit("50%") == "50%"
        assert ensure_rpx_unit("10px") == "10px"
        assert ensure_rpx_unit("auto") == "auto"
        assert ensure_rpx_unit("nan") == "nan"
        assert ensure_rpx_unit(True) is True

    def test_numeric_strings_follow_javascript_number(self):
        assert ensure_rpx_unit(" 12 ") == " 12 rpx"
        assert ensure_rpx_unit("") == "rpx"
        assert ensure_rpx_unit("Infinity") == "Infinityrpx"
        assert ensure_rpx_unit("0x10") == "0x10rpx"
        assert ensure_rpx_unit("1e3") == "1e3rpx"
        assert ensure_rpx_unit(".5") == ".5rpx"

    @pytest.mark.parametrize("value", ["inf", "infinity", "1_000", "0x", "1e", "١٢"])
    def test_python_only_spellings_are_not_numeric(self, value):
        assert ensure_rpx_unit(value) == value


class TestReplaceNbsp:
    def test_list_of_rows(self):
        rows = [{"name": "&nbsp;child", "id": 1}, {"name": 3, "id": 2}, {"id": 3}]
        result = replace_nbsp(rows, "name")
        assert result == [
            {"name": "\u00a0\u00a0child", "id": 1},
            {"name": 3, "id": 2},
            {"id": 3},
        ]
        # Input rows are not modified
        assert rows[0]["name"] == "&nbsp;child"

    def test_wrapped_rows(self):
        rows = [{"name": "&nbsp;&nbsp;x"}]
        expected = [{"name": "\u00a0" * 4 + "x"}]
        assert replace_nbsp({"value": rows}, "name") == expected
        assert replace_nbsp(SimpleNamespace(value=rows), "name") == expected

    def test_empty(self):
        assert replace_nbsp([], "name") == []
        assert replace_nbsp(None, "name") == []


class TestRenderTemplate:
    def test_dotted_paths(self):
        data = {"user": {"name": "Ada"}, "count": 3, "items": ["x", "y"]}
        assert render_template("Hi {{ user.name }}!", data) == "Hi Ada!"
        assert render_template("{{count}} new", data) == "3 new"
        assert render_template("second: {{ items.1 }}", data) == "second: y"

    def test_missing_paths_are_left_as_written(self):
        assert render_template("Hi {{ user.nick }}", {"user": {}}) == "Hi {{ user.nick }}"
        assert render_template("{{missing}}", {}) == "{{missing}}"


class TestParseJsonStr:
    def test_parses_json(self):
        assert parse_json_str('{"a": 1}') == {"a": 1}
        assert parse_json_str("[1, 2]") == [1, 2]
        assert parse_json_str("42") == 42
        assert parse_json_str("true") is True
        assert parse_json_str('"text"') == "text"
        assert parse_json_str("null") is None

    def test_falsy_input_returns_default(self):
        assert parse_json_str("") == {}
        assert parse_json_str(None) == {}
        assert parse_json_str("", []) == []

    def test_non_strings_pass_through(self):
        value = {"a": 1}
        assert parse_json_str(value) is value

    def test_plain_text_is_returned(self):
        assert parse_json_str("hello") == "hello"
        assert parse_json_str("{invalid json}") == "{invalid json}"

    def test_malformed_json_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pmun_utils.strings"):
            assert parse_json_str("[1, 2") == "[1, 2"
            assert parse_json_str("{'a': 1}") == "{'a': 1}"
        assert "not valid JSON" in caplog.text
