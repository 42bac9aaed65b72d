"""String helpers: case conversion, truncation, escaping and light parsing."""

import json
import logging
import math
import random
import re
import string
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit

from pmun_utils.objects import get

logger = logging.getLogger(__name__)

ALNUM = string.ascii_uppercase + string.ascii_lowercase + string.digits

_HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
    "/": "&#x2F;",
    "`": "&#x60;",
    "=": "&#x3D;",
}
_HTML_SPECIAL = re.compile(r"[&<>\"'`=/]")

_UPPER_RUN = re.compile(r"([A-Z])([A-Z]+)([A-Z])")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_DASH_LETTER = re.compile(r"-([a-z])")

_EMAIL = re.compile(r"[\w.%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.ASCII | re.IGNORECASE)

# Schemes that are only meaningful with a host, e.g. "http:foo" is not a URL
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_SCHEME = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*")

_JSON_LITERAL = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?|true|false|null")

# Text JavaScript's Number() accepts once trimmed; blank text reads as 0
_NUMERIC_TEXT = re.compile(
    r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+",
    re.ASCII,
)

_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")

_NBSP_ENTITY = "&nbsp;"
_NBSP_PAIR = "\u00a0\u00a0"


def capitalize(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def camel_to_kebab(text: str) -> str:
    """
    Convert camelCase or PascalCase to kebab-case.

    Runs of capitals are treated as one word, so acronyms stay together.

    Example:
        >>> camel_to_kebab("helloWorld")
        'hello-world'
        >>> camel_to_kebab("APIVersion")
        'api-version'
    """
    text = _UPPER_RUN.sub(r"\1\2-\3", text)
    text = _LOWER_UPPER.sub(r"\1-\2", text)
    return text.lower()


def kebab_to_camel(text: str) -> str:
    return _DASH_LETTER.sub(lambda match: match.group(1).upper(), text)


def truncate(text: str, length: int = 50, ellipsis: str = "...") -> str:
    """
    Shorten text to at most `length` characters, ellipsis included.

    Example:
        >>> truncate("12345678901234567890", 10)
        '1234567...'
    """
    if len(text) <= length:
        return text
    keep = max(length - len(ellipsis), 0)
    return text[:keep] + ellipsis


def random_string(length: int, chars: str = ALNUM) -> str:
    """Return `length` characters drawn at random from `chars`."""
    if not chars:
        raise ValueError("chars must not be empty")
    return "".join(random.choice(chars) for _ in range(length))


def escape_html(html: str) -> str:
    """Escape the characters that are unsafe inside HTML text or attributes."""
    return _HTML_SPECIAL.sub(lambda match: _HTML_ENTITIES[match.group(0)], html)


def is_valid_url(url: str) -> bool:
    """
    Check that a string is an absolute URL.

    A scheme is required. Web schemes (http, https, ws, wss, ftp) also need
    a host after ``//``, so ``http:foo`` is rejected even though browsers
    would read it as ``http://foo/``. Other schemes such as ``mailto:`` only
    need something after the colon.
    """
    if not isinstance(url, str) or ":" not in url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        _ = parts.port  # raises ValueError for a malformed port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME.fullmatch(parts.scheme):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(url.split(":", 1)[1])


def is_valid_email(email: str) -> bool:
    if not isinstance(email, str):
        return False
    return _EMAIL.fullmatch(email) is not None


def is_empty_string(text: str) -> bool:
    return len(text.strip()) == 0


def ensure_rpx_unit(value: str | int | float) -> str | int | float:
    """
    Append the "rpx" unit to numeric values.

    Numbers and numeric strings gain the suffix; anything else (including
    values that already carry a unit) is returned unchanged. Strings count as
    numeric the way a JavaScript ``Number()`` cast sees them: surrounding
    whitespace is ignored, hex/octal/binary literals and ``Infinity`` are
    accepted, blank text counts as 0, while Python-only spellings such as
    ``"inf"`` or ``"1_000"`` do not.

    Example:
        >>> ensure_rpx_unit(100)
        '100rpx'
        >>> ensure_rpx_unit("50%")
        '50%'
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value if math.isnan(value) else f"{value}rpx"
    if isinstance(value, str):
        text = value.strip()
        if not text or _NUMERIC_TEXT.fullmatch(text):
            return f"{value}rpx"
    return value


def replace_nbsp(rows: Any, key: str) -> list[dict[str, Any]]:
    """
    Replace ``&nbsp;`` entities in one column of a table with real spaces.

    Each entity becomes two non-breaking spaces (U+00A0) so indentation
    survives HTML-free rendering. Rows are copied, never modified.

    Args:
        rows: A list of row dicts, or a wrapper exposing the list as a
              ``value`` attribute or ``"value"`` key
        key: Column to rewrite; non-string cells are left alone
    """
    if isinstance(rows, Mapping):
        rows = rows.get("value", [])
    elif not isinstance(rows, Sequence) and hasattr(rows, "value"):
        rows = rows.value

    result: list[dict[str, Any]] = []
    for row in rows or []:
        cell = row.get(key)
        if isinstance(cell, str):
            row = {**row, key: cell.replace(_NBSP_ENTITY, _NBSP_PAIR)}
        result.append(row)
    return result


def render_template(template: str, data: Mapping[str, Any]) -> str:
    """
    Fill ``{{ path }}`` placeholders from `data`.

    Paths are dotted lookups (``{{ user.name }}``). Placeholders whose path
    does not resolve are left exactly as written.

    Example:
        >>> render_template("Hi {{ user.name }}!", {"user": {"name": "Ada"}})
        'Hi Ada!'
    """
    missing = object()

    def substitute(match: re.Match[str]) -> str:
        value = get(data, match.group(1), missing)
        if value is missing:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(substitute, template)


def _looks_like_json(text: str) -> bool:
    if len(text) >= 2 and (text[0], text[-1]) in {("{", "}"), ("[", "]"), ('"', '"')}:
        return True
    return _JSON_LITERAL.fullmatch(text) is not None


def parse_json_str(value: Any, default: Any = None) -> Any:
    """
    Parse a JSON string leniently.

    - Falsy input returns `default`, or ``{}`` when no default is given.
    - Non-string input is returned unchanged.
    - Text is only parsed when it looks like JSON (an object, array, quoted
      string, number, ``true``, ``false`` or ``null``); anything else, and
      malformed JSON, comes back as the original string.

    Never raises.

    Example:
        >>> parse_json_str('{"a": 1}')
        {'a': 1}
        >>> parse_json_str("{invalid json}")
        '{invalid json}'
    """
    if not value:
        return {} if default is None else default
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not _looks_like_json(text):
        return value
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("parse_json_str: not valid JSON (%s): %.80r", exc, value)
        return value
