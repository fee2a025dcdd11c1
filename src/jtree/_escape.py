"""
Conversion between raw text and JSON string escapes.

Escaped output is pure ASCII: every non-ASCII codepoint is written as a
``\\uXXXX`` escape (a surrogate pair above U+FFFF).
"""

import re

from ._errors import EscapeError
from ._profile import ProfileContext
from ._utf8 import Utf8Error
from ._utf8 import decode_codepoint
from ._utf8 import encode_codepoint

_HIGH_SURROGATE_MIN = 0xD800
_HIGH_SURROGATE_MAX = 0xDBFF
_LOW_SURROGATE_MIN = 0xDC00
_LOW_SURROGATE_MAX = 0xDFFF
_SUPPLEMENTARY_BASE = 0x10000

_ASCII_LIMIT = 0x80
_CONTROL_LIMIT = 0x20

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "/": "\\/",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Anything escape() would rewrite
_NEEDS_ESCAPE = re.compile(r'[\\"/\x00-\x1f\x80-\U0010ffff]')
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")


def _escape_codepoint(codepoint: int) -> str:
    if codepoint < _SUPPLEMENTARY_BASE:
        return f"\\u{codepoint:04x}"

    offset = codepoint - _SUPPLEMENTARY_BASE
    high = _HIGH_SURROGATE_MIN + (offset >> 10)
    low = _LOW_SURROGATE_MIN + (offset & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"


def escape(text: str) -> str:
    """
    Escapes text for use inside a double-quoted JSON string.

    Raises EscapeError when the text holds a lone surrogate, which has no
    UTF-8 form.
    """
    with ProfileContext("escape", len(text)):
        if not _NEEDS_ESCAPE.search(text):
            return text

        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EscapeError(
                "Text contains a lone surrogate", e.start
            ) from e

        result = []
        i = 0
        while i < len(data):
            byte = data[i]
            if byte < _ASCII_LIMIT:
                char = chr(byte)
                if char in _ESCAPES:
                    result.append(_ESCAPES[char])
                elif byte < _CONTROL_LIMIT:
                    result.append(f"\\u{byte:04x}")
                else:
                    result.append(char)
                i += 1
            else:
                # Group the high-bit run into a single codepoint
                codepoint, width = decode_codepoint(data, i)
                result.append(_escape_codepoint(codepoint))
                i += width

        return "".join(result)


def _read_hex4(text: str, pos: int, escape_start: int) -> int:
    digits = text[pos : pos + 4]
    if not _HEX4.fullmatch(digits):
        raise EscapeError(
            f"Invalid unicode escape sequence: \\u{digits}", escape_start
        )
    return int(digits, 16)


def _read_unicode_escape(text: str, start: int) -> tuple[int, int]:
    """Decodes the ``\\uXXXX`` escape at ``start``; returns (codepoint, end)."""
    codepoint = _read_hex4(text, start + 2, start)
    end = start + 6

    if _LOW_SURROGATE_MIN <= codepoint <= _LOW_SURROGATE_MAX:
        raise EscapeError(f"Unpaired surrogate \\u{codepoint:04x}", start)

    if _HIGH_SURROGATE_MIN <= codepoint <= _HIGH_SURROGATE_MAX:
        if text[end : end + 2] != "\\u":
            raise EscapeError(f"Unpaired surrogate \\u{codepoint:04x}", start)
        low = _read_hex4(text, end + 2, end)
        if not _LOW_SURROGATE_MIN <= low <= _LOW_SURROGATE_MAX:
            raise EscapeError(f"Unpaired surrogate \\u{codepoint:04x}", start)
        codepoint = (
            _SUPPLEMENTARY_BASE
            + ((codepoint - _HIGH_SURROGATE_MIN) << 10)
            + (low - _LOW_SURROGATE_MIN)
        )
        end += 6

    return codepoint, end


def unescape(text: str, quote: str = '"') -> str:
    """
    Restores the raw text of an escaped JSON string body.

    ``quote`` is the delimiter the string was read with; when it is a
    single quote, ``\\'`` is accepted as well.
    """
    with ProfileContext("unescape", len(text)):
        if "\\" not in text:
            return text

        unescapes = _UNESCAPES
        if quote == "'":
            unescapes = {**_UNESCAPES, "'": "'"}

        result = []
        i = 0
        while i < len(text):
            backslash = text.find("\\", i)
            if backslash < 0:
                result.append(text[i:])
                break

            result.append(text[i:backslash])
            if backslash + 1 >= len(text):
                raise EscapeError("Unterminated escape sequence", backslash)

            marker = text[backslash + 1]
            if marker == "u":
                codepoint, i = _read_unicode_escape(text, backslash)
                try:
                    raw = encode_codepoint(codepoint)
                except Utf8Error as e:
                    raise EscapeError(str(e), backslash) from e
                result.append(raw.decode("utf-8"))
            elif marker in unescapes:
                result.append(unescapes[marker])
                i = backslash + 2
            else:
                raise EscapeError(
                    f"Invalid escape sequence: \\{marker}", backslash
                )

        return "".join(result)
