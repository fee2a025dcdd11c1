"""
Recursive-descent parser turning JSON text into a Container tree.
"""

import logging
import re
from dataclasses import dataclass
from enum import IntFlag

from ._errors import ErrorCode
from ._errors import EscapeError
from ._errors import JSONDecodeError
from ._errors import Position
from ._escape import unescape
from ._profile import ProfileContext
from ._store import Container
from ._store import JSONArray
from ._store import JSONObject
from ._store import Value
from ._structure import cleanup

logger = logging.getLogger(__name__)


class DecodeOption(IntFlag):
    NONE = 0
    # Accept 'single quoted' keys and strings
    SINGLE_QUOTES = 1


@dataclass(frozen=True)
class DecodeConfig:
    """
    Configures JSON decoding behavior with immutable settings.

    ``max_depth`` bounds how many levels of nested objects and arrays a
    document may have, the root included; None lifts the bound.
    """

    max_depth: int | None = 256

    def __post_init__(self) -> None:
        if self.max_depth is not None and (
            not isinstance(self.max_depth, int)
            or isinstance(self.max_depth, bool)
            or self.max_depth < 1
        ):
            raise ValueError("max_depth must be a positive integer or None")


DEFAULT_DECODE_CONFIG = DecodeConfig()

_WHITESPACE = " \t\n\r"
_INTEGER = re.compile(r"-?(?:0|[1-9][0-9]*)")
_FLOAT = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
# A bare token runs until a delimiter or whitespace
_BARE_TOKEN = re.compile(r"[^,\]} \t\n\r]*")
_STRING_STOPS = {
    '"': re.compile(r'["\\\x00-\x1f]'),
    "'": re.compile(r"['\\\x00-\x1f]"),
}


class JsonParser:
    """
    Parser state for one document: the text and the current offset.

    Nested containers are parsed by recursive calls on the same parser, so
    each call resumes where the previous sibling stopped.
    """

    def __init__(
        self,
        text: str,
        options: DecodeOption = DecodeOption.NONE,
        config: DecodeConfig = DEFAULT_DECODE_CONFIG,
    ) -> None:
        self.text = text
        self.pos: Position = 0
        self.length = len(text)
        self.single_quotes = DecodeOption.SINGLE_QUOTES in options
        self.max_depth = config.max_depth

    def peek(self) -> str:
        """Returns current character without advancing, "" at the end."""
        return self.text[self.pos] if self.pos < self.length else ""

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def at_end(self) -> bool:
        return self.pos >= self.length

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to JSON spec."""
        while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def error(
        self, msg: str, code: ErrorCode, pos: Position | None = None
    ) -> JSONDecodeError:
        return JSONDecodeError(
            msg, self.text, self.pos if pos is None else pos, code
        )

    def _require_more(self, expecting: str) -> None:
        self.skip_whitespace()
        if self.at_end():
            raise self.error(
                f"Unexpected end of input, expecting {expecting}",
                ErrorCode.UNEXPECTED_END,
            )

    def parse_document(self) -> Container:
        """Parses the whole text as one top-level object or array."""
        if self.text.startswith("\ufeff"):
            raise self.error(
                "JSON input should not contain BOM (Byte Order Mark)",
                ErrorCode.EXPECTED_STRUCTURE,
                0,
            )

        container = self.parse_container(0)

        self.skip_whitespace()
        if not self.at_end():
            cleanup(container)
            raise self.error("Extra data", ErrorCode.TRAILING_DATA)
        return container

    def parse_container(self, depth: int) -> Container:
        """
        Parses the object or array starting at the current offset.

        Leaves the offset just past the closing bracket; whatever follows
        is the caller's business. On failure everything built so far for
        this container is cleaned up before the error propagates.
        """
        self._require_more("'{' or '['")

        container: Container
        opener = self.peek()
        if opener == "{":
            container, closer = JSONObject(), "}"
        elif opener == "[":
            container, closer = JSONArray(), "]"
        else:
            raise self.error(
                "Expecting '{' or '['", ErrorCode.EXPECTED_STRUCTURE
            )

        if self.max_depth is not None and depth >= self.max_depth:
            raise self.error(
                f"Maximum nesting depth of {self.max_depth} exceeded",
                ErrorCode.DEPTH_EXCEEDED,
            )

        with ProfileContext("parse_container"):
            try:
                self._parse_members(container, closer, depth)
            except JSONDecodeError:
                logger.debug(
                    "Discarding partially decoded %s at depth %d",
                    container.kind.value,
                    depth,
                )
                cleanup(container)
                raise

        return container

    def _parse_members(
        self, container: Container, closer: str, depth: int
    ) -> None:
        is_object = isinstance(container, JSONObject)
        first = True

        while True:
            # Step over the opening bracket or the comma
            self.advance()
            self._require_more("value" if not is_object else "property name")

            if first and self.peek() == closer:
                break
            first = False

            key = self._parse_key() if is_object else ""

            value: Value
            if self.peek() in ("{", "["):
                value = self.parse_container(depth + 1)
            else:
                value = self._parse_scalar()

            if is_object:
                container.set(key, value)
            else:
                container.push(value)  # type: ignore[attr-defined]

            self._require_more(f"',' or '{closer}'")
            char = self.peek()
            if char == closer:
                break
            if char != ",":
                raise self.error(
                    f"Expecting ',' or '{closer}' delimiter",
                    ErrorCode.EXPECTED_DELIMITER,
                )

        self.advance()

    def _is_quote(self, char: str) -> bool:
        return char == '"' or (char == "'" and self.single_quotes)

    def _parse_key(self) -> str:
        if not self._is_quote(self.peek()):
            raise self.error(
                "Expecting property name enclosed in double quotes",
                ErrorCode.EXPECTED_KEY,
            )
        key = self._parse_string()

        self._require_more("':'")
        if self.peek() != ":":
            raise self.error(
                "Expecting ':' delimiter", ErrorCode.EXPECTED_COLON
            )
        self.advance()

        self._require_more("value")
        return key

    def _parse_string(self) -> str:
        with ProfileContext("parse_string"):
            quote = self.advance()
            start = self.pos
            stops = _STRING_STOPS[quote]

            pos = start
            while True:
                match = stops.search(self.text, pos)
                if match is None:
                    raise self.error(
                        "Unterminated string starting at",
                        ErrorCode.UNEXPECTED_END,
                        start - 1,
                    )
                pos = match.start()
                char = match.group()
                if char == quote:
                    break
                if char == "\\":
                    # Skip the escaped character
                    pos += 2
                    continue
                raise self.error(
                    "Invalid control character in string",
                    ErrorCode.INVALID_STRING,
                    pos,
                )

            self.pos = pos + 1
            try:
                return unescape(self.text[start:pos], quote)
            except EscapeError as e:
                raise self.error(
                    e.msg, ErrorCode.INVALID_ESCAPE, start + e.pos
                ) from e

    def _parse_scalar(self) -> Value:
        if self._is_quote(self.peek()):
            return self._parse_string()

        start = self.pos
        match = _BARE_TOKEN.match(self.text, start)
        token = match.group() if match else ""
        self.pos = start + len(token)

        if not token:
            raise self.error(
                "Expecting value", ErrorCode.UNKNOWN_LITERAL, start
            )
        if token == "true":
            return True
        if token == "false":
            return False
        if token == "null":
            return None

        if _INTEGER.fullmatch(token):
            try:
                return int(token)
            except ValueError as e:
                # Python's limit on int string conversion
                raise self.error(
                    "Number too large", ErrorCode.UNKNOWN_LITERAL, start
                ) from e

        if _FLOAT.fullmatch(token):
            number = float(token)
            if number in (float("inf"), float("-inf")):
                raise self.error(
                    "Number out of range", ErrorCode.UNKNOWN_LITERAL, start
                )
            return number

        raise self.error(
            f"Unknown literal {token!r}", ErrorCode.UNKNOWN_LITERAL, start
        )


def decode(
    text: str,
    options: DecodeOption = DecodeOption.NONE,
    config: DecodeConfig = DEFAULT_DECODE_CONFIG,
) -> Container:
    """
    Parses JSON text whose top level is an object or array.

    Raises JSONDecodeError on malformed input; no partial tree is
    returned.
    """
    if not isinstance(text, str):
        msg = f"the JSON object must be str, not {type(text).__name__}"
        raise TypeError(msg)

    with ProfileContext("decode", len(text)):
        return JsonParser(text, options, config).parse_document()
