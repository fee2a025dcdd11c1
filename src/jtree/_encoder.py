"""
Serialization of Container trees into JSON text.
"""

import dataclasses
import math
from dataclasses import dataclass
from enum import IntFlag

from ._errors import ErrorCode
from ._errors import EscapeError
from ._errors import JSONEncodeError
from ._escape import escape
from ._profile import ProfileContext
from ._store import Container
from ._store import Entry
from ._store import JSONType


class EncodeOption(IntFlag):
    NONE = 0
    # Multi-line output indented with EncodeConfig.indent
    PRETTY = 1


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    Holds the strings pretty-printing is built from and an optional
    ceiling on the size of the produced text.
    """

    indent: str = "    "
    newline: str = "\n"
    colon_spacer: str = " "
    max_size: int | None = None

    def __post_init__(self) -> None:
        for name in ("indent", "newline", "colon_spacer"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string")
        if self.max_size is not None and (
            not isinstance(self.max_size, int) or self.max_size < 0
        ):
            raise ValueError("max_size must be a non-negative integer")


DEFAULT_ENCODE_CONFIG = EncodeConfig()


def _encode_float(value: float) -> str:
    """
    Encode a float as the shortest text that reads back to it.

    The mantissa always carries a fractional digit, exponent forms included.
    """
    if not math.isfinite(value):
        raise JSONEncodeError(
            "Out of range float values are not JSON compliant",
            ErrorCode.NON_FINITE_FLOAT,
        )
    # repr keeps exactly one fractional digit for whole numbers (1.0) and
    # never emits trailing zeros otherwise
    text = repr(value)
    if "." not in text and "e" in text:
        # 1e+20 -> 1.0e+20
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text


def _encode_int(value: int) -> str:
    try:
        return str(value)
    except ValueError as e:
        # Python's limit on int string conversion
        raise JSONEncodeError(
            "Number too large", ErrorCode.ENCODING_OVERFLOW
        ) from e


def _encode_string(value: str) -> str:
    try:
        return f'"{escape(value)}"'
    except EscapeError as e:
        raise JSONEncodeError(
            f"String is not encodable: {e.msg}", ErrorCode.INVALID_STRING
        ) from e


class _Encoder:
    """Accumulates the text of one encode call."""

    def __init__(self, options: EncodeOption, config: EncodeConfig) -> None:
        self.pretty = EncodeOption.PRETTY in options
        self.config = config
        self.parts: list[str] = []
        self._active: set[int] = set()

    def _break_line(self, depth: int) -> None:
        self.parts.append(self.config.newline + self.config.indent * depth)

    def encode_container(self, container: Container, depth: int) -> None:
        marker = id(container)
        if marker in self._active:
            raise JSONEncodeError(
                "Circular reference detected", ErrorCode.CIRCULAR_REFERENCE
            )
        self._active.add(marker)

        is_array = container.is_array
        self.parts.append("[" if is_array else "{")

        first = True
        for key, entry in container.entries(include_hidden=False):
            if entry.kind is JSONType.INVALID:
                continue
            if not first:
                self.parts.append(",")
            first = False

            if self.pretty:
                self._break_line(depth + 1)
            if not is_array:
                self.parts.append(_encode_string(key) + ":")  # type: ignore[arg-type]
                if self.pretty:
                    self.parts.append(self.config.colon_spacer)
            self.encode_entry(entry, depth)

        # Empty containers stay on one line
        if self.pretty and not first:
            self._break_line(depth)
        self.parts.append("]" if is_array else "}")

        self._active.discard(marker)

    def encode_entry(self, entry: Entry, depth: int) -> None:
        kind = entry.kind
        if kind is JSONType.STRING:
            self.parts.append(_encode_string(entry.value))  # type: ignore[arg-type]
        elif kind is JSONType.INT:
            self.parts.append(_encode_int(entry.value))  # type: ignore[arg-type]
        elif kind is JSONType.FLOAT:
            self.parts.append(_encode_float(entry.value))  # type: ignore[arg-type]
        elif kind is JSONType.BOOL:
            self.parts.append("true" if entry.value else "false")
        elif kind is JSONType.NULL or entry.value is None:
            self.parts.append("null")
        else:
            self.encode_container(entry.value, depth + 1)  # type: ignore[arg-type]


def encode(
    container: Container,
    options: EncodeOption = EncodeOption.NONE,
    config: EncodeConfig = DEFAULT_ENCODE_CONFIG,
) -> str:
    """
    Serializes a Container tree into JSON text.

    Hidden entries are skipped. Raises JSONEncodeError when the tree holds
    a non-finite float, a string with a lone surrogate or a cycle, or when
    the output is longer than ``config.max_size``.
    """
    if not isinstance(container, Container):
        msg = f"Object of type {type(container).__name__} is not a Container"
        raise TypeError(msg)

    with ProfileContext("encode"):
        encoder = _Encoder(options, config)
        encoder.encode_container(container, 0)
        text = "".join(encoder.parts)

    if config.max_size is not None and len(text) > config.max_size:
        raise JSONEncodeError(
            f"Encoded output needs {len(text)} characters,"
            f" limit is {config.max_size}",
            ErrorCode.ENCODING_OVERFLOW,
        )
    return text


def encoded_size(
    container: Container,
    options: EncodeOption = EncodeOption.NONE,
    config: EncodeConfig = DEFAULT_ENCODE_CONFIG,
) -> int:
    """Length of the text ``encode`` would produce, ignoring max_size."""
    unlimited = dataclasses.replace(config, max_size=None)
    return len(encode(container, options, unlimited))
