"""
Error taxonomy shared by the decoder, encoder and structural operations.
"""

from enum import Enum

from ._utf8_mapper import UTF8PositionMapper

type Position = int


class ErrorCode(Enum):
    """Machine-readable failure categories."""

    UNEXPECTED_END = "unexpected_end"
    EXPECTED_STRUCTURE = "expected_structure"
    EXPECTED_KEY = "expected_key"
    EXPECTED_COLON = "expected_colon"
    EXPECTED_DELIMITER = "expected_delimiter"
    UNKNOWN_LITERAL = "unknown_literal"
    INVALID_STRING = "invalid_string"
    INVALID_ESCAPE = "invalid_escape"
    DEPTH_EXCEEDED = "depth_exceeded"
    TRAILING_DATA = "trailing_data"
    TYPE_MISMATCH = "type_mismatch"
    ENCODING_OVERFLOW = "encoding_overflow"
    CIRCULAR_REFERENCE = "circular_reference"
    NON_FINITE_FLOAT = "non_finite_float"


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with precise position and context information.

    Carries the failure category along with the character position, the
    line/column pair and the UTF-8 byte offset of the failure so callers
    can point at the offending input whichever unit they count in. ``code``
    is None for failures raised without a category.
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: Position = 0,
        code: ErrorCode | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.code = code

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1
        self.byte_offset = (
            UTF8PositionMapper(doc).char_to_byte(pos) if doc else pos
        )

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno}"
            f" (byte {self.byte_offset})"
        )

    def __reduce__(self) -> tuple[type, tuple[str, str, int, ErrorCode | None]]:
        return self.__class__, (self.msg, self.doc, self.pos, self.code)


class JSONEncodeError(ValueError):
    """Raised when a tree cannot be serialized."""

    def __init__(self, msg: str, code: ErrorCode) -> None:
        self.msg = msg
        self.code = code
        super().__init__(msg)

    def __reduce__(self) -> tuple[type, tuple[str, ErrorCode]]:
        return self.__class__, (self.msg, self.code)


class EscapeError(ValueError):
    """Raised for malformed escape sequences; ``pos`` indexes the input."""

    def __init__(self, msg: str, pos: Position) -> None:
        self.msg = msg
        self.pos = pos
        super().__init__(f"{msg} at offset {pos}")

    def __reduce__(self) -> tuple[type, tuple[str, int]]:
        return self.__class__, (self.msg, self.pos)
