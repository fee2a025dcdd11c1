"""
Stateless UTF-8 codepoint encoding and decoding.

Implements the standard UTF-8 rules directly so callers get a precise
failure for every invalid codepoint or byte sequence instead of a
replacement character.
"""


class Utf8Error(ValueError):
    """Raised for codepoints or byte sequences that are not valid UTF-8."""


MAX_CODEPOINT = 0x10FFFF
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF

_ONE_BYTE_LIMIT = 0x80
_TWO_BYTE_LIMIT = 0x800
_THREE_BYTE_LIMIT = 0x10000

_CONTINUATION_MASK = 0xC0
_CONTINUATION_TAG = 0x80


def encoded_width(codepoint: int) -> int:
    """Returns the number of UTF-8 bytes used for ``codepoint``.

    Performs no validation; surrogates report the width they would take.
    """
    if codepoint < _ONE_BYTE_LIMIT:
        return 1
    if codepoint < _TWO_BYTE_LIMIT:
        return 2
    if codepoint < _THREE_BYTE_LIMIT:
        return 3
    return 4


def is_surrogate(codepoint: int) -> bool:
    return SURROGATE_MIN <= codepoint <= SURROGATE_MAX


def encode_codepoint(codepoint: int) -> bytes:
    """
    Encodes one codepoint as a UTF-8 byte sequence.

    Raises Utf8Error for negative values, surrogates and values above
    U+10FFFF.
    """
    if codepoint < 0 or codepoint > MAX_CODEPOINT:
        raise Utf8Error(f"Codepoint out of range: {codepoint:#x}")

    if codepoint < _ONE_BYTE_LIMIT:
        return bytes((codepoint,))

    if codepoint < _TWO_BYTE_LIMIT:
        return bytes(
            (
                0xC0 | (codepoint >> 6),
                0x80 | (codepoint & 0x3F),
            )
        )

    if codepoint < _THREE_BYTE_LIMIT:
        if is_surrogate(codepoint):
            raise Utf8Error(f"Surrogate codepoint: U+{codepoint:04X}")
        return bytes(
            (
                0xE0 | (codepoint >> 12),
                0x80 | ((codepoint >> 6) & 0x3F),
                0x80 | (codepoint & 0x3F),
            )
        )

    return bytes(
        (
            0xF0 | (codepoint >> 18),
            0x80 | ((codepoint >> 12) & 0x3F),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        )
    )


def _sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    # 0x80-0xBF are continuation bytes, 0xC0/0xC1 only start overlong forms
    raise Utf8Error(f"Invalid UTF-8 lead byte: {lead:#04x}")


def decode_codepoint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decodes the UTF-8 sequence starting at ``data[offset]``.

    Returns a ``(codepoint, width)`` pair. Raises Utf8Error for invalid
    lead or continuation bytes, truncated sequences, overlong encodings,
    surrogates and values above U+10FFFF.
    """
    if offset < 0 or offset >= len(data):
        raise Utf8Error(f"Offset {offset} outside of {len(data)} bytes")

    lead = data[offset]
    width = _sequence_length(lead)
    if width == 1:
        return lead, 1

    if offset + width > len(data):
        raise Utf8Error(f"Truncated UTF-8 sequence at byte {offset}")

    codepoint = lead & (0x7F >> width)
    for index in range(offset + 1, offset + width):
        byte = data[index]
        if byte & _CONTINUATION_MASK != _CONTINUATION_TAG:
            raise Utf8Error(f"Invalid continuation byte at byte {index}")
        codepoint = (codepoint << 6) | (byte & 0x3F)

    if encoded_width(codepoint) != width:
        raise Utf8Error(f"Overlong UTF-8 sequence at byte {offset}")
    if is_surrogate(codepoint):
        raise Utf8Error(f"Surrogate codepoint: U+{codepoint:04X}")
    if codepoint > MAX_CODEPOINT:
        raise Utf8Error(f"Codepoint out of range: {codepoint:#x}")

    return codepoint, width
