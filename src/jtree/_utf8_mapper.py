"""UTF-8 position mapping between character offsets and byte offsets."""

from __future__ import annotations

from bisect import bisect_right
from typing import Final

from ._utf8 import encoded_width


class UTF8PositionMapper:
    """Maps character offsets in a document to UTF-8 byte offsets.

    Instead of storing the byte offset of every character, the mapper
    records a checkpoint every ``checkpoint_interval`` characters and
    walks forward from the nearest checkpoint on lookup.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The document the decoder was reading
            checkpoint_interval: Characters between checkpoints (default 256)
        """
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        # checkpoint i holds the byte offset of character i * interval
        self._char_checkpoints: list[int] = []
        self._byte_checkpoints: list[int] = []
        self._is_ascii_only = text.isascii()

        if not self._is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._char_checkpoints.append(char_pos)
                self._byte_checkpoints.append(byte_pos)
            byte_pos += encoded_width(ord(char))

        self._char_checkpoints.append(len(self.text))
        self._byte_checkpoints.append(byte_pos)

    def char_to_byte(self, char_pos: int) -> int:
        """Convert a character offset to the UTF-8 byte offset.

        Offsets past the end of the text clamp to the encoded length.
        """
        if self._is_ascii_only:
            return min(char_pos, len(self.text))

        char_pos = min(char_pos, len(self.text))
        index = bisect_right(self._char_checkpoints, char_pos) - 1
        current_char = self._char_checkpoints[index]
        byte_pos = self._byte_checkpoints[index]

        for char in self.text[current_char:char_pos]:
            byte_pos += encoded_width(ord(char))

        return byte_pos

    def byte_to_char(self, byte_pos: int) -> int:
        """Convert a UTF-8 byte offset to the character offset.

        A byte offset falling inside a multi-byte sequence maps to the
        character that sequence encodes.
        """
        if self._is_ascii_only:
            return min(byte_pos, len(self.text))

        index = bisect_right(self._byte_checkpoints, byte_pos) - 1
        current_char = self._char_checkpoints[index]
        current_byte = self._byte_checkpoints[index]

        while current_char < len(self.text):
            width = encoded_width(ord(self.text[current_char]))
            if current_byte + width > byte_pos:
                break
            current_byte += width
            current_char += 1

        return current_char
