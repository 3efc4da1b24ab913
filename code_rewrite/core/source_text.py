"""
Immutable program text addressed by UTF-8 byte offsets.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import EncodingError


@dataclass(frozen=True)
class SourceText:
    """
    Owned program text plus its raw UTF-8 bytes.

    All node spans and edit positions are byte offsets into `data`.
    """

    text: str
    data: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"SourceText expects str, got {type(self.text).__name__}")
        try:
            encoded = self.text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(f"Source text is not encodable as UTF-8: {e}") from e
        object.__setattr__(self, "data", encoded)

    @classmethod
    def from_bytes(cls, data: bytes) -> SourceText:
        """Decode raw bytes; raises EncodingError for invalid UTF-8."""
        try:
            return cls(data.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"Source bytes are not valid UTF-8: {e.reason}",
                start=e.start,
                end=e.end,
            ) from e

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.text

    def is_char_boundary(self, offset: int) -> bool:
        """Return True if `offset` is in bounds and not inside a multi-byte char."""
        if offset < 0 or offset > len(self.data):
            return False
        if offset == len(self.data):
            return True
        # UTF-8 continuation bytes look like 0b10xxxxxx
        return (self.data[offset] & 0xC0) != 0x80

    def slice(self, start: int, end: int) -> str:
        """
        Return text for the byte span [start, end).

        Raises:
            EncodingError: If the span is out of bounds or cuts a character
        """
        if start < 0 or end < start or end > len(self.data):
            raise EncodingError(
                f"Byte span [{start}, {end}) is outside source of {len(self.data)} bytes",
                start=start,
                end=end,
            )
        try:
            return self.data[start:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"Byte span [{start}, {end}) is not valid text: {e.reason}",
                start=start,
                end=end,
            ) from e
