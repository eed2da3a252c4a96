"""
Big-endian integer reads and bounds-checked buffer slicing.
"""

import re
import struct

from .errors import InvalidHexInput, MalformedInput, UnsupportedIntegerWidth

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

# struct formats per supported integer width
_UINT_FORMATS = {1: "!B", 2: "!H", 4: "!I"}


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Validate a hex string and convert it to bytes.

    Raises:
        InvalidHexInput: If the string is empty, has non-hex characters
            or an odd number of digits.
    """
    if not hex_string or not isinstance(hex_string, str) or not _HEX_RE.fullmatch(hex_string):
        raise InvalidHexInput("Invalid hex string", stage="input")
    if len(hex_string) % 2:
        raise InvalidHexInput(
            f"Hex string has an odd number of digits ({len(hex_string)})", stage="input"
        )
    return bytes.fromhex(hex_string)


def read_uint(buffer: bytes, offset: int, width: int) -> int:
    """
    Read a big-endian unsigned integer of 1, 2 or 4 bytes.

    Raises:
        UnsupportedIntegerWidth: For any other width.
        MalformedInput: If the read would run past the buffer.
    """
    fmt = _UINT_FORMATS.get(width)
    if fmt is None:
        raise UnsupportedIntegerWidth(width)
    if offset < 0 or offset + width > len(buffer):
        raise MalformedInput(
            f"Cannot read {width} bytes at offset {offset} (buffer is {len(buffer)} bytes)"
        )
    return struct.unpack_from(fmt, buffer, offset)[0]


class ByteReader:
    """
    Running-offset reader over an owned byte buffer.

    Reads never cross ``limit`` (defaults to the buffer length); a read that
    would raises ``error_cls``.
    """

    def __init__(self, buffer: bytes, offset: int = 0, limit=None, error_cls=MalformedInput):
        self.buffer = buffer
        self.offset = offset
        self.limit = len(buffer) if limit is None else limit
        self.error_cls = error_cls

    @property
    def remaining(self) -> int:
        return self.limit - self.offset

    def _check(self, width: int) -> None:
        if self.offset + width > self.limit:
            raise self.error_cls(
                f"Need {width} bytes at offset {self.offset}, "
                f"only {self.remaining} left before {self.limit}"
            )

    def take(self, width: int) -> bytes:
        """Return the next ``width`` bytes and advance."""
        self._check(width)
        data = self.buffer[self.offset:self.offset + width]
        self.offset += width
        return data

    def uint(self, width: int) -> int:
        """Read a big-endian unsigned integer and advance."""
        self._check(width)
        value = read_uint(self.buffer, self.offset, width)
        self.offset += width
        return value
