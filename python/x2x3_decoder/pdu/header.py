"""
Mandatory header decoding.

Wire layout (40 bytes, big-endian):

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +---------------------------------------------------------------+
    |            Version            |            PDU Type           |
    |                         Header Length                         |
    |                         Payload Length                        |
    |         Payload Format        |       Payload Direction       |
    |                          XID (16 bytes)                       |
    |                     Correlation ID (8 bytes)                  |
    +---------------------------------------------------------------+
"""

import uuid
from dataclasses import dataclass
from typing import Tuple

from .errors import MalformedInput
from .reader import ByteReader
from .tables import MANDATORY_HEADER_LENGTH

# (field, width in bytes, kind) in wire order
HEADER_LAYOUT = (
    ("version", 2, "integer"),
    ("pdu_type", 2, "integer"),
    ("header_length", 4, "integer"),
    ("payload_length", 4, "integer"),
    ("payload_format", 2, "integer"),
    ("payload_direction", 2, "integer"),
    ("xid", 16, "uuid"),
    ("correlation_id", 8, "string"),
)


@dataclass(frozen=True)
class MandatoryHeader:
    """Decoded mandatory header."""
    version: int
    pdu_type: int
    header_length: int
    payload_length: int
    payload_format: int
    payload_direction: int
    xid: str
    # Raw text of the 8 bytes; not interpreted as a number
    correlation_id: str

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "pduType": self.pdu_type,
            "headerLength": self.header_length,
            "payloadLength": self.payload_length,
            "payloadFormat": self.payload_format,
            "payloadDirection": self.payload_direction,
            "xid": self.xid,
            "correlationId": self.correlation_id,
        }


def decode_header(buffer: bytes) -> Tuple[MandatoryHeader, int]:
    """
    Decode the 40-byte mandatory header at the start of ``buffer``.

    Returns:
        (header, offset) where offset is the first byte after the header.

    Raises:
        MalformedInput: Buffer shorter than 40 bytes, or a declared header
            length shorter than the mandatory header.
    """
    if len(buffer) < MANDATORY_HEADER_LENGTH:
        raise MalformedInput(
            f"PDU too small: {len(buffer)} bytes (minimum {MANDATORY_HEADER_LENGTH})"
        )

    reader = ByteReader(buffer)
    values = {}
    for name, width, kind in HEADER_LAYOUT:
        if kind == "integer":
            values[name] = reader.uint(width)
        elif kind == "uuid":
            values[name] = str(uuid.UUID(bytes=reader.take(width)))
        else:
            values[name] = reader.take(width).decode("utf-8", errors="replace")

    header = MandatoryHeader(**values)

    if header.header_length < MANDATORY_HEADER_LENGTH:
        raise MalformedInput(
            f"Header length {header.header_length} is shorter than the "
            f"mandatory header ({MANDATORY_HEADER_LENGTH})"
        )

    return header, reader.offset
