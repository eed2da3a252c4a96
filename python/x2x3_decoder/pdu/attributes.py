"""
Conditional attribute (TLV) decoding.

Attributes sit between the 40-byte mandatory header and the declared header
length. Each one is a 2-byte type code, a 2-byte content length and the
content itself, interpreted according to the attribute table.
"""

import ipaddress
import logging
import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Union

from .errors import MalformedInput, TruncatedAttribute, UnknownAttributeType, UnsupportedIntegerWidth
from .reader import ByteReader, read_uint
from .tables import (
    CONDITIONAL_ATTRIBUTES,
    IP_PROTOCOLS,
    MANDATORY_HEADER_LENGTH,
    AttributeKind,
    lookup_name,
)

logger = logging.getLogger("x2x3.pdu")

AttributeValue = Union[int, str]

_FIXED_SIZES = {
    AttributeKind.TIMESTAMP: 8,
    AttributeKind.IPV4: 4,
    AttributeKind.IPV6: 16,
}


@dataclass(frozen=True)
class ConditionalAttribute:
    """One decoded TLV attribute."""
    attribute_type: str
    length: int
    attribute_value: AttributeValue
    type_code: int = 0
    # Wall-clock instant, only set for Timestamp attributes
    instant: Optional[datetime] = field(default=None, compare=False)

    def describe(self) -> str:
        """Human readable value for presentation."""
        if self.type_code == 16:
            return f"{self.attribute_value} ({lookup_name(IP_PROTOCOLS, self.attribute_value)})"
        if self.instant is not None:
            return f"{self.attribute_value} ({self.instant.isoformat()})"
        return str(self.attribute_value)

    def to_dict(self) -> dict:
        return {
            "attributeType": self.attribute_type,
            "length": self.length,
            "attributeValue": self.attribute_value,
        }


def _require_size(kind: AttributeKind, content: bytes) -> None:
    expected = _FIXED_SIZES[kind]
    if len(content) != expected:
        raise MalformedInput(
            f"{kind.value} attribute must be {expected} bytes, got {len(content)}"
        )


def _split_timestamp(content: bytes):
    _require_size(AttributeKind.TIMESTAMP, content)
    return struct.unpack("!II", content)


def timestamp_instant(content: bytes) -> datetime:
    """UTC instant of a Timestamp attribute, from its seconds field alone."""
    seconds, _ = _split_timestamp(content)
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def format_ipv6(content: bytes) -> str:
    """Eight colon-separated 4-digit groups, without zero compression."""
    digits = content.hex()
    return ":".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def interpret_attribute(kind: AttributeKind, content: bytes) -> AttributeValue:
    """
    Interpret raw attribute content.

    Args:
        kind: Interpretation from the attribute table
        content: Exactly the declared attribute bytes

    Returns:
        Hex text, integer, UTF-8 text, timestamp sum or address text.

    Raises:
        UnsupportedIntegerWidth: Integer content not 1, 2 or 4 bytes.
        MalformedInput: Fixed-size content (timestamp, addresses) of the wrong size.
    """
    if kind is AttributeKind.HEX:
        return content.hex()

    if kind is AttributeKind.INTEGER:
        if len(content) not in (1, 2, 4):
            raise UnsupportedIntegerWidth(len(content))
        return read_uint(content, 0, len(content))

    if kind is AttributeKind.STRING:
        return content.decode("utf-8", errors="replace")

    if kind is AttributeKind.TIMESTAMP:
        # Seconds and the second word are summed as-is, not scaled.
        seconds, fraction = _split_timestamp(content)
        return seconds + fraction

    if kind is AttributeKind.IPV4:
        _require_size(kind, content)
        return str(ipaddress.IPv4Address(content))

    if kind is AttributeKind.IPV6:
        _require_size(kind, content)
        return format_ipv6(content)

    raise ValueError(f"Unsupported attribute kind: {kind}")


def decode_attributes(
    buffer: bytes,
    header_length: int,
    offset: int = MANDATORY_HEADER_LENGTH,
) -> List[ConditionalAttribute]:
    """
    Decode every conditional attribute in ``[offset, header_length)``.

    Attributes are returned in wire order; repeated types are kept.

    Raises:
        MalformedInput: header_length shorter than the mandatory header.
        TruncatedAttribute: An attribute crosses header_length, or
            header_length runs past the buffer.
        UnknownAttributeType: A type code outside the table.
    """
    if header_length < offset:
        raise MalformedInput(
            f"Header length {header_length} is shorter than the mandatory header ({offset})"
        )
    if header_length > len(buffer):
        raise TruncatedAttribute(
            f"Header length {header_length} exceeds buffer size {len(buffer)}"
        )

    reader = ByteReader(buffer, offset, limit=header_length, error_cls=TruncatedAttribute)
    attributes: List[ConditionalAttribute] = []

    while reader.offset < header_length:
        type_code = reader.uint(2)
        length = reader.uint(2)

        spec = CONDITIONAL_ATTRIBUTES.get(type_code)
        if spec is None:
            raise UnknownAttributeType(type_code)

        content = reader.take(length)
        value = interpret_attribute(spec.kind, content)
        instant = timestamp_instant(content) if spec.kind is AttributeKind.TIMESTAMP else None

        logger.debug(f"Attribute {spec.name} ({type_code}) len={length}: {value!r}")

        attributes.append(ConditionalAttribute(
            attribute_type=spec.name,
            length=length,
            attribute_value=value,
            type_code=type_code,
            instant=instant,
        ))

    return attributes
