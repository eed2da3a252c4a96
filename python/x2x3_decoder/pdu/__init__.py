"""X2/X3 PDU decoding module."""
from .errors import (
    DecodeError,
    InvalidHexInput,
    MalformedInput,
    TruncatedAttribute,
    TruncatedPayload,
    UnknownAttributeType,
    UnsupportedIntegerWidth,
)
from .tables import AttributeKind, AttributeSpec, CONDITIONAL_ATTRIBUTES
from .reader import ByteReader, hex_to_bytes, read_uint
from .attributes import ConditionalAttribute, decode_attributes, interpret_attribute, timestamp_instant
from .header import MandatoryHeader, decode_header
from .decoder import DecodedPdu, PduDecoder, PduMetadata, decode_pdu

__all__ = [
    "DecodeError",
    "InvalidHexInput",
    "MalformedInput",
    "TruncatedAttribute",
    "TruncatedPayload",
    "UnknownAttributeType",
    "UnsupportedIntegerWidth",
    "AttributeKind",
    "AttributeSpec",
    "CONDITIONAL_ATTRIBUTES",
    "ByteReader",
    "hex_to_bytes",
    "read_uint",
    "ConditionalAttribute",
    "decode_attributes",
    "interpret_attribute",
    "timestamp_instant",
    "MandatoryHeader",
    "decode_header",
    "DecodedPdu",
    "PduDecoder",
    "PduMetadata",
    "decode_pdu",
]
