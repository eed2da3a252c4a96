"""
Decode error taxonomy.

Every error carries the decode ``stage`` it was raised in ("input",
"header", "attributes", "payload") and a short machine-readable ``reason``.
The top-level decoders fill in the stage when a lower layer left it unset.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base class for all decode failures."""

    reason = "decode_error"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class InvalidHexInput(DecodeError):
    """Input is empty or is not an even-length string of hex digits."""

    reason = "invalid_hex_input"


class MalformedInput(DecodeError):
    """Buffer is shorter than a fixed structure requires."""

    reason = "malformed_input"


class UnknownAttributeType(DecodeError):
    """TLV type code is absent from the attribute table."""

    reason = "unknown_attribute_type"

    def __init__(self, type_code: int, stage: Optional[str] = None):
        super().__init__(f"Unknown conditional attribute type: {type_code}", stage)
        self.type_code = type_code


class UnsupportedIntegerWidth(DecodeError):
    """Integer field declares a width other than 1, 2 or 4 bytes."""

    reason = "unsupported_integer_width"

    def __init__(self, width: int, stage: Optional[str] = None):
        super().__init__(f"Unsupported integer length: {width}", stage)
        self.width = width


class TruncatedAttribute(DecodeError):
    """Attribute runs past the declared header length."""

    reason = "truncated_attribute"


class TruncatedPayload(DecodeError):
    """Declared payload length exceeds the remaining buffer."""

    reason = "truncated_payload"
