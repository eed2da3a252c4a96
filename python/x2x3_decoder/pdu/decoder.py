"""
X2/X3 PDU decoder.

Decodes a hex-encoded PDU through:
- Hex validation
- Mandatory header (40 bytes)
- Conditional attributes (TLV, up to the declared header length)
- Payload slice (declared payload length after the header)

A failure in any stage raises a DecodeError tagged with that stage;
no partially decoded PDU is ever returned.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from ..config import DecoderConfig, get_config
from ..metrics import MetricsCollector, get_metrics
from .attributes import ConditionalAttribute, decode_attributes
from .errors import DecodeError, TruncatedPayload
from .header import MandatoryHeader, decode_header
from .reader import hex_to_bytes
from .tables import (
    MANDATORY_HEADER_LENGTH,
    PAYLOAD_DIRECTIONS,
    PAYLOAD_FORMAT_RTP,
    PAYLOAD_FORMATS,
    PDU_TYPES,
    TEXT_PAYLOAD_FORMATS,
    lookup_name,
)

logger = logging.getLogger("x2x3.pdu")


@dataclass(frozen=True)
class PduMetadata:
    """Descriptive data derived from a decoded PDU, for presentation."""
    mapped_headers_length: int
    conditional_attributes_length: int
    payload_length: int
    pdu_type: str
    payload_type: str
    payload_direction: str
    payload_text: Optional[str] = None
    timestamp: Optional[datetime] = None

    def to_dict(self) -> dict:
        result = {
            "Mapped Headers Length": self.mapped_headers_length,
            "Conditional Attributes Length": self.conditional_attributes_length,
            "Payload Length": self.payload_length,
            "PDU Type": self.pdu_type,
            "Payload Type": self.payload_type,
            "Payload Direction": self.payload_direction,
        }
        if self.timestamp is not None:
            result["Timestamp"] = self.timestamp.isoformat()
        if self.payload_text is not None:
            # "SIP Message String", "MSRP Message String"
            result[f"{self.payload_type} String"] = self.payload_text
        return result


@dataclass(frozen=True)
class DecodedPdu:
    """Fully decoded PDU."""
    headers: MandatoryHeader
    conditional_attributes: Tuple[ConditionalAttribute, ...]
    payload: bytes
    metadata: Optional[PduMetadata] = field(default=None, compare=False)

    @property
    def payload_hex(self) -> str:
        return self.payload.hex()

    def to_dict(self) -> dict:
        """External representation with the payload hex-encoded."""
        return {
            "headers": self.headers.to_dict(),
            "conditionalAttributes": [a.to_dict() for a in self.conditional_attributes],
            "payload": self.payload_hex,
        }

    def rtp_header(self, metrics: Optional[MetricsCollector] = None):
        """
        Decode the RTP header carried in the payload.

        Raises:
            ValueError: If the payload format is not RTP.
            MalformedInput: If the payload is shorter than an RTP header
                (stage "rtp").
        """
        from ..rtp import decode_rtp_bytes

        if self.headers.payload_format != PAYLOAD_FORMAT_RTP:
            raise ValueError(
                f"Payload format {self.headers.payload_format} "
                f"({lookup_name(PAYLOAD_FORMATS, self.headers.payload_format)}) is not RTP"
            )
        return decode_rtp_bytes(self.payload, metrics, stage="rtp")


def _slice_payload(buffer: bytes, header: MandatoryHeader) -> bytes:
    start = header.header_length
    end = start + header.payload_length
    if end > len(buffer):
        raise TruncatedPayload(
            f"Payload length {header.payload_length} exceeds the "
            f"{max(len(buffer) - start, 0)} bytes left after the header"
        )
    if end < len(buffer):
        logger.debug(f"Ignoring {len(buffer) - end} trailing bytes after payload")
    return buffer[start:end]


def build_metadata(
    header: MandatoryHeader,
    attributes: Tuple[ConditionalAttribute, ...],
    payload: bytes,
) -> PduMetadata:
    """Resolve names and derived values for a decoded PDU."""
    timestamp = None
    for attribute in attributes:
        if attribute.instant is not None:
            timestamp = attribute.instant

    payload_text = None
    if header.payload_format in TEXT_PAYLOAD_FORMATS:
        payload_text = payload.decode("utf-8", errors="replace")

    return PduMetadata(
        mapped_headers_length=MANDATORY_HEADER_LENGTH,
        conditional_attributes_length=header.header_length - MANDATORY_HEADER_LENGTH,
        payload_length=header.payload_length,
        pdu_type=lookup_name(PDU_TYPES, header.pdu_type),
        payload_type=lookup_name(PAYLOAD_FORMATS, header.payload_format),
        payload_direction=lookup_name(PAYLOAD_DIRECTIONS, header.payload_direction),
        payload_text=payload_text,
        timestamp=timestamp,
    )


class PduDecoder:
    """
    Stateless X2/X3 PDU decoder.

    Safe to share between threads; each call works on its own buffer.
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.config = config or get_config()
        self.metrics = metrics or get_metrics()

    def decode(self, pdu_hex: str) -> DecodedPdu:
        """
        Decode a hex-encoded PDU.

        Args:
            pdu_hex: Hex digits (either case) for the whole PDU

        Returns:
            DecodedPdu

        Raises:
            DecodeError: Subclass naming the failure, with ``stage`` set.
        """
        stage = "input"
        try:
            buffer = hex_to_bytes(pdu_hex)

            stage = "header"
            header, offset = decode_header(buffer)

            stage = "attributes"
            attributes = tuple(decode_attributes(buffer, header.header_length, offset))

            stage = "payload"
            payload = _slice_payload(buffer, header)
        except DecodeError as e:
            if e.stage is None:
                e.stage = stage
            logger.warning(f"Error in decoding: {e}")
            self.metrics.pdu_failed(e.stage, e.reason)
            raise

        metadata = build_metadata(header, attributes, payload)
        result = DecodedPdu(
            headers=header,
            conditional_attributes=attributes,
            payload=payload,
            metadata=metadata,
        )

        self.metrics.pdu_decoded(len(payload), [a.attribute_type for a in attributes])
        if self.config.log_metadata:
            logger.debug(f"Decoder metadata: {metadata.to_dict()}")
            logger.debug(f"Decoded PDU: {result.to_dict()}")

        return result


_default_decoder: Optional[PduDecoder] = None


def decode_pdu(pdu_hex: str) -> DecodedPdu:
    """Decode a hex-encoded PDU with the shared default decoder."""
    global _default_decoder
    if _default_decoder is None:
        _default_decoder = PduDecoder()
    return _default_decoder.decode(pdu_hex)
