"""
RTP fixed header decoder.

Decodes the 12-byte fixed RTP header found in X3 payloads of format 8.
The CSRC list and header extension announced by ``csrc_count`` and
``extension`` are not skipped: everything after byte 12 is the payload.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Optional

from ..metrics import MetricsCollector, get_metrics
from ..pdu.errors import DecodeError, MalformedInput
from ..pdu.reader import hex_to_bytes

logger = logging.getLogger("x2x3.rtp")

RTP_HEADER_LENGTH = 12


@dataclass(frozen=True)
class RtpHeader:
    """Decoded RTP fixed header."""
    version: int
    padding: int
    extension: int
    csrc_count: int
    marker: int
    payload_type: int
    sequence_number: int
    timestamp: int
    ssrc: int
    payload: bytes

    @classmethod
    def parse(cls, data: bytes) -> 'RtpHeader':
        """
        Parse raw bytes into an RtpHeader.

        Args:
            data: Packet bytes (minimum 12 bytes for the fixed header)

        Returns:
            Parsed RtpHeader instance

        Raises:
            MalformedInput: If the packet is shorter than 12 bytes
        """
        if len(data) < RTP_HEADER_LENGTH:
            raise MalformedInput(
                f"Packet too small: {len(data)} bytes (minimum {RTP_HEADER_LENGTH})"
            )

        first_byte = data[0]
        second_byte = data[1]

        sequence_number, timestamp, ssrc = struct.unpack('!HII', data[2:RTP_HEADER_LENGTH])

        return cls(
            version=(first_byte >> 6) & 0x03,
            padding=(first_byte >> 5) & 0x01,
            extension=(first_byte >> 4) & 0x01,
            csrc_count=first_byte & 0x0F,
            marker=(second_byte >> 7) & 0x01,
            payload_type=second_byte & 0x7F,
            sequence_number=sequence_number,
            timestamp=timestamp,
            ssrc=ssrc,
            payload=data[RTP_HEADER_LENGTH:],
        )

    @property
    def payload_hex(self) -> str:
        return self.payload.hex()

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "padding": self.padding,
            "extension": self.extension,
            "csrcCount": self.csrc_count,
            "marker": self.marker,
            "payloadType": self.payload_type,
            "sequenceNumber": self.sequence_number,
            "timestamp": self.timestamp,
            "ssrc": self.ssrc,
            "payload": self.payload_hex,
        }


def _record_failure(error: DecodeError, stage: str, metrics: MetricsCollector) -> None:
    if error.stage is None:
        error.stage = stage
    logger.warning(f"Error in RTP decoding: {error}")
    metrics.rtp_failed(error.stage, error.reason)


def decode_rtp_bytes(
    data: bytes,
    metrics: Optional[MetricsCollector] = None,
    stage: str = "rtp",
) -> RtpHeader:
    """
    Decode an RTP packet already held as bytes, such as an X3 payload.

    Raises:
        MalformedInput: Fewer than 12 bytes, tagged with ``stage``.
    """
    metrics = metrics or get_metrics()
    try:
        header = RtpHeader.parse(data)
    except DecodeError as e:
        _record_failure(e, stage, metrics)
        raise

    metrics.rtp_decoded()
    return header


def decode_rtp_header(packet_hex: str, metrics: Optional[MetricsCollector] = None) -> RtpHeader:
    """
    Decode a hex-encoded RTP packet.

    Raises:
        InvalidHexInput: Empty or non-hex input.
        MalformedInput: Fewer than 12 bytes.
    """
    metrics = metrics or get_metrics()
    try:
        data = hex_to_bytes(packet_hex)
    except DecodeError as e:
        _record_failure(e, "input", metrics)
        raise

    return decode_rtp_bytes(data, metrics, stage="header")
