"""
X2/X3 Decoder - ETSI TS 103 221-2 handover PDU and RTP header decoding.

Decodes hex-encoded X2/X3 PDUs through:
- Mandatory header (version, PDU type, lengths, format, direction, XID, correlation ID)
- Conditional attributes (TLV)
- Payload extraction and metadata (type names, timestamps, SIP text)

and, separately, the 12-byte fixed RTP header carried in X3 payloads.

Usage:
    python -m x2x3_decoder pdu <hex>
    python -m x2x3_decoder rtp <hex>

Environment Variables:
    X2X3_LOG_LEVEL - Log level (DEBUG, INFO, WARNING, ERROR)
    X2X3_LOG_METADATA - Log decoded metadata (true/false)
    X2X3_METRICS_ENABLED - Start the Prometheus exporter from the CLI
"""

__version__ = "1.0.0"

from .config import DecoderConfig, get_config
from .pdu import DecodedPdu, DecodeError, PduDecoder, decode_pdu
from .rtp import RtpHeader, decode_rtp_header

__all__ = [
    "DecoderConfig",
    "get_config",
    "DecodedPdu",
    "DecodeError",
    "PduDecoder",
    "decode_pdu",
    "RtpHeader",
    "decode_rtp_header",
]
