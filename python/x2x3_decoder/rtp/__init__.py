"""RTP header decoding module."""
from .header import RTP_HEADER_LENGTH, RtpHeader, decode_rtp_bytes, decode_rtp_header

__all__ = ["RTP_HEADER_LENGTH", "RtpHeader", "decode_rtp_bytes", "decode_rtp_header"]
