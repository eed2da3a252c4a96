"""Tests for the top-level PDU decoder."""

import logging
import os
import struct
import sys

import pytest
from prometheus_client import REGISTRY

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../python'))

from conftest import build_pdu, tlv
from x2x3_decoder.config import DecoderConfig
from x2x3_decoder.metrics import MetricsCollector
from x2x3_decoder.pdu import (
    DecodeError,
    InvalidHexInput,
    MalformedInput,
    PduDecoder,
    TruncatedAttribute,
    TruncatedPayload,
    UnknownAttributeType,
    UnsupportedIntegerWidth,
    decode_pdu,
)

SIP_INVITE = b"INVITE sip:bob@example.com SIP/2.0\r\nCall-ID: a84b4c76e66710\r\n\r\n"


class TestPduDecoder:
    """Test full PDU decoding."""

    def setup_method(self):
        self.decoder = PduDecoder(config=DecoderConfig(), metrics=MetricsCollector())

    def test_decode_x3_rtp(self, sample_attributes, sample_rtp_packet):
        pdu_hex = build_pdu(attributes=sample_attributes, payload=sample_rtp_packet).hex()

        pdu = self.decoder.decode(pdu_hex)

        assert pdu.headers.header_length == 40 + len(sample_attributes)
        assert len(pdu.conditional_attributes) == 7
        assert pdu.payload == sample_rtp_packet
        assert pdu.metadata.pdu_type == "X3"
        assert pdu.metadata.payload_type == "RTP Packet"
        assert pdu.metadata.payload_text is None
        assert pdu.metadata.timestamp.isoformat() == "2023-11-14T22:13:20+00:00"
        assert pdu.metadata.conditional_attributes_length == len(sample_attributes)

    def test_uppercase_hex(self, sample_attributes):
        pdu_hex = build_pdu(attributes=sample_attributes, payload=b'\xab').hex().upper()

        pdu = self.decoder.decode(pdu_hex)

        assert pdu.payload_hex == "ab"

    def test_to_dict(self):
        pdu = self.decoder.decode(build_pdu(attributes=tlv(15, b'\x1f\x90'), payload=b'\xde\xad').hex())

        result = pdu.to_dict()

        assert result["headers"]["payloadLength"] == 2
        assert result["conditionalAttributes"] == [
            {"attributeType": "Destination Port", "length": 2, "attributeValue": 8080}
        ]
        assert result["payload"] == "dead"

    def test_sip_payload_text(self):
        pdu_hex = build_pdu(payload=SIP_INVITE, pdu_type=1, payload_format=9).hex()

        pdu = self.decoder.decode(pdu_hex)

        assert pdu.metadata.pdu_type == "X2"
        assert pdu.metadata.payload_type == "SIP Message"
        assert pdu.metadata.payload_text.startswith("INVITE sip:bob@example.com")
        assert pdu.metadata.to_dict()["SIP Message String"] == SIP_INVITE.decode("utf-8")

    def test_msrp_payload_text(self):
        pdu = self.decoder.decode(build_pdu(payload=b"MSRP a786hjs2 SEND\r\n", payload_format=13).hex())

        assert pdu.metadata.to_dict()["MSRP Message String"] == "MSRP a786hjs2 SEND\r\n"

    def test_binary_payload_has_no_text(self):
        metadata = self.decoder.decode(build_pdu(payload=b"\x80\x00").hex()).metadata.to_dict()

        assert not any(key.endswith(" String") for key in metadata)

    def test_keepalive(self):
        pdu_hex = build_pdu(pdu_type=3, payload_format=0, payload_direction=0).hex()

        pdu = self.decoder.decode(pdu_hex)

        assert pdu.conditional_attributes == ()
        assert pdu.payload == b''
        assert pdu.metadata.pdu_type == "Keepalive"
        assert pdu.metadata.payload_direction == "Reserved for Keepalive mechanism"

    def test_unknown_names(self):
        pdu = self.decoder.decode(build_pdu(pdu_type=9, payload_format=99, payload_direction=42).hex())

        assert pdu.metadata.pdu_type == "Unknown"
        assert pdu.metadata.payload_type == "Unknown"
        assert pdu.metadata.payload_direction == "Unknown"

    def test_trailing_bytes_ignored(self):
        buffer = build_pdu(payload=b'\x01\x02') + b'\xff\xff'

        pdu = self.decoder.decode(buffer.hex())

        assert pdu.payload == b'\x01\x02'

    def test_result_is_immutable(self):
        pdu = self.decoder.decode(build_pdu().hex())

        with pytest.raises(AttributeError):
            pdu.payload = b'x'

    def test_rtp_header_from_payload(self, sample_rtp_packet):
        pdu = self.decoder.decode(build_pdu(payload=sample_rtp_packet).hex())

        rtp = pdu.rtp_header()

        assert rtp.sequence_number == 1234
        assert rtp.ssrc == 0x12345678

    def test_rtp_header_wrong_format(self):
        pdu = self.decoder.decode(build_pdu(payload=SIP_INVITE, payload_format=9).hex())

        with pytest.raises(ValueError, match="not RTP"):
            pdu.rtp_header()

    def test_rtp_header_short_payload(self):
        pdu = self.decoder.decode(build_pdu(payload=b"\x80\x00\x00").hex())
        before = REGISTRY.get_sample_value(
            "x2x3_decode_errors_total",
            {"decoder": "rtp", "stage": "rtp", "reason": "malformed_input"},
        ) or 0

        with pytest.raises(MalformedInput) as exc_info:
            pdu.rtp_header(metrics=MetricsCollector())

        assert exc_info.value.stage == "rtp"
        after = REGISTRY.get_sample_value(
            "x2x3_decode_errors_total",
            {"decoder": "rtp", "stage": "rtp", "reason": "malformed_input"},
        )
        assert after == before + 1

    def test_log_metadata(self, caplog):
        decoder = PduDecoder(config=DecoderConfig(log_metadata=True), metrics=MetricsCollector())
        caplog.set_level(logging.DEBUG, logger="x2x3.pdu")

        decoder.decode(build_pdu(pdu_type=1, payload_format=9, payload=SIP_INVITE).hex())

        messages = [r.getMessage() for r in caplog.records if r.name == "x2x3.pdu"]
        assert any(m.startswith("Decoder metadata:") and "SIP Message String" in m for m in messages)
        assert any(m.startswith("Decoded PDU:") for m in messages)

    def test_metadata_not_logged_by_default(self, caplog):
        caplog.set_level(logging.DEBUG, logger="x2x3.pdu")

        self.decoder.decode(build_pdu().hex())

        assert not any(r.getMessage().startswith("Decoder metadata:") for r in caplog.records)


class TestPduDecoderErrors:
    """Test error taxonomy and stage attribution."""

    def setup_method(self):
        self.decoder = PduDecoder(config=DecoderConfig(), metrics=MetricsCollector())

    @pytest.mark.parametrize("value", ["", "40g0", "00112"])
    def test_invalid_hex(self, value):
        with pytest.raises(InvalidHexInput) as exc_info:
            self.decoder.decode(value)
        assert exc_info.value.stage == "input"

    def test_short_header(self):
        with pytest.raises(MalformedInput) as exc_info:
            self.decoder.decode(build_pdu()[:20].hex())
        assert exc_info.value.stage == "header"

    def test_unknown_attribute(self):
        region = tlv(8, b'\x01') + tlv(42, b'\x00\x00')

        with pytest.raises(UnknownAttributeType) as exc_info:
            self.decoder.decode(build_pdu(attributes=region).hex())
        assert exc_info.value.stage == "attributes"
        assert exc_info.value.type_code == 42

    def test_unsupported_integer_width(self):
        region = tlv(14, b'\x00\x00\x50')

        with pytest.raises(UnsupportedIntegerWidth) as exc_info:
            self.decoder.decode(build_pdu(attributes=region).hex())
        assert exc_info.value.stage == "attributes"

    def test_truncated_attribute(self):
        region = struct.pack('!HH', 17, 20) + b'target'

        with pytest.raises(TruncatedAttribute) as exc_info:
            self.decoder.decode(build_pdu(attributes=region, payload=b'\x00' * 20).hex())
        assert exc_info.value.stage == "attributes"

    def test_truncated_payload(self):
        buffer = build_pdu(attributes=tlv(8, b'\x01'), payload=b'\x00' * 4, payload_length=10)

        with pytest.raises(TruncatedPayload) as exc_info:
            self.decoder.decode(buffer.hex())
        assert exc_info.value.stage == "payload"
        assert str(exc_info.value).startswith("payload: ")

    def test_failure_counted_by_stage(self):
        labels = {"decoder": "pdu", "stage": "payload", "reason": "truncated_payload"}
        before_errors = REGISTRY.get_sample_value("x2x3_decode_errors_total", labels) or 0
        before_total = REGISTRY.get_sample_value("x2x3_pdus_decoded_total", {"status": "error"}) or 0

        with pytest.raises(TruncatedPayload):
            self.decoder.decode(build_pdu(payload=b'\x00', payload_length=2).hex())

        assert REGISTRY.get_sample_value("x2x3_decode_errors_total", labels) == before_errors + 1
        assert REGISTRY.get_sample_value("x2x3_pdus_decoded_total", {"status": "error"}) == before_total + 1

    def test_success_counted(self):
        attr_labels = {"attribute_type": "Source Port"}
        before_total = REGISTRY.get_sample_value("x2x3_pdus_decoded_total", {"status": "success"}) or 0
        before_attrs = REGISTRY.get_sample_value("x2x3_attributes_decoded_total", attr_labels) or 0
        before_payloads = REGISTRY.get_sample_value("x2x3_payload_bytes_count") or 0

        self.decoder.decode(build_pdu(attributes=tlv(14, b'\x13\xc4') * 2, payload=b'\x00' * 3).hex())

        assert REGISTRY.get_sample_value("x2x3_pdus_decoded_total", {"status": "success"}) == before_total + 1
        assert REGISTRY.get_sample_value("x2x3_attributes_decoded_total", attr_labels) == before_attrs + 2
        assert REGISTRY.get_sample_value("x2x3_payload_bytes_count") == before_payloads + 1

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            self.decoder.decode("zz")
        assert issubclass(TruncatedPayload, DecodeError)


def test_decode_pdu_default_decoder():
    """Test module-level convenience function."""
    pdu = decode_pdu(build_pdu(attributes=tlv(10, bytes([10, 0, 0, 1]))).hex())

    assert pdu.conditional_attributes[0].attribute_value == "10.0.0.1"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
