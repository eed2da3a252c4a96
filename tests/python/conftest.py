"""Pytest configuration and fixtures."""

import os
import struct
import sys
import uuid

import pytest

# Add python directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../python'))

SAMPLE_XID = uuid.UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6")


def pytest_configure(config):
    """Configure pytest."""
    os.environ['X2X3_LOG_LEVEL'] = 'WARNING'


def tlv(type_code, content):
    """Encode one conditional attribute."""
    return struct.pack('!HH', type_code, len(content)) + content


def build_pdu(
    attributes=b'',
    payload=b'',
    pdu_type=2,
    payload_format=8,
    payload_direction=2,
    version=5,
    xid=SAMPLE_XID,
    correlation_id=b'corr0001',
    header_length=None,
    payload_length=None,
):
    """Assemble PDU bytes; lengths default to the actual sizes."""
    if header_length is None:
        header_length = 40 + len(attributes)
    if payload_length is None:
        payload_length = len(payload)
    header = struct.pack(
        '!HHIIHH',
        version, pdu_type, header_length, payload_length,
        payload_format, payload_direction,
    ) + xid.bytes + correlation_id
    return header + attributes + payload


@pytest.fixture
def sample_attributes():
    """Sequence number, timestamp, addresses, port, protocol and target."""
    return (
        tlv(8, struct.pack('!I', 42))
        + tlv(9, struct.pack('!II', 1700000000, 500))
        + tlv(10, bytes([192, 0, 2, 1]))
        + tlv(11, bytes([198, 51, 100, 7]))
        + tlv(14, struct.pack('!H', 5060))
        + tlv(16, bytes([17]))
        + tlv(17, 'sip:alice@example.com'.encode('utf-8'))
    )


@pytest.fixture
def sample_rtp_packet():
    """Generate sample RTP packet."""
    header = struct.pack('!BBHII', 0x80, 0x00, 1234, 160, 0x12345678)
    payload = b'\xff' * 160
    return header + payload
