"""
Closed lookup tables for the X2/X3 PDU (ETSI TS 103 221-2).

The attribute set is fixed by the standard; decoding a code that is not
listed here is an error, not an extension point.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

MANDATORY_HEADER_LENGTH = 40


class AttributeKind(Enum):
    """How the content of a conditional attribute is interpreted."""
    HEX = "hex"
    INTEGER = "integer"
    STRING = "string"
    TIMESTAMP = "timestamp"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


@dataclass(frozen=True)
class AttributeSpec:
    """Display name and interpretation of one attribute type code."""
    name: str
    kind: AttributeKind


# Conditional attribute types. Codes 1-5 carry structures defined by other
# standards and are exposed as hex.
CONDITIONAL_ATTRIBUTES: Dict[int, AttributeSpec] = {
    1: AttributeSpec("ETSI TS 102 232-1", AttributeKind.HEX),
    2: AttributeSpec("3GPP TS 33.128", AttributeKind.HEX),
    3: AttributeSpec("ETSI TS 133 108", AttributeKind.HEX),
    4: AttributeSpec("Proprietary Attribute", AttributeKind.HEX),
    5: AttributeSpec("Domain ID (DID)", AttributeKind.HEX),
    6: AttributeSpec("Network Function ID (NFID)", AttributeKind.STRING),
    7: AttributeSpec("Interception Point ID (IPID)", AttributeKind.STRING),
    8: AttributeSpec("Sequence Number", AttributeKind.INTEGER),
    9: AttributeSpec("Timestamp", AttributeKind.TIMESTAMP),
    10: AttributeSpec("Source IPv4 address", AttributeKind.IPV4),
    11: AttributeSpec("Destination IPv4 address", AttributeKind.IPV4),
    12: AttributeSpec("Source IPv6 address", AttributeKind.IPV6),
    13: AttributeSpec("Destination IPv6 address", AttributeKind.IPV6),
    14: AttributeSpec("Source Port", AttributeKind.INTEGER),
    15: AttributeSpec("Destination Port", AttributeKind.INTEGER),
    16: AttributeSpec("IP Protocol", AttributeKind.INTEGER),
    17: AttributeSpec("Matched Target Identifier", AttributeKind.STRING),
    18: AttributeSpec("Other Target Identifier", AttributeKind.STRING),
}

PDU_TYPES: Dict[int, str] = {
    1: "X2",
    2: "X3",
    3: "Keepalive",
    4: "Keepalive Acknowledgement",
}

PAYLOAD_FORMATS: Dict[int, str] = {
    0: "Keepalive",
    1: "ETSI TS 102 232-1",
    2: "3GPP TS 33.128",
    3: "ETSI TS 133 108",
    4: "Proprietary Payload",
    5: "IPv4 Packet",
    6: "IPv6 Packet",
    7: "Ethernet Frame",
    8: "RTP Packet",
    9: "SIP Message",
    10: "DHCP Message",
    11: "RADIUS Packet",
    12: "GTP-U Message",
    13: "MSRP Message",
}

PAYLOAD_DIRECTIONS: Dict[int, str] = {
    0: "Reserved for Keepalive mechanism",
    1: "The direction of the intercepted data or event is not known to the POI",
    2: "The intercepted data or event was sent to (i.e. received by) the target",
    3: "The intercepted data or event was sent from the target",
    4: "The intercepted data or event is a result of intercepted data or events in more than one direction",
    5: "The concept of direction is not applicable to this intercepted data or event",
}

IP_PROTOCOLS: Dict[int, str] = {
    6: "TCP",
    17: "UDP",
}

PAYLOAD_FORMAT_RTP = 8
PAYLOAD_FORMAT_SIP = 9
PAYLOAD_FORMAT_MSRP = 13

# Payload formats whose content is a text protocol message
TEXT_PAYLOAD_FORMATS = frozenset({PAYLOAD_FORMAT_SIP, PAYLOAD_FORMAT_MSRP})

UNKNOWN = "Unknown"


def lookup_name(table: Dict[int, str], code: int) -> str:
    """Resolve a wire code to its display name, or "Unknown"."""
    return table.get(code, UNKNOWN)
