"""
X2/X3 decoder entry point.

Usage:
    python -m x2x3_decoder pdu <HEX> [--metadata] [--rtp]
    python -m x2x3_decoder rtp <HEX>

Pass "-" instead of HEX to read one hex string per line from stdin; each
result is printed as a single JSON line on stdout; log output goes to stderr.

Environment Variables:
    X2X3_LOG_LEVEL - Log level (DEBUG, INFO, WARNING, ERROR)
    X2X3_LOG_METADATA - Log decoded metadata at DEBUG (true/false)
    X2X3_METRICS_ENABLED - Serve Prometheus metrics while decoding (true/false)
    X2X3_METRICS_PORT - Prometheus port (default: 9090)
"""

import argparse
import json
import sys
from typing import Iterable, List, Optional

from .config import get_config, get_logger, setup_logging
from .metrics import get_metrics
from .pdu import DecodeError, PduDecoder
from .pdu.tables import PAYLOAD_FORMAT_RTP
from .rtp import decode_rtp_header

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="x2x3_decoder",
        description="Decode X2/X3 PDUs and RTP headers from hex.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pdu = subparsers.add_parser("pdu", help="Decode an X2/X3 PDU")
    pdu.add_argument("hex", help="PDU hex string, or - for stdin")
    pdu.add_argument("--metadata", action="store_true", help="Include derived metadata")
    pdu.add_argument("--rtp", action="store_true", help="Also decode the RTP header of RTP payloads")

    rtp = subparsers.add_parser("rtp", help="Decode an RTP header")
    rtp.add_argument("hex", help="RTP packet hex string, or - for stdin")

    for sub in (pdu, rtp):
        sub.add_argument("--indent", type=int, default=None, help="Pretty-print JSON")

    return parser


def _inputs(value: str) -> Iterable[str]:
    if value != "-":
        yield value
        return
    for line in sys.stdin:
        line = line.strip()
        if line:
            yield line


def _decode_pdu(decoder: PduDecoder, pdu_hex: str, args: argparse.Namespace) -> dict:
    pdu = decoder.decode(pdu_hex)
    result = pdu.to_dict()
    if args.metadata:
        result["metadata"] = pdu.metadata.to_dict()
        result["metadata"]["Attributes"] = [
            f"{a.attribute_type}: {a.describe()}" for a in pdu.conditional_attributes
        ]
    if args.rtp and pdu.headers.payload_format == PAYLOAD_FORMAT_RTP:
        # The PDU itself decoded; a short RTP payload is reported alongside it
        try:
            result["rtp"] = pdu.rtp_header().to_dict()
        except DecodeError as e:
            result["rtpError"] = str(e)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    config = get_config()
    # stdout carries only JSON results
    setup_logging(config.log_level, stream=sys.stderr)

    if config.metrics_enabled:
        get_metrics().start()

    decoder = PduDecoder(config=config)
    status = 0

    for value in _inputs(args.hex):
        try:
            if args.command == "pdu":
                result = _decode_pdu(decoder, value, args)
            else:
                result = decode_rtp_header(value).to_dict()
        except DecodeError as e:
            print(f"error: {e}", file=sys.stderr)
            status = 1
            continue

        print(json.dumps(result, indent=args.indent, ensure_ascii=False))

    logger.debug(f"Finished {args.command} decode with status {status}")
    return status


if __name__ == "__main__":
    sys.exit(main())
