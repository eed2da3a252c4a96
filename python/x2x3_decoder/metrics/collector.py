"""
Prometheus Metrics Collector for the X2/X3 decoder.

Provides metrics for monitoring:
- PDU decodes by outcome
- Decode errors by decoder, stage and reason
- Conditional attributes by type
- RTP header decodes by outcome
- Payload sizes
"""

import logging
from typing import Optional

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger("x2x3.metrics")


PDUS_DECODED_TOTAL = Counter(
    'x2x3_pdus_decoded_total',
    'Total number of PDU decode attempts',
    ['status']  # 'success', 'error'
)
DECODE_ERRORS_TOTAL = Counter(
    'x2x3_decode_errors_total',
    'Decode failures',
    ['decoder', 'stage', 'reason']  # decoder: 'pdu', 'rtp'
)
ATTRIBUTES_DECODED_TOTAL = Counter(
    'x2x3_attributes_decoded_total',
    'Conditional attributes decoded',
    ['attribute_type']
)
PAYLOAD_BYTES = Histogram(
    'x2x3_payload_bytes',
    'Size of decoded PDU payloads',
    buckets=[0, 64, 160, 320, 512, 1024, 1500, 4096, 16384]
)
RTP_HEADERS_DECODED_TOTAL = Counter(
    'x2x3_rtp_headers_decoded_total',
    'Total number of RTP header decode attempts',
    ['status']
)


class MetricsCollector:
    """
    Centralized metrics collector for the decoder.

    Provides convenient methods for recording metrics
    and starts the Prometheus HTTP server.
    """

    def __init__(self, port: int = 9090, host: str = "0.0.0.0"):
        """
        Initialize metrics collector.

        Args:
            port: Port for Prometheus HTTP server
            host: Host to bind to
        """
        self.port = port
        self.host = host
        self._started = False

    def start(self) -> bool:
        """
        Start the Prometheus HTTP server.

        Returns:
            True if started successfully
        """
        if self._started:
            return True

        try:
            start_http_server(self.port, addr=self.host)
        except OSError as e:
            logger.error(f"Failed to start metrics server: {e}")
            return False

        self._started = True
        logger.info(f"Prometheus metrics server started on {self.host}:{self.port}")
        return True

    def pdu_decoded(self, payload_length: int, attribute_types) -> None:
        """Record a successful PDU decode."""
        PDUS_DECODED_TOTAL.labels(status="success").inc()
        PAYLOAD_BYTES.observe(payload_length)
        for attribute_type in attribute_types:
            ATTRIBUTES_DECODED_TOTAL.labels(attribute_type=attribute_type).inc()

    def pdu_failed(self, stage: str, reason: str) -> None:
        """Record a failed PDU decode."""
        PDUS_DECODED_TOTAL.labels(status="error").inc()
        DECODE_ERRORS_TOTAL.labels(decoder="pdu", stage=stage, reason=reason).inc()

    def rtp_decoded(self) -> None:
        """Record a successful RTP header decode."""
        RTP_HEADERS_DECODED_TOTAL.labels(status="success").inc()

    def rtp_failed(self, stage: str, reason: str) -> None:
        """Record a failed RTP header decode."""
        RTP_HEADERS_DECODED_TOTAL.labels(status="error").inc()
        DECODE_ERRORS_TOTAL.labels(decoder="rtp", stage=stage, reason=reason).inc()


# Global instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics
    if _metrics is None:
        from ..config import get_config

        config = get_config()
        _metrics = MetricsCollector(port=config.metrics_port, host=config.metrics_host)
    return _metrics
