"""
Decoder configuration with environment variable support.

Environment Variables:
    X2X3_LOG_LEVEL - Log level (default: INFO)
    X2X3_LOG_METADATA - Log decoded metadata at DEBUG level (true/false)
    X2X3_METRICS_ENABLED - Start the Prometheus exporter from the CLI (true/false)
    X2X3_METRICS_PORT - Prometheus exporter port (default: 9090)
    X2X3_METRICS_HOST - Prometheus exporter bind address (default: 0.0.0.0)
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class DecoderConfig:
    """Decoder configuration."""

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("X2X3_LOG_LEVEL", "INFO").upper()
    )
    log_metadata: bool = field(
        default_factory=lambda: _env_flag("X2X3_LOG_METADATA")
    )

    # Metrics
    metrics_enabled: bool = field(
        default_factory=lambda: _env_flag("X2X3_METRICS_ENABLED")
    )
    metrics_port: int = field(
        default_factory=lambda: int(os.getenv("X2X3_METRICS_PORT", "9090"))
    )
    metrics_host: str = field(
        default_factory=lambda: os.getenv("X2X3_METRICS_HOST", "0.0.0.0")
    )

    def __post_init__(self):
        """Validate values after initialization."""
        if not 0 < self.metrics_port < 65536:
            raise ValueError(f"Invalid metrics port: {self.metrics_port}")


# Singleton config instance
_config: Optional[DecoderConfig] = None


def get_config() -> DecoderConfig:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = DecoderConfig()
    return _config


def reset_config():
    """Reset the global config (useful for testing)."""
    global _config
    _config = None
