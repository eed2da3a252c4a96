"""Configuration module."""
from .settings import DecoderConfig, get_config, reset_config
from .logging import setup_logging, get_logger

__all__ = ["DecoderConfig", "get_config", "reset_config", "setup_logging", "get_logger"]
