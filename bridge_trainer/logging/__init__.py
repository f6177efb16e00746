"""
Logging configuration and utilities for the bidding engine.
"""
from .config import configure_from_settings, configure_logging, get_logger

__all__ = ["configure_from_settings", "configure_logging", "get_logger"]
