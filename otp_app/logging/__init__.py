"""
Logging configuration and utilities for the training plan loader.
"""
from .config import configure_logging, get_logger, get_resolution_logger, log_fetch

__all__ = ["configure_logging", "get_logger", "get_resolution_logger", "log_fetch"]
