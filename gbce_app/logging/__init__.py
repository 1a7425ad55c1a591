"""
Logging configuration and utilities for the GBCE trade indicator service.
"""
from .config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
