"""Utility modules for ghedit."""

from .logger import get_logger, setup_logging
from .file_ops import FileManager

__all__ = ["get_logger", "setup_logging", "FileManager"]
