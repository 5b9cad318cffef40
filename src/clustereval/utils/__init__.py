"""Shared utilities: logging and file helpers."""

from .file_utils import read_jsonl_lines
from .logger_utils import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "read_jsonl_lines",
]
