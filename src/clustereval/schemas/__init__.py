"""Data schemas shared by the validation engine and its callers."""

from .validation import ValidationMetrics, ValidationRecord

__all__ = [
    "ValidationMetrics",
    "ValidationRecord",
]
