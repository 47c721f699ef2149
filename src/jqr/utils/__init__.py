"""Utility functions for jqr."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
