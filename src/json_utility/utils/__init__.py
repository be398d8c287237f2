"""Utility functions for the JSON Utility."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
