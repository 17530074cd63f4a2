"""Utility functions and helpers."""

from .token_counter import TokenCounter
from .validators import validate_input_file, validate_required_settings

__all__ = ["TokenCounter", "validate_input_file", "validate_required_settings"]
