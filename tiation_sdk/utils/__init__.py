"""Utility functions and helpers."""

from .timestamps import parse_timestamp, format_timestamp
from .validators import slugify, parse_key_value_pairs

__all__ = ["parse_timestamp", "format_timestamp", "slugify", "parse_key_value_pairs"]
