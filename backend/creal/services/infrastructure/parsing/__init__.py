"""
Parsing Module

Provides utilities for parsing JSON from model responses.

Usage:
    from creal.services.infrastructure.parsing import parse_json_object
"""

from .json_parser import (
    parse_json_object,
    strip_markdown_fences,
    extract_largest_balanced_json,
)

__all__ = [
    "parse_json_object",
    "strip_markdown_fences",
    "extract_largest_balanced_json",
]
