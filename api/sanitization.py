"""
Input sanitization utilities for EcoTrack API endpoints.
Free text that ends up in Firestore or in a Gemini prompt passes through here first.
"""

import re
import html
from typing import Any, Dict, Optional
import logging

MAX_QUERY_LENGTH = 2000
MAX_DETAIL_LENGTH = 100

def sanitize_string(input_str: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize a string input by:
    1. Stripping leading/trailing whitespace
    2. HTML escaping to prevent XSS
    3. Removing control characters
    4. Truncating to max_length if specified

    Args:
        input_str: The input string to sanitize
        max_length: Optional maximum length for truncation

    Returns:
        Sanitized string
    """
    if not isinstance(input_str, str):
        if input_str is None:
            return ""
        return str(input_str)

    sanitized = input_str.strip()
    sanitized = html.escape(sanitized)

    # Remove control characters (except tab, newline, carriage return)
    sanitized = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', sanitized)

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        logging.warning(f"Input truncated from {len(input_str)} to {max_length} characters")

    return sanitized

def sanitize_query(query: str) -> str:
    """Coach queries keep their newlines but are capped at MAX_QUERY_LENGTH."""
    return sanitize_string(query, MAX_QUERY_LENGTH)

def sanitize_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitizes the string fields of an action details payload.
    Numbers and other values are left for model validation.
    """
    if not isinstance(details, dict):
        return details

    sanitized = {}
    for field, value in details.items():
        if isinstance(value, str):
            sanitized[field] = sanitize_string(value, MAX_DETAIL_LENGTH)
        else:
            sanitized[field] = value
    return sanitized
