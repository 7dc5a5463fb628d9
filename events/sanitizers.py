# events/sanitizers.py
"""
Input sanitization for desk forms.

All user-typed text passes through these functions before it is stored.
"""
import re
from typing import Optional


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    text = str(text)
    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_title(title: Optional[str]) -> str:
    """
    Sanitize event and team names.

    - Max 255 characters
    - Single line (no newlines)
    """
    text = sanitize_text(title, max_length=255)
    # Replace newlines with spaces
    text = re.sub(r'[\r\n]+', ' ', text)
    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text)
    return text


def lenient_int(value, default: int) -> int:
    """
    Parse a form number the way the desk forms always have: anything that
    is not a non-zero integer falls back to ``default``.
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number or default
