"""Text normalization utilities for comparison."""
from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_document_text(text: str, allowed_punctuation: str = ".,!?;:()-'\"/\\") -> str:
    """
    Clean extracted document text before comparison.

    - Collapses runs of whitespace (including paragraph breaks) to one space
    - Replaces every character that is not a word character, whitespace, or
      in ``allowed_punctuation`` with a space
    - Collapses whitespace again and strips the ends

    Examples:
        >>> normalize_document_text("Total:  $40\\n\\nDue *now*")
        'Total: 40 Due now'
    """
    if not text:
        return ""

    cleaned = _WHITESPACE_RE.sub(" ", text)
    disallowed = re.compile(r"[^\w\s" + re.escape(allowed_punctuation) + r"]")
    cleaned = disallowed.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()
