"""Secret value redaction for safe output."""

from __future__ import annotations

from typing import List

REDACTION_MARKER = "*****"


def redact(_value: str) -> str:
    """Full redaction, never reveal any part of the value."""
    return REDACTION_MARKER


def mask_matches(matches: List[str]) -> List[str]:
    """Return *matches* with every value slot (odd index) redacted.

    Example: ``["password", "hunter2"]`` → ``["password", "*****"]``
    """
    return [redact(m) if idx % 2 == 1 else m for idx, m in enumerate(matches)]
