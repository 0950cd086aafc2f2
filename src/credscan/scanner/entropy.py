"""Shannon entropy of candidate values."""

from __future__ import annotations

import math
from collections import Counter


def shannon_entropy(value: str) -> float:
    """Bits of information per character of *value*; 0.0 for an empty string."""
    length = len(value)
    if length == 0:
        return 0.0
    entropy = 0.0
    for count in Counter(value).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy
