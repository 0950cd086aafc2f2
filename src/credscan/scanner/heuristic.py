"""Heuristic classifier: does a captured value look like a real secret?

Check modes describe what a secret must contain:

  - ``letter``             at least one letter
  - ``digit``              at least one digit
  - ``special``            at least one non-alphanumeric, non-space character
  - ``letter+digit``       letters and digits
  - ``letter+word``        letters, and not an English word
  - ``letter+digit+word``  letters and digits, and not an English word (default)
  - ``all``                letters, digits and special characters

A value shorter than ``min_length`` is never a secret. A non-zero
``entropy_threshold`` also rejects values whose Shannon entropy is below it.
If the word list is missing the word veto is skipped, so ``letter+digit+word``
behaves like ``letter+digit``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

from credscan.config.schema import uses_dictionary
from credscan.scanner.entropy import shannon_entropy
from credscan.scanner.wordlist import load_words


def _has_letter(value: str) -> bool:
    return any(c.isalpha() for c in value)


def _has_digit(value: str) -> bool:
    return any(c.isdigit() for c in value)


def _has_special(value: str) -> bool:
    return any(not c.isalnum() and not c.isspace() for c in value)


def is_dictionary_word(value: str, words: Optional[FrozenSet[str]]) -> bool:
    """True if *value* itself, ignoring case, is a known word."""
    return bool(words) and value.lower() in words


def _char_rule(value: str, mode: str) -> bool:
    if mode == "letter" or mode == "letter+word":
        return _has_letter(value)
    if mode == "digit":
        return _has_digit(value)
    if mode == "special":
        return _has_special(value)
    if mode == "letter+digit" or mode == "letter+digit+word":
        return _has_letter(value) and _has_digit(value)
    if mode == "all":
        return _has_letter(value) and _has_digit(value) and _has_special(value)
    raise ValueError(f"unknown check mode: {mode!r}")


def is_likely_secret(
    value: str,
    mode: str = "letter+digit+word",
    words_path: Path | str | None = None,
    min_length: int = 4,
    entropy_threshold: float = 0.0,
    *,
    words: Optional[FrozenSet[str]] = None,
) -> bool:
    """Return True if *value* plausibly is a password, token or key."""
    if len(value) < min_length:
        return False
    if entropy_threshold > 0 and shannon_entropy(value) < entropy_threshold:
        return False
    if not _char_rule(value, mode):
        return False
    if uses_dictionary(mode):
        if words is None:
            words = load_words(words_path)
        if is_dictionary_word(value, words):
            return False
    return True


@dataclass(frozen=True)
class SecretClassifier:
    """``is_likely_secret`` bound to one run's settings and word list."""

    mode: str = "letter+digit+word"
    min_length: int = 4
    entropy_threshold: float = 0.0
    words: Optional[FrozenSet[str]] = field(default=None, repr=False)

    @classmethod
    def from_settings(
        cls,
        mode: str,
        words_path: Path | str | None,
        min_length: int = 4,
        entropy_threshold: float = 0.0,
    ) -> "SecretClassifier":
        words = load_words(words_path) if uses_dictionary(mode) else None
        return cls(mode, min_length, entropy_threshold, words)

    @property
    def dictionary_missing(self) -> bool:
        return uses_dictionary(self.mode) and self.words is None

    def __call__(self, value: str) -> bool:
        return is_likely_secret(
            value,
            self.mode,
            min_length=self.min_length,
            entropy_threshold=self.entropy_threshold,
            words=self.words if self.words is not None else frozenset(),
        )
