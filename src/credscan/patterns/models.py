"""Credential pattern model: source stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CredentialPattern:
    """A single credential regex.

    ``source`` is the identity of the pattern: it keys the registry and is
    recorded verbatim in every finding the pattern produces. Group 1 captures
    the label (``password``, ``token``...), group 2 the candidate value.
    """

    source: str
    description: str = ""

    _compiled: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled(self) -> re.Pattern[str]:
        if self._compiled is None:
            self._compiled = re.compile(self.source)
        return self._compiled
