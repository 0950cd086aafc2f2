"""Profile store: a previous run's result set used to suppress known findings.

A profile is the JSON document credscan prints (or writes with
``--save-profile``): ``{file: {signature: finding}}``. Lookups are exact on
(file, signature) with the raw value; there is no fuzzy matching. A profile
saved from a masked run therefore suppresses nothing; save it with ``--debug``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from credscan.findings.models import Finding, ResultSet
from credscan.findings.redactor import REDACTION_MARKER
from credscan.output.json_report import render


class ProfileError(Exception):
    """Raised when a profile cannot be read or is not a result set."""


def _parse(data: Any, source: str) -> ResultSet:
    if not isinstance(data, dict):
        raise ProfileError(f"{source}: expected an object of files")
    result: ResultSet = {}
    for path, by_sig in data.items():
        if not isinstance(by_sig, dict):
            raise ProfileError(f"{source}: entry for {path!r} is not an object")
        entries: Dict[str, Finding] = {}
        for sig, raw in by_sig.items():
            if not isinstance(raw, dict):
                raise ProfileError(f"{source}: finding {sig!r} in {path!r} is not an object")
            entries[str(sig)] = Finding.from_dict(raw)
        result[str(path)] = entries
    return result


def load_profile(path: Path | str) -> ResultSet:
    """Load a persisted result set. Raises ProfileError on any failure."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileError(f"cannot read profile {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProfileError(f"cannot parse profile {path}: {exc}") from exc
    return _parse(data, str(path))


class Profile:
    """Read-only (file, signature) lookup over a loaded result set."""

    def __init__(self, entries: Optional[ResultSet] = None) -> None:
        self._entries: ResultSet = entries or {}

    @classmethod
    def empty(cls) -> "Profile":
        return cls()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def contains(self, file: str, signature: str) -> bool:
        by_sig = self._entries.get(file)
        return by_sig is not None and signature in by_sig

    def masked_signatures(self) -> int:
        """Count entries saved with redacted values; they can never match a new finding."""
        return sum(
            1
            for by_sig in self._entries.values()
            for sig in by_sig
            if sig.endswith(REDACTION_MARKER)
        )


def save_profile(findings: ResultSet, path: Path | str) -> None:
    """Persist *findings* so the next run can load them with ``load_profile``."""
    try:
        Path(path).write_text(render(findings) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ProfileError(f"cannot write profile {path}: {exc}") from exc
