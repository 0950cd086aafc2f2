"""Finding data models and the messages workers send to the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class Finding:
    """All sightings of one credential in one file.

    ``matches`` is flat: ``[label, value, label, value, ...]``.
    """

    file: str
    line_numbers: List[int] = field(default_factory=list)  # 0-based
    pattern: str = ""
    matches: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        """Dedup/suppression key: label + value of the first pair."""
        return signature_of(self.matches)

    def add_sighting(self, line_no: int, pattern: str, label: str, value: str) -> None:
        if not self.line_numbers or self.line_numbers[-1] != line_no:
            self.line_numbers.append(line_no)
        self.pattern = pattern
        self.matches.extend((label, value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line_numbers": list(self.line_numbers),
            "pattern": self.pattern,
            "matches": list(self.matches),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        """Build from a profile entry; older profiles use capitalised keys."""
        return cls(
            file=str(data.get("file", data.get("File", ""))),
            line_numbers=[int(n) for n in data.get("line_numbers", data.get("Line_no")) or []],
            pattern=str(data.get("pattern", data.get("Pattern", ""))),
            matches=[str(m) for m in data.get("matches", data.get("Matches")) or []],
        )


def signature_of(matches: List[str]) -> str:
    if len(matches) < 2:
        return ""
    return matches[0] + matches[1]


# file path -> signature -> Finding
ResultSet = Dict[str, Dict[str, Finding]]


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: ResultSet = field(default_factory=dict)
    logs: List[str] = field(default_factory=list)
    files_scanned: int = 0  # regular entries seen by discovery
    files_processed: int = 0  # files actually read by workers
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return sum(len(by_sig) for by_sig in self.findings.values())

    def iter_findings(self):
        for path in sorted(self.findings):
            by_sig = self.findings[path]
            for sig in sorted(by_sig):
                yield by_sig[sig]


# ── worker -> aggregator messages ────────────────────────────────────────────


@dataclass(frozen=True)
class FindingMessage:
    finding: Finding


@dataclass(frozen=True)
class LogMessage:
    text: str


@dataclass(frozen=True)
class CountMessage:
    delta: int


Message = Union[FindingMessage, LogMessage, CountMessage]
