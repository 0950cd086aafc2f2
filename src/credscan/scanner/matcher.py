"""Line-by-line credential matching."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from credscan.findings.models import Finding

# Minified bundle heuristic: few very long lines in a *js file
MINIFIED_MAX_LINES = 10
MINIFIED_MIN_SIZE = 1000


@dataclass(frozen=True)
class Sighting:
    """One accepted (label, value) pair on one line."""

    line_no: int  # 0-based
    pattern: str  # source text of the pattern that fired
    label: str
    value: str

    @property
    def signature(self) -> str:
        return self.label + self.value


RawMatchHook = Callable[[int, str, str], None]


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def is_minified_js(name: str, line_count: int, size: int) -> bool:
    """True for generated JS bundles that are not worth scanning."""
    ext = os.path.splitext(name)[1]
    return ext.endswith("js") and line_count < MINIFIED_MAX_LINES and size >= MINIFIED_MIN_SIZE


class PatternMatcher:
    """Apply every compiled pattern to every line and keep plausible secrets."""

    def __init__(
        self,
        patterns: Mapping[str, re.Pattern[str]],
        classifier: Callable[[str], bool],
    ) -> None:
        self.patterns = patterns
        self.classifier = classifier

    def scan_lines(
        self,
        lines: List[str],
        on_raw_match: Optional[RawMatchHook] = None,
    ) -> List[Sighting]:
        """Return accepted sightings in line order, then pattern order."""
        sightings: List[Sighting] = []
        for idx, line in enumerate(lines):
            for source, cp in self.patterns.items():
                for m in cp.finditer(line):
                    label, value = m.group(1), m.group(2)
                    if label is None or value is None:
                        continue
                    if on_raw_match is not None:
                        on_raw_match(idx, label, value)
                    if self.classifier(value):
                        sightings.append(Sighting(idx, source, label, value))
        return sightings

    def scan_text(self, text: str, on_raw_match: Optional[RawMatchHook] = None) -> List[Sighting]:
        return self.scan_lines(split_lines(text), on_raw_match)


def group_sightings(path: str, sightings: List[Sighting]) -> List[Finding]:
    """Fold sightings into one Finding per distinct (label, value) pair.

    Order follows each pair's first sighting in the file.
    """
    by_sig: Dict[str, Finding] = {}
    for s in sightings:
        finding = by_sig.get(s.signature)
        if finding is None:
            finding = by_sig[s.signature] = Finding(file=path)
        finding.add_sighting(s.line_no, s.pattern, s.label, s.value)
    return list(by_sig.values())
