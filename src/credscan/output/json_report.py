"""JSON reporter: the result set document, also used as a profile."""

from __future__ import annotations

import json
from typing import Any, Dict

from credscan.findings.models import ResultSet


def to_dict(findings: ResultSet) -> Dict[str, Dict[str, Dict[str, Any]]]:
    """Convert a result set to a JSON-serialisable dict."""
    return {
        path: {sig: finding.to_dict() for sig, finding in by_sig.items()}
        for path, by_sig in findings.items()
    }


def render(findings: ResultSet) -> str:
    """Return formatted JSON; ``{}`` when nothing was found."""
    if not findings:
        return "{}"
    return json.dumps(to_dict(findings), indent=2, sort_keys=True, ensure_ascii=False)
