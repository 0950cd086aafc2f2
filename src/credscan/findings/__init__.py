"""Finding models, aggregation, and redaction."""

from credscan.findings.aggregator import ResultAggregator
from credscan.findings.models import (
    CountMessage,
    Finding,
    FindingMessage,
    LogMessage,
    ResultSet,
    ScanResult,
)
from credscan.findings.redactor import REDACTION_MARKER, mask_matches, redact

__all__ = [
    "CountMessage",
    "Finding",
    "FindingMessage",
    "LogMessage",
    "REDACTION_MARKER",
    "ResultAggregator",
    "ResultSet",
    "ScanResult",
    "mask_matches",
    "redact",
]
