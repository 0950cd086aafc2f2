"""Tests for output reporters and the redactor."""

import io
import json

from rich.console import Console

from credscan.findings.models import Finding, ScanResult
from credscan.findings.redactor import REDACTION_MARKER, mask_matches, redact
from credscan.output import json_report, terminal


def _finding(file="conf/app.ini", value="hunter2x") -> Finding:
    return Finding(file=file, line_numbers=[4], pattern="p", matches=["password", value])


def _result(findings=None) -> ScanResult:
    if findings is None:
        f = _finding()
        findings = {f.file: {f.signature: f}}
    return ScanResult(findings=findings, files_scanned=5, files_processed=3, scan_duration_ms=12.0)


def _recording_console() -> Console:
    return Console(file=io.StringIO(), record=True, width=200, color_system=None)


class TestRedactor:
    def test_redact_hides_everything(self):
        assert redact("AKIAIOSFODNN7REAL123") == REDACTION_MARKER
        assert redact("") == REDACTION_MARKER

    def test_mask_matches_keeps_labels(self):
        masked = mask_matches(["password", "hunter2", "token", "abc123"])
        assert masked == ["password", "*****", "token", "*****"]

    def test_mask_does_not_mutate(self):
        matches = ["password", "hunter2"]
        mask_matches(matches)
        assert matches == ["password", "hunter2"]


class TestJsonReport:
    def test_empty_is_braces(self):
        assert json_report.render({}) == "{}"

    def test_shape(self):
        data = json.loads(json_report.render(_result().findings))
        entry = data["conf/app.ini"]["passwordhunter2x"]
        assert entry == {
            "file": "conf/app.ini",
            "line_numbers": [4],
            "pattern": "p",
            "matches": ["password", "hunter2x"],
        }

    def test_sorted_keys(self):
        a, b = _finding("b.txt"), _finding("a.txt")
        findings = {a.file: {a.signature: a}, b.file: {b.signature: b}}
        text = json_report.render(findings)
        assert text.index('"a.txt"') < text.index('"b.txt"')

    def test_unicode_kept(self):
        f = _finding(value="pässwörd9")
        text = json_report.render({f.file: {f.signature: f}})
        assert "pässwörd9" in text

    def test_to_dict_round_trips_through_finding(self):
        data = json_report.to_dict(_result().findings)
        restored = Finding.from_dict(data["conf/app.ini"]["passwordhunter2x"])
        assert restored == _finding()


class TestTerminal:
    def test_clean(self):
        console = _recording_console()
        terminal.render(_result({}), console=console)
        out = console.export_text()
        assert "No credentials detected" in out
        assert "Files scanned:" in out

    def test_findings_table(self):
        console = _recording_console()
        terminal.render(_result(), console=console)
        out = console.export_text()
        assert "conf/app.ini" in out
        assert "password" in out
        assert "hunter2x" in out
        # line numbers are shown 1-based
        assert "5" in out
        assert "1 credential(s) found in 1 file(s)" in out

    def test_no_summary(self):
        console = _recording_console()
        terminal.render(_result(), show_summary=False, console=console)
        assert "Files scanned:" not in console.export_text()

    def test_brackets_are_not_markup(self):
        f = Finding(file="app/[id]/page.tsx", line_numbers=[0], pattern="p", matches=["token", "ab1[/x]"])
        console = _recording_console()
        terminal.render(_result({f.file: {f.signature: f}}), console=console)
        out = console.export_text()
        assert "app/[id]/page.tsx" in out
        assert "ab1[/x]" in out
