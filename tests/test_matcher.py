"""Tests for the pattern matcher and minified-bundle heuristic."""

import re

from credscan.config.schema import DEFAULT_PATTERN
from credscan.scanner.matcher import PatternMatcher, group_sightings, is_minified_js

PATTERNS = {DEFAULT_PATTERN: re.compile(DEFAULT_PATTERN)}


def _accept_all(_value: str) -> bool:
    return True


def _has_digit(value: str) -> bool:
    return any(c.isdigit() for c in value)


class TestDefaultPattern:
    def test_colon_separator(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text("password: Sup3rSecret!")
        assert [(h.label, h.value) for h in hits] == [("password", "Sup3rSecret!")]

    def test_equals_and_quotes(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text("API_KEY='k3y-value'")
        assert [(h.label, h.value) for h in hits] == [("API_KEY", "k3y-value")]

    def test_json_style(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text('"token": "abc123"')
        assert [(h.label, h.value) for h in hits] == [("token", "abc123")]

    def test_case_insensitive_label(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text("PASSWD=hunter22")
        assert hits[0].label == "PASSWD"

    def test_all_matches_on_line(self):
        line = "token=aa11 secret=bb22"
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text(line)
        assert [(h.label, h.value) for h in hits] == [("token", "aa11"), ("secret", "bb22")]

    def test_no_match(self):
        assert PatternMatcher(PATTERNS, _accept_all).scan_text("user = bob") == []


class TestClassifierGate:
    def test_rejected_values_dropped(self):
        text = "password: word\npassword: w0rd99"
        hits = PatternMatcher(PATTERNS, _has_digit).scan_text(text)
        assert [(h.line_no, h.value) for h in hits] == [(1, "w0rd99")]

    def test_raw_match_hook_sees_rejected(self):
        seen = []
        PatternMatcher(PATTERNS, _has_digit).scan_text(
            "password: word", on_raw_match=lambda idx, label, value: seen.append((idx, label, value))
        )
        assert seen == [(0, "password", "word")]

    def test_zero_based_line_numbers(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text("a\nb\ntoken=abc123\n")
        assert hits[0].line_no == 2

    def test_pattern_source_recorded(self):
        custom = r"(client_id)=(\w+)"
        patterns = {**PATTERNS, custom: re.compile(custom)}
        hits = PatternMatcher(patterns, _accept_all).scan_text("client_id=zz99")
        assert [h.pattern for h in hits] == [custom]


class TestGroupSightings:
    def test_one_finding_per_pair(self):
        text = "token=abc123\nsecret=zz99yy\ntoken=abc123\n"
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text(text)
        findings = group_sightings("app.cfg", hits)
        assert [f.signature for f in findings] == ["tokenabc123", "secretzz99yy"]
        token = findings[0]
        assert token.line_numbers == [0, 2]
        assert token.matches == ["token", "abc123", "token", "abc123"]
        assert token.pattern == DEFAULT_PATTERN
        assert len(token.matches) % 2 == 0

    def test_same_pair_twice_on_one_line(self):
        hits = PatternMatcher(PATTERNS, _accept_all).scan_text("token=ab12 token=ab12")
        (finding,) = group_sightings("x", hits)
        assert finding.line_numbers == [0]
        assert len(finding.matches) == 4

    def test_empty(self):
        assert group_sightings("x", []) == []


class TestMinifiedJs:
    def test_minified_bundle(self):
        assert is_minified_js("bundle.min.js", 1, 5000) is True

    def test_plain_js_extension_counts(self):
        assert is_minified_js("app.js", 3, 1000) is True

    def test_mjs_counts(self):
        assert is_minified_js("app.mjs", 3, 2000) is True

    def test_small_file(self):
        assert is_minified_js("bundle.min.js", 1, 999) is False

    def test_many_lines(self):
        assert is_minified_js("bundle.min.js", 10, 50000) is False

    def test_other_extension(self):
        assert is_minified_js("data.json", 1, 5000) is False
