"""Tests for the credential pattern model and registry."""

from pathlib import Path

import pytest
import yaml

from credscan.config.loader import ConfigError
from credscan.config.schema import DEFAULT_PATTERN, CredScanConfig
from credscan.patterns.models import CredentialPattern
from credscan.patterns.registry import CUSTOM_PATTERN_DIR, PatternRegistry, build_registry


class TestPatternModel:
    def test_compiled_cached(self):
        p = CredentialPattern(source=r"(key)=(\w+)")
        assert p.compiled is p.compiled
        assert p.compiled.search("key=abc")


class TestRegistry:
    def test_keyed_by_source(self):
        reg = PatternRegistry()
        reg.register(CredentialPattern(source=r"(a)=(\w+)", description="first"))
        reg.register(CredentialPattern(source=r"(a)=(\w+)", description="second"))
        assert len(reg) == 1
        assert reg.get(r"(a)=(\w+)").description == "first"

    def test_compile_all(self):
        reg = PatternRegistry()
        reg.register_many([CredentialPattern(DEFAULT_PATTERN), CredentialPattern(r"(pin)=(\d+)")])
        compiled = reg.compile_all()
        assert list(compiled) == [DEFAULT_PATTERN, r"(pin)=(\d+)"]

    def test_invalid_regex_fails_fast(self):
        reg = PatternRegistry()
        reg.register(CredentialPattern(source=r"(token=(\w+"))
        with pytest.raises(ConfigError, match="Invalid pattern"):
            reg.compile_all()

    def test_needs_two_groups(self):
        reg = PatternRegistry()
        reg.register(CredentialPattern(source=r"token=(\w+)"))
        with pytest.raises(ConfigError, match="two capture groups"):
            reg.compile_all()


class TestCustomPatterns:
    def test_yaml_strings_and_mappings(self, tmp_path: Path):
        d = tmp_path / CUSTOM_PATTERN_DIR
        d.mkdir()
        (d / "extra.yaml").write_text(yaml.safe_dump([
            r"(client_secret)=(\S+)",
            {"pattern": r"(pin)\s*=\s*(\d+)", "description": "PIN codes"},
        ]))
        (d / "notes.txt").write_text("ignored")
        reg = PatternRegistry()
        assert reg.load_custom_patterns(d) == 2
        assert reg.get(r"(pin)\s*=\s*(\d+)").description == "PIN codes"

    def test_bad_entry(self, tmp_path: Path):
        d = tmp_path / CUSTOM_PATTERN_DIR
        d.mkdir()
        (d / "bad.yml").write_text(yaml.safe_dump([{"regex": "x"}]))
        with pytest.raises(ConfigError):
            PatternRegistry().load_custom_patterns(d)

    def test_missing_dir(self, tmp_path: Path):
        assert PatternRegistry().load_custom_patterns(tmp_path / "nope") == 0


class TestBuildRegistry:
    def test_defaults_then_extra(self, tmp_path: Path):
        cfg = CredScanConfig()
        cfg.patterns.extra = [r"(pin)=(\d+)", DEFAULT_PATTERN]
        reg = build_registry(cfg, tmp_path)
        assert [p.source for p in reg.all_patterns] == [DEFAULT_PATTERN, r"(pin)=(\d+)"]

    def test_custom_dir_loaded(self, tmp_path: Path):
        d = tmp_path / CUSTOM_PATTERN_DIR
        d.mkdir()
        (d / "p.yaml").write_text(yaml.safe_dump([r"(pin)=(\d+)"]))
        reg = build_registry(CredScanConfig(), tmp_path)
        assert len(reg) == 2

    def test_broken_extra_raises(self, tmp_path: Path):
        cfg = CredScanConfig()
        cfg.patterns.extra = ["(unclosed"]
        with pytest.raises(ConfigError):
            build_registry(cfg, tmp_path)
