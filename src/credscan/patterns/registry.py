"""Pattern registry: loads default and custom patterns, compiles them up front."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from credscan.config.loader import ConfigError
from credscan.config.schema import CredScanConfig
from credscan.patterns.models import CredentialPattern

CUSTOM_PATTERN_DIR = ".credscan-patterns"


class PatternRegistry:
    """Run-scoped set of credential patterns keyed by their source text."""

    def __init__(self) -> None:
        self._patterns: Dict[str, CredentialPattern] = {}

    # ---- registration ----

    def register(self, pattern: CredentialPattern) -> None:
        # first registration wins so a duplicate keeps its original description
        self._patterns.setdefault(pattern.source, pattern)

    def register_many(self, patterns: Iterable[CredentialPattern]) -> None:
        for p in patterns:
            self.register(p)

    # ---- queries ----

    @property
    def all_patterns(self) -> List[CredentialPattern]:
        return list(self._patterns.values())

    def get(self, source: str) -> Optional[CredentialPattern]:
        return self._patterns.get(source)

    def __len__(self) -> int:
        return len(self._patterns)

    # ---- compilation ----

    def compile_all(self) -> Dict[str, re.Pattern[str]]:
        """Compile every pattern. Raises ConfigError on the first bad one."""
        compiled: Dict[str, re.Pattern[str]] = {}
        for p in self._patterns.values():
            try:
                cp = p.compiled
            except re.error as exc:
                raise ConfigError(f"Invalid pattern {p.source!r}: {exc}") from exc
            if cp.groups < 2:
                raise ConfigError(
                    f"Pattern {p.source!r} needs two capture groups (label, value), "
                    f"found {cp.groups}"
                )
            compiled[p.source] = cp
        return compiled

    # ---- custom pattern loading ----

    def load_custom_patterns(self, directory: Path) -> int:
        """Load YAML pattern files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_patterns(path)
        return count

    def _load_yaml_patterns(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load patterns from {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if isinstance(entry, str):
                self.register(CredentialPattern(source=entry))
            elif isinstance(entry, dict) and "pattern" in entry:
                self.register(
                    CredentialPattern(
                        source=str(entry["pattern"]),
                        description=str(entry.get("description", "")),
                    )
                )
            else:
                raise ConfigError(f"{path}: pattern entries need a 'pattern' key")
            count += 1
        return count


def build_registry(config: CredScanConfig, root: Path) -> PatternRegistry:
    """Create a populated registry: defaults, then extras, then custom files."""
    registry = PatternRegistry()
    registry.register_many(
        CredentialPattern(source=s, description="default") for s in config.patterns.default
    )
    registry.register_many(CredentialPattern(source=s) for s in config.patterns.extra)

    custom_dir = root / CUSTOM_PATTERN_DIR
    registry.load_custom_patterns(custom_dir)

    # Fail fast on a broken pattern before any file is touched
    registry.compile_all()
    return registry
