"""Load and merge configuration from .credscan.toml and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from credscan.config.schema import (
    CHECK_MODES,
    OUTPUT_FORMATS,
    CheckConfig,
    CredScanConfig,
    DiscoveryConfig,
    OutputConfig,
    PatternsConfig,
    ProfileConfig,
    ScanConfig,
)

CONFIG_FILENAME = ".credscan.toml"


class ConfigError(Exception):
    """Raised when config is malformed, unreadable or invalid."""


def config_search_path(start_dir: Path) -> List[Path]:
    """Candidate config files, highest priority first."""
    return [
        start_dir / CONFIG_FILENAME,
        Path.home() / ".config" / "credscan.toml",
        Path("/etc/credscan/credscan.toml"),
    ]


def find_config_file(start_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    for candidate in config_search_path(start_dir):
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _positive_int(val: str) -> Optional[int]:
    try:
        n = int(val)
    except ValueError:
        return None
    return n if n >= 1 else None


def _merge_env_overrides(cfg: CredScanConfig) -> None:
    """Apply CREDSCAN_* environment variable overrides."""
    if val := os.environ.get("CREDSCAN_CHECK_MODE"):
        if val in CHECK_MODES:
            cfg.check.mode = val  # type: ignore[assignment]
    if val := os.environ.get("CREDSCAN_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CREDSCAN_PROFILE"):
        cfg.profile.path = val
    if val := os.environ.get("CREDSCAN_EXCLUDE"):
        cfg.discovery.exclude = val
    if val := os.environ.get("CREDSCAN_PATH_EXCLUDE"):
        cfg.discovery.path_exclude = val
    if val := os.environ.get("CREDSCAN_BATCH_SIZE"):
        if (n := _positive_int(val)) is not None:
            cfg.discovery.batch_size = n
    if val := os.environ.get("CREDSCAN_WORKERS"):
        if (n := _positive_int(val)) is not None:
            cfg.scan.workers = n


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def validate_config(cfg: CredScanConfig) -> None:
    """Reject values the scanner cannot run with."""
    if cfg.check.mode not in CHECK_MODES:
        raise ConfigError(
            f"Unknown check mode {cfg.check.mode!r} (expected one of: {', '.join(CHECK_MODES)})"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format {cfg.output.format!r}")
    if cfg.discovery.batch_size < 1:
        raise ConfigError("batch_size must be at least 1")
    if cfg.scan.workers is not None and cfg.scan.workers < 1:
        raise ConfigError("workers must be at least 1")
    if cfg.check.min_length < 0:
        raise ConfigError("min_length must not be negative")
    if cfg.check.entropy_threshold < 0:
        raise ConfigError("entropy_threshold must not be negative")


def load_config(
    start_dir: Path,
    config_override: Optional[str] = None,
) -> CredScanConfig:
    """Load, validate, and return a CredScanConfig."""
    config_path = find_config_file(start_dir, config_override)

    if config_path is None:
        cfg = CredScanConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = CredScanConfig(
                version=str(raw.get("version", "1.0")),
                discovery=_build_section(raw, DiscoveryConfig, "discovery"),
                patterns=_build_section(raw, PatternsConfig, "patterns"),
                check=_build_section(raw, CheckConfig, "check"),
                profile=_build_section(raw, ProfileConfig, "profile"),
                output=_build_section(raw, OutputConfig, "output"),
                scan=_build_section(raw, ScanConfig, "scan"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid value in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    validate_config(cfg)
    return cfg
