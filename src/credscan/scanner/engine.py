"""Core scan engine: discovery, worker pool and fan-in wired together.

Exception safety: ScanError messages never quote file content, and a fatal
walk error still hands back everything aggregated before it happened.
"""

from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Optional

from credscan.config.loader import ConfigError
from credscan.config.schema import CredScanConfig
from credscan.findings.aggregator import ResultAggregator
from credscan.findings.models import ScanResult
from credscan.patterns.registry import PatternRegistry, build_registry
from credscan.scanner.discovery import FileDiscovery, WalkError, batched
from credscan.scanner.heuristic import SecretClassifier
from credscan.scanner.profile import Profile, ProfileError, load_profile
from credscan.scanner.scheduler import BatchScheduler, ScanContext


class ScanError(Exception):
    """Fatal-to-run error. ``result`` holds whatever was aggregated before it."""

    def __init__(self, message: str, result: Optional[ScanResult] = None) -> None:
        super().__init__(message)
        self.result = result if result is not None else ScanResult()


def build_context(config: CredScanConfig, registry: PatternRegistry) -> ScanContext:
    """Freeze the run-scoped settings every worker task needs."""
    classifier = SecretClassifier.from_settings(
        config.check.mode,
        config.words_path,
        min_length=config.check.min_length,
        entropy_threshold=config.check.entropy_threshold,
    )
    return ScanContext(
        patterns=registry.compile_all(),
        classifier=classifier,
        profile_path=config.profile.path,
        debug=config.output.debug,
    )


def build_discovery(config: CredScanConfig, sink: ResultAggregator) -> FileDiscovery:
    try:
        return FileDiscovery(
            config.discovery,
            profile_path=config.profile.path,
            debug=config.output.debug,
            log=sink.log,
        )
    except re.error as exc:
        raise ConfigError(f"Invalid file filter pattern: {exc}") from exc


def _warn_masked_profile(config: CredScanConfig, sink: ResultAggregator) -> None:
    if not config.profile.path:
        return
    try:
        profile = Profile(load_profile(config.profile.path))
    except ProfileError:
        # Every task reports the load failure itself
        return
    masked = profile.masked_signatures()
    if masked:
        sink.log(
            f"[WARN] profile {config.profile.path} holds {masked} masked finding(s) "
            "that can not be matched; save the profile with --debug"
        )


def scan(
    root: str,
    config: CredScanConfig,
    registry: Optional[PatternRegistry] = None,
) -> ScanResult:
    """Scan the tree at *root* and return the aggregated ScanResult.

    Raises ConfigError before touching any file if a pattern or filter is
    invalid, and ScanError if *root* cannot be walked.
    """
    start = time.perf_counter()

    if registry is None:
        base = Path(root)
        registry = build_registry(config, base if base.is_dir() else Path.cwd())
    ctx = build_context(config, registry)

    sink = ResultAggregator()
    discovery = build_discovery(config, sink)
    sink.start()

    if ctx.classifier.dictionary_missing:
        sink.log(
            f"[WARN] word list {config.words_path} not available; "
            f"mode {config.check.mode} runs without the dictionary check"
        )

    fatal: Optional[WalkError] = None
    try:
        _warn_masked_profile(config, sink)
        with BatchScheduler(ctx, sink, workers=config.scan.workers) as scheduler:
            for batch in batched(discovery.walk(root), config.discovery.batch_size):
                scheduler.submit(batch)
    except WalkError as exc:
        fatal = exc
    finally:
        result = sink.close()

    result.files_scanned = discovery.files_scanned
    result.scan_duration_ms = round((time.perf_counter() - start) * 1000, 2)

    if fatal is not None:
        raise ScanError(str(fatal), result=result) from fatal
    return result
