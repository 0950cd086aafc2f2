"""Batch scheduler: a fixed worker pool scanning file batches.

Each batch is scanned by one task that owns it exclusively. Tasks only talk
to the outside world through the ResultAggregator's queue.
"""

from __future__ import annotations

import os
import re
import traceback
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from credscan.findings.aggregator import ResultAggregator
from credscan.findings.models import CountMessage, FindingMessage
from credscan.findings.redactor import mask_matches
from credscan.scanner.discovery import FileBatch
from credscan.scanner.heuristic import SecretClassifier
from credscan.scanner.matcher import (
    PatternMatcher,
    group_sightings,
    is_minified_js,
    split_lines,
)
from credscan.scanner.profile import Profile, ProfileError, load_profile


@dataclass(frozen=True)
class ScanContext:
    """Immutable run-scoped settings handed to every task."""

    patterns: Mapping[str, re.Pattern[str]]
    classifier: SecretClassifier = field(default_factory=SecretClassifier)
    profile_path: str = ""
    debug: bool = False


def _load_task_profile(ctx: ScanContext, sink: ResultAggregator) -> Profile:
    if not ctx.profile_path:
        return Profile.empty()
    try:
        return Profile(load_profile(ctx.profile_path))
    except ProfileError as exc:
        sink.log(f"[WARN] can not load profile {ctx.profile_path}: {exc}")
        return Profile.empty()


def _trace_hook(sink: ResultAggregator, path: str):
    def hook(idx: int, label: str, value: str) -> None:
        sink.log(f"{path}:{idx} - {label}: {value}")

    return hook


def scan_batch(batch: FileBatch, ctx: ScanContext, sink: ResultAggregator) -> int:
    """Scan every file of *batch*; returns the number of files processed."""
    profile = _load_task_profile(ctx, sink)
    matcher = PatternMatcher(ctx.patterns, ctx.classifier)
    processed = 0

    for path, info in batch.items():
        try:
            with open(path, "rb") as f:
                text = f.read().decode("utf-8", errors="replace")
        except OSError as exc:
            sink.log(f"[ERROR] ReadFile {path}: {exc}")
            continue

        lines = split_lines(text)
        if is_minified_js(info.name, len(lines), info.size):
            if ctx.debug:
                sink.log(f"SKIP MINIFIED {path}")
            continue
        processed += 1

        hook = _trace_hook(sink, path) if ctx.debug else None
        for finding in group_sightings(path, matcher.scan_lines(lines, hook)):
            sig = finding.signature
            masked = mask_matches(finding.matches)
            shown_sig = sig if ctx.debug else masked[0] + masked[1]
            if profile.contains(path, sig):
                sink.log(f"File: {path} - matches {shown_sig} exist in profile, skipping")
                continue
            if not ctx.debug:
                finding.matches = masked
            sink.send(FindingMessage(finding))

    sink.send(CountMessage(processed))
    return processed


def default_workers() -> int:
    return os.cpu_count() or 1


class BatchScheduler:
    """Run ``scan_batch`` for each submitted batch on a bounded thread pool."""

    def __init__(
        self,
        ctx: ScanContext,
        sink: ResultAggregator,
        workers: Optional[int] = None,
    ) -> None:
        self.ctx = ctx
        self.sink = sink
        self.workers = workers or default_workers()
        self._executor = ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="credscan-worker"
        )
        self._futures: List[Future] = []

    def submit(self, batch: FileBatch) -> Future:
        fut = self._executor.submit(scan_batch, batch, self.ctx, self.sink)
        self._futures.append(fut)
        return fut

    @property
    def batches_submitted(self) -> int:
        return len(self._futures)

    def close(self) -> None:
        """Wait for every batch, reporting crashed tasks as log lines."""
        self._executor.shutdown(wait=True)
        for fut in self._futures:
            exc = fut.exception()
            if exc is not None:
                # Never include the exception message: it may quote file content
                frame = traceback.extract_tb(exc.__traceback__)[-1:]
                where = f" at {frame[0].filename}:{frame[0].lineno}" if frame else ""
                self.sink.log(f"[ERROR] batch worker failed: {type(exc).__name__}{where}")

    def __enter__(self) -> "BatchScheduler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
