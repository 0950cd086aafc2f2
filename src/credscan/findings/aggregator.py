"""Fan-in of worker messages into one deduplicated result set.

A single consumer thread owns the ScanResult; workers only ever talk to it
through the message queue, so the result set needs no locking.
"""

from __future__ import annotations

import queue
import threading
from typing import Optional

from credscan.findings.models import (
    CountMessage,
    Finding,
    FindingMessage,
    LogMessage,
    Message,
    ScanResult,
)

_CLOSE = object()


class ResultAggregator:
    """Single-consumer sink for FindingMessage / LogMessage / CountMessage."""

    def __init__(self, maxsize: int = 0) -> None:
        self.result = ScanResult()
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._thread: Optional[threading.Thread] = None

    # ---- producer side ----

    def send(self, message: Message) -> None:
        """Hand a message to the consumer. Safe from any thread."""
        self._queue.put(message)

    def log(self, text: str) -> None:
        self.send(LogMessage(text))

    # ---- consumer side ----

    def handle(self, message: Message) -> None:
        """Apply one message to the result set."""
        if isinstance(message, FindingMessage):
            self._add_finding(message.finding)
        elif isinstance(message, LogMessage):
            self.result.logs.append(message.text)
        elif isinstance(message, CountMessage):
            self.result.files_processed += message.delta
        else:
            raise TypeError(f"unexpected message type: {type(message).__name__}")

    def _add_finding(self, finding: Finding) -> None:
        if not finding.matches:
            return
        sig = finding.signature
        by_sig = self.result.findings.setdefault(finding.file, {})
        existing = by_sig.get(sig)
        if existing is None:
            by_sig[sig] = finding
            return
        # Masked values can make two credentials of one file share a key;
        # keep every sighting rather than dropping the earlier one.
        for n in finding.line_numbers:
            if n not in existing.line_numbers:
                existing.line_numbers.append(n)
        existing.line_numbers.sort()
        existing.matches.extend(finding.matches)
        existing.pattern = finding.pattern

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _CLOSE:
                break
            self.handle(item)  # type: ignore[arg-type]

    # ---- lifecycle ----

    def start(self) -> "ResultAggregator":
        self._thread = threading.Thread(target=self._run, name="credscan-aggregator", daemon=True)
        self._thread.start()
        return self

    def close(self) -> ScanResult:
        """Signal that every producer is done, drain the queue, return the result."""
        if self._thread is None:
            # Never started: drain synchronously
            while not self._queue.empty():
                item = self._queue.get_nowait()
                if item is not _CLOSE:
                    self.handle(item)  # type: ignore[arg-type]
            return self.result
        self._queue.put(_CLOSE)
        self._thread.join()
        self._thread = None
        return self.result
