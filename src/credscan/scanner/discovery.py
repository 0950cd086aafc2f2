"""Directory walk with name, path and binary-content filters."""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from credscan.config.schema import DiscoveryConfig

BINARY_SAMPLE_SIZE = 8192
_TEXT_CHARS = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)) - {0x7F})


class WalkError(Exception):
    """Raised when the scan root itself cannot be walked."""


@dataclass(frozen=True)
class FileInfo:
    path: str
    name: str
    size: int
    mode: int


# path -> FileInfo, at most batch_size entries
FileBatch = Dict[str, FileInfo]

LogFn = Callable[[str], None]


def is_binary_file(path: str, sample_size: int = BINARY_SAMPLE_SIZE) -> bool:
    """Sniff the lead bytes of *path*. Raises OSError if it cannot be read."""
    with open(path, "rb") as f:
        chunk = f.read(sample_size)
    if not chunk:
        return False
    if b"\x00" in chunk:
        return True
    non_text = sum(1 for byte in chunk if byte not in _TEXT_CHARS)
    return non_text / len(chunk) > 0.30


def _compile_optional(pattern: str) -> Optional[re.Pattern[str]]:
    return re.compile(pattern) if pattern else None


class FileDiscovery:
    """Depth-first walk yielding the regular files that pass every filter.

    ``files_scanned`` counts every non-directory entry the walk reached,
    including the ones a filter then rejected.
    """

    def __init__(
        self,
        config: DiscoveryConfig,
        *,
        profile_path: str = "",
        debug: bool = False,
        log: Optional[LogFn] = None,
    ) -> None:
        # Invalid regexes surface here as re.error; callers translate it
        self.include = re.compile(config.include or ".*")
        self.exclude = _compile_optional(config.exclude)
        self.default_exclude = _compile_optional(config.default_exclude)
        self.path_exclude = _compile_optional(config.path_exclude)
        self.skip_binary = config.skip_binary
        self.profile_path = os.path.abspath(profile_path) if profile_path else ""
        self.debug = debug
        self._log: LogFn = log or (lambda _msg: None)
        self.files_scanned = 0

    # ---- name filters ----

    def _name_excluded(self, name: str) -> bool:
        if self.exclude is not None and self.exclude.search(name):
            return True
        return self.default_exclude is not None and bool(self.default_exclude.search(name))

    def _path_excluded(self, path: str) -> bool:
        return self.path_exclude is not None and bool(self.path_exclude.search(path))

    def prune_dir(self, path: str, name: str) -> bool:
        """True if the directory at *path* must not be descended into."""
        if self._path_excluded(path):
            self._log(f"SKIP PATH {path}")
            return True
        if self._name_excluded(name):
            self._log(f"SKIP DIR {path}")
            return True
        return False

    def accept_file(self, path: str, name: str) -> Optional[FileInfo]:
        """Apply the file filters to one non-directory entry."""
        if self._path_excluded(path):
            self._log(f"SKIP PATH {path}")
            return None
        self.files_scanned += 1
        if self.profile_path and os.path.abspath(path) == self.profile_path:
            return None
        if not self.include.search(name) or self._name_excluded(name):
            return None
        try:
            st = os.lstat(path)
        except OSError as exc:
            self._log(f"[WARN] stat {path}: {exc}")
            return None
        if not stat.S_ISREG(st.st_mode):
            return None
        if self.skip_binary:
            try:
                if is_binary_file(path):
                    self._log(f"SKIP BIN {path}")
                    return None
            except OSError as exc:
                # An unreadable sniff is not proof of binary content
                self._log(f"[WARN] binary check {path}: {exc}")
        if self.debug:
            self._log(f"Add file: {path}")
        return FileInfo(path=path, name=name, size=st.st_size, mode=st.st_mode)

    # ---- walk ----

    def _on_walk_error(self, exc: OSError) -> None:
        self._log(f"[WARN] {exc}")

    def walk(self, root: str) -> Iterator[FileInfo]:
        """Yield accepted files under *root*. Raises WalkError if *root* is unusable."""
        try:
            st = os.stat(root)
        except OSError as exc:
            raise WalkError(f"cannot scan {root}: {exc.strerror or exc}") from exc

        if not stat.S_ISDIR(st.st_mode):
            info = self.accept_file(root, os.path.basename(root))
            if info is not None:
                yield info
            return

        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            # A symlink to a directory is a non-regular entry, not a subtree
            links = [d for d in dirnames if os.path.islink(os.path.join(dirpath, d))]
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in links and not self.prune_dir(os.path.join(dirpath, d), d)
            )
            for name in sorted(filenames + links):
                info = self.accept_file(os.path.join(dirpath, name), name)
                if info is not None:
                    yield info


def batched(files: Iterable[FileInfo], batch_size: int) -> Iterator[FileBatch]:
    """Group *files* into batches of at most *batch_size*."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    batch: FileBatch = {}
    for info in files:
        if len(batch) >= batch_size:
            yield batch
            batch = {}
        batch[info.path] = info
    if batch:
        yield batch
