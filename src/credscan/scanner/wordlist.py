"""English word list used by the ``*+word`` check modes."""

from __future__ import annotations

import functools
import os
import tempfile
from pathlib import Path
from typing import FrozenSet, Optional

import requests


class WordlistError(Exception):
    """Raised when the word list cannot be downloaded or stored."""


@functools.lru_cache(maxsize=8)
def _load_words_cached(path: str, mtime_ns: int) -> FrozenSet[str]:
    with open(path, encoding="utf-8", errors="replace") as f:
        return frozenset(w.strip().lower() for w in f if w.strip())


def load_words(path: Path | str | None) -> Optional[FrozenSet[str]]:
    """Return the lowercased word set at *path*, or None if it is unusable."""
    if not path:
        return None
    p = Path(path).expanduser()
    try:
        st = p.stat()
        return _load_words_cached(str(p), st.st_mtime_ns)
    except OSError:
        return None


def ensure_wordlist(path: Path | str, url: str, timeout: float = 30) -> Path:
    """Download the word list to *path* unless it already exists."""
    dest = Path(path).expanduser()
    if dest.is_file():
        return dest

    try:
        resp = requests.get(url, stream=True, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise WordlistError(f"Failed to download word list from {url}: {exc}") from exc

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".words-", dir=dest.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                for chunk in resp.iter_content(chunk_size=65536):
                    f.write(chunk)
            os.replace(tmp_name, dest)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except (OSError, requests.RequestException) as exc:
        raise WordlistError(f"Failed to write word list to {dest}: {exc}") from exc
    finally:
        resp.close()
    return dest
