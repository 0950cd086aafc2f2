"""Shared test fixtures: sample trees, word lists, configs."""

from __future__ import annotations

from pathlib import Path

import pytest

from credscan.config.schema import CredScanConfig

WORDS = ["password", "secret", "token", "word", "hello", "changeme", "admin"]


@pytest.fixture
def words_file(tmp_path: Path) -> Path:
    """A tiny English word list."""
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS) + "\n")
    return path


@pytest.fixture
def config(words_file: Path) -> CredScanConfig:
    """Default config pointed at the tiny word list, two workers."""
    cfg = CredScanConfig()
    cfg.check.words_file = str(words_file)
    cfg.scan.workers = 2
    return cfg


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """One real-looking secret, one dictionary-word value."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "config.yaml").write_text("db:\n  password: Sup3rSecret!\n")
    (root / "readme.md").write_text("# Readme\n\nSet password: word in dev.\n")
    return root


@pytest.fixture
def noisy_tree(tmp_path: Path) -> Path:
    """A tree exercising every discovery filter."""
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "src" / "app.py").write_text('API_KEY = "x"\ntoken: ab12cd34ef\n')
    (root / "src" / "settings.py").write_text("secret: s3cr3tV4lue\n")
    (root / ".git" / "config").write_text("token = gitT0kenValue1\n")
    (root / "node_modules" / "lib" / "index.js").write_text("var token='np9m0dul3s';\n")
    (root / "archive.zip").write_bytes(b"PK\x03\x04token=zip9value")
    (root / "logo.dat").write_bytes(b"\x89PNG\x00\x00token=binary1value")
    (root / "bundle.min.js").write_text("var token='m1n1f13dT0ken';" + "x" * 1200 + "\n")
    return root


@pytest.fixture
def make_files():
    """Factory writing *count* files containing *line* under *root*."""

    def _make(root: Path, count: int, line: str = "token=abc123\n") -> list[Path]:
        root.mkdir(parents=True, exist_ok=True)
        paths = []
        for i in range(count):
            p = root / f"file_{i:03d}.txt"
            p.write_text(line)
            paths.append(p)
        return paths

    return _make
