"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

CheckMode = Literal[
    "letter",
    "digit",
    "special",
    "letter+digit",
    "letter+word",
    "letter+digit+word",
    "all",
]

CHECK_MODES: tuple[str, ...] = (
    "letter",
    "digit",
    "special",
    "letter+digit",
    "letter+word",
    "letter+digit+word",
    "all",
)

OUTPUT_FORMATS: tuple[str, ...] = ("json", "terminal")

DEFAULT_PATTERN = (
    r"""(?i)['"]?(password|passwd|token|api_key|secret)['"]?[=:\s][\s]*?['"]?([^'"\s]+)['"]?"""
)

DEFAULT_EXCLUDE = (
    r"^(\.git|.*\.zip|.*\.gz|.*\.xz|.*\.bz2|.*\.zstd|.*\.7z|.*\.dll|.*\.iso|.*\.bin|.*\.tar|.*\.exe)$"
)

DEFAULT_WORDS_URL = "https://raw.githubusercontent.com/dwyl/english-words/master/words.txt"


def uses_dictionary(mode: str) -> bool:
    """Return True if *mode* needs the English word list."""
    return mode.endswith("+word")


@dataclass
class DiscoveryConfig:
    include: str = ".*"  # filename regex
    exclude: str = ""  # filename / directory-name regex, empty = off
    default_exclude: str = DEFAULT_EXCLUDE
    path_exclude: str = ""  # full-path regex, empty = off
    skip_binary: bool = True
    batch_size: int = 5


@dataclass
class PatternsConfig:
    default: List[str] = field(default_factory=lambda: [DEFAULT_PATTERN])
    extra: List[str] = field(default_factory=list)


@dataclass
class CheckConfig:
    mode: CheckMode = "letter+digit+word"
    words_file: str = "~/cred-detect-word.txt"
    words_url: str = DEFAULT_WORDS_URL
    min_length: int = 4
    entropy_threshold: float = 0.0  # 0 = entropy check off


@dataclass
class ProfileConfig:
    path: str = ""  # previous run to suppress against
    save: str = ""  # write this run's result set here


@dataclass
class OutputConfig:
    format: Literal["json", "terminal"] = "json"
    debug: bool = False  # unmasked values + raw match trace


@dataclass
class ScanConfig:
    workers: Optional[int] = None  # None = os.cpu_count()


@dataclass
class CredScanConfig:
    version: str = "1.0"
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)

    @property
    def words_path(self) -> Path:
        return Path(self.check.words_file).expanduser()
