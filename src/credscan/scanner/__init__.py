"""Scanner: discovery, matching, classification, worker pool."""

from credscan.scanner.discovery import FileDiscovery, FileInfo, WalkError, batched
from credscan.scanner.engine import ScanError, scan
from credscan.scanner.entropy import shannon_entropy
from credscan.scanner.heuristic import SecretClassifier, is_likely_secret
from credscan.scanner.matcher import PatternMatcher, Sighting
from credscan.scanner.profile import Profile, ProfileError, load_profile
from credscan.scanner.scheduler import BatchScheduler, ScanContext, scan_batch

__all__ = [
    "BatchScheduler",
    "FileDiscovery",
    "FileInfo",
    "PatternMatcher",
    "Profile",
    "ProfileError",
    "ScanContext",
    "ScanError",
    "SecretClassifier",
    "Sighting",
    "WalkError",
    "batched",
    "is_likely_secret",
    "load_profile",
    "scan",
    "scan_batch",
    "shannon_entropy",
]
