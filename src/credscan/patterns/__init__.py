"""Credential patterns: model and registry."""

from credscan.patterns.models import CredentialPattern
from credscan.patterns.registry import PatternRegistry, build_registry

__all__ = ["CredentialPattern", "PatternRegistry", "build_registry"]
