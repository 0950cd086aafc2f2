"""Configuration loading, schema, and defaults."""

from credscan.config.loader import ConfigError, load_config, validate_config
from credscan.config.schema import CHECK_MODES, CheckMode, CredScanConfig

__all__ = [
    "CHECK_MODES",
    "CheckMode",
    "ConfigError",
    "CredScanConfig",
    "load_config",
    "validate_config",
]
