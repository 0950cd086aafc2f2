"""credscan: find leaked credentials in source trees."""

__version__ = "0.3.0"
