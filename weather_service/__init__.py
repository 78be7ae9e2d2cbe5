"""Weather Service - periodic temperature collector with a last-value read API."""

__version__ = "1.0.0"
