"""S2I build pipeline demo service."""

__version__ = "1.0.0"
