"""
Package: config
Description: Client configuration models.
"""

from .settings import LoggingSettings, QueuedSettings, TlsSettings

__all__ = ["LoggingSettings", "QueuedSettings", "TlsSettings"]
