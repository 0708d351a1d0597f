"""
Package: transport
Description: HTTP request execution and retry policy for the queued client.
"""

from .executor import TransportExecutor
from .retry import RetryController, is_retryable

__all__ = ["TransportExecutor", "RetryController", "is_retryable"]
