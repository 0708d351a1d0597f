"""
Queued Client Library

Async Python client for the queued visibility-timeout message queue.

Usage:
    from queued_client import QueuedClient, QueuedSettings, OutgoingMessage

    client = QueuedClient(QueuedSettings(endpoint="https://queued.local:3333", api_key="..."))
    jobs = client.queue("jobs")
    await jobs.push_messages_raw([OutgoingMessage(contents=b"hi", visibility_timeout_secs=0)])
    for msg in await jobs.poll_messages_raw(10, visibility_timeout_secs=30):
        ...
        await jobs.delete_messages([msg])
"""

from .client import QueuedClient
from .config import QueuedSettings, TlsSettings
from .errors import (
    QueuedApiError,
    QueuedCodecError,
    QueuedError,
    QueuedInvalidUrlError,
    QueuedResponseValidationError,
    QueuedUnauthorizedError,
)
from .models import HealthStatus, OutgoingMessage, PolledMessage, QueueInfo, TypedOutgoingMessage
from .queue import QueueClient

__version__ = "0.1.0"
__all__ = [
    "QueuedClient",
    "QueueClient",
    "QueuedSettings",
    "TlsSettings",
    "OutgoingMessage",
    "TypedOutgoingMessage",
    "PolledMessage",
    "QueueInfo",
    "HealthStatus",
    "QueuedError",
    "QueuedApiError",
    "QueuedUnauthorizedError",
    "QueuedInvalidUrlError",
    "QueuedCodecError",
    "QueuedResponseValidationError",
]
