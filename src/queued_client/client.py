"""
Module: client.py
Description: Authenticated client for a queued server.

Owns the endpoint settings, runs every request through the retry
controller and exposes queue administration. Message operations live on
the per-queue handle returned by queue().
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional

from queued_client.codec import encode
from queued_client.config.settings import QueuedSettings
from queued_client.models.response import HealthStatus, ListQueuesResponse, QueueInfo, parse_response
from queued_client.queue import QueueClient, queue_path
from queued_client.transport.executor import TransportExecutor
from queued_client.transport.retry import RetryController
from queued_client.utils.logger import get_logger

logger = get_logger(__name__)


class QueuedClient:
    """
    Client for one queued server.

    Example:
        >>> client = QueuedClient(QueuedSettings(endpoint="https://queued.local", api_key="..."))
        >>> await client.create_queue("jobs")
        >>> ids = await client.queue("jobs").push_messages_raw([...])
    """

    def __init__(
        self,
        settings: QueuedSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the client.

        Args:
            settings: Endpoint, credentials, retry and TLS settings
            sleep: Coroutine function used for backoff between retries
        """
        self.settings = settings
        self.executor = TransportExecutor(settings)
        self.retry = RetryController(settings.max_retries, sleep=sleep)

        logger.info(
            "Queued client initialized",
            endpoint=settings.endpoint,
            max_retries=settings.max_retries,
            authenticated=settings.api_key is not None
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "QueuedClient":
        """Create a client from QUEUED_* environment variables."""
        return cls(QueuedSettings(**overrides))

    def queue(self, name: str) -> QueueClient:
        """Handle for one queue. No request is made until an operation is called."""
        return QueueClient(self, name)

    async def raw_request(self, method: str, path: str, body: Optional[Any] = None) -> Any:
        """
        Send a request to the server, retrying transient failures.

        The URL is resolved and the body encoded once, before the first
        attempt, so errors in either are never retried.

        Args:
            method: HTTP method
            path: Path below the endpoint, starting with "/"
            body: Value to send msgpack-encoded, or None for no body

        Returns:
            Decoded response body
        """
        url = self.executor.resolve_url(path)
        content = encode(body) if body is not None else None
        return await self.retry.run(self.executor.send, method, url, content)

    async def create_queue(self, name: str) -> None:
        """Create an empty queue with the given name."""
        await self.raw_request("PUT", queue_path(name))
        logger.info("Queue created", queue=name)

    async def delete_queue(self, name: str) -> None:
        """Delete a queue and any messages still in it."""
        await self.raw_request("DELETE", queue_path(name))
        logger.info("Queue deleted", queue=name)

    async def list_queues(self) -> List[QueueInfo]:
        """List all queues on the server."""
        raw = await self.raw_request("GET", "/queues")
        return parse_response(ListQueuesResponse, raw).queues

    async def healthz(self) -> HealthStatus:
        """Check that the server is up and report its version."""
        raw = await self.raw_request("GET", "/healthz")
        return parse_response(HealthStatus, raw)
