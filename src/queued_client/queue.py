"""
Module: queue.py
Description: Message operations scoped to one named queue.

Translates between message models and the queued wire payloads for
push, poll, update and delete. Outbound payloads are always built from
an explicit list of fields, never from caller objects as a whole, so
extra attributes on caller objects are never sent.
"""

import math
from typing import TYPE_CHECKING, Any, List, Sequence
from urllib.parse import quote

from queued_client.codec import decode, encode
from queued_client.models.message import OutgoingMessage, PolledMessage, TypedOutgoingMessage
from queued_client.models.response import PollResponse, PushResponse, UpdateResponse, parse_response
from queued_client.utils.logger import get_logger

if TYPE_CHECKING:
    from queued_client.client import QueuedClient

logger = get_logger(__name__)


def queue_path(name: str) -> str:
    """Path prefix of a queue, with the name fully percent-encoded."""
    return f"/queue/{quote(name, safe='')}"


def visibility_timeout(secs: float) -> int:
    """
    Whole seconds sent for a visibility timeout.

    Fractions are floored, never rounded up. Negative values are passed
    through and left for the server to reject.
    """
    return math.floor(secs)


class QueueClient:
    """
    Handle for one queue on a queued server.

    Created by QueuedClient.queue(); holds no state besides the owning
    client and the queue name.
    """

    def __init__(self, svc: "QueuedClient", name: str):
        self.svc = svc
        self.name = name

    @property
    def path(self) -> str:
        return queue_path(self.name)

    def __repr__(self) -> str:
        return f"QueueClient(name={self.name!r})"

    async def poll_messages_raw(
        self,
        count: int,
        visibility_timeout_secs: float
    ) -> List[PolledMessage[bytes]]:
        """
        Poll up to `count` visible messages, leaving their contents as bytes.

        Each returned message becomes invisible for the given timeout and
        carries a fresh poll tag; earlier poll tags for it stop working.

        Args:
            count: Maximum number of messages to receive
            visibility_timeout_secs: Seconds the messages stay invisible

        Returns:
            Polled messages, possibly fewer than `count`
        """
        raw = await self.svc.raw_request("POST", f"{self.path}/messages/poll", {
            "count": count,
            "visibility_timeout_secs": visibility_timeout(visibility_timeout_secs),
        })
        parsed = parse_response(PollResponse, raw)
        logger.debug("Polled messages", queue=self.name, count=len(parsed.messages))
        return [
            PolledMessage[bytes](contents=m.contents, id=m.id, poll_tag=m.poll_tag)
            for m in parsed.messages
        ]

    async def poll_messages(
        self,
        count: int,
        visibility_timeout_secs: float
    ) -> List[PolledMessage[Any]]:
        """Poll messages and decode each one's contents with the wire codec."""
        messages = await self.poll_messages_raw(count, visibility_timeout_secs)
        return [
            PolledMessage[Any](contents=decode(m.contents), id=m.id, poll_tag=m.poll_tag)
            for m in messages
        ]

    async def push_messages_raw(self, messages: Sequence[OutgoingMessage]) -> List[int]:
        """
        Push messages with raw byte contents.

        Args:
            messages: Messages to push; only `contents` and
                `visibility_timeout_secs` are read from each

        Returns:
            Server-assigned ids, in the same order as `messages`
        """
        raw = await self.svc.raw_request("POST", f"{self.path}/messages/push", {
            "messages": [
                {
                    "contents": m.contents,
                    "visibility_timeout_secs": visibility_timeout(m.visibility_timeout_secs),
                }
                for m in messages
            ],
        })
        ids = parse_response(PushResponse, raw).ids
        logger.debug("Pushed messages", queue=self.name, count=len(ids))
        return ids

    async def push_messages(self, messages: Sequence[TypedOutgoingMessage]) -> List[int]:
        """Push messages after encoding each one's contents with the wire codec."""
        return await self.push_messages_raw([
            OutgoingMessage(
                contents=encode(m.contents),
                visibility_timeout_secs=m.visibility_timeout_secs,
            )
            for m in messages
        ])

    async def update_message(self, message: Any, new_visibility_timeout_secs: float) -> int:
        """
        Change a polled message's visibility timeout.

        Args:
            message: Object with `id` and `poll_tag` attributes, such as a
                PolledMessage
            new_visibility_timeout_secs: Seconds from now until the message
                becomes visible again

        Returns:
            The new poll tag; the one passed in is no longer valid

        Raises:
            QueuedApiError: If the poll tag is stale or the message is gone
        """
        raw = await self.svc.raw_request("POST", f"{self.path}/messages/update", {
            "id": message.id,
            "poll_tag": message.poll_tag,
            "visibility_timeout_secs": visibility_timeout(new_visibility_timeout_secs),
        })
        return parse_response(UpdateResponse, raw).new_poll_tag

    async def delete_messages(self, messages: Sequence[Any]) -> None:
        """
        Delete polled messages.

        Args:
            messages: Objects with `id` and `poll_tag` attributes
        """
        await self.svc.raw_request("POST", f"{self.path}/messages/delete", {
            "messages": [{"id": m.id, "poll_tag": m.poll_tag} for m in messages],
        })
        logger.debug("Deleted messages", queue=self.name, count=len(messages))
