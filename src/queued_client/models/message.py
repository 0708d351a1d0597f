"""
Module: message.py
Description: Message models exchanged with callers of the queue client.

Key Components:
- OutgoingMessage: Raw bytes message to push
- TypedOutgoingMessage: Message whose contents are msgpack-encoded on push
- PolledMessage: A delivered message with its id and current poll tag

Dependencies: pydantic, typing
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ContentsT = TypeVar("ContentsT")


class OutgoingMessage(BaseModel):
    """
    A message to push with raw binary contents.

    Attributes:
        contents: Opaque message bytes
        visibility_timeout_secs: Seconds before the message first becomes
            visible; fractions are truncated when sent
    """

    model_config = ConfigDict(frozen=True)

    contents: bytes = Field(..., description="Opaque message bytes")
    visibility_timeout_secs: float = Field(
        ...,
        description="Initial invisibility window in seconds"
    )


class TypedOutgoingMessage(BaseModel):
    """A message to push whose contents are encoded with the wire codec."""

    model_config = ConfigDict(frozen=True)

    contents: Any = Field(..., description="Any msgpack-encodable value")
    visibility_timeout_secs: float = Field(
        ...,
        description="Initial invisibility window in seconds"
    )


class PolledMessage(BaseModel, Generic[ContentsT]):
    """
    A message delivered by a poll.

    The poll tag is a fencing token: it must be presented to update or
    delete the message, and stops being valid as soon as the message is
    polled again or updated.

    Attributes:
        id: Server-assigned message identifier, unique within the queue
        poll_tag: Poll tag issued with this delivery
        contents: Raw bytes, or the decoded value for typed polls
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Message identifier")
    poll_tag: int = Field(..., ge=0, description="Current poll tag")
    contents: ContentsT = Field(..., description="Message contents")
