"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the models used by the queued client:
- OutgoingMessage / TypedOutgoingMessage: messages to push
- PolledMessage: a delivered message with its poll tag
- QueueInfo, HealthStatus: server administration responses
- Response schemas used to validate decoded bodies
"""

from .message import OutgoingMessage, PolledMessage, TypedOutgoingMessage
from .response import (
    HealthStatus,
    ListQueuesResponse,
    PollResponse,
    PushResponse,
    QueueInfo,
    UpdateResponse,
    parse_response,
)

__all__ = [
    "OutgoingMessage",
    "TypedOutgoingMessage",
    "PolledMessage",
    "QueueInfo",
    "HealthStatus",
    "ListQueuesResponse",
    "PollResponse",
    "PushResponse",
    "UpdateResponse",
    "parse_response",
]
