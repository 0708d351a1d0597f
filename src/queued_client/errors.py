"""
Module: errors.py
Description: Exception types raised by the queued client.

Every failure surfaced to callers is one of these types, or an
httpx.TransportError for network-level faults, so callers can tell
apart what is worth retrying from what is a permanent defect.
"""

import json
from typing import Any, Optional


class QueuedError(Exception):
    """Base error for the queued client."""

    pass


class QueuedInvalidUrlError(QueuedError, ValueError):
    """The configured endpoint and request path do not form a valid URL."""

    pass


class QueuedUnauthorizedError(QueuedError):
    """The server rejected the request with HTTP 401."""

    def __init__(self):
        super().__init__("Authorization failed")


class QueuedApiError(QueuedError):
    """
    The server returned a non-2xx status.

    Attributes:
        status: HTTP status code
        error: Value of the body's `error` field, or the whole body
        error_details: Value of the body's `error_details` field, if any
    """

    def __init__(self, status: int, error: Any = None, error_details: Any = None):
        self.status = status
        self.error = error
        self.error_details = error_details
        message = f"Request to queued failed with status {status}: {error}"
        if error_details is not None:
            message += " " + json.dumps(error_details, indent=2, default=repr)
        super().__init__(message)

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500


class QueuedCodecError(QueuedError):
    """A payload could not be encoded to or decoded from MessagePack."""

    pass


class QueuedResponseValidationError(QueuedError):
    """A decoded response body did not have the expected shape."""

    pass
