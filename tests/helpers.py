"""
Module: helpers.py
Description: Constants and helpers shared by queued client tests.
"""

from typing import Any, List

import httpx
import msgpack

ENDPOINT = "https://queued.test"
API_KEY = "Bearer sk_test123456789"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, secs: float) -> None:
        self.delays.append(secs)


def msgpack_body(value: Any) -> dict:
    """Keyword arguments for httpx_mock.add_response() with a msgpack body."""
    return {
        "content": msgpack.packb(value, use_bin_type=True),
        "headers": {"Content-Type": "application/msgpack"},
    }


def request_body(request: httpx.Request) -> Any:
    """Decode the msgpack body of a captured request."""
    return msgpack.unpackb(request.content, raw=False)
