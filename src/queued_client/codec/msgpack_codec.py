"""
Module: msgpack_codec.py
Description: MessagePack wire codec.

Encodes request bodies and message contents, and decodes response
bodies and polled message contents. Binary values of any buffer type
(bytes, bytearray, memoryview) encode as msgpack bin and always decode
back to bytes. Timezone-aware datetimes use the msgpack timestamp
extension; naive datetimes are taken to be UTC.

Decoding errors are never recovered from: malformed input raises
QueuedCodecError straight to the caller.
"""

from datetime import datetime, timezone
from typing import Any

import msgpack

from queued_client.errors import QueuedCodecError


def _default(obj: Any) -> Any:
    """Encode naive datetimes as UTC timestamps; reject any other unknown type."""
    if isinstance(obj, datetime) and obj.tzinfo is None:
        return msgpack.Timestamp.from_datetime(obj.replace(tzinfo=timezone.utc))
    raise TypeError(f"Cannot encode {type(obj).__name__} value as msgpack")


def encode(value: Any) -> bytes:
    """
    Encode a value to MessagePack bytes.

    Args:
        value: None, bool, int, float, str, datetime, bytes-like, list/tuple,
            or dict with str or int keys, nested arbitrarily

    Returns:
        Encoded bytes

    Raises:
        QueuedCodecError: If the value contains an unsupported type
    """
    try:
        return msgpack.packb(value, use_bin_type=True, datetime=True, default=_default)
    except (TypeError, ValueError, OverflowError) as e:
        raise QueuedCodecError(f"Failed to encode msgpack value: {e}") from e


def decode(data: bytes) -> Any:
    """
    Decode MessagePack bytes into Python values.

    Args:
        data: A complete msgpack document

    Returns:
        Decoded value; bin values are bytes, timestamps are UTC datetimes

    Raises:
        QueuedCodecError: If the data is not a single well-formed document
    """
    try:
        return msgpack.unpackb(
            bytes(data),
            raw=False,
            timestamp=3,
            strict_map_key=False,
        )
    except (ValueError, TypeError, msgpack.UnpackException) as e:
        raise QueuedCodecError(f"Failed to decode msgpack payload: {e}") from e
