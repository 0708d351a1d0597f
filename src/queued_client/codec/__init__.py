"""
Package: codec
Description: MessagePack encoding for request bodies and message contents.
"""

from .msgpack_codec import decode, encode

__all__ = ["encode", "decode"]
