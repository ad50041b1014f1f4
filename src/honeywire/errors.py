"""
honeywire error types. Every decode or encode failure is a ProtocolError.
"""

from typing import Any, Optional


class ProtocolError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TagMismatchError(ProtocolError):
    def __init__(self, message: str, expected: Optional[int] = None, actual: Optional[int] = None):
        super().__init__("tag_mismatch", message, {"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual


class TruncatedBufferError(ProtocolError):
    def __init__(self, needed: int, remaining: int):
        super().__init__(
            "truncated_buffer",
            f"buffer truncated: need {needed} bytes, {remaining} remaining",
            {"needed": needed, "remaining": remaining},
        )
        self.needed = needed
        self.remaining = remaining


class EncodingOverflowError(ProtocolError):
    def __init__(self, message: str, size: int, limit: int):
        super().__init__("encoding_overflow", message, {"size": size, "limit": limit})
        self.size = size
        self.limit = limit


class UnknownMessageError(ProtocolError):
    def __init__(self, tag: int):
        super().__init__("unknown_message", f"unknown message type 0x{tag:02x}", {"tag": tag})
        self.tag = tag


class AddressError(ProtocolError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_address", message, details)


class FrameTooLargeError(ProtocolError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            "frame_too_large",
            f"frame of {size} bytes exceeds limit of {limit}",
            {"size": size, "limit": limit},
        )
        self.size = size
        self.limit = limit
