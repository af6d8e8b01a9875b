"""Shared definitions for the buffer types: seek directions and errors."""

from __future__ import annotations

from enum import Enum


class BufferSeek(Enum):
    """Direction of a write-cursor seek."""

    BACKWARD = "backward"
    FORWARD = "forward"
    ABSOLUTE = "absolute"


class HexiError(Exception):
    """Base class for all buffer and stream errors."""


class BufferOverflow(HexiError):
    """Raised when a write needs more space than the buffer can provide."""

    def __init__(self, attempted: int, write_pos: int, free: int) -> None:
        self.attempted = attempted
        self.write_pos = write_pos
        self.free = free
        super().__init__(
            f"buffer overflow: attempted to write {attempted} bytes at "
            f"position {write_pos} with {free} bytes free"
        )


class BufferUnderrun(HexiError):
    """Raised when a read asks for more data than the buffer holds."""

    def __init__(self, attempted: int, read_pos: int, buffer_size: int) -> None:
        self.attempted = attempted
        self.read_pos = read_pos
        self.buffer_size = buffer_size
        super().__init__(
            f"buffer underrun: attempted to read {attempted} bytes at "
            f"position {read_pos} with {buffer_size} bytes available"
        )


class StreamReadLimit(HexiError):
    """Raised when a read would exceed a stream's configured read limit."""

    def __init__(self, attempted: int, total_read: int, read_limit: int) -> None:
        self.attempted = attempted
        self.total_read = total_read
        self.read_limit = read_limit
        super().__init__(
            f"read limit exceeded: attempted to read {attempted} bytes after "
            f"{total_read} bytes with a limit of {read_limit}"
        )


def _as_byte(value: int | bytes | bytearray | str) -> int:
    """Normalise a single byte given as an int, a one-byte bytes or a one-char str."""
    if isinstance(value, bool):
        raise TypeError("a byte value must not be a bool")
    if isinstance(value, int):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise ValueError("expected exactly one byte")
        return value[0]
    if isinstance(value, str):
        if len(value) != 1 or ord(value) > 0xFF:
            raise ValueError("expected a single character in the range 0-255")
        return ord(value)
    raise TypeError(f"cannot interpret {type(value).__name__} as a byte")


def _check_length(length: int) -> None:
    if length < 0:
        raise ValueError(f"length must not be negative: {length}")