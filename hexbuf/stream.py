"""Stream state handling and a bounds-checked binary reader over any buffer."""

from __future__ import annotations

import struct
from enum import Enum, auto
from functools import lru_cache

from hexbuf.base import BufferUnderrun, StreamReadLimit, _check_length

_BYTE_ORDERS = {"little": "<", "big": ">", "native": "="}


class StreamState(Enum):
    """Condition of a stream; anything other than OK stops further reads."""

    OK = auto()
    READ_LIMIT_ERR = auto()
    BUFF_LIMIT_ERR = auto()
    INVALID_STREAM = auto()
    USER_DEFINED_ERR = auto()


@lru_cache(maxsize=None)
def _value_struct(fmt: str, byteorder: str) -> struct.Struct:
    try:
        prefix = _BYTE_ORDERS[byteorder]
    except KeyError:
        raise ValueError(f"unknown byte order: {byteorder!r}") from None
    try:
        packer = struct.Struct(prefix + fmt)
    except struct.error as exc:
        raise ValueError(f"invalid value format {fmt!r}: {exc}") from None
    if packer.size == 0 or len(packer.unpack(bytes(packer.size))) != 1:
        raise ValueError(f"format must describe exactly one value: {fmt!r}")
    return packer


class StreamBase:
    """Tracks the error state of a stream bound to a buffer."""

    def __init__(self, buffer, allow_throw: bool = True) -> None:
        self._buffer = buffer
        self._state = StreamState.OK
        self._allow_throw = allow_throw

    def _set_state(self, state: StreamState) -> None:
        self._state = state

    def size(self) -> int:
        """Bytes available in the underlying buffer."""
        return self._buffer.size()

    def empty(self) -> bool:
        """Whether the underlying buffer holds no readable data."""
        return self._buffer.empty()

    def state(self) -> StreamState:
        """The current stream state."""
        return self._state

    def good(self) -> bool:
        """Whether the stream is free of errors."""
        return self._state is StreamState.OK

    def clear_state(self) -> None:
        """Reset the stream to the OK state."""
        self._set_state(StreamState.OK)

    def __bool__(self) -> bool:
        return self.good()

    def set_error_state(self) -> None:
        """Put the stream into the user-defined error state."""
        self._set_state(StreamState.USER_DEFINED_ERR)


class BinaryStreamReader(StreamBase):
    """Reads binary values from a buffer, enforcing buffer size and an optional read limit.

    With ``allow_throw`` set, a failed read raises and leaves the stream in an
    error state; later reads then return empty or zero values without raising.
    Without it, failures only set the state.
    """

    def __init__(self, source, read_limit: int = 0, allow_throw: bool = True) -> None:
        _check_length(read_limit)
        super().__init__(source, allow_throw)
        self._total_read = 0
        self._read_limit = read_limit

    def _enforce_read_bounds(self, read_size: int) -> None:
        available = self._buffer.size()
        if read_size > available:
            self._set_state(StreamState.BUFF_LIMIT_ERR)
            if self._allow_throw:
                raise BufferUnderrun(read_size, self._total_read, available)
            return
        if self._read_limit:
            remaining = self._read_limit - self._total_read
            if read_size > remaining:
                self._set_state(StreamState.READ_LIMIT_ERR)
                if self._allow_throw:
                    raise StreamReadLimit(read_size, self._total_read, self._read_limit)
                return
        self._total_read += read_size

    def _may_read(self, read_size: int) -> bool:
        _check_length(read_size)
        if not self.good():
            return False
        self._enforce_read_bounds(read_size)
        return self.good()

    def deserialise(self, obj):
        """Let ``obj`` read itself through its ``serialise(stream)`` method; return it."""
        obj.serialise(self)
        return obj

    def read_bytes(self, size: int) -> bytes:
        """Read ``size`` raw bytes, or nothing if the stream is in error."""
        if not self._may_read(size):
            return b""
        return self._buffer.read(size)

    def read_string(self) -> str:
        """Read a string written with a 32-bit little-endian length prefix."""
        size = self.read_value("I", "little")
        if not self.good():
            return ""
        return self.read_fixed_string(size)

    def read_fixed_string(self, size: int) -> str:
        """Read a string of exactly ``size`` bytes."""
        return self.read_bytes(size).decode("utf-8")

    def read_null_terminated(self) -> str:
        """Read a string up to a null byte, consuming the terminator.

        Returns an empty string and consumes nothing if no terminator is present.
        """
        pos = self._buffer.find_first_of(0)
        if pos < 0:
            return ""
        if not self._may_read(pos + 1):
            return ""
        data = self._buffer.read(pos)
        self._buffer.skip(1)
        return data.decode("utf-8")

    def read_value(self, fmt: str, byteorder: str = "little"):
        """Read one value described by a :mod:`struct` format character.

        Returns the zero value of the format if the stream is in error.
        """
        packer = _value_struct(fmt, byteorder)
        if not self._may_read(packer.size):
            return packer.unpack(bytes(packer.size))[0]
        return packer.unpack(self._buffer.read(packer.size))[0]

    def read_prefixed_array(self, fmt: str, byteorder: str = "little") -> list:
        """Read a 32-bit little-endian count followed by that many values."""
        packer = _value_struct(fmt, byteorder)
        count = self.read_value("I", "little")
        if not self.good():
            return []
        data = self.read_bytes(count * packer.size)
        if not self.good():
            return []
        return [item for (item,) in packer.iter_unpack(data)]

    def skip(self, length: int) -> None:
        """Discard ``length`` bytes from the stream."""
        if self._may_read(length):
            self._buffer.skip(length)

    def total_read(self) -> int:
        """Total bytes read from the stream."""
        return self._total_read

    def read_limit(self) -> int:
        """The configured read limit, or 0 when unlimited."""
        return self._read_limit

    def read_max(self) -> int:
        """Bytes that may still be read, honouring the read limit if one is set."""
        if self._read_limit:
            return self._read_limit - self._total_read
        return self._buffer.size()

    def buffer(self):
        """The buffer this stream reads from."""
        return self._buffer