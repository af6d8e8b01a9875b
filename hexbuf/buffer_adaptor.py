"""Cursor-based adaptor over an existing contiguous byte container."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from hexbuf.base import (
    BufferOverflow,
    BufferSeek,
    BufferUnderrun,
    _as_byte,
    _check_length,
)


class _CursorBuffer:
    """Shared read/write cursor bookkeeping for contiguous buffers."""

    npos = -1
    _space_optimise = True

    _read: int
    _write: int

    def _seek_limit(self) -> int | None:
        """Highest position the write cursor may be moved to, if bounded."""
        return None

    def _available(self) -> int:
        return self._write - self._read

    def _check_available(self, length: int) -> None:
        _check_length(length)
        if length > self._available():
            raise BufferUnderrun(length, self._read, self._available())

    def _consumed(self, length: int) -> None:
        self._read += length
        if self._space_optimise and self._read == self._write:
            self._read = self._write = 0

    def _index(self, index: int) -> int:
        if not 0 <= index < self._available():
            raise IndexError("buffer index out of range")
        return self._read + index

    def _move_write_cursor(self, direction: BufferSeek, offset: int) -> None:
        _check_length(offset)
        targets = {
            BufferSeek.BACKWARD: self._write - offset,
            BufferSeek.FORWARD: self._write + offset,
            BufferSeek.ABSOLUTE: offset,
        }
        if direction not in targets:
            raise ValueError(f"unknown seek direction: {direction!r}")
        target = targets[direction]
        if target < 0:
            raise ValueError("write seek before the start of the buffer")
        limit = self._seek_limit()
        if limit is not None and target > limit:
            raise ValueError("write seek beyond the end of the buffer")
        self._write = target


class BufferAdaptor(_CursorBuffer):
    """Reads from and writes to a caller-owned byte container.

    A ``bytearray`` grows on demand; fixed-size writable containers such as a
    ``memoryview`` raise :class:`BufferOverflow` when full, and read-only
    containers such as ``bytes`` reject writes.
    """

    def __init__(self, buffer, init_empty: bool = False, space_optimise: bool = True) -> None:
        self._buffer = buffer
        self._space_optimise = space_optimise
        self._read = 0
        self._write = 0 if init_empty else self._capacity()

    @contextmanager
    def _view(self, writable: bool = False) -> Iterator[memoryview]:
        with memoryview(self._buffer) as raw, raw.cast("B") as view:
            if writable and view.readonly:
                raise TypeError("the underlying buffer is read-only")
            yield view

    def _capacity(self) -> int:
        with self._view() as view:
            return view.nbytes

    def read(self, length: int) -> bytes:
        """Remove and return the next ``length`` bytes."""
        data = self.copy(length)
        self._consumed(length)
        return data

    def copy(self, length: int) -> bytes:
        """Return the next ``length`` bytes without advancing the read cursor."""
        self._check_available(length)
        with self._view() as view:
            return bytes(view[self._read:self._read + length])

    def skip(self, length: int) -> None:
        """Discard the next ``length`` bytes."""
        self._check_available(length)
        self._consumed(length)

    def write(self, data) -> None:
        """Write a bytes-like object at the write cursor, growing a bytearray if needed."""
        payload = bytes(data)
        with self._view(writable=True):
            pass
        required = self._write + len(payload)
        capacity = self._capacity()
        if capacity < required:
            if not isinstance(self._buffer, bytearray):
                raise BufferOverflow(len(payload), self._write, self.free())
            self._buffer.extend(bytes(required - capacity))
        with self._view() as view:
            view[self._write:required] = payload
        self._write = required

    def reserve(self, length: int) -> None:
        """Non-binding request to reserve space; Python containers manage their own capacity."""
        _check_length(length)

    def find_first_of(self, value) -> int:
        """Position of ``value`` relative to the read cursor, or ``npos``."""
        byte = _as_byte(value)
        with self._view() as view:
            return bytes(view[self._read:self._write]).find(byte)

    def size(self) -> int:
        """Number of bytes available to read."""
        return self._write - self._read

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        """Whether there is no data left to read."""
        return self._read == self._write

    def __getitem__(self, index: int) -> int:
        position = self._index(index)
        with self._view() as view:
            return view[position]

    def __setitem__(self, index: int, value) -> None:
        position = self._index(index)
        byte = _as_byte(value)
        with self._view(writable=True) as view:
            view[position] = byte

    def can_write_seek(self) -> bool:
        """Write seeking is always supported."""
        return True

    def write_seek(self, direction: BufferSeek, offset: int) -> None:
        """Move the write cursor relative to its position or to an absolute offset."""
        self._move_write_cursor(direction, offset)

    def read_view(self) -> memoryview:
        """A view over the readable bytes; release it before growing the buffer."""
        with memoryview(self._buffer) as raw:
            return raw.cast("B")[self._read:self._write]

    def storage(self):
        """The underlying container."""
        return self._buffer

    def advance_write(self, length: int) -> None:
        """Mark ``length`` bytes already present in the container as written."""
        _check_length(length)
        if self._capacity() < self._write + length:
            raise BufferOverflow(length, self._write, self.free())
        self._write += length

    def free(self) -> int:
        """Bytes between the write cursor and the end of the container."""
        return self._capacity() - self._write

    def clear(self) -> None:
        """Reset both cursors; the stored bytes are left untouched."""
        self._read = self._write = 0