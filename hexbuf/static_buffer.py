"""Fixed-capacity byte buffer with independent read and write cursors."""

from __future__ import annotations

from collections.abc import Iterator

from hexbuf.base import BufferOverflow, BufferSeek, HexiError, _as_byte, _check_length
from hexbuf.buffer_adaptor import _CursorBuffer


class StaticBuffer(_CursorBuffer):
    """A buffer with a fixed capacity that never reallocates."""

    def __init__(self, capacity: int, initial=b"") -> None:
        _check_length(capacity)
        data = bytes(initial)
        if len(data) > capacity:
            raise BufferOverflow(len(data), 0, capacity)
        self._storage = bytearray(capacity)
        self._storage[:len(data)] = data
        self._read = 0
        self._write = len(data)

    def _seek_limit(self) -> int:
        return len(self._storage)

    def read(self, length: int) -> bytes:
        """Remove and return the next ``length`` bytes."""
        data = self.copy(length)
        self._consumed(length)
        return data

    def copy(self, length: int) -> bytes:
        """Return the next ``length`` bytes without advancing the read cursor."""
        self._check_available(length)
        return bytes(self._storage[self._read:self._read + length])

    def find_first_of(self, value) -> int:
        """Position of ``value`` relative to the read cursor, or ``npos``."""
        position = self._storage.find(_as_byte(value), self._read, self._write)
        return self.npos if position == -1 else position - self._read

    def skip(self, length: int) -> None:
        """Discard the next ``length`` bytes."""
        self._check_available(length)
        self._consumed(length)

    def advance_write(self, length: int) -> None:
        """Advance the write cursor over bytes written directly into storage."""
        _check_length(length)
        if self.free() < length:
            raise BufferOverflow(length, self._write, self.free())
        self._write += length

    def resize(self, size: int) -> None:
        """Set the write cursor to ``size``; it may not exceed the capacity."""
        _check_length(size)
        if size > len(self._storage):
            raise HexiError("attempted to resize static_buffer to larger than capacity")
        self._write = size

    def clear(self) -> None:
        """Reset both cursors; the stored bytes are left untouched."""
        self._read = self._write = 0

    def defragment(self) -> bool:
        """Move unread data to the front; return True if space was freed."""
        if self._read == 0:
            return False
        size = self.size()
        self._storage[:size] = self._storage[self._read:self._write]
        self._read, self._write = 0, size
        return True

    def __getitem__(self, index: int) -> int:
        return self._storage[self._index(index)]

    def __setitem__(self, index: int, value) -> None:
        self._storage[self._index(index)] = _as_byte(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self._storage[self._read:self._write])

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        """Whether there is no data left to read."""
        return self._read == self._write

    def full(self) -> bool:
        """Whether the write cursor has reached the capacity."""
        return self._write == len(self._storage)

    def can_write_seek(self) -> bool:
        """Write seeking is always supported."""
        return True

    def write(self, data) -> None:
        """Append a bytes-like object at the write cursor."""
        payload = bytes(data)
        end = self._write + len(payload)
        if end > len(self._storage):
            raise BufferOverflow(len(payload), self._write, self.free())
        self._storage[self._write:end] = payload
        self._write = end

    def write_seek(self, direction: BufferSeek, offset: int) -> None:
        """Move the write cursor relative to its position or to an absolute offset."""
        self._move_write_cursor(direction, offset)

    def capacity(self) -> int:
        """Total size of the storage in bytes."""
        return len(self._storage)

    def size(self) -> int:
        """Number of bytes available to read."""
        return self._write - self._read

    def free(self) -> int:
        """Bytes between the write cursor and the end of storage."""
        return len(self._storage) - self._write

    def read_view(self) -> memoryview:
        """Read-only view over the unread data."""
        return memoryview(self._storage)[self._read:self._write].toreadonly()

    def write_view(self) -> memoryview:
        """Writable view over the free space after the write cursor."""
        return memoryview(self._storage)[self._write:]

    def storage(self) -> bytearray:
        """The whole underlying storage."""
        return self._storage