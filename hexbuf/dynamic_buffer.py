"""Growable byte buffer built from a chain of fixed-size blocks."""

from __future__ import annotations

from hexbuf.base import (
    BufferOverflow,
    BufferSeek,
    BufferUnderrun,
    _as_byte,
    _check_length,
)


class Block:
    """One fixed-size storage block with its own read and write offsets."""

    def __init__(self, block_size: int) -> None:
        if block_size <= 0:
            raise ValueError(f"block size must be greater than zero: {block_size}")
        self.storage = bytearray(block_size)
        self.read_offset = 0
        self.write_offset = 0

    def write(self, data) -> int:
        """Write as much of ``data`` as fits; return the number of bytes written."""
        with memoryview(data) as raw, raw.cast("B") as view:
            count = min(len(view), self.free())
            start = self.write_offset
            self.storage[start:start + count] = view[:count]
        self.write_offset += count
        return count

    def size(self) -> int:
        """Number of unread bytes held in the block."""
        return self.write_offset - self.read_offset

    def free(self) -> int:
        """Bytes left between the write offset and the end of the block."""
        return len(self.storage) - self.write_offset

    def read_view(self) -> memoryview:
        """A writable view over the block's unread bytes."""
        return memoryview(self.storage)[self.read_offset:self.write_offset]

    def _take(self, length: int, allow_reset: bool) -> bytes:
        count = min(length, self.size())
        start = self.read_offset
        data = bytes(self.storage[start:start + count])
        self._discard(count, allow_reset)
        return data

    def _discard(self, length: int, allow_reset: bool) -> int:
        count = min(length, self.size())
        self.read_offset += count
        if allow_reset and self.read_offset == self.write_offset:
            self.read_offset = self.write_offset = 0
        return count

    def _advance(self, length: int) -> int:
        count = min(length, self.free())
        self.write_offset += count
        return count

    def _rewind(self, length: int) -> int:
        count = min(length, self.size())
        self.write_offset -= count
        return count

    def _clone(self) -> Block:
        other = Block(len(self.storage))
        other.storage[:] = self.storage
        other.read_offset = self.read_offset
        other.write_offset = self.write_offset
        return other


class DynamicBuffer:
    """A buffer that grows by chaining blocks of ``block_size`` bytes.

    Blocks released by seeking the write cursor backwards are kept so that a
    later forward seek restores the data they hold.
    """

    npos = -1

    def __init__(self, block_size: int) -> None:
        if block_size <= 0:
            raise ValueError(f"block size must be greater than zero: {block_size}")
        self._block_size = block_size
        self._blocks: list[Block] = []
        self._tail = -1
        self._size = 0

    def __copy__(self) -> DynamicBuffer:
        other = DynamicBuffer(self._block_size)
        other._blocks = [block._clone() for block in self._active()]
        other._tail = len(other._blocks) - 1
        other._size = self._size
        return other

    def _active(self) -> list[Block]:
        return self._blocks[:self._tail + 1]

    def _block_at(self, index: int) -> Block:
        if index == len(self._blocks):
            self._blocks.append(self.allocate())
        return self._blocks[index]

    def _check_available(self, length: int) -> None:
        _check_length(length)
        if length > self._size:
            raise BufferUnderrun(length, 0, self._size)

    def _drop_head(self) -> None:
        del self._blocks[0]
        self._tail -= 1

    def read(self, length: int) -> bytes:
        """Remove and return the next ``length`` bytes."""
        self._check_available(length)
        out = bytearray()
        while True:
            chunk = self._blocks[0]._take(length - len(out), self._tail == 0)
            out += chunk
            if len(out) == length:
                break
            self._drop_head()
        self._size -= length
        return bytes(out)

    def copy(self, length: int) -> bytes:
        """Return the next ``length`` bytes without consuming them."""
        self._check_available(length)
        out = bytearray()
        for block in self._active():
            if len(out) == length:
                break
            with block.read_view() as view:
                out += view[:length - len(out)]
        return bytes(out)

    def fetch_buffers(self, length: int, offset: int = 0) -> list[memoryview]:
        """Writable views over ``length`` readable bytes starting ``offset`` bytes in."""
        _check_length(offset)
        self._check_available(length + offset)
        views = []
        remaining = length
        for block in self._active():
            if not remaining:
                break
            view = block.read_view()
            if offset >= len(view):
                offset -= len(view)
                view.release()
                continue
            part = view[offset:offset + remaining]
            offset = 0
            if part:
                views.append(part)
                remaining -= len(part)
        return views

    def skip(self, length: int) -> None:
        """Discard the next ``length`` bytes."""
        self._check_available(length)
        remaining = length
        while True:
            remaining -= self._blocks[0]._discard(remaining, self._tail == 0)
            if not remaining:
                break
            self._drop_head()
        self._size -= length

    def write(self, data) -> None:
        """Append a bytes-like object, allocating blocks as needed."""
        with memoryview(data) as raw, raw.cast("B") as payload:
            total = len(payload)
            if not total:
                return
            index = max(self._tail, 0)
            written = 0
            while True:
                written += self._block_at(index).write(payload[written:])
                if written == total:
                    break
                index += 1
        self._tail = index
        self._size += total

    def reserve(self, length: int) -> None:
        """Make ``length`` bytes readable without writing them, for filling in place."""
        _check_length(length)
        if not length:
            return
        index = max(self._tail, 0)
        remaining = length
        while True:
            remaining -= self._block_at(index)._advance(remaining)
            if not remaining:
                break
            index += 1
        self._tail = index
        self._size += length

    def size(self) -> int:
        """Number of bytes available to read."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def back(self) -> Block | None:
        """The last block in use, or None when there is none."""
        return self._blocks[self._tail] if self._tail >= 0 else None

    def front(self) -> Block | None:
        """The first block in use, or None when there is none."""
        return self._blocks[0] if self._tail >= 0 else None

    def allocate(self) -> Block:
        """A new empty block of this buffer's block size."""
        return Block(self._block_size)

    def pop_front(self) -> Block:
        """Detach and return the first block; its unread bytes leave the buffer."""
        if self._tail < 0:
            raise IndexError("pop from an empty buffer")
        block = self._blocks[0]
        self._size -= block.size()
        self._drop_head()
        return block

    def push_back(self, block: Block) -> None:
        """Attach a block after the last block in use; its unread bytes join the buffer."""
        if len(block.storage) != self._block_size:
            raise ValueError("block size does not match the buffer's block size")
        self._tail += 1
        self._blocks.insert(self._tail, block)
        self._size += block.size()

    def advance_write(self, length: int) -> None:
        """Advance the write cursor of the last block over bytes already in storage."""
        _check_length(length)
        index = max(self._tail, 0)
        block = self._block_at(index)
        if length > block.free():
            raise BufferOverflow(length, block.write_offset, block.free())
        block._advance(length)
        self._tail = index
        self._size += length

    def can_write_seek(self) -> bool:
        """Write seeking is always supported."""
        return True

    def write_seek(self, direction: BufferSeek, offset: int) -> None:
        """Move the write cursor relative to its position or to an absolute offset."""
        _check_length(offset)
        if direction is BufferSeek.ABSOLUTE:
            if offset >= self._size:
                direction, offset = BufferSeek.FORWARD, offset - self._size
            else:
                direction, offset = BufferSeek.BACKWARD, self._size - offset
        if direction is BufferSeek.BACKWARD:
            if offset > self._size:
                raise ValueError("write seek before the start of the buffer")
            index = self._tail
            remaining = offset
            while remaining:
                remaining -= self._blocks[index]._rewind(remaining)
                if remaining:
                    index -= 1
            self._tail = index
            self._size -= offset
        elif direction is BufferSeek.FORWARD:
            if not offset:
                return
            index = max(self._tail, 0)
            remaining = offset
            while True:
                remaining -= self._block_at(index)._advance(remaining)
                if not remaining:
                    break
                index += 1
            self._tail = index
            self._size += offset
        else:
            raise ValueError(f"unknown seek direction: {direction!r}")

    def clear(self) -> None:
        """Release every block."""
        self._blocks = []
        self._tail = -1
        self._size = 0

    def empty(self) -> bool:
        """Whether there is no data left to read."""
        return not self._size

    def block_size(self) -> int:
        """Size in bytes of each block."""
        return self._block_size

    def _locate(self, index: int) -> tuple[Block, int]:
        if not 0 <= index < self._size:
            raise IndexError("buffer index out of range")
        for block in self._active():
            if index < block.size():
                return block, block.read_offset + index
            index -= block.size()
        raise IndexError("buffer index out of range")

    def __getitem__(self, index: int) -> int:
        block, position = self._locate(index)
        return block.storage[position]

    def __setitem__(self, index: int, value) -> None:
        block, position = self._locate(index)
        block.storage[position] = _as_byte(value)

    def block_count(self) -> int:
        """Number of blocks currently in use."""
        return self._tail + 1

    def find_first_of(self, value) -> int:
        """Position of ``value`` relative to the read cursor, or ``npos``."""
        byte = _as_byte(value)
        base = 0
        for block in self._active():
            found = block.storage.find(byte, block.read_offset, block.write_offset)
            if found != -1:
                return base + found - block.read_offset
            base += block.size()
        return self.npos