# hexbuf

Byte buffers and a bounds-checked binary stream reader. Use them to build
and parse binary data.

## Installation

```
pip install hexbuf
```

## Buffers

The package has three buffer types. All three support these operations:
`write`, `read`, `copy`, `skip`, `find_first_of`, `size`, `empty`,
`write_seek` and item access by index. Indexes count from the read cursor.

A read, copy or skip that asks for more bytes than are available raises
`BufferUnderrun`. `find_first_of` returns `npos` (`-1`) when the byte is
not found. The seek directions are `BufferSeek.BACKWARD`,
`BufferSeek.FORWARD` and `BufferSeek.ABSOLUTE`. All the errors are in
`hexbuf.base` and derive from `HexiError`.

### BufferAdaptor

`BufferAdaptor` (in `hexbuf.buffer_adaptor`) keeps a read cursor and a write
cursor over a byte container that you already own. How writes behave depends
on that container:

- A `bytearray` grows when a write needs more room.
- A fixed-size writable container, such as a `memoryview` over a
  `bytearray`, raises `BufferOverflow` when it is full.
- A read-only container, such as `bytes`, raises `TypeError` on writes.

By default, the container's existing contents count as written data. Pass
`init_empty=True` to start with nothing to read.

When everything has been read, both cursors return to the start. Pass
`space_optimise=False` to turn this off.

### StaticBuffer

`StaticBuffer` (in `hexbuf.static_buffer`) has a fixed capacity.

- A write that does not fit raises `BufferOverflow`.
- `defragment()` moves unread data to the front. This frees the space at the
  end for new writes.
- `resize()` sets the write cursor. It raises `HexiError` if the new size is
  larger than the capacity.

### DynamicBuffer

`DynamicBuffer` (in `hexbuf.dynamic_buffer`) is a chain of fixed-size
`Block`s. Blocks are added as data is written and dropped as data is read.

- `reserve()` makes space readable without writing to it.
- `fetch_buffers()` returns writable views over the readable data, so you can
  fill it in place.
- `pop_front()` and `push_back()` detach and attach whole blocks.
- `copy.copy()` gives an independent copy of the buffer.

### Example

```python
from hexbuf.base import BufferSeek
from hexbuf.buffer_adaptor import BufferAdaptor
from hexbuf.dynamic_buffer import DynamicBuffer
from hexbuf.static_buffer import StaticBuffer

storage = bytearray(b"\x01\x02\x03")
adaptor = BufferAdaptor(storage)
adaptor.write_seek(BufferSeek.BACKWARD, 2)
adaptor.write(b"\x04\x05\x06")
assert storage == bytearray(b"\x01\x04\x05\x06")

fixed = StaticBuffer(3, b"abc")
assert fixed.read(1) == b"a"
fixed.defragment()
assert fixed.free() == 1

chain = DynamicBuffer(32)
chain.write(b"The quick brown fox jumps over the lazy dog")
assert chain.find_first_of(ord("g")) == 42
assert chain.block_count() == 2
```

## Reading streams

`BinaryStreamReader` (in `hexbuf.stream`) reads from any of the buffers. It
can read:

- raw bytes, with `read_bytes`;
- single values given as a `struct` format character, in `"little"`, `"big"`
  or `"native"` byte order, with `read_value`;
- strings with a 32-bit little-endian length prefix, with `read_string`;
- fixed-length strings, with `read_fixed_string`;
- null-terminated strings, with `read_null_terminated`;
- arrays with a 32-bit little-endian count prefix, with
  `read_prefixed_array`.

Strings are decoded as UTF-8.

### Read limits and errors

You can give the reader a read limit. By default, reading past the buffer
raises `BufferUnderrun`, and reading past the limit raises
`StreamReadLimit`.

After a failure, the stream stays in an error state until you call
`clear_state()`. While it is in that state, reads return empty or zero
values.

If you pass `allow_throw=False`, the reader does not raise. It only records
the error in `state()`, and the stream then evaluates as false.

### Example

```python
from hexbuf.dynamic_buffer import DynamicBuffer
from hexbuf.stream import BinaryStreamReader, StreamState

buf = DynamicBuffer(16)
buf.write(b"\x05\x00\x00\x00hello" + b"\x2a\x00")
reader = BinaryStreamReader(buf)
assert reader.read_string() == "hello"
assert reader.read_value("H", "little") == 42
assert reader.total_read() == 11

quiet = BinaryStreamReader(DynamicBuffer(8), allow_throw=False)
quiet.read_value("I", "little")
assert quiet.state() is StreamState.BUFF_LIMIT_ERR
assert not quiet
```

### Reading your own objects

An object with a `serialise(stream)` method can read itself with
`reader.deserialise(obj)`. The method receives the reader, and
`deserialise` returns the object.

## What it does not do

- There is no stream writer: to produce data, write bytes to a buffer
  directly.
- There is no file-backed buffer.
- The package has no command-line tool.