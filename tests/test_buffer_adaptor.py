import pytest

from hexbuf.base import BufferOverflow, BufferSeek, BufferUnderrun
from hexbuf.buffer_adaptor import BufferAdaptor

PANGRAM = b"The quick brown fox jumped over the lazy dog"


@pytest.mark.parametrize("initial", [b"", b"\x01", bytes([1, 2, 3, 4, 5])])
def test_initial_size_matches_container(initial):
    adaptor = BufferAdaptor(bytearray(initial))
    assert adaptor.size() == len(initial)
    assert len(adaptor) == len(initial)


@pytest.mark.parametrize("initial", [b"", bytes([1, 2, 3, 4, 5])])
def test_advance_write_tracks_appended_data(initial):
    buffer = bytearray(initial)
    adaptor = BufferAdaptor(buffer)
    assert adaptor.empty() == (not initial)
    buffer.append(6)
    adaptor.advance_write(1)
    assert not adaptor.empty()
    assert adaptor.size() == len(buffer)


def test_read_one():
    adaptor = BufferAdaptor(bytes([1, 2, 3]))
    assert adaptor.read(1) == b"\x01"
    assert adaptor.size() == 2


def test_read_all():
    adaptor = BufferAdaptor(bytearray([1, 2, 3]))
    assert adaptor.read(3) == bytes([1, 2, 3])
    assert adaptor.empty()


@pytest.mark.parametrize(
    ("content", "skip", "optimise", "expected", "remaining"),
    [
        (bytes([1, 2, 3]), 1, True, 2, 1),
        (bytes([1, 2, 3, 4, 5, 6]), 5, False, 6, 0),
    ],
)
def test_skip_then_read(content, skip, optimise, expected, remaining):
    adaptor = BufferAdaptor(content, space_optimise=optimise)
    adaptor.skip(skip)
    assert adaptor.read(1)[0] == expected
    assert adaptor.size() == remaining


def test_write_grows_bytearray():
    buffer = bytearray()
    adaptor = BufferAdaptor(buffer)
    adaptor.write(bytes([1, 2, 3, 4, 5, 6]))
    assert buffer == bytes([1, 2, 3, 4, 5, 6])
    assert adaptor.size() == 6
    adaptor.write(b"\0")
    assert adaptor.size() == 7


def test_write_append():
    buffer = bytearray([1, 2, 3])
    adaptor = BufferAdaptor(buffer)
    adaptor.write(bytes([4, 5, 6]))
    assert buffer == bytes([1, 2, 3, 4, 5, 6])
    assert adaptor.size() == 6


def test_can_write_seek():
    assert BufferAdaptor(bytearray()).can_write_seek() is True


@pytest.mark.parametrize(
    ("direction", "offset", "expected"),
    [
        (BufferSeek.BACKWARD, 2, bytes([1, 4, 5, 6])),
        (BufferSeek.ABSOLUTE, 0, bytes([4, 5, 6])),
    ],
)
def test_write_seek(direction, offset, expected):
    buffer = bytearray([1, 2, 3])
    adaptor = BufferAdaptor(buffer)
    adaptor.write_seek(direction, offset)
    adaptor.write(bytes([4, 5, 6]))
    assert buffer == expected
    assert adaptor.size() == len(expected)


def test_write_seek_before_start():
    with pytest.raises(ValueError):
        BufferAdaptor(bytearray([1])).write_seek(BufferSeek.BACKWARD, 2)


def test_read_view_follows_cursor():
    adaptor = BufferAdaptor(bytes([1, 2, 3]))
    seen = []
    for _ in range(3):
        seen.append(adaptor.read_view()[0])
        adaptor.skip(1)
    assert seen == [1, 2, 3]


def test_subscript():
    buffer = bytearray([1, 2, 3])
    adaptor = BufferAdaptor(buffer)
    assert [adaptor[i] for i in range(3)] == [1, 2, 3]
    buffer[0] = 4
    assert adaptor[0] == 4
    adaptor[0] = 5
    assert buffer[0] == 5


def test_subscript_out_of_range():
    adaptor = BufferAdaptor(bytes([1, 2, 3]))
    with pytest.raises(IndexError) as excinfo:
        adaptor[3]
    assert "out of range" in str(excinfo.value)
    assert adaptor[2] == 3
    assert adaptor.size() == 3


@pytest.mark.parametrize(
    ("needle", "expected"),
    [("\0", BufferAdaptor.npos), ("g", 43), (b"T", 0), (ord("t"), 32)],
)
def test_find_first_of(needle, expected):
    adaptor = BufferAdaptor(bytearray())
    adaptor.write(PANGRAM)
    assert adaptor.find_first_of(needle) == expected


def test_read_only_buffer_rejects_write():
    with pytest.raises(TypeError):
        BufferAdaptor(b"abc").write(b"d")


def test_fixed_buffer_init_empty_and_overflow():
    storage = bytearray(4)
    adaptor = BufferAdaptor(memoryview(storage), init_empty=True)
    assert adaptor.empty()
    adaptor.write(b"ab")
    assert storage[:2] == b"ab"
    assert adaptor.free() == 2
    with pytest.raises(BufferOverflow):
        adaptor.write(b"xyz")


def test_read_too_much():
    with pytest.raises(BufferUnderrun):
        BufferAdaptor(b"ab").read(3)


def test_copy_does_not_consume():
    adaptor = BufferAdaptor(b"abc")
    assert adaptor.copy(2) == b"ab"
    assert adaptor.size() == 3


def test_clear_and_storage():
    buffer = bytearray(b"abc")
    adaptor = BufferAdaptor(buffer)
    adaptor.clear()
    assert adaptor.empty()
    assert adaptor.storage() is buffer
    assert buffer == b"abc"