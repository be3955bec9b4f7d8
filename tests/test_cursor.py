import pytest

from binmode_cursor import ByteCursor
from binmode_errors import UnexpectedEofError


def test_reads_advance_position():
    cursor = ByteCursor(b'I\xf9\xff\xff\xff\x01\x00\x00\x00abc')
    assert cursor.peek_char() == 'I'
    assert cursor.read_char() == 'I'
    assert cursor.read_i32_le() == -7
    assert cursor.read_u32_le() == 1
    assert cursor.read_bytes(3) == b'abc'
    assert cursor.at_end
    assert cursor.remaining == 0


def test_u32_is_unsigned():
    assert ByteCursor(b'\xff\xff\xff\xff').read_u32_le() == 0xFFFFFFFF


def test_truncated_read_does_not_advance():
    cursor = ByteCursor(b'\x01\x02')
    with pytest.raises(UnexpectedEofError):
        cursor.read_i32_le()
    assert cursor.position == 0
    assert cursor.read_byte() == 1


def test_peek_at_end():
    with pytest.raises(UnexpectedEofError):
        ByteCursor(b'').peek_char()


def test_read_bytes_past_end():
    cursor = ByteCursor(b'abc')
    with pytest.raises(UnexpectedEofError) as excinfo:
        cursor.read_bytes(4)
    assert excinfo.value.offset == 0
