import struct

from binmode_errors import UnexpectedEofError


class ByteCursor:
    """带位置的只读字节视图，所有读取都做越界检查"""

    def __init__(self, data, position=0):
        self.data = bytes(data)
        self.position = position

    @property
    def remaining(self):
        return len(self.data) - self.position

    @property
    def at_end(self):
        return self.position >= len(self.data)

    def _take(self, n):
        if n < 0 or n > self.remaining:
            raise UnexpectedEofError(
                f'Unexpected end of input: need {n} bytes, {self.remaining} left',
                self.position)
        start = self.position
        self.position += n
        return self.data[start:self.position]

    def read_byte(self):
        return self._take(1)[0]

    def peek_char(self):
        if self.at_end:
            raise UnexpectedEofError('Unexpected end of input while peeking', self.position)
        return chr(self.data[self.position])

    def read_char(self):
        return chr(self.read_byte())

    def read_u32_le(self):
        return struct.unpack('<I', self._take(4))[0]

    def read_i32_le(self):
        return struct.unpack('<i', self._take(4))[0]

    def read_bytes(self, n):
        return self._take(n)
