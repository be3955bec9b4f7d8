"""
UTF-8 结构检查：拒绝孤立的续字节、超长编码和错误的续字节。
不检查码点本身（代理项、0xFE/0xFF 会通过），只做字节形状校验。
"""

from binmode_errors import InvalidUtf8Error

# (首字节模式, 掩码[, 第二字节模式, 掩码])
ILLEGAL_INITIAL_BYTES = (
    (0x80, 0xC0),              # 10xxxxxx
    (0xC0, 0xFE),              # 1100000x
    (0xE0, 0xFF, 0x80, 0xE0),  # 11100000 100xxxxx
    (0xF0, 0xFF, 0x80, 0xF0),  # 11110000 1000xxxx
    (0xF8, 0xFF, 0x80, 0xF8),  # 11111000 10000xxx
    (0xFC, 0xFF, 0x80, 0xFC),  # 11111100 100000xx
)

# (模式, 掩码, 序列长度)
SEQUENCE_LENGTHS = (
    (0xC0, 0xE0, 2),  # 110xxxxx
    (0xE0, 0xF0, 3),  # 1110xxxx
    (0xF0, 0xF8, 4),  # 11110xxx
    (0xF8, 0xFC, 5),  # 111110xx
    (0xFC, 0xFE, 6),  # 1111110x
)


def _is_illegal_initial(data, i):
    first = data[i]
    for entry in ILLEGAL_INITIAL_BYTES:
        if first & entry[1] != entry[0]:
            continue
        if len(entry) == 2:
            return True
        if i + 1 < len(data) and data[i + 1] & entry[3] == entry[2]:
            return True
    return False


def sequence_length(lead):
    for pattern, mask, length in SEQUENCE_LENGTHS:
        if lead & mask == pattern:
            return length
    return 1


def validate_utf8(data):
    i = 0
    end = len(data)
    while i < end:
        if _is_illegal_initial(data, i):
            raise InvalidUtf8Error(f'Illegal UTF-8 initial byte 0x{data[i]:02X}', i)
        length = sequence_length(data[i])
        if i + length > end:
            raise InvalidUtf8Error(
                f'Truncated UTF-8 sequence: expected {length} bytes, {end - i} left', i)
        for j in range(i + 1, i + length):
            if data[j] & 0xC0 != 0x80:
                raise InvalidUtf8Error(f'Bad UTF-8 continuation byte 0x{data[j]:02X}', j)
        i += length
