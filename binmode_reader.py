import logging

from binmode_config import HEADER, TAG_CALL, TAG_FAULT, TAG_RESPONSE
from binmode_cursor import ByteCursor
from binmode_errors import (
    MissingHeaderError,
    NestingTooDeepError,
    TypeMismatchError,
    UndefinedCodebookEntryError,
    UnknownMessageTypeError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from binmode_types import (
    Call,
    DecodeResult,
    Fault,
    Result,
    RpcArray,
    RpcBase64,
    RpcBoolean,
    RpcDateTime,
    RpcDouble,
    RpcInt,
    RpcString,
    RpcStruct,
    ValueKind,
)
from utf8_validator import validate_utf8

logger = logging.getLogger(__name__)


class Codebook:
    """字符串回引表：索引 -> 已解码的 RpcString，同一索引后写覆盖先写"""

    def __init__(self):
        self.entries = {}

    def __contains__(self, index):
        return index in self.entries

    def __len__(self):
        return len(self.entries)

    def record(self, index, value):
        if index in self.entries:
            logger.debug('Codebook entry %d overwritten', index)
        self.entries[index] = value

    def recall(self, index, offset=None):
        try:
            return self.entries[index]
        except KeyError:
            raise UndefinedCodebookEntryError(
                f'Codebook entry {index} is not defined', offset) from None


def _read_string_payload(cursor):
    start = cursor.position
    length = cursor.read_u32_le()
    raw = cursor.read_bytes(length)
    validate_utf8(raw)
    # 校验允许代理项等严格解码会拒绝的字节，用 surrogateescape 保留原字节
    logger.debug('String of %d bytes at %d', length, start)
    return RpcString(raw.decode('utf-8', errors='surrogateescape'))


def _read_short_text(cursor):
    length = cursor.read_byte()
    return cursor.read_bytes(length).decode('latin-1')


def read_value(cursor, codebook):
    offset = cursor.position
    tag = cursor.read_char()
    if tag == 'I':
        return RpcInt(cursor.read_i32_le())
    elif tag == 't':
        return RpcBoolean(True)
    elif tag == 'f':
        return RpcBoolean(False)
    elif tag == 'D':
        return RpcDouble(_read_short_text(cursor))
    elif tag == '8':
        return RpcDateTime(_read_short_text(cursor))
    elif tag == 'B':
        length = cursor.read_u32_le()
        return RpcBase64(cursor.read_bytes(length))
    elif tag == 'A':
        count = cursor.read_u32_le()
        return RpcArray([read_value(cursor, codebook) for _ in range(count)])
    elif tag == 'S':
        count = cursor.read_u32_le()
        members = {}
        for _ in range(count):
            key = read_value_typed(cursor, codebook, ValueKind.STRING)
            members[key.text] = read_value(cursor, codebook)
        return RpcStruct(members)
    elif tag == 'U':
        return _read_string_payload(cursor)
    elif tag == '>':
        index = cursor.read_byte()
        value = _read_string_payload(cursor)
        codebook.record(index, value)
        logger.debug('Recorded codebook entry %d: %r', index, value.text)
        return value
    elif tag == '<':
        index = cursor.read_byte()
        return codebook.recall(index, offset)
    elif tag == 'O':
        raise UnsupportedTypeError('Objects are not supported', offset)
    raise UnknownTypeError(f'Unknown value type {tag!r}', offset)


def read_value_typed(cursor, codebook, expected_kind):
    offset = cursor.position
    value = read_value(cursor, codebook)
    if value.kind is not expected_kind:
        raise TypeMismatchError(
            f'Expected {expected_kind.name}, got {value.kind.name}', offset)
    return value


class BinmodeReader:
    """单次解码：游标和回引表只在一次 decode 中存在"""

    def __init__(self, data):
        self.data = bytes(data)
        self.cursor = ByteCursor(self.data)
        self.codebook = Codebook()

    def read_header(self):
        if not self.data.startswith(HEADER):
            raise MissingHeaderError('Input does not start with binmode-rpc header', 0)
        self.cursor.read_bytes(len(HEADER))

    def read_message(self):
        offset = self.cursor.position
        tag = self.cursor.read_char()
        if tag == TAG_CALL:
            name = read_value_typed(self.cursor, self.codebook, ValueKind.STRING)
            params = read_value_typed(self.cursor, self.codebook, ValueKind.ARRAY)
            logger.debug('Call %r with %d params', name.text, len(params.items))
            return Call(name.text, params.items)
        elif tag == TAG_RESPONSE:
            if self.cursor.peek_char() == TAG_FAULT:
                self.cursor.read_char()
                logger.debug('Fault response')
                return Fault(read_value_typed(self.cursor, self.codebook, ValueKind.STRUCT))
            logger.debug('Result response')
            return Result(read_value(self.cursor, self.codebook))
        raise UnknownMessageTypeError(f'Unknown message type {tag!r}', offset)

    def decode(self):
        self.read_header()
        try:
            message = self.read_message()
        except RecursionError:
            raise NestingTooDeepError('Values nested too deeply', self.cursor.position) from None
        return DecodeResult(message, self.cursor.remaining)


def decode_message(data):
    return BinmodeReader(data).decode()
