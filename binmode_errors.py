class BinmodeRpcError(ValueError):
    """所有解码错误的基类，offset 为出错时的字节位置"""

    def __init__(self, message, offset=None):
        self.offset = offset
        if offset is not None:
            message = f'{message} (at byte {offset})'
        super().__init__(message)


class MissingHeaderError(BinmodeRpcError):
    pass


class UnexpectedEofError(BinmodeRpcError):
    pass


class UnknownMessageTypeError(BinmodeRpcError):
    pass


class UnknownTypeError(BinmodeRpcError):
    pass


class UnsupportedTypeError(BinmodeRpcError):
    pass


class TypeMismatchError(BinmodeRpcError):
    pass


class UndefinedCodebookEntryError(BinmodeRpcError):
    pass


class InvalidUtf8Error(BinmodeRpcError):
    pass


class NestingTooDeepError(BinmodeRpcError):
    pass
