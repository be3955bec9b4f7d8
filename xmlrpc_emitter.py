"""
把解码得到的消息树输出为 XML-RPC 文本
"""

import base64
from contextlib import contextmanager
from typing import List

from binmode_config import INDENT, XML_DECLARATION
from binmode_errors import NestingTooDeepError
from binmode_types import (
    Call,
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
)


def escape_text(text: str) -> str:
    # & 必须最先替换
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('"', '&quot;')


def scalar_fragment(value) -> str:
    """标量值的单行形式，如 <value><int>-7</int></value>；复合类型返回 None"""
    if isinstance(value, RpcInt):
        body = str(value.value)
    elif isinstance(value, RpcBoolean):
        body = '1' if value.value else '0'
    elif isinstance(value, (RpcDouble, RpcString, RpcDateTime)):
        body = escape_text(value.text)
    elif isinstance(value, RpcBase64):
        body = base64.b64encode(value.data).decode('ascii')
    elif isinstance(value, (RpcArray, RpcStruct)):
        return None
    else:
        raise TypeError(f'Cannot emit value of type {type(value).__name__}')
    tag = value.kind.value
    return f'<value><{tag}>{body}</{tag}></value>'


class XmlRpcEmitter:
    """逐行输出，depth 为当前缩进层级"""

    def __init__(self, indent: str = INDENT):
        self.indent = indent
        self.depth = 0
        self.lines: List[str] = []

    def line(self, text: str):
        self.lines.append(self.indent * self.depth + text)

    @contextmanager
    def element(self, tag: str):
        self.line(f'<{tag}>')
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
        self.line(f'</{tag}>')

    def wrapped_value(self, tag: str, value):
        """<param> 里的值：标量与 <param> 同一行"""
        fragment = scalar_fragment(value)
        if fragment is not None:
            self.line(f'<{tag}>{fragment}</{tag}>')
            return
        with self.element(tag):
            self.value(value)

    def value(self, value):
        fragment = scalar_fragment(value)
        if fragment is not None:
            self.line(fragment)
            return
        with self.element('value'):
            if isinstance(value, RpcArray):
                with self.element('array'), self.element('data'):
                    for item in value.items:
                        self.value(item)
            else:
                with self.element('struct'):
                    for key, member in value.members.items():
                        self.member(key, member)

    def member(self, key: str, value):
        with self.element('member'):
            self.line(f'<name>{escape_text(key)}</name>')
            self.value(value)

    def params(self, values):
        with self.element('params'):
            for value in values:
                self.wrapped_value('param', value)

    def message(self, message):
        self.lines = []
        self.depth = 0
        self.line(XML_DECLARATION)
        if isinstance(message, Call):
            with self.element('methodCall'):
                self.line(f'<methodName>{escape_text(message.method_name)}</methodName>')
                self.params(message.params)
        elif isinstance(message, Fault):
            with self.element('methodResponse'), self.element('fault'):
                self.value(message.value)
        elif isinstance(message, Result):
            with self.element('methodResponse'):
                self.params([message.value])
        else:
            raise TypeError(f'Cannot emit message of type {type(message).__name__}')
        return self.lines

    def emit(self, message) -> str:
        try:
            lines = self.message(message)
        except RecursionError:
            raise NestingTooDeepError('Values nested too deeply to emit') from None
        return '\n'.join(lines) + '\n'


def emit_message(message, indent: str = INDENT) -> str:
    return XmlRpcEmitter(indent).emit(message)
