"""
Binmode-RPC 值与消息的数据结构
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union


class ValueKind(Enum):
    """值类型枚举"""
    INT = 'int'
    DOUBLE = 'double'
    BOOLEAN = 'boolean'
    STRING = 'string'
    DATETIME = 'dateTime.iso8601'
    BASE64 = 'base64'
    ARRAY = 'array'
    STRUCT = 'struct'


@dataclass
class RpcInt:
    value: int
    kind = ValueKind.INT


@dataclass
class RpcDouble:
    """线上原样文本，不做数值解析"""
    text: str
    kind = ValueKind.DOUBLE


@dataclass
class RpcBoolean:
    value: bool
    kind = ValueKind.BOOLEAN


@dataclass
class RpcString:
    text: str
    kind = ValueKind.STRING


@dataclass
class RpcDateTime:
    text: str
    kind = ValueKind.DATETIME


@dataclass
class RpcBase64:
    data: bytes
    kind = ValueKind.BASE64


@dataclass
class RpcArray:
    items: List['RpcValue'] = field(default_factory=list)
    kind = ValueKind.ARRAY


@dataclass
class RpcStruct:
    members: Dict[str, 'RpcValue'] = field(default_factory=dict)
    kind = ValueKind.STRUCT


RpcValue = Union[RpcInt, RpcDouble, RpcBoolean, RpcString, RpcDateTime,
                 RpcBase64, RpcArray, RpcStruct]


@dataclass
class Call:
    method_name: str
    params: List[RpcValue] = field(default_factory=list)


@dataclass
class Fault:
    value: RpcStruct


@dataclass
class Result:
    value: RpcValue


Message = Union[Call, Fault, Result]


@dataclass
class DecodeResult:
    """trailing_bytes > 0 表示消息之后还有未处理的数据"""
    message: Message
    trailing_bytes: int = 0
