#!/usr/bin/env python3
"""
Binmode-RPC -> XML-RPC 转换工具
用法: binmode-rpc2xml < input.binmode > output.xml
"""

import logging
import sys

from binmode_config import INDENT, LOG_FORMAT
from binmode_errors import BinmodeRpcError
from binmode_reader import decode_message
from xmlrpc_emitter import emit_message

logger = logging.getLogger(__name__)

USAGE = 'Usage: binmode-rpc2xml < binmode-rpc-data > xml-rpc-data'


def transcode(data, indent=INDENT):
    """解码一条消息并输出 XML-RPC 文本；解码成功前不产生任何输出"""
    result = decode_message(data)
    if result.trailing_bytes:
        logger.warning('Unprocessed data at end of input: %d bytes', result.trailing_bytes)
    return emit_message(result.message, indent)


def main(argv=None, stdin=None, stdout=None):
    """主函数，返回退出码"""
    argv = sys.argv[1:] if argv is None else argv
    stdin = sys.stdin.buffer if stdin is None else stdin
    stdout = sys.stdout.buffer if stdout is None else stdout
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)

    if argv:
        print(USAGE, file=sys.stderr)
        return 1

    data = stdin.read()
    try:
        document = transcode(data)
    except BinmodeRpcError as e:
        logger.error('binmode-rpc2xml: %s', e)
        return 2

    stdout.write(document.encode('utf-8', errors='surrogateescape'))
    stdout.flush()
    return 0


if __name__ == '__main__':
    sys.exit(main())
