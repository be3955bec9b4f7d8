import struct

HEADER = b'binmode-rpc:'


def int_(n):
    return b'I' + struct.pack('<i', n)


def string(s):
    raw = s.encode('utf-8') if isinstance(s, str) else s
    return b'U' + struct.pack('<I', len(raw)) + raw


def record(index, s):
    return b'>' + bytes([index]) + string(s)[1:]


def recall(index):
    return b'<' + bytes([index])


def double(text):
    return b'D' + bytes([len(text)]) + text.encode('ascii')


def datetime_(text):
    return b'8' + bytes([len(text)]) + text.encode('ascii')


def binary(data):
    return b'B' + struct.pack('<I', len(data)) + data


def array(*items):
    return b'A' + struct.pack('<I', len(items)) + b''.join(items)


def struct_(*pairs):
    return b'S' + struct.pack('<I', len(pairs)) + b''.join(k + v for k, v in pairs)


def call(name, *params):
    return HEADER + b'C' + string(name) + array(*params)


def response(value):
    return HEADER + b'R' + value


def fault(code, message):
    return HEADER + b'RF' + struct_((string('faultCode'), int_(code)),
                                    (string('faultString'), string(message)))
