from typing import Union, get_args
from zlib import crc32

Data = Union[bytes, bytearray, memoryview]


def as_data(data: Data) -> bytes:
    if not isinstance(data, get_args(Data)):
        types = " or ".join(t.__name__ for t in get_args(Data))
        raise TypeError("Expected {}, not {}".format(types, type(data).__name__))
    if not isinstance(data, bytes):
        data = bytes(data)
    return data


def crc(*parts: bytes) -> int:
    """Standard PNG CRC-32 (ISO 3309 / ITU-T V.42), as computed by zlib,
    over the concatenation of the given parts.
    See https://www.w3.org/TR/PNG/#5CRC-algorithm"""
    value = 0
    for part in parts:
        value = crc32(part, value)
    return value & 0xffffffff
