from typing import Union

from .pngexceptions import InvalidChunkTypeException
from .utils import as_data


"""
This module contains the chunk type codes used to name every chunk in a PNG file.
"""

# Bit 5 of each byte of a type code carries one of the chunk properties
CHUNK_TYPE_PROPERTY_BITMASK = 0b00100000

_ALLOWED_BYTES = frozenset(range(ord('A'), ord('Z') + 1)) | frozenset(range(ord('a'), ord('z') + 1))


class ChunkType:

    """
    Represents a PNG chunk type code.
    A type code is made of four bytes, each of them being an ASCII letter.
    The case of each letter encodes a property of the chunk:
            [   ancillary bit (lowercase: ancillary)    |
                private bit (lowercase: private)        |
                reserved bit (has to be uppercase)      |
                safe-to-copy bit (lowercase: safe)      ]

    See https://www.w3.org/TR/PNG/#5Chunk-naming-conventions
    """

    def __init__(self, code: Union[bytes, bytearray]) -> None:
        """
        :param code: the four raw bytes of the type code.
        :raises TypeError: if code is not bytes-like.
        :raises InvalidChunkTypeException: if code is not made of exactly four ASCII letters.
        """
        code = as_data(code)
        if len(code) != 4:
            raise InvalidChunkTypeException(
                "A chunk type has to be 4 bytes long, got {}".format(len(code))
            )
        for i, byte in enumerate(code):
            if byte not in _ALLOWED_BYTES:
                raise InvalidChunkTypeException(
                    "Byte {} of chunk type {!r} is not an ASCII letter".format(i, code)
                )
        self.__code = code

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        """
        :param text: a four characters type name (E.g. IHDR).
        :returns: the corresponding chunk type.
        :raises TypeError: if text is not a str instance.
        :raises InvalidChunkTypeException: if text is not made of exactly four ASCII letters.
        """
        if not isinstance(text, str):
            raise TypeError("A chunk type name should be a string.")
        try:
            code = text.encode('ascii')
        except UnicodeEncodeError:
            raise InvalidChunkTypeException(
                "Chunk type {!r} contains non ASCII characters".format(text)
            ) from None
        return cls(code)

    @property
    def code(self) -> bytes:
        """
        :returns: the raw bytes of this type code.
        """
        return self.__code

    def __property_bit(self, index: int) -> bool:
        return bool(self.__code[index] & CHUNK_TYPE_PROPERTY_BITMASK)

    @property
    def is_critical(self) -> bool:
        """
        Critical chunks are needed to display the image.
        A decoder coming across a critical chunk it doesn't know about should produce an error.
        """
        return not self.__property_bit(0)

    @property
    def is_ancillary(self) -> bool:
        return self.__property_bit(0)

    @property
    def is_public(self) -> bool:
        """
        Public chunks are part of the PNG specification or registered.
        """
        return not self.__property_bit(1)

    @property
    def is_private(self) -> bool:
        return self.__property_bit(1)

    @property
    def is_reserved_bit_valid(self) -> bool:
        """
        The third letter is reserved and has to be uppercase in conforming files.
        """
        return not self.__property_bit(2)

    @property
    def is_safe_to_copy(self) -> bool:
        """
        Safe to copy chunks may be copied by editors that do not recognize them,
        even when the critical content of the image changed.
        """
        return self.__property_bit(3)

    def is_valid(self) -> bool:
        """
        :returns: whether this type code conforms to the PNG naming rules,
            which only leaves the reserved bit to check once the letters are validated.
        """
        return self.is_reserved_bit_valid

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self.__code == other.code

    def __hash__(self) -> int:
        return hash(self.__code)

    def __str__(self) -> str:
        return self.__code.decode('ascii')

    def __repr__(self) -> str:
        return "ChunkType('{}')".format(self)


def as_chunk_type(value: Union[ChunkType, str, bytes, bytearray]) -> ChunkType:
    """
    :param value: a chunk type, its name or its raw bytes.
    :returns: the corresponding :class:`ChunkType`.
    :raises TypeError: if value is none of the accepted types.
    :raises InvalidChunkTypeException: if value is not a valid type code.
    """
    if isinstance(value, ChunkType):
        return value
    if isinstance(value, str):
        return ChunkType.from_str(value)
    return ChunkType(value)


# Critical chunks defined by the PNG specification
IHDR = ChunkType(b'IHDR')
PLTE = ChunkType(b'PLTE')
IDAT = ChunkType(b'IDAT')
IEND = ChunkType(b'IEND')
