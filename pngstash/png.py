import logging
import zlib
from struct import unpack, pack
from typing import Iterable, Iterator, Optional, Union

import requests

from . import chunks
from .chunks import ChunkType, as_chunk_type
from .pngexceptions import *
from .utils import as_data, crc, Data as _Data


"""
This is the main pngstash module, and contains the most basic structures that make up a PNG file.
"""

logger = logging.getLogger(__name__)

# Type aliases for annotations
_Png = "Png"
_Chunk = "PngChunk"
_ChunkTypeLike = Union[ChunkType, str, bytes, bytearray]

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# The length header, type code and crc fields surrounding the data of a chunk
_CHUNK_FIELDS_SIZE = 12

MAX_CHUNK_LENGTH = (1 << 31) - 1


class Png:

    """
    Represents a PNG file according to the PNG specification: https://www.w3.org/TR/PNG/.
    A PNG file starts with the PNG signature.
    It then contains a stream of PNG chunks, each starting with a four bytes length,
    followed by a four bytes ascii valid and then by a payload of the specified length, followed by a CRC checksum.
    It is expected that a PNG file starts with an IHDR chunk and ends with an IEND chunk,
    but this class only edits the chunk stream and does not enforce it.
    """

    def __init__(self, chunks: Iterable[_Chunk] = ()) -> None:
        """
        Constructs a :class:`Png` object from a sequence of chunks.
        To read a PNG file from bytes, use :meth:`Png.decode`.
        To directly read a PNG file from disc or http, prefer the :func:`open` function.
        To create a new :class:`Png` object from scratch, prefer the :func:`create_empty_png` function.

        :param chunks: the chunks that make up the PNG, in order.
        :raises TypeError: if one of the chunks is not a :class:`PngChunk`.
        """
        self.__chunks = []
        for chunk in chunks:
            self.append_chunk(chunk)

    @classmethod
    def decode(cls, filebytes: _Data) -> _Png:
        """
        Decodes a whole PNG file.
        Every byte after the signature has to belong to a valid chunk,
        the first invalid chunk aborts the decoding.

        :param filebytes: the bytes that make up the PNG.
        :returns: the decoded :class:`Png`.
        :raises TypeError: if filebytes is not of the right type.
        :raises InvalidSignatureException: if the PNG signature is missing.
        :raises InvalidChunkStructureException: if a chunk is truncated.
        :raises InvalidChunkTypeException: if a chunk has an invalid type code.
        :raises InvalidCrcException: if a chunk's CRC does not match its content.
        """
        filebytes = as_data(filebytes)
        if not read_png_signature(filebytes):
            raise InvalidSignatureException(filebytes[:len(PNG_SIGNATURE)])
        decoded_chunks = []
        start = len(PNG_SIGNATURE)
        while start < len(filebytes):
            chunk, consumed = PngChunk.decode(filebytes, start)
            logger.debug("Read %s chunk of length %d at address %d", chunk.type, chunk.length, start)
            decoded_chunks.append(chunk)
            start += consumed
        logger.debug("Decoded %d chunks", len(decoded_chunks))
        return cls(decoded_chunks)

    @property
    def chunks(self) -> tuple:
        """
        :returns: the PNG chunks that make up this image.
        """
        return tuple(self.__chunks)

    def __len__(self) -> int:
        return len(self.__chunks)

    def __iter__(self) -> Iterator[_Chunk]:
        return iter(self.chunks)

    @property
    def bytes(self) -> bytes:
        """
        :returns: the raw bytes that make up the PNG file.
        """
        b = bytearray(PNG_SIGNATURE)
        for chunk in self.__chunks:
            b += chunk.bytes
        return bytes(b)

    def save(self, file_name: str) -> None:
        """
        Save this PNG to a file on disc.
        :param file_name: name to save the file as. Will be overwritten if is already exists.
        """
        data = self.bytes
        with _builtin_open(file_name, 'bw') as f:  # Workaround because we have our own open function
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), file_name)

    def append_chunk(self, chunk: _Chunk) -> None:
        """
        Adds the chunk at the end of the file.
        Keeping the IEND chunk last is up to the caller.

        :param chunk: the chunk to add to the image.
        :raises TypeError: if chunk is not a :class:`PngChunk`.
        """
        if not isinstance(chunk, PngChunk):
            raise TypeError("Expected a PngChunk, not {}".format(type(chunk).__name__))
        self.__chunks.append(chunk)
        logger.debug("Appended %s chunk at index %d", chunk.type, len(self.__chunks) - 1)

    def chunk_by_type(self, chunk_type: _ChunkTypeLike) -> Optional[_Chunk]:
        """
        :param chunk_type: the chunk type to look for (e.g. IHDR).
        :returns: the first chunk of the given type in this image, or None if there is none.
        """
        chunk_type = as_chunk_type(chunk_type)
        for chunk in self.__chunks:
            if chunk.type == chunk_type:
                return chunk
        return None

    def get_chunks_by_type(self, chunk_type: _ChunkTypeLike) -> tuple:
        """
        :param chunk_type: the chunk type to look for (e.g. IHDR).
        :returns: all the chunks of the given type in this image.
        """
        chunk_type = as_chunk_type(chunk_type)
        return tuple(filter(lambda c: c.type == chunk_type, self.__chunks))

    def remove_chunk(self, chunk_type: _ChunkTypeLike) -> _Chunk:
        """
        Removes the first chunk of the given type from the image.
        Other chunks of the same type are left untouched.

        :param chunk_type: the type of the chunk to remove.
        :returns: the removed chunk.
        :raises ChunkNotFoundException: if this image does not contain a chunk of that type.
        """
        chunk_type = as_chunk_type(chunk_type)
        for index, chunk in enumerate(self.__chunks):
            if chunk.type == chunk_type:
                del self.__chunks[index]
                logger.debug("Removed %s chunk at index %d", chunk_type, index)
                return chunk
        raise ChunkNotFoundException(chunk_type)

    def __str__(self) -> str:
        return "\n".join(str(chunk) for chunk in self.__chunks)

    def __repr__(self) -> str:
        return "<Png [{}]>".format(", ".join(str(chunk.type) for chunk in self.__chunks))


class PngChunk:

    """
    Represents a PNG chunk.
    The structure of a png chunk should be as follow:
            [   length (4 bytes, big-endian) |
                type (4 bytes, ascii)        |
                data (length bytes)          |
                crc (4 bytes)                ]

    The crc checksum is calculated with the chunk type and data, but does
    not include the length header.
    Chunks are never modified, use :meth:`with_data` to get a modified copy.
    """

    def __init__(self, chunk_type: _ChunkTypeLike, data: _Data = b'') -> None:
        """
        Creates a PngChunk from its type and payload.
        To read a chunk from its raw bytes, use :meth:`PngChunk.decode`.

        :param chunk_type: the type of the chunk, as a :class:`ChunkType`, a str or raw bytes.
        :param data: the payload of the chunk.
        :raises TypeError: if the data is not of a valid type.
        :raises InvalidChunkTypeException: if chunk_type is not a valid type code.
        :raises InvalidChunkStructureException: if data is too long to fit in a chunk.
        """
        self.__type = as_chunk_type(chunk_type)
        self.__data = as_data(data)
        if len(self.__data) > MAX_CHUNK_LENGTH:
            raise InvalidChunkStructureException(
                "A chunk can't hold more than {} bytes".format(MAX_CHUNK_LENGTH)
            )
        self.__crc = crc(self.__type.code, self.__data)

    @classmethod
    def decode(cls, data: _Data, offset: int = 0) -> tuple:
        """
        Reads the chunk starting at the given offset.
        Bytes following the chunk are left untouched so the caller can read the next one.

        :param data: a buffer containing the chunk.
        :param offset: the address of the chunk in the buffer.
        :returns: a (chunk, consumed) tuple, consumed being the size of the chunk in bytes.
        :raises InvalidChunkStructureException: if the buffer is too short to contain the chunk.
        :raises InvalidChunkTypeException: if the chunk's type code is invalid.
        :raises InvalidCrcException: if the chunk's CRC does not match its content.
        """
        data = as_data(data)
        remaining = len(data) - offset
        if remaining < _CHUNK_FIELDS_SIZE:
            raise InvalidChunkStructureException(
                "Incomplete chunk at address {}: {} bytes left, at least {} needed".format(
                    offset, remaining, _CHUNK_FIELDS_SIZE
                )
            )
        length = unpack('>I', data[offset:offset + 4])[0]
        if length > MAX_CHUNK_LENGTH:
            raise InvalidChunkStructureException(
                "Invalid chunk length {} at address {}".format(length, offset)
            )
        chunk_type = ChunkType(data[offset + 4:offset + 8])
        size = length + _CHUNK_FIELDS_SIZE
        if remaining < size:
            raise InvalidChunkStructureException(
                "Truncated {} chunk at address {}: length is {} but only {} bytes are left".format(
                    chunk_type, offset, length, remaining - _CHUNK_FIELDS_SIZE
                )
            )
        chunk = cls(chunk_type, data[offset + 8:offset + 8 + length])
        stored_crc = unpack('!I', data[offset + 8 + length:offset + size])[0]
        if stored_crc != chunk.crc:
            raise InvalidCrcException(chunk_type, chunk.crc, stored_crc)
        return chunk, size

    @property
    def bytes(self) -> bytes:
        """
        :returns: this chunk's raw content.
        """
        return pack('>I', self.length) + self.__type.code + self.__data + pack('!I', self.__crc)

    @property
    def crc(self) -> int:
        """
        :returns: the chunk's CRC checksum.
        """
        return self.__crc

    @property
    def type(self) -> ChunkType:
        """
        :returns: the type of this chunk (E.g. IHDR)
        """
        return self.__type

    def __len__(self) -> int:
        """
        :returns: the length of this chunk.
        """
        return self.length

    @property
    def length(self) -> int:
        """
        :returns: the length of this chunk's payload.
        """
        return len(self.__data)

    @property
    def data(self) -> bytes:
        """
        :returns: this chunk's payload.
        """
        return self.__data

    def with_data(self, data: _Data) -> _Chunk:
        """
        :param data: the new payload.
        :returns: a new chunk of the same type, with the given payload.
        :raises TypeError: if data is not of the correct type.
        """
        return PngChunk(self.__type, data)

    def data_as_string(self) -> str:
        """
        :returns: this chunk's payload, read as UTF-8 text.
        :raises InvalidUtf8Exception: if the payload is not valid UTF-8.
        """
        try:
            return self.__data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidUtf8Exception(self.__type) from e

    def __eq__(self, other) -> bool:
        if not isinstance(other, PngChunk):
            return NotImplemented
        return self.__type == other.type and self.__data == other.data

    def __hash__(self) -> int:
        return hash((self.__type, self.__data))

    def __str__(self) -> str:
        return "Chunk {{Length: {}, Type: {}, Crc: {}}}".format(self.length, self.__type, self.__crc)

    def __repr__(self) -> str:
        return "<PngChunk [{}] length={}>".format(self.__type, self.length)


_builtin_open = open


def open(filename: str) -> Png:
    """
    :returns: a Png object, reading from the given file name. Http and Https links are supported as well.
    """
    if filename.startswith('http://') or filename.startswith('https://'):
        response = requests.get(filename)
        response.raise_for_status()
        data = response.content
    else:
        with _builtin_open(filename, 'rb') as f:
            data = f.read()
    logger.debug("Read %d bytes from %s", len(data), filename)
    return Png.decode(data)


def read_png_signature(data: _Data) -> bool:
    return data[0:len(PNG_SIGNATURE)] == PNG_SIGNATURE


def create_empty_png() -> Png:
    """
    Creates a new Png object, with an IHDR chunk for a single black grayscale pixel,
    the matching IDAT chunk, and an IEND chunk.
    """
    # width, height, bit depth, colour type, compression, filter and interlace methods
    ihdr = PngChunk(chunks.IHDR, pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0))
    # one scanline: filter type byte followed by the pixel
    idat = PngChunk(chunks.IDAT, zlib.compress(b'\x00\x00'))
    iend = PngChunk(chunks.IEND)
    return Png((ihdr, idat, iend))
