import logging
from typing import List, Tuple, Union

from .chunks import as_chunk_type
from .png import Png, PngChunk
from .pngexceptions import ChunkNotFoundException
from .utils import Data as _Data


"""
Message hiding operations, working on whole PNG files held in memory.
"""

logger = logging.getLogger(__name__)


def hide(png_bytes: _Data, chunk_type: str, message: Union[str, _Data]) -> bytes:
    """
    Hides a message in a new chunk appended at the end of the image.

    :param png_bytes: the PNG file to hide the message in.
    :param chunk_type: the type of the chunk carrying the message (E.g. ruSt).
    :param message: the message, str messages are encoded as UTF-8.
    :returns: the bytes of the modified PNG file.
    """
    chunk_type = as_chunk_type(chunk_type)
    if not chunk_type.is_valid():
        logger.warning("Chunk type %s has its reserved bit set, decoders may reject it", chunk_type)
    if isinstance(message, str):
        message = message.encode('utf-8')
    png = Png.decode(png_bytes)
    png.append_chunk(PngChunk(chunk_type, message))
    logger.info("Hid %d bytes in a %s chunk", len(message), chunk_type)
    return png.bytes


def extract(png_bytes: _Data, chunk_type: str) -> str:
    """
    :param png_bytes: the PNG file to read the message from.
    :param chunk_type: the type of the chunk carrying the message.
    :returns: the message held by the first chunk of the given type.
    :raises ChunkNotFoundException: if there is no chunk of that type.
    :raises InvalidUtf8Exception: if the message is not valid UTF-8 text.
    """
    chunk_type = as_chunk_type(chunk_type)
    chunk = Png.decode(png_bytes).chunk_by_type(chunk_type)
    if chunk is None:
        raise ChunkNotFoundException(chunk_type)
    return chunk.data_as_string()


def remove(png_bytes: _Data, chunk_type: str) -> bytes:
    """
    Removes the first chunk of the given type.

    :returns: the bytes of the modified PNG file.
    :raises ChunkNotFoundException: if there is no chunk of that type.
    """
    png = Png.decode(png_bytes)
    removed = png.remove_chunk(chunk_type)
    logger.info("Removed a %s chunk holding %d bytes", removed.type, removed.length)
    return png.bytes


def list_chunks(png_bytes: _Data) -> List[Tuple[str, int]]:
    """
    :returns: the (type, length) of every chunk in the file, in order.
    """
    return [(str(chunk.type), chunk.length) for chunk in Png.decode(png_bytes)]
