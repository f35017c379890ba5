import io

import pytest
from PIL import Image

from pngstash import ChunkType, PngChunk

from .chunk_data import MESSAGE, MESSAGE_CRC


@pytest.fixture
def png_bytes():
    """A real 4x3 RGB image as written by Pillow."""
    image = Image.new('RGB', (4, 3), color=(200, 30, 30))
    stream = io.BytesIO()
    image.save(stream, format='PNG')
    return stream.getvalue()


@pytest.fixture
def message_chunk():
    return PngChunk(ChunkType(b'RuSt'), MESSAGE)


@pytest.fixture
def message_chunk_bytes():
    return (
        len(MESSAGE).to_bytes(4, 'big') +
        b'RuSt' +
        MESSAGE +
        MESSAGE_CRC.to_bytes(4, 'big')
    )
