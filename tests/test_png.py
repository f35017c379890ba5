import io

import pytest
import requests

import pngstash
from pngstash import Png, PngChunk, PNG_SIGNATURE, create_empty_png, read_png_signature
from pngstash.chunks import IDAT, IEND, IHDR
from pngstash.pngexceptions import (
    ChunkNotFoundException,
    InvalidChunkStructureException,
    InvalidCrcException,
    InvalidSignatureException,
)


def build_png(*chunks):
    return Png([create_empty_png().chunks[0], *chunks, PngChunk(IEND)])


def test_decode_real_png(png_bytes):
    """Check decoding a file written by Pillow"""
    png = Png.decode(png_bytes)

    assert png.chunks[0].type == IHDR
    assert png.chunks[-1].type == IEND
    assert png.chunk_by_type('IDAT') is not None
    assert png.chunk_by_type(b'IHDR').data[:8] == b'\x00\x00\x00\x04\x00\x00\x00\x03'


def test_png_round_trip(png_bytes):
    png = Png.decode(png_bytes)

    assert png.bytes == png_bytes
    assert Png.decode(png.bytes).chunks == png.chunks


def test_decode_signature_only():
    png = Png.decode(PNG_SIGNATURE)

    assert len(png) == 0
    assert png.bytes == PNG_SIGNATURE


@pytest.mark.parametrize('data', [
    b'',
    b'\x89PNG',
    b'GIF89a\x00\x00\x00\x00',
    b'\x88PNG\r\n\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82',
    b'\x89PNG\n\r\x1a\n\x00\x00\x00\x00IEND\xaeB`\x82',
])
def test_decode_invalid_signature(data):
    with pytest.raises(InvalidSignatureException):
        Png.decode(data)


def test_decode_corrupted_chunk_aborts(png_bytes):
    png = Png.decode(png_bytes)
    idat_address = png_bytes.index(png.chunk_by_type(IDAT).bytes)
    corrupted = bytearray(png_bytes)
    corrupted[idat_address + 8] ^= 0x01

    with pytest.raises(InvalidCrcException):
        Png.decode(corrupted)


def test_decode_truncated_file(png_bytes):
    with pytest.raises(InvalidChunkStructureException):
        Png.decode(png_bytes[:-3])


def test_decode_trailing_garbage(png_bytes):
    with pytest.raises(InvalidChunkStructureException):
        Png.decode(png_bytes + b'hidden')


def test_append_chunk(png_bytes):
    png = Png.decode(png_bytes)
    count = len(png)
    chunk = PngChunk('ruSt', b'hello')
    png.append_chunk(chunk)

    assert len(png) == count + 1
    assert png.chunks[-1] is chunk
    assert png.chunks[-2].type == IEND


def test_append_wrong_type():
    png = create_empty_png()

    with pytest.raises(TypeError):
        png.append_chunk(b'\x00\x00\x00\x00IEND\xaeB`\x82')


def test_chunks_is_read_only():
    png = create_empty_png()

    assert isinstance(png.chunks, tuple)
    assert [chunk.type for chunk in png] == [IHDR, IDAT, IEND]


def test_chunk_by_type_first_match():
    first = PngChunk('ruSt', b'first')
    second = PngChunk('ruSt', b'second')
    png = build_png(first, second)

    assert png.chunk_by_type('ruSt') is first
    assert png.get_chunks_by_type('ruSt') == (first, second)
    assert png.chunk_by_type('teSt') is None
    assert png.get_chunks_by_type('teSt') == ()


def test_remove_chunk_first_match():
    first = PngChunk('ruSt', b'first')
    other = PngChunk('teXt', b'other')
    second = PngChunk('ruSt', b'second')
    png = build_png(first, other, second)

    assert png.remove_chunk('ruSt') is first
    assert [str(c.type) for c in png] == ['IHDR', 'teXt', 'ruSt', 'IEND']
    assert png.chunk_by_type('ruSt') is second

    assert png.remove_chunk('ruSt') is second
    with pytest.raises(ChunkNotFoundException):
        png.remove_chunk('ruSt')


def test_read_png_signature(png_bytes):
    assert read_png_signature(png_bytes)
    assert not read_png_signature(png_bytes[1:])


def test_create_empty_png():
    png = create_empty_png()

    assert png.bytes.startswith(PNG_SIGNATURE)
    assert Png.decode(png.bytes).chunks == png.chunks


def test_empty_png_is_an_image():
    from PIL import Image

    image = Image.open(io.BytesIO(create_empty_png().bytes))
    image.load()

    assert image.size == (1, 1)
    assert image.getpixel((0, 0)) == 0


def test_png_string():
    png = create_empty_png()

    assert repr(png) == '<Png [IHDR, IDAT, IEND]>'
    assert str(png).splitlines()[2] == 'Chunk {Length: 0, Type: IEND, Crc: 2923585666}'


def test_save_and_open(tmp_path, png_bytes):
    png = Png.decode(png_bytes)
    png.append_chunk(PngChunk('ruSt', b'hello'))
    path = tmp_path / 'out.png'
    png.save(str(path))

    assert path.read_bytes() == png.bytes
    assert pngstash.open(str(path)).chunks == png.chunks


def test_open_url(monkeypatch, png_bytes):
    class Response:
        content = png_bytes

        def raise_for_status(self):
            pass

    requested = []

    def fake_get(url):
        requested.append(url)
        return Response()

    monkeypatch.setattr(requests, 'get', fake_get)

    png = pngstash.open('https://example.com/image.png')

    assert requested == ['https://example.com/image.png']
    assert png.bytes == png_bytes
