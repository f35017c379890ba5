"""
A pure python package to hide messages in the chunks of PNG files.
"""

from .chunks import ChunkType, as_chunk_type
from .png import Png, PngChunk, PNG_SIGNATURE, open, read_png_signature, create_empty_png
from .commands import hide, extract, remove, list_chunks
from .pngexceptions import *
