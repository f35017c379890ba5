class PngException(Exception):
    """Base class for every error raised while reading or editing a png."""


class InvalidPngStructureException(PngException):
    """Raised when a png structure is invalid."""
    def __init__(self, txt):
        super(InvalidPngStructureException, self).__init__(txt)


class InvalidSignatureException(InvalidPngStructureException):
    """Raised when a byte stream does not start with the PNG signature."""
    def __init__(self, found=b''):
        self.found = bytes(found)
        super(InvalidSignatureException, self).__init__(
            "missing PNG signature, found {!r}".format(self.found)
        )


class InvalidChunkStructureException(PngException):
    """Raised when a chunk's internal structure is invalid."""
    def __init__(self, txt):
        super(InvalidChunkStructureException, self).__init__(txt)


class InvalidCrcException(InvalidChunkStructureException):
    """Raised when a chunk's CRC does not match its type and data."""
    def __init__(self, chunk_type, expected, found):
        self.chunk_type = chunk_type
        self.expected = expected
        self.found = found
        super(InvalidCrcException, self).__init__(
            "checksum does not match data in {} chunk: expected {:#010x}, found {:#010x}".format(
                chunk_type, expected, found
            )
        )


class InvalidChunkTypeException(PngException):
    """Raised when a chunk type code is not made of four ASCII letters."""
    def __init__(self, txt):
        super(InvalidChunkTypeException, self).__init__(txt)


class InvalidUtf8Exception(PngException):
    """Raised when the data of a chunk can't be read as UTF-8 text."""
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super(InvalidUtf8Exception, self).__init__(
            "{} chunk data is not valid utf8".format(chunk_type)
        )


class ChunkNotFoundException(PngException):
    """Raised when looking for a chunk type the png does not contain."""
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super(ChunkNotFoundException, self).__init__(
            "no {} chunk in this image".format(chunk_type)
        )
