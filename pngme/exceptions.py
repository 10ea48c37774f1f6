class PngmeException(Exception):
    '''Base class to extend in order to throw exception in pngme.

    It takes a single argument that represents the chain of the layer that
    caused the exception: every record the exception passes through appends
    the name of the field that was being unpacked.
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    @property
    def location(self) -> str:
        return '.'.join(reversed(self.chain))

    @property
    def message(self) -> str:
        return self.__class__.__name__

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.location})'


class UnpackException(PngmeException):
    '''A field could not be read from the stream, usually because the data is truncated.'''

    def __init__(self, reason, chain=None):
        self.reason = reason
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'unable to unpack: {self.reason}'


class MagicException(PngmeException):
    def __init__(self, expected, found, chain=None):
        self.expected = expected
        self.found = found
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'magic mismatch: expected {self.expected!r}, found {self.found!r}'


class InvalidCrcException(PngmeException):
    '''The CRC computed over the data doesn't match the one stored.

    "crc" is the computed value, "expected" the value read from the stream.'''

    def __init__(self, crc, expected, chain=None):
        self.crc = crc
        self.expected = expected
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'Invalid crc: {self.crc} (stored 0x{self.expected:08x}, computed 0x{self.crc:08x})'


class InvalidLengthException(PngmeException):
    def __init__(self, length, available=None, chain=None):
        self.length = length
        self.available = available
        super().__init__(chain=chain)

    @property
    def message(self):
        msg = f'Invalid length: {self.length}'
        if self.available is not None:
            msg += f' ({self.available} bytes available)'
        return msg


class ChunkTypeException(PngmeException):
    pass


class InvalidChunkTypeException(ChunkTypeException):
    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'Invalid chunk type: {self.chunk_type}'


class InconsistentByteLengthException(ChunkTypeException):
    def __init__(self, length, chain=None):
        self.length = length
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'Inconsistent byte length: {self.length}'


class ChunkNotFoundException(PngmeException):
    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'no chunk with type {self.chunk_type}'


class DecodeException(PngmeException):
    '''The data of a chunk is not valid UTF-8.'''

    def __init__(self, chunk_type, reason, chain=None):
        self.chunk_type = chunk_type
        self.reason = reason
        super().__init__(chain=chain)

    @property
    def message(self):
        return f'data of chunk {self.chunk_type} is not valid UTF-8: {self.reason}'
