'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html>.

Here the file is seen only as a signature followed by a sequence of chunks:
the content of the chunks is not interpreted, so that a chunk can be added,
found or removed and the file written back untouched for everything else.

'''
import logging
from typing import Optional

from ..core import Chunk
from .. import fields
from ..meta import Endianess
from ..properties import Dependency
from ..common import crc
from ..exceptions import (
    UnpackException,
    InvalidCrcException,
    InvalidLengthException,
    InvalidChunkTypeException,
    ChunkNotFoundException,
    DecodeException,
)
from .chunk_type import ChunkType


logger = logging.getLogger(__name__)

SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field (see ChunkType for the other properties).

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    length = fields.StructField('I', endianess=Endianess.BIG_ENDIAN)  # big endian
    type   = fields.StringField(4)
    data   = fields.StringField(Dependency('.length'))
    crc    = crc.CRCField(['type', 'data'], endianess=Endianess.BIG_ENDIAN)  # network byte order

    @classmethod
    def new(cls, chunk_type: ChunkType, data: bytes) -> 'PNGChunk':
        '''Build a chunk with length and crc calculated from the arguments.'''
        return cls(type=chunk_type.raw, data=data)

    @classmethod
    def parse(cls, data: bytes) -> 'PNGChunk':
        return cls(data)

    def __str__(self):
        return f'{self.chunk_type} length={self.length.value} crc=0x{self.crc.value:08x}'

    @property
    def chunk_type(self) -> ChunkType:
        return ChunkType(self.type.value)

    def unpack(self, stream):
        try:
            super().unpack(stream)
        except UnpackException as e:
            # the stream ended in the middle of the data
            if e.chain[-1] == 'crc' and len(self.data.value) != self.length.value:
                raise InvalidLengthException(self.length.value, len(self.data.value), chain=['data'])
            raise

    def validate(self):
        if not self.crc.is_valid():
            raise InvalidCrcException(self.crc.calculate(), self.crc.value)

        if len(self.data.value) != self.length.value:
            raise InvalidLengthException(self.length.value, len(self.data.value))

        if not self.chunk_type.is_valid():
            raise InvalidChunkTypeException(str(self.chunk_type))

    def as_bytes(self) -> bytes:
        return self.raw

    def data_as_text(self) -> str:
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeException(str(self.chunk_type), e.reason) from e


class PNGFile(Chunk):
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    @classmethod
    def parse(cls, data: bytes) -> 'PNGFile':
        return cls(data)

    def append_chunk(self, chunk: PNGChunk) -> None:
        logger.debug('appending chunk %s', chunk.chunk_type)
        self.chunks.append(chunk)

    def _index_of(self, chunk_type: str) -> Optional[int]:
        for idx, chunk in enumerate(self.chunks):
            if str(chunk.chunk_type) == chunk_type:
                return idx

        return None

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        '''Return the first chunk with the given type, None if there is none.'''
        idx = self._index_of(chunk_type)

        return self.chunks[idx] if idx is not None else None

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        idx = self._index_of(chunk_type)

        if idx is None:
            raise ChunkNotFoundException(chunk_type)

        logger.debug('removing chunk %s at index %d', chunk_type, idx)

        return self.chunks.pop(idx)

    def as_bytes(self) -> bytes:
        return self.raw
