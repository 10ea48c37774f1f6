'''
The chunk type is a 4-byte code restricted to ASCII letters: the case of each
letter (bit 5 of the byte) encodes a property of the chunk

 1. first byte: uppercase for critical, lowercase for ancillary chunks
 2. second byte: uppercase for public, lowercase for private chunks
 3. third byte: reserved, must be uppercase in conforming files
 4. fourth byte: lowercase if the chunk is safe to copy by editors that
    don't recognize it

See <http://www.libpng.org/pub/png/spec/1.2/PNG-Structure.html#Chunk-naming-conventions>.
'''
from ..exceptions import InvalidChunkTypeException, InconsistentByteLengthException


def _is_uppercase(byte: int) -> bool:
    return 65 <= byte <= 90


def _is_lowercase(byte: int) -> bool:
    return 97 <= byte <= 122


def _is_letter(byte: int) -> bool:
    return _is_uppercase(byte) or _is_lowercase(byte)


class ChunkType(object):
    '''Immutable value wrapping the 4 bytes of a chunk type.

    Building from raw bytes doesn't check the content, so that types
    read from a file can be represented whatever they are; use from_str()
    to build one from user input.'''
    SIZE = 4

    def __init__(self, raw: bytes):
        raw = bytes(raw)

        if len(raw) != self.SIZE:
            raise InconsistentByteLengthException(len(raw))

        self._raw = raw

    @classmethod
    def from_str(cls, text: str) -> 'ChunkType':
        raw = text.encode('utf-8')

        if not all(_is_letter(_) for _ in raw):
            raise InvalidChunkTypeException(text)

        if len(raw) != cls.SIZE:
            raise InconsistentByteLengthException(len(raw))

        return cls(raw)

    @property
    def raw(self) -> bytes:
        return self._raw

    def is_critical(self) -> bool:
        return _is_uppercase(self._raw[0])

    def is_public(self) -> bool:
        return _is_uppercase(self._raw[1])

    def is_reserved_bit_valid(self) -> bool:
        return _is_uppercase(self._raw[2])

    def is_safe_to_copy(self) -> bool:
        return _is_lowercase(self._raw[3])

    def is_valid(self) -> bool:
        return all(_is_letter(_) for _ in self._raw) and self.is_reserved_bit_valid()

    def __str__(self):
        return self._raw.decode('latin1')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)
