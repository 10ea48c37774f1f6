import struct

import pytest

from pngme.exceptions import (
    PngmeException,
    UnpackException,
    MagicException,
    InvalidCrcException,
    InvalidLengthException,
    InvalidChunkTypeException,
    ChunkNotFoundException,
    DecodeException,
)
from pngme.png import PNGHeader, PNGChunk, PNGFile, SIGNATURE
from pngme.png.chunk_type import ChunkType


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


@pytest.fixture
def rust_chunk_data():
    """The serialized chunk of type 'RuSt' containing MESSAGE."""
    return struct.pack('>I', len(MESSAGE)) + b'RuSt' + MESSAGE + struct.pack('>I', MESSAGE_CRC)


def build_chunk(chunk_type: str, data: bytes) -> PNGChunk:
    return PNGChunk.new(ChunkType.from_str(chunk_type), data)


def build_png(*chunk_types) -> PNGFile:
    png = PNGFile()
    for chunk_type in chunk_types:
        png.append_chunk(build_chunk(chunk_type, f'data of {chunk_type}'.encode()))

    return png


def test_header():
    """Check header is right"""
    png_header = PNGHeader()

    assert png_header.magic.value == b'\x89PNG\x0d\x0a\x1a\x0a'
    assert png_header.raw == SIGNATURE


def test_chunk_new():
    chunk = build_chunk('RuSt', MESSAGE)

    assert chunk.length.value == 42
    assert chunk.chunk_type == ChunkType.from_str('RuSt')
    assert chunk.data.value == MESSAGE
    assert chunk.crc.value == MESSAGE_CRC
    assert str(chunk) == f'RuSt length=42 crc=0x{MESSAGE_CRC:08x}'


def test_chunk_new_empty_data():
    chunk = build_chunk('IEND', b'')

    assert chunk.length.value == 0
    assert chunk.as_bytes() == b'\x00\x00\x00\x00IEND\xae\x42\x60\x82'


def test_chunk_from_bytes(rust_chunk_data):
    chunk = PNGChunk.parse(rust_chunk_data)

    assert chunk.length.value == 42
    assert str(chunk.chunk_type) == 'RuSt'
    assert chunk.data_as_text() == 'This is where your secret message will be!'
    assert chunk.crc.value == 2882656334
    assert chunk.size == len(rust_chunk_data)


def test_chunk_as_bytes(rust_chunk_data):
    assert build_chunk('RuSt', MESSAGE).as_bytes() == rust_chunk_data
    assert PNGChunk.parse(rust_chunk_data).as_bytes() == rust_chunk_data


def test_chunk_round_trip():
    for data in [b'', b'\x00', MESSAGE, bytes(range(256)) * 4]:
        chunk = build_chunk('ruSt', data)

        assert PNGChunk.parse(chunk.as_bytes()) == chunk


def test_chunk_invalid_crc(rust_chunk_data):
    data = rust_chunk_data[:-4] + struct.pack('>I', MESSAGE_CRC - 1)

    with pytest.raises(InvalidCrcException) as e:
        PNGChunk.parse(data)

    assert e.value.crc == MESSAGE_CRC
    assert e.value.expected == MESSAGE_CRC - 1
    assert str(e.value).startswith(f'Invalid crc: {MESSAGE_CRC}')


def test_chunk_crc_sensitivity(rust_chunk_data):
    """Flipping any bit of the type or of the data must be detected."""
    for idx in range(4, len(rust_chunk_data) - 4):
        for bit in range(8):
            corrupted = bytearray(rust_chunk_data)
            corrupted[idx] ^= 1 << bit

            with pytest.raises(InvalidCrcException):
                PNGChunk.parse(bytes(corrupted))


def test_chunk_length_too_big(rust_chunk_data):
    data = struct.pack('>I', 50) + rust_chunk_data[4:]

    with pytest.raises(InvalidLengthException) as e:
        PNGChunk.parse(data)

    assert e.value.length == 50
    assert e.value.available == 46
    assert e.value.location == 'data'


def test_chunk_truncated(rust_chunk_data):
    with pytest.raises(InvalidLengthException):
        PNGChunk.parse(rust_chunk_data[:20])

    with pytest.raises(UnpackException):
        PNGChunk.parse(rust_chunk_data[:2])

    with pytest.raises(UnpackException) as e:
        PNGChunk.parse(build_chunk('IEND', b'').as_bytes()[:10])

    assert e.value.location == 'crc'

    # cut inside the type, whatever the declared length
    for length in [0, 5]:
        with pytest.raises(UnpackException) as e:
            PNGChunk.parse(struct.pack('>I', length) + b'Ru')

        assert not isinstance(e.value, InvalidLengthException)
        assert e.value.location == 'type'
        assert e.value.reason == 'needed 4 bytes, found 2'


def test_chunk_invalid_type():
    # the crc is right but the reserved bit is not
    chunk = build_chunk('Rust', MESSAGE)

    with pytest.raises(InvalidChunkTypeException) as e:
        PNGChunk.parse(chunk.as_bytes())

    assert e.value.chunk_type == 'Rust'


def test_chunk_invalid_type_not_letters():
    chunk = PNGChunk(type=b'Ru1t', data=b'kebab')

    assert chunk.length.value == 5

    with pytest.raises(InvalidChunkTypeException) as e:
        PNGChunk.parse(chunk.as_bytes())

    assert e.value.chunk_type == 'Ru1t'


def test_chunk_data_as_text_invalid_utf8():
    chunk = build_chunk('ruSt', b'\xff\xfe\xfd')

    with pytest.raises(DecodeException) as e:
        chunk.data_as_text()

    assert e.value.chunk_type == 'ruSt'
    assert isinstance(e.value.__cause__, UnicodeDecodeError)


def test_png_file(png_data):
    """Check unpacking a pre-established PNG file is fine"""
    png = PNGFile(png_data)

    assert png.header.magic.value == SIGNATURE
    assert str(png.chunks[0].chunk_type) == 'IHDR'
    assert str(png.chunks[-1].chunk_type) == 'IEND'
    assert png.chunks[0].offset == 8

    for chunk in png.chunks:
        assert chunk.crc.is_valid()

    assert png.as_bytes() == png_data


def test_png_file_from_path(png_path, png_data):
    assert PNGFile(png_path).as_bytes() == png_data
    assert PNGFile(str(png_path)).as_bytes() == png_data


def test_png_file_empty():
    png = PNGFile()

    assert len(png.chunks) == 0
    assert png.as_bytes() == SIGNATURE
    assert len(PNGFile.parse(SIGNATURE).chunks) == 0


def test_png_file_wrong_signature(png_data):
    with pytest.raises(MagicException) as e:
        PNGFile(b'\x89PNG\x0d\x0a\x1a\x0b' + png_data[8:])

    assert e.value.location == 'header.magic'

    for data in [b'', b'\x89PNG', b'GIF89a' + png_data]:
        with pytest.raises(MagicException):
            PNGFile.parse(data)


def test_png_file_corrupted_chunk(png_data):
    corrupted = bytearray(png_data)
    # the first byte of the IHDR data (the width)
    corrupted[16] ^= 0xff

    with pytest.raises(InvalidCrcException) as e:
        PNGFile.parse(bytes(corrupted))

    assert e.value.location == 'chunks.0'
    assert isinstance(e.value, PngmeException)


def test_png_file_trailing_garbage(png_data):
    with pytest.raises(UnpackException) as e:
        PNGFile.parse(png_data + b'\x00\x00')

    assert e.value.chain[-1] == 'chunks'


def test_png_file_round_trip(png_data):
    png = PNGFile.parse(png_data)
    n = len(png.chunks)

    png.append_chunk(build_chunk('ruSt', MESSAGE))
    png.append_chunk(build_chunk('ruSt', b'another one'))
    png.append_chunk(build_chunk('abCD', b''))

    data = png.as_bytes()

    assert data[:len(png_data)] == png_data

    reparsed = PNGFile.parse(data)

    assert len(reparsed.chunks) == n + 3
    assert list(reparsed.chunks) == list(png.chunks)
    assert reparsed.as_bytes() == data


def test_png_file_chunk_by_type():
    png = build_png('IHDR', 'ruSt', 'IEND')

    chunk = png.chunk_by_type('ruSt')

    assert chunk is not None
    assert chunk.data_as_text() == 'data of ruSt'
    assert png.chunk_by_type('zzZz') is None
    assert len(png.chunks) == 3


def test_png_file_chunk_by_type_first_match():
    png = PNGFile()
    png.append_chunk(build_chunk('ruSt', b'first'))
    png.append_chunk(build_chunk('ruSt', b'second'))

    assert png.chunk_by_type('ruSt').data.value == b'first'


def test_png_file_remove_chunk():
    png = build_png('IHDR', 'ruSt', 'IEND')

    chunk = png.remove_chunk('ruSt')

    assert chunk.data_as_text() == 'data of ruSt'
    assert [str(_.chunk_type) for _ in png.chunks] == ['IHDR', 'IEND']

    with pytest.raises(ChunkNotFoundException) as e:
        png.remove_chunk('ruSt')

    assert e.value.chunk_type == 'ruSt'
    assert str(e.value) == 'no chunk with type ruSt'


def test_png_file_remove_chunk_first_match():
    png = PNGFile()
    png.append_chunk(build_chunk('ruSt', b'first'))
    png.append_chunk(build_chunk('IEND', b''))
    png.append_chunk(build_chunk('ruSt', b'second'))

    assert png.remove_chunk('ruSt').data.value == b'first'
    assert [_.data.value for _ in png.chunks] == [b'', b'second']


def test_secret_message(rust_chunk_data):
    png = PNGFile.parse(SIGNATURE + rust_chunk_data)

    chunk = png.chunk_by_type('RuSt')

    assert chunk.data_as_text() == 'This is where your secret message will be!'
