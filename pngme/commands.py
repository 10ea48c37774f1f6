'''
Commands to hide messages inside a PNG file: each message is stored as the
data of a new chunk whose type is a random token, the token is needed
to get the message back or to remove it.
'''
import argparse
import logging
import os
import sys
from typing import List

from .png import PNGFile, PNGChunk
from .png.chunk_type import ChunkType
from .png.utils import new_chunk_type
from .exceptions import PngmeException, ChunkNotFoundException


logger = logging.getLogger(__name__)


def write_png(png: PNGFile, path) -> None:
    with open(path, 'wb') as f:
        f.write(png.as_bytes())


def encode(path, message: str, output=None) -> str:
    '''Append the message to the file at "path" (or write the result to "output")
    and return the chunk type that identifies it.'''
    png = PNGFile(path)

    token = new_chunk_type()
    png.append_chunk(PNGChunk.new(ChunkType.from_str(token), message.encode('utf-8')))

    output = output if output is not None else path
    logger.debug('writing %d chunks to \'%s\'', len(png.chunks), output)
    write_png(png, output)

    return token


def decode(path, chunk_type: str) -> str:
    png = PNGFile(path)

    chunk = png.chunk_by_type(chunk_type)

    if chunk is None:
        raise ChunkNotFoundException(chunk_type)

    return chunk.data_as_text()


def remove(path, chunk_type: str) -> str:
    '''Remove the first chunk with the given type, rewriting the file in place,
    and return the message it contained.'''
    png = PNGFile(path)

    chunk = png.remove_chunk(chunk_type)
    # a message that cannot be shown is not removed
    message = chunk.data_as_text()

    write_png(png, path)

    return message


def _flags(chunk_type: ChunkType) -> str:
    return ' '.join([
        'critical' if chunk_type.is_critical() else 'ancillary',
        'public' if chunk_type.is_public() else 'private',
        'safe-to-copy' if chunk_type.is_safe_to_copy() else 'unsafe-to-copy',
    ])


def print_chunks(path) -> List[str]:
    png = PNGFile(path)

    return [
        f'[{idx:02d}] {chunk} {_flags(chunk.chunk_type)}'
        for idx, chunk in enumerate(png.chunks)
    ]


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pngme', description='hide messages inside PNG files')
    subparsers = parser.add_subparsers(dest='command', required=True)

    parser_encode = subparsers.add_parser('encode', help='hide a message into a PNG file')
    parser_encode.add_argument('path', help='path of the PNG file')
    parser_encode.add_argument('message', help='message to hide')
    parser_encode.add_argument('-o', '--output', help='where to write the result (default: in place)')

    parser_decode = subparsers.add_parser('decode', help='print the message hidden with the given chunk type')
    parser_decode.add_argument('path', help='path of the PNG file')
    parser_decode.add_argument('chunk_type', help='the token returned by encode')

    parser_remove = subparsers.add_parser('remove', help='remove the message hidden with the given chunk type')
    parser_remove.add_argument('path', help='path of the PNG file')
    parser_remove.add_argument('chunk_type', help='the token returned by encode')

    parser_print = subparsers.add_parser('print', help='list the chunks of a PNG file')
    parser_print.add_argument('path', help='path of the PNG file')

    return parser


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    try:
        if args.command == 'encode':
            token = encode(args.path, args.message, output=args.output)
            print(f'message encoded, the token is {token}: keep it secret, you need it to decode the message')
        elif args.command == 'decode':
            print(decode(args.path, args.chunk_type))
        elif args.command == 'remove':
            print(remove(args.path, args.chunk_type))
        elif args.command == 'print':
            for line in print_chunks(args.path):
                print(line)
    except PngmeException as e:
        logger.error('failed to %s \'%s\': %s', args.command, args.path, e)
        return 1
    except OSError as e:
        logger.error('failed to access \'%s\': %s', args.path, e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
