import argparse
import logging
import sys

from . import commands
from .pngexceptions import PngException


"""
Command line interface: reads a whole PNG file, runs one of the message commands on it
and writes the result back.
"""

logger = logging.getLogger(__name__)


def _read(path):
    with open(path, 'rb') as f:
        return f.read()


def _write(path, data):
    with open(path, 'wb') as f:
        f.write(data)
    logger.debug("Wrote %d bytes to %s", len(data), path)


def cmd_hide(args):
    # argv bytes that are not valid UTF-8 come in as surrogate escapes
    message = args.message.encode('utf-8', 'surrogateescape')
    data = commands.hide(_read(args.file), args.chunk_type, message)
    _write(args.output or args.file, data)


def cmd_extract(args):
    print(commands.extract(_read(args.file), args.chunk_type))


def cmd_remove(args):
    data = commands.remove(_read(args.file), args.chunk_type)
    _write(args.output or args.file, data)


def cmd_list(args):
    for index, (chunk_type, length) in enumerate(commands.list_chunks(_read(args.file))):
        print(f'[{index:02d}] {chunk_type} {length}')


def build_parser():
    parser = argparse.ArgumentParser(prog='pngstash', description='Hide messages in PNG chunks.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug messages')
    subparsers = parser.add_subparsers(dest='command', required=True, help='Operation to run')

    hide_parser = subparsers.add_parser('hide', help='Hide a message in a new chunk')
    hide_parser.add_argument('file', help='Path to the PNG file')
    hide_parser.add_argument('chunk_type', help='Type of the chunk carrying the message (e.g. ruSt)')
    hide_parser.add_argument('message', help='Message to hide')
    hide_parser.add_argument('-o', '--output', help='Where to write the result (default: overwrite the file)')
    hide_parser.set_defaults(func=cmd_hide)

    extract_parser = subparsers.add_parser('extract', help='Print the message held by a chunk')
    extract_parser.add_argument('file', help='Path to the PNG file')
    extract_parser.add_argument('chunk_type', help='Type of the chunk carrying the message')
    extract_parser.set_defaults(func=cmd_extract)

    remove_parser = subparsers.add_parser('remove', help='Remove the first chunk of a type')
    remove_parser.add_argument('file', help='Path to the PNG file')
    remove_parser.add_argument('chunk_type', help='Type of the chunk to remove')
    remove_parser.add_argument('-o', '--output', help='Where to write the result (default: overwrite the file)')
    remove_parser.set_defaults(func=cmd_remove)

    list_parser = subparsers.add_parser('list', help='List the chunks of a PNG file')
    list_parser.add_argument('file', help='Path to the PNG file')
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')
    try:
        args.func(args)
    except (PngException, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
