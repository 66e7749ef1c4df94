"""Main CLI entry point for frontvars."""

import argparse
import logging
import sys
from typing import Optional, Tuple

from .commands import list_command, rename_command, replace_command, set_command


LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def line_range(value: str) -> Tuple[int, int]:
    """Parse ``START`` or ``START:END`` into a 1-based inclusive line range."""
    start_text, _, end_text = value.partition(':')
    try:
        start = int(start_text)
        end = int(end_text) if end_text else start
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid line range: {value!r}")
    if start < 1 or end < start:
        raise argparse.ArgumentTypeError(f"invalid line range: {value!r}")
    return start, end


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the frontvars CLI."""
    parser = argparse.ArgumentParser(
        prog='frontvars',
        description='Replace {{variables}} with YAML frontmatter values on demand'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to a YAML/JSON settings file'
    )
    parser.add_argument(
        '--log-level',
        choices=list(LOG_LEVELS),
        default='warn',
        help='Set log level'
    )
    parser.add_argument(
        '--notify',
        choices=['all', 'errors', 'none'],
        help='Notification level (overrides settings)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Replace command
    replace_parser = subparsers.add_parser('replace', help='Replace variables in a document')
    replace_parser.add_argument('file', type=str, help='Path to the document')
    replace_parser.add_argument(
        '--in-place',
        action='store_true',
        help='Write the result back to the file instead of stdout'
    )
    replace_parser.add_argument(
        '--body-only',
        action='store_true',
        help='Print only the document body (without frontmatter)'
    )
    scope = replace_parser.add_mutually_exclusive_group()
    scope.add_argument(
        '--filename',
        action='store_true',
        help='Also replace variables in the filename (implies --in-place)'
    )
    scope.add_argument(
        '--lines',
        type=line_range,
        metavar='START[:END]',
        help='Only replace variables on these document lines (1-based, inclusive)'
    )

    # List command
    list_parser = subparsers.add_parser('list', help='List all variables in a document')
    list_parser.add_argument('file', type=str, help='Path to the document')
    list_parser.add_argument(
        '--json',
        action='store_true',
        help='Print variables as JSON'
    )
    list_parser.add_argument(
        '--no-data-only',
        action='store_true',
        help='Do not list frontmatter values that have no placeholder'
    )

    # Set command
    set_parser = subparsers.add_parser('set', help='Set a variable value in the frontmatter')
    set_parser.add_argument('file', type=str, help='Path to the document')
    set_parser.add_argument('path', type=str, help='Variable path, e.g. server.ip or items[0]')
    set_parser.add_argument('value', type=str, help='Value to store')
    set_parser.add_argument(
        '--yaml',
        action='store_true',
        help='Parse VALUE as YAML instead of storing it as a string'
    )

    # Rename command
    rename_parser = subparsers.add_parser('rename', help='Rename a file with variables replaced')
    rename_parser.add_argument('file', type=str, help='Path to the document')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=LOG_LEVELS[parsed_args.log_level],
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if parsed_args.command == 'replace':
        return replace_command(parsed_args)
    elif parsed_args.command == 'list':
        return list_command(parsed_args)
    elif parsed_args.command == 'set':
        return set_command(parsed_args)
    elif parsed_args.command == 'rename':
        return rename_command(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
