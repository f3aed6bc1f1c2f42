"""CLI entry point for mdtag."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mdtag",
        description="Generate consistent tags for markdown notes with an LLM",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    # Tagging commands
    file_parser = subparsers.add_parser("file", help="Tag a single note")
    file_parser.add_argument("path", help="Path of the note")
    commands.add_common_arguments(file_parser)

    dir_parser = subparsers.add_parser("dir", help="Tag every note under a directory")
    dir_parser.add_argument("directory", help="Directory inside the vault")
    commands.add_common_arguments(dir_parser)

    all_parser = subparsers.add_parser("all", help="Tag every note in the vault")
    commands.add_common_arguments(all_parser)

    # Vocabulary command
    vocab_parser = subparsers.add_parser("vocab", help="List tags used in the vault")
    commands.add_common_arguments(vocab_parser)
    vocab_parser.add_argument("-s", "--sort", action="store_true", help="Sort alphabetically")
    vocab_parser.add_argument("-c", "--count", action="store_true", help="Print the tag count")

    return parser


def configure_logging(verbose: bool) -> None:
    """Route loguru output to stderr at the requested level."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        config = Config.from_env()

        if args.command == "file":
            commands.handle_file(args, config)
        elif args.command == "dir":
            commands.handle_dir(args, config)
        elif args.command == "all":
            commands.handle_all(args, config)
        elif args.command == "vocab":
            commands.handle_vocab(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
