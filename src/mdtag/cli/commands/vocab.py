"""Vocabulary command for mdtag CLI."""

from ...core.config import Config
from ...metadata import VocabularyIndex
from .options import create_store


def handle_vocab(args, config: Config) -> None:
    """Print every tag currently used in the vault, one per line.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    vocabulary = VocabularyIndex(create_store(args)).snapshot()
    tags = sorted(vocabulary) if args.sort else list(vocabulary)
    for tag in tags:
        print(tag)
    if args.count:
        print(f"\n{len(vocabulary)} tags")
