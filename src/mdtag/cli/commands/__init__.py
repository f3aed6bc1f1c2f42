"""Command implementations for mdtag CLI."""

from .options import add_common_arguments
from .tag import handle_all, handle_dir, handle_file
from .vocab import handle_vocab

__all__ = [
    "add_common_arguments",
    "handle_file",
    "handle_dir",
    "handle_all",
    "handle_vocab",
]
