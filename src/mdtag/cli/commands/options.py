"""Options shared by the mdtag subcommands."""

from pathlib import Path

from ...core.config import Config
from ...core.types import ProviderKind
from ...sources import FileSystemConfig, FileSystemStore


def add_common_arguments(parser) -> None:
    """Add vault and provider options to a subcommand.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument(
        "-r",
        "--root",
        default=".",
        help="Vault root directory (default: current directory)",
    )
    parser.add_argument(
        "-p",
        "--provider",
        choices=[kind.value for kind in ProviderKind],
        help="Primary LLM provider (default: $MDTAG_PROVIDER or claude)",
    )
    parser.add_argument(
        "--prefix",
        help="Prefix prepended to every generated tag (default: $MDTAG_TAG_PREFIX)",
    )


def apply_overrides(args, config: Config) -> Config:
    """Apply command-line overrides on top of environment configuration."""
    if getattr(args, "provider", None):
        config.provider = ProviderKind.parse(args.provider)
    if getattr(args, "prefix", None) is not None:
        config.tag_prefix = args.prefix
    return config


def create_store(args) -> FileSystemStore:
    """Create a filesystem store for ``--root``.

    Raises:
        ValueError: If the root is not a directory.
    """
    root = Path(args.root).expanduser().resolve()
    if not root.is_dir():
        raise ValueError(f"Vault root is not a directory: {root}")
    return FileSystemStore(FileSystemConfig(base_path=root))


def to_document_id(path: str, store: FileSystemStore) -> str:
    """Convert a path given on the command line to a vault-relative id.

    Raises:
        ValueError: If the path lies outside the vault.
    """
    resolved = Path(path).expanduser().resolve()
    try:
        return resolved.relative_to(store.base_path).as_posix()
    except ValueError:
        raise ValueError(f"{path} is not inside the vault {store.base_path}") from None
