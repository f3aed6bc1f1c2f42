"""Tagging commands for mdtag CLI."""

import asyncio

from ...core.config import Config
from ...core.exceptions import MdtagError
from ...core.types import BatchProgress
from ...services import TaggingContainer
from .options import apply_overrides, create_store, to_document_id


def handle_file(args, config: Config) -> None:
    """Handle file command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    asyncio.run(_handle_file_async(args, apply_overrides(args, config)))


def handle_dir(args, config: Config) -> None:
    """Handle dir command."""
    asyncio.run(_handle_dir_async(args, apply_overrides(args, config)))


def handle_all(args, config: Config) -> None:
    """Handle all command."""
    asyncio.run(_handle_all_async(args, apply_overrides(args, config)))


async def _handle_file_async(args, config: Config) -> None:
    store = create_store(args)
    document_id = to_document_id(args.path, store)

    async with TaggingContainer(config, store) as engine:
        outcome = await engine.tag_document(document_id)

    if not outcome.success:
        raise MdtagError(f"Failed to tag {document_id}: {outcome.error}")

    via = f" via {outcome.provider.display_name}" if outcome.used_fallback else ""
    print(f"Tagged {document_id}{via}: {', '.join(outcome.tags)}")


async def _handle_dir_async(args, config: Config) -> None:
    store = create_store(args)
    container_id = to_document_id(args.directory, store)
    if container_id == ".":
        container_id = ""

    async with TaggingContainer(config, store, notify=print) as engine:
        progress = await engine.tag_container(container_id)
    _print_failures(progress)


async def _handle_all_async(args, config: Config) -> None:
    store = create_store(args)

    async with TaggingContainer(config, store, notify=print) as engine:
        progress = await engine.tag_all()
    _print_failures(progress)


def _print_failures(progress: BatchProgress) -> None:
    """Print the documents that could not be tagged.

    Args:
        progress: Finished batch run.
    """
    if not progress.failed:
        return
    print()
    print("Failed:")
    for document_id, error in progress.failed:
        print(f"  {document_id}: {error}")
