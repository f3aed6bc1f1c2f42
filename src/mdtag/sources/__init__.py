"""Document storage for mdtag."""

from .base import DocumentStore, SourceError, SourceListError
from .filesystem import FileSystemConfig, FileSystemStore
from .glob_matcher import DEFAULT_PATTERNS, MultiGlobMatcher

__all__ = [
    "DocumentStore",
    "SourceError",
    "SourceListError",
    "FileSystemConfig",
    "FileSystemStore",
    "MultiGlobMatcher",
    "DEFAULT_PATTERNS",
]
