"""Include/exclude glob matching for vault files."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterator

from loguru import logger

DEFAULT_PATTERNS = ["**/*.md", "!.obsidian/**", "!**/.trash/**"]


class MultiGlobMatcher:
    """Match relative paths against include and ``!``-prefixed exclude globs.

    A path matches if it satisfies ANY include pattern AND no exclude
    pattern.

    Example:
        matcher = MultiGlobMatcher(["**/*.md", "!**/templates/**"])
        matcher.matches("notes/today.md")       # True
        matcher.matches("templates/daily.md")   # False
    """

    def __init__(self, patterns: list[str]) -> None:
        self.includes = [p for p in patterns if not p.startswith("!")]
        self.excludes = [p[1:] for p in patterns if p.startswith("!")]

        if not self.includes:
            raise ValueError(
                "At least one include pattern required (patterns without ! prefix)"
            )

    def matches(self, path: str) -> bool:
        """Check a relative path (either separator) against the pattern set."""
        normalized = path.replace("\\", "/")
        if not any(_glob_match(normalized, inc) for inc in self.includes):
            return False
        return not any(_glob_match(normalized, exc) for exc in self.excludes)

    def list_matching_files(self, base_path: Path) -> Iterator[Path]:
        """Yield matching files under ``base_path`` in sorted order."""
        found: set[Path] = set()
        for pattern in self.includes:
            try:
                for file_path in base_path.glob(pattern):
                    if file_path.is_file():
                        found.add(file_path)
            except OSError as e:
                logger.warning(f"Error globbing pattern {pattern}: {e}")

        for file_path in sorted(found):
            rel_path = file_path.relative_to(base_path).as_posix()
            if any(_glob_match(rel_path, exc) for exc in self.excludes):
                logger.debug(f"Excluded by pattern: {rel_path}")
                continue
            yield file_path


def _glob_match(path: str, pattern: str) -> bool:
    """Match with ``**`` able to stand for zero or more directories."""
    if pattern.startswith("**/"):
        rest = pattern[3:]
        parts = PurePosixPath(path).parts
        # Try the remainder anchored at every directory depth
        return any(_glob_match("/".join(parts[i:]), rest) for i in range(len(parts)))

    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        parts = PurePosixPath(path).parts
        return any(
            PurePosixPath("/".join(parts[: i + 1])).match(prefix)
            and len(PurePosixPath(prefix).parts) == i + 1
            for i in range(len(parts) - 1)
        )

    return PurePosixPath(path).match(pattern) and (
        len(PurePosixPath(path).parts) == len(PurePosixPath(pattern).parts)
    )
