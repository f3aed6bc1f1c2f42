"""Tag normalization and extraction helpers.

Normalized tags are lowercase, hyphen-separated and limited to
``[a-z0-9/-]``; ``/`` is kept so hierarchical tags such as
``tech/programming`` survive.
"""

import re
from typing import Any, Iterable

# Anything outside the allowed tag alphabet becomes a hyphen
_DISALLOWED_PATTERN = re.compile(r"[^a-z0-9/\-]")
_HYPHEN_RUN_PATTERN = re.compile(r"-+")

# Matches: #tag, #tag/subtag, #tag-with-dashes, #tag_with_underscores
# Does NOT match: # heading, #123 (pure numbers), # (bare hash)
_INLINE_TAG_PATTERN = re.compile(
    r"(?<![^\s([\"{])#([a-zA-Z][a-zA-Z0-9_/-]*)",
)


def normalize_tag(tag: str) -> str:
    """Normalize a tag to the vault convention.

    Idempotent: ``normalize_tag(normalize_tag(s)) == normalize_tag(s)``.

    Example:
        >>> normalize_tag("  Machine Learning! ")
        'machine-learning'
        >>> normalize_tag("#Tech/Programming")
        'tech/programming'
    """
    result = tag.strip().lower()
    result = _DISALLOWED_PATTERN.sub("-", result)
    result = _HYPHEN_RUN_PATTERN.sub("-", result)
    return result.strip("-")


def format_tags(tags: Iterable[str], prefix: str = "") -> list[str]:
    """Normalize, deduplicate and prefix tags for writing.

    Empty tags (after normalization) are dropped. Order of first
    appearance is preserved. The prefix is always prepended, so
    candidates must be unprefixed (see :func:`strip_prefix`).

    Args:
        tags: Reconciled tags.
        prefix: Optional prefix prepended to every tag.

    Returns:
        Tags ready to be written to frontmatter.
    """
    seen: set[str] = set()
    formatted: list[str] = []
    for tag in tags:
        normalized = normalize_tag(tag)
        if not normalized:
            continue
        prefixed = f"{prefix}{normalized}"
        if prefixed in seen:
            continue
        seen.add(prefixed)
        formatted.append(prefixed)
    return formatted


def strip_prefix(tag: str, prefix: str) -> str:
    """Remove the configured tag prefix from a normalized tag.

    A tag equal to the bare prefix is returned unchanged.

    Example:
        >>> strip_prefix("ai/python", "ai/")
        'python'
    """
    if prefix and tag.startswith(prefix) and len(tag) > len(prefix):
        return tag[len(prefix):]
    return tag


def extract_inline_tags(content: str) -> list[str]:
    """Extract inline hashtags from markdown body text.

    Tags inside fenced or inline code are ignored.

    Returns:
        Tags found (without the ``#`` prefix), in order of appearance.

    Example:
        >>> extract_inline_tags("Check #python and #rust/async code")
        ['python', 'rust/async']
    """
    return _INLINE_TAG_PATTERN.findall(_remove_code_blocks(content))


def _remove_code_blocks(content: str) -> str:
    """Blank out fenced and inline code, preserving positions."""
    result = re.sub(r"```.*?```", lambda m: " " * len(m.group()), content, flags=re.DOTALL)
    return re.sub(r"`[^`]+`", lambda m: " " * len(m.group()), result)


def extract_tags_from_field(value: Any) -> list[str]:
    """Extract tags from a decoded frontmatter ``tags`` value.

    Handles the shapes found in real vaults:
    - List: ``["tag1", "tag2"]``
    - Comma-separated string: ``"tag1, tag2"``
    - Space-separated hashtags: ``"#tag1 #tag2"``
    - Single value: ``"tag1"``

    Returns:
        Extracted tag strings with any leading ``#`` removed.
    """
    if value is None:
        return []

    if isinstance(value, list):
        tags = []
        for item in value:
            if item is None:
                continue
            text = str(item).strip().lstrip("#")
            if text:
                tags.append(text)
        return tags

    if isinstance(value, str):
        if "," in value:
            return [t.strip().lstrip("#") for t in value.split(",") if t.strip().lstrip("#")]
        if re.search(r"#\w+\s+#\w+", value):
            return [t.lstrip("#") for t in re.findall(r"#?[\w/-]+", value)]
        single = value.strip().lstrip("#")
        return [single] if single else []

    text = str(value).strip()
    return [text] if text else []
