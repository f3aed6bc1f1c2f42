"""Tag-generation prompts and response parsing."""

from __future__ import annotations

import json
import re
from typing import Sequence

from loguru import logger

SYSTEM_PROMPT = (
    "You are an expert at analyzing content and generating relevant, consistent "
    "tags that follow Obsidian's best practices. You understand the importance of "
    "maintaining a clean and useful tag hierarchy. When possible, reuse existing "
    "tags to maintain consistency across the knowledge base."
)

_RULES = """Generate relevant tags for the following content. Follow these rules:
- Use lowercase letters
- Use hyphens for multi-word tags
- Keep tags concise and meaningful
- Avoid special characters (except hyphens)
- Create hierarchical tags when appropriate (e.g., tech/programming)
- Focus on key topics, themes, and concepts
- Include both broad categories and specific details when relevant
- Maintain consistency with existing tag patterns
- Prioritize reusing existing tags when they fit the content
- Only create new tags when existing ones don't capture the concept
- Avoid overly generic tags that wouldn't be useful for filtering
- Limit to 3-7 most relevant tags unless content is highly complex
- Return ONLY the tags as a JSON array of strings"""

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)
_SPLIT_PATTERN = re.compile(r"[,\n]")
# Brackets, quotes and list bullets left over from almost-JSON answers
_STRIP_CHARS = " \t\r[]\"'`"
_BULLET_PATTERN = re.compile(r"^(?:[-*•]|\d+[.)])\s+")


def build_user_prompt(body: str, vocabulary: Sequence[str]) -> str:
    """Build the user message for a document body.

    Args:
        body: Document text without frontmatter.
        vocabulary: Existing vault tags offered as context.

    Returns:
        Prompt text.
    """
    context = ""
    if vocabulary:
        context = (
            "\nExisting tags in the vault (use these for consistency when appropriate):\n"
            + ", ".join(vocabulary)
        )
    return f"{_RULES}{context}\n\nContent:\n{body}"


def parse_tag_response(text: str) -> list[str]:
    """Parse a model answer into raw tag strings.

    A JSON array of strings is expected (optionally inside a code fence).
    Anything else is split on commas and newlines as a best-effort
    recovery, which can produce odd tags from malformed output.

    Example:
        >>> parse_tag_response('["python", "asyncio"]')
        ['python', 'asyncio']
        >>> parse_tag_response("python, asyncio")
        ['python', 'asyncio']
    """
    stripped = text.strip()
    if not stripped:
        return []

    fenced = _FENCE_PATTERN.match(stripped)
    if fenced:
        stripped = fenced.group(1).strip()

    try:
        data = json.loads(stripped)
    except ValueError:
        data = None

    if isinstance(data, list):
        return [str(item).strip() for item in data if item is not None and str(item).strip()]

    logger.warning(f"Response is not a JSON array, splitting leniently: {stripped[:80]!r}")
    tags = []
    for part in _SPLIT_PATTERN.split(stripped):
        tag = _BULLET_PATTERN.sub("", part.strip()).strip(_STRIP_CHARS)
        if tag:
            tags.append(tag)
    return tags
