"""Frontmatter parsing and rewriting.

The block is kept as an ordered list of raw-line fields rather than a
decoded mapping, so rewriting the ``tags`` field never reorders or
re-quotes anything else. PyYAML is only used to decode values and to
validate the block.

Example:
    >>> block = parse_frontmatter("---\\ntitle: Notes\\n---\\n\\nBody")
    >>> fields = with_tags_field(block.fields, ["python", "asyncio"])
    >>> print(render(fields))
    ---
    title: Notes
    tags:
      - python
      - asyncio
    ---
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence

import yaml

from ..core.exceptions import MalformedDocumentError
from ..core.types import MetadataShape

DELIMITER = "---"
TAGS_KEY = "tags"

# Leading block: opening line, optional inner lines, closing line.
# The closing delimiter must sit on its own line; the trailing newline is
# left in the remainder so the body is reattached byte-for-byte.
_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?=\r?\n|\Z)",
    re.DOTALL,
)
_OPENING_PATTERN = re.compile(r"\A---[ \t]*(?:\r?\n|\Z)")

BOM = "\ufeff"

# Top-level mapping key: unindented, not a comment or list item
_KEY_PATTERN = re.compile(r"^([^\s#\-][^:]*?)[ \t]*:(?:[ \t\r]|$)")

# Characters that are structurally significant in a plain YAML scalar
_SPECIAL_CHARS_PATTERN = re.compile(r"[:#\[\]{}&*!|>'\"%@`,]")
_LINE_BREAKS_PATTERN = re.compile(r"[\n\r\t\f\u2028\u2029]")
_CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0e-\x1f\x7f-\x9f]")


@dataclass
class Field:
    """One top-level frontmatter entry and its raw lines.

    ``key`` is None for leading comments or blank lines that precede the
    first key.
    """

    key: str | None
    lines: list[str]

    @property
    def value(self) -> Any:
        """Decode this field's value with PyYAML."""
        if self.key is None:
            return None
        data = yaml.safe_load("\n".join(self.lines))
        if isinstance(data, dict):
            return data.get(self.key)
        return None


@dataclass
class MetadataBlock:
    """Result of parsing a document's leading frontmatter.

    Attributes:
        present: Whether a well-formed delimited block was found.
        opened: Whether the text starts with an opening delimiter.
        fields: Ordered fields (empty when absent).
        raw: Block text between the delimiters.
        remainder: Text after the closing delimiter, untouched.
        data: Decoded mapping (empty when absent or invalid).
        error: YAML error message when the block cannot be decoded.
        bom: Leading byte-order mark, written back in front of the block.
        newline: Line ending used by the document (``"\\n"`` or ``"\\r\\n"``).
    """

    present: bool
    opened: bool = False
    fields: list[Field] = field(default_factory=list)
    raw: str = ""
    remainder: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    bom: str = ""
    newline: str = "\n"

    @property
    def body(self) -> str:
        """Document body with the frontmatter and leading blank lines removed."""
        if not self.present:
            return self.remainder
        return self.remainder.lstrip("\r\n")


def parse_frontmatter(text: str) -> MetadataBlock:
    """Parse the leading frontmatter block of a document.

    A missing closing delimiter is reported as ``present=False`` with
    ``opened=True``; invalid YAML is reported through ``error``. Use
    :func:`detect_shape` to turn either case into an exception.

    A leading byte-order mark is skipped for matching and kept in
    ``bom``; ``remainder`` never includes it.
    """
    bom = BOM if text.startswith(BOM) else ""
    text = text[len(bom):]
    newline = _detect_newline(text)

    match = _FRONTMATTER_PATTERN.match(text)
    if not match:
        return MetadataBlock(
            present=False,
            opened=bool(_OPENING_PATTERN.match(text)),
            remainder=text,
            bom=bom,
            newline=newline,
        )

    raw = match.group(1) or ""
    block = MetadataBlock(
        present=True,
        opened=True,
        fields=_split_fields(raw),
        raw=raw,
        remainder=text[match.end():],
        bom=bom,
        newline=newline,
    )

    try:
        data = yaml.safe_load(raw) if raw.strip() else None
    except yaml.YAMLError as e:
        block.error = str(e)
        return block

    if data is None:
        data = {}
    elif not isinstance(data, dict):
        block.error = f"frontmatter is a {type(data).__name__}, not a mapping"
        return block

    block.data = data
    return block


def _detect_newline(text: str) -> str:
    """Line ending of the first line, ``"\\n"`` when there is none."""
    end = text.find("\n")
    if end > 0 and text[end - 1] == "\r":
        return "\r\n"
    return "\n"


def _split_fields(raw: str) -> list[Field]:
    """Group block lines under the top-level key that owns them.

    Lines are stored without their ``\\r``; :func:`render` puts the
    document's line ending back.
    """
    fields: list[Field] = []
    if not raw:
        return fields

    for line in raw.split("\n"):
        line = line.removesuffix("\r")
        match = _KEY_PATTERN.match(line)
        if match:
            fields.append(Field(key=match.group(1).strip().strip("\"'"), lines=[line]))
        elif fields:
            fields[-1].lines.append(line)
        else:
            fields.append(Field(key=None, lines=[line]))
    return fields


def detect_shape(block: MetadataBlock) -> MetadataShape:
    """Classify a parsed document by its frontmatter shape.

    Raises:
        MalformedDocumentError: If an opening delimiter exists but the
            block is unterminated or cannot be decoded.
    """
    if not block.present:
        if block.opened:
            raise MalformedDocumentError("frontmatter opening delimiter has no closing delimiter")
        return MetadataShape.NO_METADATA
    if block.error:
        raise MalformedDocumentError(f"invalid frontmatter: {block.error}")
    if has_field(block.fields, TAGS_KEY):
        return MetadataShape.METADATA_WITH_TAGS
    return MetadataShape.METADATA_NO_TAGS


def has_field(fields: Sequence[Field], key: str) -> bool:
    """Check whether a top-level key is present."""
    return any(f.key == key for f in fields)


def with_tags_field(fields: Sequence[Field], tags: Sequence[str]) -> list[Field]:
    """Return fields with ``tags`` replaced in place or appended.

    A single tag is written as an inline list (``tags: [a]``); several
    tags as a block list, one per line. Later duplicate ``tags`` keys are
    dropped so the new value is the one a YAML reader sees.
    """
    return _with_field(fields, TAGS_KEY, _tags_lines(tags))


def with_scalar_field(fields: Sequence[Field], key: str, value: str) -> list[Field]:
    """Return fields with a scalar ``key`` replaced in place or appended."""
    return _with_field(fields, key, [f"{key}: {escape_scalar(value)}"])


def _with_field(fields: Sequence[Field], key: str, lines: list[str]) -> list[Field]:
    updated: list[Field] = []
    replaced = False
    for existing in fields:
        if existing.key != key:
            updated.append(existing)
        elif not replaced:
            updated.append(Field(key=key, lines=lines))
            replaced = True
    if not replaced:
        updated.append(Field(key=key, lines=lines))
    return updated


def _tags_lines(tags: Sequence[str]) -> list[str]:
    items = [_format_list_item(tag) for tag in tags]
    if len(items) == 1:
        return [f"{TAGS_KEY}: [{items[0]}]"]
    return [f"{TAGS_KEY}:"] + [f"  - {item}" for item in items]


def _format_list_item(tag: str) -> str:
    # Prefixes such as "#" would otherwise start a YAML comment
    return escape_scalar(tag) if _needs_quotes(tag) else tag


def render(fields: Sequence[Field], newline: str = "\n") -> str:
    """Serialize fields back into a delimited block (no trailing newline)."""
    lines = [DELIMITER] + [line for f in fields for line in f.lines] + [DELIMITER]
    return newline.join(lines)


def escape_scalar(value: str) -> str:
    """Make a scalar value safe to write as a YAML plain or quoted scalar.

    Values that contain structural characters, line breaks, leading or
    trailing spaces, or that YAML would read as a bool, null or number are
    wrapped in double quotes with backslashes and quotes escaped. Line
    breaks and tabs become spaces; other control characters are removed.

    Example:
        >>> escape_scalar("Part 1: the basics")
        '"Part 1: the basics"'
        >>> escape_scalar("plain text")
        'plain text'
    """
    sanitized = _LINE_BREAKS_PATTERN.sub(" ", value)
    sanitized = _CONTROL_CHARS_PATTERN.sub("", sanitized)

    if not (_needs_quotes(value) or _needs_quotes(sanitized)):
        return sanitized

    escaped = sanitized.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _needs_quotes(value: str) -> bool:
    if value == "" or value != value.strip():
        return True
    if _SPECIAL_CHARS_PATTERN.search(value) or _LINE_BREAKS_PATTERN.search(value):
        return True
    if value[0] in "-?":
        return True
    # Anything YAML would not read back as the same string (bool, null, number)
    try:
        return yaml.safe_load(value) != value
    except yaml.YAMLError:
        return True


def create_content_with_tags(body: str, tags: Sequence[str], newline: str = "\n") -> str:
    """Prepend a new frontmatter block holding only ``tags``.

    Example:
        >>> create_content_with_tags("Body", ["a", "b"])
        '---\\ntags:\\n  - a\\n  - b\\n---\\n\\nBody'
    """
    if not tags:
        return body
    block = render([Field(key=TAGS_KEY, lines=_tags_lines(tags))], newline)
    return f"{block}{newline}{newline}{body}"


def update_content_tags(text: str, tags: Sequence[str]) -> str:
    """Insert or replace the ``tags`` field of a document.

    Documents without frontmatter get a new block; otherwise only the
    ``tags`` field changes and the remainder is reattached unchanged.
    A leading byte-order mark and CRLF line endings are preserved.

    Raises:
        MalformedDocumentError: If the existing block cannot be classified.
    """
    block = parse_frontmatter(text)
    shape = detect_shape(block)
    if not tags:
        return text
    if shape is MetadataShape.NO_METADATA:
        return block.bom + create_content_with_tags(block.remainder, tags, block.newline)
    rendered = render(with_tags_field(block.fields, tags), block.newline)
    return block.bom + rendered + block.remainder
