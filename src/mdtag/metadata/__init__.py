"""Frontmatter, tag vocabulary and tag reconciliation."""

from .enhancer import TagConsistencyEnhancer
from .frontmatter import (
    Field,
    MetadataBlock,
    create_content_with_tags,
    detect_shape,
    escape_scalar,
    has_field,
    parse_frontmatter,
    render,
    update_content_tags,
    with_scalar_field,
    with_tags_field,
)
from .similarity import find_similar, levenshtein
from .tags import (
    extract_inline_tags,
    extract_tags_from_field,
    format_tags,
    normalize_tag,
    strip_prefix,
)
from .vocabulary import Vocabulary, VocabularyIndex, document_tags

__all__ = [
    "Field",
    "MetadataBlock",
    "parse_frontmatter",
    "detect_shape",
    "has_field",
    "with_tags_field",
    "with_scalar_field",
    "render",
    "escape_scalar",
    "create_content_with_tags",
    "update_content_tags",
    "levenshtein",
    "find_similar",
    "normalize_tag",
    "format_tags",
    "strip_prefix",
    "extract_inline_tags",
    "extract_tags_from_field",
    "Vocabulary",
    "VocabularyIndex",
    "document_tags",
    "TagConsistencyEnhancer",
]
