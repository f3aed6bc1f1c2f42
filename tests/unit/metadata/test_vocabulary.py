"""Tests for the tag vocabulary."""

from mdtag.metadata.vocabulary import Vocabulary, VocabularyIndex, document_tags

from tests.fakes import InMemoryDocumentStore


class TestVocabulary:
    """Tests for Vocabulary."""

    def test_normalizes_and_dedupes(self):
        """Tags are stored normalized, first-seen order."""
        vocabulary = Vocabulary(["Python", "rust", "python", "Machine Learning"])

        assert vocabulary.tags == ["python", "rust", "machine-learning"]
        assert len(vocabulary) == 3

    def test_add_reports_new(self):
        """add should return True only for new tags."""
        vocabulary = Vocabulary(["a"])

        assert vocabulary.add("b") is True
        assert vocabulary.add("B") is False
        assert vocabulary.add("!!!") is False

    def test_contains(self):
        """Membership checks use normalized tags."""
        vocabulary = Vocabulary(["tech/AI"])

        assert "tech/ai" in vocabulary
        assert "tech/AI" not in vocabulary


class TestDocumentTags:
    """Tests for document_tags."""

    def test_collects_field_and_inline(self):
        """Frontmatter tags come first, then inline tags."""
        text = "---\ntags: [alpha, beta]\n---\nBody with #gamma"
        assert document_tags(text) == ["alpha", "beta", "gamma"]

    def test_skips_broken_frontmatter(self):
        """Undecodable frontmatter contributes nothing."""
        text = "---\ntags: [oops\n---\nBody with #inline"
        assert document_tags(text) == ["inline"]

    def test_inline_only(self):
        """Documents without frontmatter still contribute inline tags."""
        assert document_tags("Just #one tag") == ["one"]


class TestVocabularyIndex:
    """Tests for VocabularyIndex."""

    def test_snapshot_across_documents(self):
        """The snapshot merges tags from every document."""
        store = InMemoryDocumentStore(
            {
                "a.md": "---\ntags:\n  - Python\n---\nText #asyncio",
                "b.md": "Plain #python and #Rust",
                "c.md": "No tags at all",
            }
        )

        vocabulary = VocabularyIndex(store).snapshot()

        assert vocabulary.tags == ["python", "asyncio", "rust"]

    def test_empty_store(self):
        """An empty store yields an empty vocabulary."""
        assert len(VocabularyIndex(InMemoryDocumentStore()).snapshot()) == 0

    def test_strips_configured_prefix(self):
        """Tags written with the prefix are stored without it."""
        store = InMemoryDocumentStore(
            {
                "a.md": "---\ntags:\n  - ai/python\n  - aircraft\n---\nText",
                "b.md": "Inline #ai/rust",
            }
        )

        vocabulary = VocabularyIndex(store, prefix="ai/").snapshot()

        assert vocabulary.tags == ["python", "aircraft", "rust"]
