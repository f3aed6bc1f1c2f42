"""Tests for tag reconciliation."""

from mdtag.metadata.enhancer import TagConsistencyEnhancer
from mdtag.metadata.vocabulary import Vocabulary


class TestTagConsistencyEnhancer:
    """Tests for TagConsistencyEnhancer."""

    def test_exact_match_short_circuits(self):
        """An exact vocabulary entry is kept even when a neighbour exists."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["python", "pythons"]))
        assert enhancer.reconcile(["python"]) == ["python"]

    def test_similar_match_substituted(self):
        """A near-duplicate is replaced by the vocabulary entry."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["machine-learning"]))
        assert enhancer.reconcile(["Machine-Learnin"]) == ["machine-learning"]

    def test_new_tag_kept(self):
        """A tag with no close match is kept."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["python"]))
        assert enhancer.reconcile(["kubernetes"]) == ["kubernetes"]

    def test_closest_wins(self):
        """The closest entry is chosen over a farther one."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["databsae", "databases"]))
        assert enhancer.reconcile(["database"]) == ["databases"]

    def test_dedupes_after_substitution(self):
        """Candidates mapping to the same entry appear once."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["javascript"]))
        assert enhancer.reconcile(["javascrip", "JavaScript", "rust"]) == ["javascript", "rust"]

    def test_drops_empty_candidates(self):
        """Candidates normalizing to empty are ignored."""
        enhancer = TagConsistencyEnhancer(Vocabulary())
        assert enhancer.reconcile(["", "  ", "ok"]) == ["ok"]

    def test_threshold_respected(self):
        """A zero threshold disables substitution."""
        enhancer = TagConsistencyEnhancer(Vocabulary(["python"]), threshold=0)
        assert enhancer.reconcile(["pythn"]) == ["pythn"]

    def test_every_output_in_vocabulary_or_new(self):
        """Outputs are vocabulary entries or normalized candidates."""
        vocabulary = Vocabulary(["devops", "cloud"])
        candidates = ["DevOp", "Cloud", "Terraform"]
        result = TagConsistencyEnhancer(vocabulary).reconcile(candidates)

        assert result == ["devops", "cloud", "terraform"]
