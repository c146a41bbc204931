"""
Unit tests for explanation texts and canned content.
"""

from gitsim.content import COMMIT_MESSAGES, CONFLICT_EXAMPLES, EXPLANATIONS, describe


class TestDescribe:
    """Tests for describe."""

    def test_merge_mentions_branches(self):
        """Test the merge-specific explanation."""
        text = describe("merge", {"source": "feature", "target": "main"})

        assert "feature" in text
        assert "main" in text

    def test_generic_tag(self):
        """Test a plain lookup."""
        assert describe("commit") == EXPLANATIONS["commit"].text

    def test_unknown_tag(self):
        """Test that unknown tags describe to an empty string."""
        assert describe("nonsense") == ""
        assert describe(None) == ""

    def test_every_result_tag_is_explained(self):
        """Test that each explanation tag produced by operations has text."""
        tags = [
            "welcome", "commit", "branch", "checkout", "merge", "conflict",
            "rebase", "cherry-pick", "stash-save", "stash-apply", "stash-pop",
            "stash-drop", "fetch", "push", "pull", "undo", "redo",
        ]

        for tag in tags:
            assert describe(tag), tag


def test_canned_content_present():
    """Test the sample messages and conflict examples."""
    assert len(COMMIT_MESSAGES) == 15
    assert len(CONFLICT_EXAMPLES) == 3
    assert all(example.current != example.incoming for example in CONFLICT_EXAMPLES)
