"""
Unit tests for tutorial step predicates.
"""

from gitsim.tutorial.checks import (
    branch_exists,
    branch_has_commits,
    get_check,
    has_commit_with_prefix,
    has_rebased_commit,
    head_merged_from,
    on_branch,
    remote_head_present_locally,
    remote_in_sync,
    remote_out_of_sync,
    stash_popped_onto,
)


def _state(ops):
    return ops.state_manager.get_state()


class TestBranchChecks:
    """Tests for branch and lane predicates."""

    def test_branch_exists_and_on_branch(self, ops):
        """Test branch presence and current-branch predicates."""
        assert not branch_exists("feature")(_state(ops))

        ops.branch("feature")

        assert branch_exists("feature")(_state(ops))
        assert on_branch("feature")(_state(ops))
        assert not on_branch("main")(_state(ops))

    def test_branch_has_commits_counts_lane(self, ops):
        """Test that only commits created in the lane count."""
        ops.branch("feature")
        ops.commit("one")

        assert branch_has_commits("feature", 1)(_state(ops))
        assert not branch_has_commits("feature", 2)(_state(ops))

    def test_head_merged_from(self, ops):
        """Test the merge predicate."""
        ops.branch("feature")
        ops.commit("one")
        ops.checkout("main")
        assert not head_merged_from("main", "feature")(_state(ops))

        ops.merge("feature")

        assert head_merged_from("main", "feature")(_state(ops))
        assert not head_merged_from("main", "other")(_state(ops))

    def test_has_rebased_commit(self, ops):
        """Test the rebase predicate."""
        ops.branch("refactor")
        ops.commit("r1")
        ops.checkout("main")
        ops.commit("m1")
        ops.checkout("refactor")
        assert not has_rebased_commit("refactor")(_state(ops))

        ops.rebase("main")

        assert has_rebased_commit("refactor")(_state(ops))

    def test_commit_prefix_and_stash_pop(self, ops):
        """Test message-prefix and stash-pop predicates."""
        ops.stash_save("work")
        ops.stash_apply()
        assert has_commit_with_prefix("main", "WIP (stash):")(_state(ops))
        assert not stash_popped_onto("main")(_state(ops))

        ops.stash_drop()

        assert stash_popped_onto("main")(_state(ops))


class TestRemoteChecks:
    """Tests for remote synchronization predicates."""

    def test_sync_predicates(self, ops):
        """Test in-sync and out-of-sync predicates through a remote commit."""
        assert remote_in_sync("main")(_state(ops))

        ops.remote_commit("theirs")

        assert remote_out_of_sync("main")(_state(ops))
        assert not remote_head_present_locally("main")(_state(ops))

        ops.pull()

        assert remote_head_present_locally("main")(_state(ops))
        assert remote_in_sync("main")(_state(ops))

    def test_missing_remote_branch(self, ops):
        """Test predicates for a branch absent on the remote."""
        ops.branch("feature")

        assert remote_out_of_sync("feature")(_state(ops))
        assert not remote_head_present_locally("feature")(_state(ops))


def test_get_check_with_custom_registry():
    """Test that a registry can be substituted."""
    registry = {("t", "s"): lambda state: True}

    assert get_check("t", "s", registry) is registry[("t", "s")]
    assert get_check("feature-flow", "create-feature", registry) is None
    assert get_check("feature-flow", "create-feature") is not None
