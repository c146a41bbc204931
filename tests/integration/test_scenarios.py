"""
End-to-end workflow scenarios driven through the session, each one
following a built-in tutorial to completion.
"""

from gitsim.graph.ancestry import get_branch_commits


def _run_all(simulator, actions):
    outcomes = []
    for action in actions:
        outcome = simulator.run(*action)
        assert outcome.result.ok, (action, outcome.result.error)
        outcomes.append(outcome)
    return outcomes


class TestFeatureBranchScenario:
    """Branch, commit three times, switch back and merge."""

    def test_feature_flow(self, simulator):
        """Test the feature-branch workflow and its tutorial."""
        root_id = simulator.state.current_head
        simulator.start_tutorial("feature-flow")

        outcomes = _run_all(
            simulator,
            [
                ("branch", "feature"),
                ("commit", "one"),
                ("commit", "two"),
                ("commit", "three"),
                ("checkout", "main"),
                ("merge", "feature"),
            ],
        )

        state = simulator.state
        merge = state.get_commit(state.branches["main"].head)
        assert merge.parents == [root_id, state.branches["feature"].head]
        assert len(get_branch_commits(state.commits, "feature")) == 3
        completed = [o.progress.completed_step for o in outcomes if o.progress]
        assert completed == [
            "create-feature",
            "feature-commits",
            "checkout-main",
            "merge-feature",
        ]
        assert outcomes[-1].progress.finished


class TestRebaseScenario:
    """Rebase a topic branch onto new work on main."""

    def test_rebase_flow(self, simulator):
        """Test the rebase workflow and its tutorial."""
        simulator.start_tutorial("rebase-flow")

        outcomes = _run_all(
            simulator,
            [
                ("branch", "refactor"),
                ("commit", "r1"),
                ("commit", "r2"),
                ("checkout", "main"),
                ("commit", "m1"),
                ("checkout", "refactor"),
                ("rebase", "main"),
            ],
        )

        assert outcomes[-1].progress.finished
        assert outcomes[-1].result.data["replayed"] == 2


class TestCherryPickScenario:
    """Copy one hotfix commit onto main."""

    def test_cherry_pick_flow(self, simulator):
        """Test the cherry-pick workflow and its tutorial."""
        simulator.start_tutorial("cherry-pick-flow")
        _run_all(
            simulator,
            [("branch", "hotfix"), ("commit", "Fix crash"), ("commit", "Fix typo")],
        )
        hotfix_head = simulator.state.branches["hotfix"].head
        simulator.run("checkout", "main")

        outcome = simulator.run("cherry-pick", hotfix_head)

        assert outcome.progress.finished
        head = simulator.state.get_commit(simulator.state.current_head)
        assert head.message == "Cherry-pick: Fix typo"


class TestStashScenario:
    """Park work in the stash while fixing a bug."""

    def test_stash_flow(self, simulator):
        """Test the stash workflow and its tutorial."""
        simulator.start_tutorial("stash-flow")

        outcomes = _run_all(
            simulator,
            [
                ("commit", "start feature"),
                ("stash-save", "half-done feature"),
                ("branch", "bugfix"),
                ("commit", "fix bug"),
                ("checkout", "main"),
                ("stash-pop",),
            ],
        )

        assert outcomes[-1].progress.finished
        assert simulator.state.stash == []


class TestRemoteCollaborationScenario:
    """Push, receive someone else's work, pull and push again."""

    def test_remote_collab(self, simulator):
        """Test the remote workflow and its tutorial."""
        simulator.start_tutorial("remote-collab")

        outcomes = _run_all(
            simulator,
            [
                ("push",),
                ("remote-commit", "their change"),
                ("pull",),
                ("commit", "my change"),
                ("push",),
            ],
        )

        state = simulator.state
        assert outcomes[2].result.data["fastForward"] is True
        assert state.remote.branches["main"].head == state.branches["main"].head
        assert all(o.progress is not None for o in outcomes)
        assert outcomes[-1].progress.finished

    def test_diverged_push_then_pull_merge(self, simulator):
        """Test recovering from a rejected push with a merging pull."""
        _run_all(simulator, [("remote-commit", "theirs"), ("commit", "ours")])

        rejected = simulator.run("push")
        assert rejected.result.error == "Push rejected: remote has diverged."

        pulled = simulator.run("pull")
        pushed = simulator.run("push")

        assert pulled.result.data["fastForward"] is False
        assert pushed.result.ok
        assert simulator.state.validate() == []

    def test_undo_pull(self, simulator):
        """Test that a pull can be undone as a whole."""
        simulator.run("remote-commit", "theirs")
        before = simulator.state

        simulator.run("pull")
        simulator.undo()

        assert simulator.state == before
