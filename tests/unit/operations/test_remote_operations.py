"""
Unit tests for remote_commit, fetch, push and pull.
"""

from gitsim.graph.ancestry import collect_ancestors


def _state(ops):
    return ops.state_manager.get_state()


def _local_head(ops, branch="main"):
    return _state(ops).branches[branch].head


def _remote_head(ops, branch="main"):
    return _state(ops).remote.branches[branch].head


class TestRemoteCommitAndFetch:
    """Tests for simulated remote activity and fetch."""

    def test_remote_commit_only_changes_remote(self, ops):
        """Test that another developer's commit is invisible locally."""
        local_before = _local_head(ops)

        result = ops.remote_commit("Remote work")

        assert result.explanation == "fetch"
        assert result.command == "git commit (on remote)"
        state = _state(ops)
        assert len(state.remote.commits) == 2
        assert state.remote.commits[-1].message == "Remote work"
        assert state.remote.commits[-1].parents == [local_before]
        assert _local_head(ops) == local_before
        assert len(state.commits) == 1

    def test_fetch_updates_tracking_refs(self, ops):
        """Test that fetch records every remote head."""
        ops.remote_commit("Remote work")

        result = ops.fetch()

        assert result.command == "git fetch origin"
        assert _state(ops).remote_tracking == {"origin/main": _remote_head(ops)}
        assert _local_head(ops) != _remote_head(ops)


class TestPush:
    """Tests for GitOperations.push."""

    def test_push_sends_missing_commits(self, ops):
        """Test that local commits are copied to the remote."""
        ops.commit("local work")

        result = ops.push()

        assert result.ok
        assert result.command == "git push origin main"
        assert result.data == {"branch": "main", "sent": 1}
        assert _remote_head(ops) == _local_head(ops)
        assert _state(ops).remote.has_commit(_local_head(ops))

    def test_push_up_to_date_sends_nothing(self, ops):
        """Test pushing when the remote already has everything."""
        result = ops.push()

        assert result.ok
        assert result.data["sent"] == 0

    def test_push_rejected_when_diverged(self, ops):
        """Test that a diverged remote rejects the push without changes."""
        ops.remote_commit("theirs")
        ops.commit("ours")
        before = _state(ops)

        result = ops.push()

        assert result.abort
        assert result.error == "Push rejected: remote has diverged."
        assert _state(ops) == before

    def test_first_push_of_new_branch(self, ops, cfg):
        """Test that pushing a new branch creates it on the remote."""
        ops.branch("feature")
        ops.commit("feature work")

        result = ops.push()

        assert result.ok
        remote_branch = _state(ops).remote.branches["feature"]
        assert remote_branch.head == _local_head(ops, "feature")
        assert remote_branch.row == 1
        assert remote_branch.color == cfg.display.branch_colors[1]

    def test_remote_history_closed_after_push(self, ops):
        """Test that every ancestor of the pushed head exists remotely."""
        ops.commit("one")
        ops.branch("feature")
        ops.commit("two")
        ops.checkout("main")
        ops.merge("feature")

        ops.push()

        state = _state(ops)
        remote_ids = {c.id for c in state.remote.commits}
        assert collect_ancestors(state.commits, _local_head(ops)) <= remote_ids


class TestPull:
    """Tests for GitOperations.pull."""

    def test_pull_fast_forward(self, ops):
        """Test that an unchanged local branch fast-forwards."""
        ops.remote_commit("theirs")

        result = ops.pull()

        assert result.ok
        assert result.command == "git pull origin main"
        assert result.data == {"branch": "main", "fastForward": True}
        state = _state(ops)
        assert state.branches["main"].head == state.remote.branches["main"].head
        imported = state.get_commit(state.branches["main"].head)
        assert imported.is_remote
        assert imported.message == "theirs"
        assert imported.row == 0

    def test_pull_merges_diverged_history(self, ops):
        """Test that diverged histories are joined with a merge commit."""
        ops.remote_commit("theirs")
        ops.commit("ours")
        local_head = _local_head(ops)
        remote_head = _remote_head(ops)

        result = ops.pull()

        assert result.data == {"branch": "main", "fastForward": False}
        merge = _state(ops).get_commit(_local_head(ops))
        assert merge.is_merge
        assert merge.parents == [local_head, remote_head]
        assert merge.merge_source == "origin/main"
        assert merge.message == "Merge 'origin/main' into 'main'"

    def test_pull_then_push_succeeds(self, ops):
        """Test that pulling resolves a diverged push."""
        ops.remote_commit("theirs")
        ops.commit("ours")
        assert ops.push().abort

        ops.pull()
        result = ops.push()

        assert result.ok
        assert _remote_head(ops) == _local_head(ops)

    def test_pull_when_up_to_date(self, ops):
        """Test that identical heads abort."""
        result = ops.pull()

        assert result.abort
        assert result.error == "Already up to date."

    def test_pull_without_remote_branch(self, ops):
        """Test that a branch never pushed cannot be pulled."""
        ops.branch("feature")
        before = _state(ops)

        result = ops.pull()

        assert result.abort
        assert result.error == "Remote branch not found."
        assert _state(ops) == before

    def test_pull_imports_chain_in_parent_order(self, ops):
        """Test that several remote commits arrive parents first."""
        ops.remote_commit("r1")
        ops.remote_commit("r2")
        ops.remote_commit("r3")

        ops.pull()

        state = _state(ops)
        messages = [c.message for c in state.commits]
        assert messages[-3:] == ["r1", "r2", "r3"]
        assert state.validate() == []
