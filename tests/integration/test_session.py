"""
Integration tests for the Simulator session.

Covers intent dispatch, undo/redo, fresh-commit tracking, tutorials and
saved-state restore.
"""

import pytest

from gitsim.config import Config, StorageConfig
from gitsim.errors import UnknownCommandError
from gitsim.persistence import StateStorage
from gitsim.session import FreshCommits, Simulator


class TestDispatch:
    """Tests for Simulator.run."""

    def test_unknown_action_raises(self, simulator):
        """Test that an unknown intent is a programming error."""
        with pytest.raises(UnknownCommandError) as exc_info:
            simulator.run("teleport")

        assert exc_info.value.command == "teleport"

    def test_success_records_history(self, simulator):
        """Test that a successful action becomes undoable."""
        outcome = simulator.run("commit", "work")

        assert outcome.result.ok
        assert simulator.history.past_size == 2
        assert simulator.history.can_undo()

    def test_abort_records_nothing(self, simulator):
        """Test that aborted actions leave history alone."""
        outcome = simulator.run("checkout", "nowhere")

        assert outcome.result.abort
        assert outcome.new_commits == []
        assert simulator.history.past_size == 1

    def test_actions_listed(self, simulator):
        """Test the available intent names."""
        assert "stash-pop" in simulator.actions
        assert "reset" in simulator.actions

    def test_subscribers_notified(self, simulator):
        """Test that renderers receive snapshots."""
        received = []
        simulator.subscribe(received.append)

        simulator.run("commit", "work")

        assert received
        assert received[-1].get_commit(received[-1].current_head).message == "work"


class TestFreshCommits:
    """Tests for fresh-commit tracking."""

    def test_new_commits_marked_fresh(self, simulator, clock):
        """Test that commits created by an action are fresh for the TTL."""
        outcome = simulator.run("commit", "work")

        assert len(outcome.new_commits) == 1
        commit_id = outcome.new_commits[0]
        assert simulator.fresh.is_fresh(commit_id)

        clock.advance(2.0)

        assert not simulator.fresh.is_fresh(commit_id)

    def test_rebase_marks_every_replayed_commit(self, simulator):
        """Test that all commits of one transaction are marked."""
        simulator.run("branch", "topic")
        simulator.run("commit", "t1")
        simulator.run("commit", "t2")
        simulator.run("checkout", "main")
        simulator.run("commit", "m1")
        simulator.run("checkout", "topic")

        outcome = simulator.run("rebase", "main")

        assert len(outcome.new_commits) == 2

    def test_table_is_standalone(self, clock):
        """Test FreshCommits directly."""
        fresh = FreshCommits(1.0, clock)
        fresh.mark(["a", "b"])
        clock.advance(0.5)
        fresh.mark(["c"])
        clock.advance(0.6)

        assert fresh.active() == {"c"}


class TestUndoRedo:
    """Tests for session undo/redo."""

    def test_undo_redo_round_trip(self, simulator):
        """Test that undo restores the prior state and redo the later one."""
        before = simulator.state
        simulator.run("commit", "work")
        after = simulator.state

        undo = simulator.undo()

        assert undo.explanation == "undo"
        assert undo.full_render
        assert simulator.state == before

        redo = simulator.redo()

        assert redo.explanation == "redo"
        assert simulator.state == after

    def test_nothing_to_undo_or_redo(self, simulator):
        """Test the empty-timeline results."""
        assert simulator.undo().error == "Nothing to undo."
        assert simulator.redo().error == "Nothing to redo."

    def test_new_action_after_undo_clears_redo(self, simulator):
        """Test that branching history discards the undone future."""
        simulator.run("commit", "one")
        simulator.undo()

        simulator.run("commit", "two")

        assert simulator.redo().abort

    def test_reset(self, simulator):
        """Test that reset starts over with an empty timeline."""
        simulator.run("branch", "feature")
        simulator.start_tutorial("feature-flow")

        outcome = simulator.run("reset")

        state = simulator.state
        assert outcome.result.full_render
        assert len(state.commits) == 1
        assert list(state.branches) == ["main"]
        assert not simulator.history.can_undo()
        assert simulator.tutorials.get_active_tutorial() is None


class TestTutorials:
    """Tests for tutorial wiring in the session."""

    def test_start_mirrors_cursor_into_state(self, simulator):
        """Test that the active tutorial is visible in the state."""
        started = simulator.start_tutorial("feature-flow")

        assert started.ok
        assert simulator.state.tutorial.active_id == "feature-flow"

    def test_start_unknown_tutorial(self, simulator):
        """Test that unknown tutorials are reported."""
        assert simulator.start_tutorial("nope").error == "Tutorial not found."

    def test_progress_reported_with_action(self, simulator):
        """Test that completing a step is reported on the outcome."""
        simulator.start_tutorial("feature-flow")

        outcome = simulator.run("branch", "feature")

        assert outcome.progress.completed_step == "create-feature"
        assert outcome.progress.next_step.id == "feature-commits"
        assert simulator.state.tutorial.step_index == 1

    def test_stop_tutorial(self, simulator):
        """Test that stopping clears the mirrored cursor."""
        simulator.start_tutorial("feature-flow")

        simulator.stop_tutorial()

        assert simulator.state.tutorial.active_id is None


class TestSavedState:
    """Tests for autosave and restore."""

    def test_state_restored_across_sessions(self, cfg, tmp_path):
        """Test that a new session resumes the saved repository."""
        storage = StateStorage(tmp_path / "gitsim_state.json")
        first = Simulator(cfg=cfg, storage=storage)
        first.run("branch", "feature")
        first.run("commit", "saved work")

        second = Simulator(cfg=cfg, storage=storage)

        assert second.state == first.state
        assert not second.history.can_undo()

    def test_undo_is_saved(self, cfg, tmp_path):
        """Test that undo persists the restored snapshot."""
        storage = StateStorage(tmp_path / "gitsim_state.json")
        sim = Simulator(cfg=cfg, storage=storage)
        sim.run("commit", "work")

        sim.undo()

        assert storage.load_state() == sim.state

    def test_tutorial_cursor_is_saved(self, cfg, tmp_path):
        """Test that starting and stopping a tutorial persist the cursor."""
        storage = StateStorage(tmp_path / "gitsim_state.json")
        sim = Simulator(cfg=cfg, storage=storage)

        sim.start_tutorial("feature-flow")
        assert storage.load_state().tutorial.active_id == "feature-flow"

        sim.stop_tutorial()
        assert storage.load_state().tutorial.active_id is None

    def test_autosave_disabled(self, tmp_path):
        """Test that autosave can be switched off."""
        cfg = Config(storage=StorageConfig(autosave=False))
        storage = StateStorage(tmp_path / "gitsim_state.json")
        sim = Simulator(cfg=cfg, storage=storage)

        sim.run("commit", "work")

        assert not storage.path.exists()
