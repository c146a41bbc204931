"""
Property-based tests over generated operation sequences.

Every reachable repository must stay structurally valid, and any successful
action must be exactly reversible through undo/redo.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from gitsim.config import Config
from gitsim.session import Simulator

BRANCH_NAMES = ["main", "feature", "topic", "hotfix"]

NO_ARGUMENT_ACTIONS = [
    "fetch",
    "push",
    "pull",
    "stash-apply",
    "stash-pop",
    "stash-drop",
    "undo",
    "redo",
    "reset",
]


@st.composite
def operation_step(draw):
    """Generate one (action, argument) step; cherry-pick draws a commit index."""
    kind = draw(
        st.sampled_from(
            [
                "commit",
                "remote-commit",
                "stash-save",
                "branch",
                "checkout",
                "merge",
                "rebase",
                "cherry-pick",
                "no-argument",
            ]
        )
    )
    if kind in ("commit", "remote-commit", "stash-save"):
        return kind, draw(st.sampled_from([None, "work", "fix typo"]))
    if kind in ("branch", "checkout", "merge", "rebase"):
        return kind, draw(st.sampled_from(BRANCH_NAMES))
    if kind == "cherry-pick":
        return kind, draw(st.integers(min_value=0, max_value=50))
    return draw(st.sampled_from(NO_ARGUMENT_ACTIONS)), None


operation_sequence = st.lists(operation_step(), min_size=1, max_size=30)


def _apply(sim, action, argument):
    if action == "undo":
        return sim.undo()
    if action == "redo":
        return sim.redo()
    if action == "cherry-pick":
        commits = sim.state.commits
        return sim.run(action, commits[argument % len(commits)].id).result
    if argument is None:
        return sim.run(action).result
    return sim.run(action, argument).result


class TestOperationSequences:
    """Invariants that hold after any sequence of simulator actions."""

    @settings(max_examples=50, deadline=None)
    @given(operation_sequence)
    def test_state_stays_valid(self, steps):
        """Test that no action leaves dangling parents or refs."""
        sim = Simulator(cfg=Config())

        for action, argument in steps:
            _apply(sim, action, argument)

            assert sim.state.validate() == [], (action, argument)

    @settings(max_examples=50, deadline=None)
    @given(operation_sequence)
    def test_undo_redo_round_trip(self, steps):
        """Test that undo restores the prior snapshot and redo the later one."""
        sim = Simulator(cfg=Config())

        for action, argument in steps:
            if action in ("undo", "redo", "reset"):
                _apply(sim, action, argument)
                continue

            before = sim.state
            result = _apply(sim, action, argument)
            if result.abort:
                assert sim.state == before
                continue
            after = sim.state

            assert sim.undo().ok
            assert sim.state == before
            assert sim.redo().ok
            assert sim.state == after
