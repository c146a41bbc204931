"""
Git operations over the simulated repository.

Every public method is one StateManager transaction and returns an
OperationResult. Expected failures abort the transaction and come back as
``OperationResult.failure``; the repository is then left exactly as it was.
"""

from typing import List, Optional

from gitsim.config import Config, config as default_config
from gitsim.content import COMMIT_MESSAGES
from gitsim.graph.ancestry import collect_ancestors, first_parent_chain, is_ancestor
from gitsim.graph.hashing import generate_hash, random_from
from gitsim.graph.layout import branch_color, create_position, next_column, palette_color
from gitsim.graph.naming import validate_branch_name
from gitsim.logging import track_operation
from gitsim.results import OperationResult
from gitsim.state.manager import StateManager
from gitsim.state.models import (
    Branch,
    Commit,
    RemoteCommit,
    RepositoryState,
    StashEntry,
    create_initial_state,
)

from .conflict import RESOLUTIONS, ConflictPreview, build_preview
from .remote import export_local_commits, import_remote_commits

DEFAULT_STASH_MESSAGE = "WIP: work in progress"
REMOTE_MAIN = "main"


def create_commit_on_branch(
    state: RepositoryState,
    branch_name: str,
    message: str,
    parents: List[str],
    cfg: Config,
    is_merge: bool = False,
    merge_source: Optional[str] = None,
) -> Commit:
    """
    Append a commit in the lane of ``branch_name`` and move that branch to it.

    Args:
        state: Draft state to modify
        branch_name: Branch whose head advances
        message: Commit message
        parents: Parent ids, all present in ``state``
        cfg: Configuration (display positions)
        is_merge: Mark as a two-parent merge commit
        merge_source: Name of the merged-in branch

    Returns:
        The new commit
    """
    branch = state.branches[branch_name]
    position = create_position(next_column(state.commits), branch.row, cfg.display)
    commit = Commit(
        id=generate_hash(),
        message=message,
        branch=branch_name,
        parents=list(parents),
        col=position.col,
        row=position.row,
        x=position.x,
        y=position.y,
        is_merge=is_merge,
        merge_source=merge_source,
    )
    state.commits.append(commit)
    branch.head = commit.id
    state.commit_counter += 1
    return commit


class GitOperations:
    """
    Command implementations for the simulator.

    Provides operations for:
    - Committing, branching and switching branches
    - Merging, rebasing and cherry-picking
    - Stashing
    - Fetching, pushing and pulling against the simulated remote
    """

    def __init__(self, state_manager: StateManager, cfg: Optional[Config] = None):
        """
        Initialize the operations engine.

        Args:
            state_manager: Owner of the repository state
            cfg: Configuration (defaults to the global config)
        """
        self.state_manager = state_manager
        self.config = cfg or default_config

    @track_operation("init")
    def initialize_repo(self) -> OperationResult:
        """Replace the repository with a fresh one-commit ``main``."""
        self.state_manager.replace_state(create_initial_state(self.config))
        return OperationResult.success("welcome", "git init")

    @track_operation("reset")
    def reset_all(self) -> OperationResult:
        """Like ``initialize_repo`` but asks renderers for a full redraw."""
        self.state_manager.replace_state(create_initial_state(self.config))
        return OperationResult.success("welcome", "git init", full_render=True)

    @track_operation("commit")
    def commit(self, message: Optional[str] = None) -> OperationResult:
        """
        Create a commit on the current branch.

        Args:
            message: Commit message (a sample message if omitted)

        Example:
            >>> ops.commit("Add login form").command
            'git commit -m "Add login form"'
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            branch = draft.branches.get(draft.current_branch)
            if branch is None:
                return OperationResult.failure("Current branch does not exist.")

            commit_message = message or random_from(COMMIT_MESSAGES)
            create_commit_on_branch(
                draft, draft.current_branch, commit_message, [branch.head], self.config
            )
            return OperationResult.success("commit", f'git commit -m "{commit_message}"')

        return self.state_manager.mutate(mutator)

    @track_operation("branch")
    def branch(self, branch_name: str) -> OperationResult:
        """
        Create a branch at the current head and switch to it.

        Args:
            branch_name: Name for the new branch
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            validation = validate_branch_name(branch_name, draft.branches)
            if not validation.valid:
                return OperationResult.failure(validation.error)

            current_head = draft.branches[draft.current_branch].head
            row = len(draft.branches)
            draft.branches[branch_name] = Branch(
                name=branch_name,
                head=current_head,
                color=palette_color(row, self.config.display.branch_colors),
                row=row,
                created_from=draft.current_branch,
                created_at=current_head,
            )
            draft.branch_counter += 1
            draft.current_branch = branch_name
            return OperationResult.success("branch", f"git checkout -b {branch_name}")

        return self.state_manager.mutate(mutator)

    @track_operation("checkout")
    def checkout(self, branch_name: str) -> OperationResult:
        """Switch the current branch."""

        def mutator(draft: RepositoryState) -> OperationResult:
            if branch_name not in draft.branches:
                return OperationResult.failure("Branch does not exist.")

            draft.current_branch = branch_name
            return OperationResult.success(
                "checkout", f"git checkout {branch_name}", data={"branch": branch_name}
            )

        return self.state_manager.mutate(mutator)

    @track_operation("merge")
    def merge(self, source_branch: str) -> OperationResult:
        """
        Merge ``source_branch`` into the current branch.

        Always records a two-parent merge commit (no fast-forward), with
        parents ``[current head, source head]``.
        """
        return self.state_manager.mutate(
            lambda draft: self._merge_into_current(draft, source_branch, "merge")
        )

    def preview_conflict(self, source_branch: str) -> ConflictPreview:
        """
        Canned conflict for the demo dialog. Does not touch the repository.
        """
        return build_preview(source_branch, self.state_manager.get_state().current_branch)

    @track_operation("resolve_conflict")
    def resolve_conflict(self, source_branch: str, resolution: str) -> OperationResult:
        """
        Finish the conflict demo by performing the merge.

        Args:
            source_branch: Branch being merged in
            resolution: "current", "incoming" or "both" (cosmetic only)
        """
        if resolution not in RESOLUTIONS:
            return OperationResult.failure("Unknown conflict resolution.")

        def mutator(draft: RepositoryState) -> OperationResult:
            result = self._merge_into_current(draft, source_branch, "conflict")
            if result.ok:
                result.data["resolution"] = resolution
            return result

        return self.state_manager.mutate(mutator)

    def _merge_into_current(
        self, draft: RepositoryState, source_branch: str, explanation: str
    ) -> OperationResult:
        target_branch = draft.current_branch
        if source_branch == target_branch:
            return OperationResult.failure("Cannot merge a branch into itself.")

        source = draft.branches.get(source_branch)
        if source is None:
            return OperationResult.failure("Source branch does not exist.")

        target = draft.branches[target_branch]
        create_commit_on_branch(
            draft,
            target_branch,
            f"Merge '{source_branch}' into '{target_branch}'",
            [target.head, source.head],
            self.config,
            is_merge=True,
            merge_source=source_branch,
        )
        return OperationResult.success(
            explanation,
            f"git merge {source_branch}",
            data={"source": source_branch, "target": target_branch},
        )

    @track_operation("rebase")
    def rebase(self, target_branch: str) -> OperationResult:
        """
        Replay the current branch's own commits on top of ``target_branch``.

        Candidates are the commits on the current branch's first-parent chain
        that were created in its lane and are not ancestors of the target
        head. They are replayed oldest first, each as a new commit copying
        only the message and recording ``rebased_from``. The originals stay
        in the graph, no longer referenced by any branch head.
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            current_branch = draft.current_branch
            if current_branch == target_branch:
                return OperationResult.failure("Cannot rebase a branch onto itself.")

            target = draft.branches.get(target_branch)
            if target is None:
                return OperationResult.failure("Target branch does not exist.")

            target_ancestors = collect_ancestors(draft.commits, target.head)
            chain = first_parent_chain(draft.commits, draft.branches[current_branch].head)
            to_replay = [
                commit
                for commit in reversed(chain)
                if commit.id not in target_ancestors and commit.branch == current_branch
            ]
            if not to_replay:
                return OperationResult.failure("No commits to rebase.")

            new_parent = target.head
            for original in to_replay:
                replayed = create_commit_on_branch(
                    draft, current_branch, original.message, [new_parent], self.config
                )
                replayed.rebased_from = original.id
                new_parent = replayed.id

            return OperationResult.success(
                "rebase",
                f"git rebase {target_branch}",
                data={"target": target_branch, "replayed": len(to_replay)},
            )

        return self.state_manager.mutate(mutator)

    @track_operation("cherry_pick")
    def cherry_pick(self, commit_id: str) -> OperationResult:
        """
        Copy one commit onto the current branch.

        Only the message is copied (prefixed ``Cherry-pick: ``); the original
        commit's history is not replayed and picking an already-present
        change is not detected.
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            original = draft.get_commit(commit_id)
            if original is None:
                return OperationResult.failure("Commit not found.")

            head = draft.branches[draft.current_branch].head
            create_commit_on_branch(
                draft,
                draft.current_branch,
                f"Cherry-pick: {original.message}",
                [head],
                self.config,
            )
            return OperationResult.success("cherry-pick", f"git cherry-pick {original.id}")

        return self.state_manager.mutate(mutator)

    @track_operation("stash_save")
    def stash_save(self, message: Optional[str] = None) -> OperationResult:
        """Push an entry on top of the stash."""

        def mutator(draft: RepositoryState) -> OperationResult:
            entry = StashEntry(id=generate_hash(), message=message or DEFAULT_STASH_MESSAGE)
            draft.stash.insert(0, entry)
            return OperationResult.success(
                "stash-save", f'git stash push -m "{entry.message}"'
            )

        return self.state_manager.mutate(mutator)

    @track_operation("stash_apply")
    def stash_apply(self, pop: bool = False) -> OperationResult:
        """
        Re-apply the top stash entry as a commit on the current branch.

        Args:
            pop: Also remove the entry from the stash
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            if not draft.stash:
                return OperationResult.failure("No stashes to apply.")

            entry = draft.stash[0]
            head = draft.branches[draft.current_branch].head
            create_commit_on_branch(
                draft,
                draft.current_branch,
                f"WIP (stash): {entry.message}",
                [head],
                self.config,
            )
            if pop:
                draft.stash.pop(0)
                return OperationResult.success("stash-pop", "git stash pop")
            return OperationResult.success("stash-apply", "git stash apply")

        return self.state_manager.mutate(mutator)

    def stash_pop(self) -> OperationResult:
        return self.stash_apply(pop=True)

    @track_operation("stash_drop")
    def stash_drop(self) -> OperationResult:
        """Discard the top stash entry without creating a commit."""

        def mutator(draft: RepositoryState) -> OperationResult:
            if not draft.stash:
                return OperationResult.failure("No stashes to drop.")

            draft.stash.pop(0)
            return OperationResult.success("stash-drop", "git stash drop")

        return self.state_manager.mutate(mutator)

    @track_operation("remote_commit")
    def remote_commit(self, message: Optional[str] = None) -> OperationResult:
        """
        Simulate another developer pushing to the remote ``main``.

        Only the remote graph changes.
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            remote_main = draft.remote.branches.get(REMOTE_MAIN)
            if remote_main is None:
                return OperationResult.failure("Remote branch not found.")

            commit = RemoteCommit(
                id=generate_hash(),
                message=message or random_from(COMMIT_MESSAGES),
                branch=REMOTE_MAIN,
                parents=[remote_main.head],
            )
            draft.remote.commits.append(commit)
            remote_main.head = commit.id
            return OperationResult.success("fetch", "git commit (on remote)")

        return self.state_manager.mutate(mutator)

    @track_operation("fetch")
    def fetch(self) -> OperationResult:
        """Record every remote branch head as ``origin/<name>``."""

        def mutator(draft: RepositoryState) -> OperationResult:
            draft.remote_tracking = {
                f"origin/{branch.name}": branch.head
                for branch in draft.remote.branches.values()
            }
            return OperationResult.success("fetch", "git fetch origin")

        return self.state_manager.mutate(mutator)

    @track_operation("push")
    def push(self) -> OperationResult:
        """
        Publish the current branch to the remote.

        Rejected when the remote branch exists and its head is not an
        ancestor of the local head. A first push always succeeds.
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            branch_name = draft.current_branch
            local = draft.branches[branch_name]
            remote_branch = draft.remote.branches.get(branch_name)

            if remote_branch is not None and not is_ancestor(
                draft.commits, remote_branch.head, local.head
            ):
                return OperationResult.failure("Push rejected: remote has diverged.")

            sent = export_local_commits(draft, local.head)

            if remote_branch is None:
                draft.remote.branches[branch_name] = Branch(
                    name=branch_name,
                    head=local.head,
                    color=branch_color(
                        draft.branches, branch_name, self.config.display.branch_colors
                    ),
                    row=len(draft.remote.branches),
                )
            else:
                remote_branch.head = local.head

            return OperationResult.success(
                "push",
                f"git push origin {branch_name}",
                data={"branch": branch_name, "sent": len(sent)},
            )

        return self.state_manager.mutate(mutator)

    @track_operation("pull")
    def pull(self) -> OperationResult:
        """
        Fetch and integrate the remote branch of the same name.

        Missing remote commits are imported first. If the local head is an
        ancestor of the remote head the branch fast-forwards, otherwise a
        merge commit with parents ``[local head, remote head]`` is created.
        """

        def mutator(draft: RepositoryState) -> OperationResult:
            branch_name = draft.current_branch
            local = draft.branches[branch_name]
            remote_branch = draft.remote.branches.get(branch_name)
            if remote_branch is None:
                return OperationResult.failure("Remote branch not found.")

            import_remote_commits(draft, remote_branch.head, branch_name, self.config.display)
            if not draft.has_commit(remote_branch.head):
                return OperationResult.failure("Remote history is incomplete.")

            if local.head == remote_branch.head:
                return OperationResult.failure("Already up to date.")

            command = f"git pull origin {branch_name}"
            if is_ancestor(draft.commits, local.head, remote_branch.head):
                local.head = remote_branch.head
                return OperationResult.success(
                    "pull", command, data={"branch": branch_name, "fastForward": True}
                )

            create_commit_on_branch(
                draft,
                branch_name,
                f"Merge 'origin/{branch_name}' into '{branch_name}'",
                [local.head, remote_branch.head],
                self.config,
                is_merge=True,
                merge_source=f"origin/{branch_name}",
            )
            return OperationResult.success(
                "pull", command, data={"branch": branch_name, "fastForward": False}
            )

        return self.state_manager.mutate(mutator)
