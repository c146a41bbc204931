"""
Command-line shell for the git simulator.

Provides an interactive prompt, a script runner and a tutorial listing on
top of a single Simulator session.
"""

import shlex
from pathlib import Path
from typing import List, Optional, Tuple

import click

from gitsim.config import config
from gitsim.content import EXPLANATIONS, describe
from gitsim.errors import UnknownCommandError
from gitsim.graph.ancestry import first_parent_chain
from gitsim.logging import initialize_logging
from gitsim.persistence import StateStorage
from gitsim.results import OperationResult
from gitsim.session import ActionOutcome, Simulator
from gitsim.tutorial import TUTORIALS

# Shell words that map one-to-one to session actions
SIMPLE_ACTIONS = {
    "commit": "commit",
    "branch": "branch",
    "checkout": "checkout",
    "merge": "merge",
    "rebase": "rebase",
    "cherry-pick": "cherry-pick",
    "fetch": "fetch",
    "push": "push",
    "pull": "pull",
    "remote-commit": "remote-commit",
    "reset": "reset",
}

REQUIRED_ARGUMENT = {"branch", "checkout", "merge", "rebase", "cherry-pick"}

# Actions that take no words at all
NO_ARGUMENT = {"fetch", "push", "pull", "reset", "stash-apply", "stash-pop", "stash-drop"}

# Actions whose remaining words form one message
MESSAGE_ARGUMENT = {"commit", "stash-save", "remote-commit"}


def format_result(result: OperationResult) -> str:
    if result.abort:
        return f"error: {result.error}"
    text = describe(result.explanation, result.data)
    if not text:
        return f"$ {result.command}"
    explanation = EXPLANATIONS.get(result.explanation or "")
    icon = f"[{explanation.icon}] " if explanation else ""
    return f"$ {result.command}\n  {icon}{text}"


def format_status(sim: Simulator) -> List[str]:
    """Plain-text summary of the repository."""
    state = sim.state
    lines = [f"On branch {state.current_branch} ({state.current_head})"]
    for name, branch in state.branches.items():
        marker = "*" if name == state.current_branch else " "
        lines.append(f"{marker} {name:<20} {branch.head}")

    if state.remote_tracking:
        lines.append("Remote tracking:")
        for ref, head in sorted(state.remote_tracking.items()):
            lines.append(f"  {ref:<20} {head}")

    lines.append(f"Remote branches: {', '.join(sorted(state.remote.branches)) or '-'}")
    lines.append(f"Stash entries: {len(state.stash)}")

    step = sim.tutorials.current_step
    tutorial = sim.tutorials.get_active_tutorial()
    if tutorial is not None:
        progress = step.description if step else "complete"
        lines.append(f"Tutorial {tutorial.id}: {progress}")
    return lines


def format_log(sim: Simulator) -> List[str]:
    state = sim.state
    lines = []
    for commit in first_parent_chain(state.commits, state.current_head):
        tags = []
        if commit.is_merge:
            tags.append("merge")
        if commit.is_remote:
            tags.append("remote")
        suffix = f" ({', '.join(tags)})" if tags else ""
        lines.append(f"{commit.id} {commit.message}{suffix}")
    return lines


def execute_line(sim: Simulator, line: str) -> Tuple[bool, List[str]]:
    """
    Execute one shell line against ``sim``.

    Args:
        sim: Session to drive
        line: Raw input, e.g. ``commit "Add login"`` or ``stash pop``

    Returns:
        Tuple of (succeeded, output lines)
    """
    try:
        words = shlex.split(line, comments=True)
    except ValueError as e:
        return False, [f"error: {e}"]
    if not words:
        return True, []

    word, args = words[0], words[1:]

    if word in ("status", "log"):
        return True, format_status(sim) if word == "status" else format_log(sim)
    if word == "undo":
        result = sim.undo()
        return result.ok, [format_result(result)]
    if word == "redo":
        result = sim.redo()
        return result.ok, [format_result(result)]
    if word == "tutorial":
        return _execute_tutorial(sim, args)
    if word == "stash":
        if not args:
            return False, ["error: usage: stash save [msg] | apply | pop | drop"]
        word, args = f"stash {args[0]}", args[1:]
        action = word.replace(" ", "-")
    elif word in SIMPLE_ACTIONS:
        action = SIMPLE_ACTIONS[word]
    else:
        return False, [f"error: {UnknownCommandError(word)}"]

    if action in REQUIRED_ARGUMENT and len(args) != 1:
        return False, [f"error: usage: {word} <name>"]
    if action in NO_ARGUMENT and args:
        return False, [f"error: usage: {word} (takes no arguments)"]
    if action in MESSAGE_ARGUMENT:
        args = [" ".join(args)] if args else []

    try:
        outcome = sim.run(action, *args)
    except UnknownCommandError as e:
        return False, [f"error: {e}"]
    return outcome.result.ok, _describe_outcome(outcome)


def _describe_outcome(outcome: ActionOutcome) -> List[str]:
    lines = [format_result(outcome.result)]
    if outcome.progress is not None:
        lines.append(f"Step complete: {outcome.progress.completed_step}")
        if outcome.progress.finished:
            lines.append("Tutorial complete!")
        else:
            lines.append(f"Next: {outcome.progress.next_step.description}")
    return lines


def _execute_tutorial(sim: Simulator, args: List[str]) -> Tuple[bool, List[str]]:
    if args[:1] == ["stop"]:
        sim.stop_tutorial()
        return True, ["Tutorial stopped."]
    if len(args) == 2 and args[0] == "start":
        started = sim.start_tutorial(args[1])
        if not started.ok:
            return False, [f"error: {started.error}"]
        step = started.tutorial.steps[0]
        return True, [f"Started: {started.tutorial.title}", f"Next: {step.description}"]
    return False, ["error: usage: tutorial start <id> | tutorial stop"]


def _build_simulator(state_file: Optional[str], no_save: bool) -> Simulator:
    storage = None
    if state_file and not no_save:
        storage = StateStorage(Path(state_file), version=config.storage.version)
    return Simulator(cfg=config, storage=storage)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
def cli(log_level: Optional[str]):
    """Interactive git workflow simulator."""
    initialize_logging(
        log_dir=Path(config.logging.log_dir),
        level=log_level or config.logging.level,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
        format_string=config.logging.format,
        enable_file_logging=config.logging.enable_file_logging,
        enable_console_logging=config.logging.enable_console_logging,
    )


@cli.command()
@click.option(
    "--state-file",
    default=config.storage.state_file,
    help="Saved-state file to restore and update",
)
@click.option("--no-save", is_flag=True, help="Do not restore or save state")
def shell(state_file: str, no_save: bool):
    """Start an interactive simulator prompt."""
    sim = _build_simulator(state_file, no_save)
    click.echo("gitsim shell. Type 'quit' to exit.")

    while True:
        try:
            line = click.prompt("gitsim", default="", show_default=False, prompt_suffix="> ")
        except (EOFError, click.Abort):
            break
        if line.strip() in ("quit", "exit"):
            break
        _, output = execute_line(sim, line)
        for text in output:
            click.echo(text)


@cli.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option("--state-file", default=None, help="Saved-state file to restore and update")
def run(script: str, state_file: Optional[str]):
    """Execute simulator commands from SCRIPT, one per line."""
    sim = _build_simulator(state_file, no_save=False)

    with open(script, "r") as f:
        lines = f.readlines()

    for number, line in enumerate(lines, start=1):
        ok, output = execute_line(sim, line)
        for text in output:
            click.echo(text)
        if not ok:
            click.echo(f"Stopped at line {number}: {line.strip()}", err=True)
            raise SystemExit(1)


@cli.command()
def tutorials():
    """List the available tutorials."""
    for tutorial in TUTORIALS:
        click.echo(f"{tutorial.id}: {tutorial.title} ({len(tutorial.steps)} steps)")
        for index, step in enumerate(tutorial.steps, start=1):
            click.echo(f"  {index}. {step.description}")


if __name__ == "__main__":
    cli()
