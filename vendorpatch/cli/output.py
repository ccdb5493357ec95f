"""Rich-based output utilities for the vendorpatch CLI."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from vendorpatch.patch.runner import FileAction, FileOutcome, PatchResult

# Shared console instances
console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)

_ACTION_STYLES = {
    FileAction.MODIFIED: "green",
    FileAction.CREATED: "cyan",
    FileAction.RENAMED: "yellow",
    FileAction.DELETED: "red",
}


def _display(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def format_outcome(outcome: FileOutcome, root: Path) -> str:
    """Render one file outcome as console markup."""
    style = _ACTION_STYLES[outcome.action]
    target = escape(_display(outcome.path, root))
    if outcome.action is FileAction.RENAMED and outcome.old_path is not None:
        target = f"{escape(_display(outcome.old_path, root))} -> {target}"
    hunks = "hunk" if outcome.hunks == 1 else "hunks"
    return f"  [{style}]{outcome.action.value:<8}[/{style}] {target} [dim]({outcome.hunks} {hunks})[/dim]"


def print_result(result: PatchResult, root: Path) -> None:
    """Print the outcome of one patch file."""
    suffix = " [dim](dry run)[/dim]" if result.dry_run else ""
    console.print(f"[bold]{escape(_display(result.patch_path, root))}[/bold]{suffix}")
    for outcome in result.outcomes:
        console.print(format_outcome(outcome, root))


def print_error(message: str) -> None:
    """Print an error message in red."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[dim]{escape(message)}[/dim]")
