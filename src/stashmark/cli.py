"""Command-line interface for stashmark."""

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from stashmark import __version__
from stashmark.config import ConfigurationError, StashmarkConfig
from stashmark.factory import StashFactory
from stashmark.models import Repository
from stashmark.stash.catalog import StashCatalog
from stashmark.stash.exceptions import StashMoveError
from stashmark.stash.models import CreateOutcome, DropOutcome, MoveState, PopOutcome, StashEntry
from stashmark.stash.sequencer import StashSequencer
from stashmark.vcs.exceptions import VCSError
from stashmark.vcs.git.manager import GitManager

app = typer.Typer(
    name="stashmark",
    help="Create, list and move stash entries tagged with their branch",
    add_completion=False,
)
console = Console()

# Help text constants
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.stashmark or .env)"
REPO_HELP = "Path to the repository (default: current directory)"
SHA_HELP = "Commit hash (or unique prefix) of the stash entry"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    # GitPython logs every command it runs at DEBUG
    if not verbose:
        logging.getLogger("git").setLevel(logging.WARNING)


def _open(repo: str | None, env_file: str | None) -> tuple[StashmarkConfig, GitManager, StashSequencer]:
    """Load configuration and open the repository.

    Returns:
        Configuration, repository manager and sequencer
    """
    config = StashmarkConfig(env_file=env_file)
    manager = GitManager(repo)
    sequencer = StashFactory.create_sequencer(config)
    return config, manager, sequencer


def _resolve_entry(catalog: StashCatalog, repository: Repository, sha: str) -> StashEntry:
    """Find the owned entry whose hash starts with `sha`.

    Raises:
        typer.Exit: If no entry or more than one entry matches
    """
    listing = catalog.list_entries(repository)
    matches = [e for e in listing.owned_entries if e.stash_sha.startswith(sha)]

    if not matches:
        console.print(f"[red]No stash entry created by stashmark matches {sha}[/red]")
        raise typer.Exit(code=1)
    if len(matches) > 1:
        console.print(f"[red]Ambiguous stash hash {sha}: {len(matches)} entries match[/red]")
        raise typer.Exit(code=1)

    return matches[0]


def _fail(error: Exception, verbose: bool) -> None:
    if isinstance(error, ConfigurationError):
        console.print(f"[red]Configuration error: {escape(str(error))}[/red]")
    else:
        console.print(f"[red]Error: {escape(str(error))}[/red]")
        if verbose:
            console.print_exception()
    sys.exit(1)


@app.command("list")
def list_entries(
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """List stash entries created by stashmark."""
    setup_logging(verbose)

    try:
        _, manager, sequencer = _open(repo, env_file)
        listing = sequencer.catalog.list_entries(manager.repository)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    if not listing.owned_entries:
        console.print(f"No stashmark entries ({listing.total_entry_count} stash entries in total)")
        return

    table = Table(title="Stash entries")
    table.add_column("Name", style="cyan")
    table.add_column("Branch", style="green")
    table.add_column("Commit")

    for entry in listing.owned_entries:
        table.add_row(entry.name, entry.branch_name, entry.stash_sha[:10])

    console.print(table)
    console.print(
        f"{len(listing.owned_entries)} stashmark entries, "
        f"{listing.foreign_entry_count} other stash entries"
    )


@app.command()
def create(
    branch: str | None = typer.Option(None, "--branch", "-b", help="Branch to tag the entry with (default: current)"),
    include_untracked: bool | None = typer.Option(
        None,
        "--include-untracked/--no-include-untracked",
        help="Stage untracked files so they are stashed too (default: from config)",
    ),
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Stash working directory changes for a branch."""
    setup_logging(verbose)

    try:
        config, manager, sequencer = _open(repo, env_file)
        branch_name = branch or manager.get_current_branch().name

        if include_untracked is None:
            include_untracked = config.default_include_untracked
        untracked = manager.get_untracked_files() if include_untracked else []

        result = sequencer.create_entry(manager.repository, branch_name, untracked)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    if result.outcome is CreateOutcome.NO_CHANGES:
        console.print("No local changes to stash")
        return

    console.print(f"[green]Stashed changes for {branch_name}[/green]")
    if result.outcome is CreateOutcome.CREATED_WITH_WARNINGS:
        console.print(f"[yellow]git reported warnings:[/yellow] {escape(result.stderr.strip())}")


@app.command()
def move(
    sha: str = typer.Argument(..., help=SHA_HELP),
    branch: str = typer.Argument(..., help="Destination branch"),
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Move a stash entry to another branch."""
    setup_logging(verbose)

    try:
        _, manager, sequencer = _open(repo, env_file)
        entry = _resolve_entry(sequencer.catalog, manager.repository, sha)
        result = sequencer.move(manager.repository, entry, branch)
    except StashMoveError as e:
        if e.state is MoveState.STORED:
            console.print("[yellow]The entry was copied but the original is still in the stash list.[/yellow]")
        _fail(e, verbose)
        return
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    console.print(f"[green]Moved {entry.stash_sha[:10]} to {result.branch_name} as {result.stash_sha[:10]}[/green]")


@app.command()
def pop(
    sha: str = typer.Argument(..., help=SHA_HELP),
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Apply a stash entry and remove it from the stash list."""
    setup_logging(verbose)

    try:
        _, manager, sequencer = _open(repo, env_file)
        entry = _resolve_entry(sequencer.catalog, manager.repository, sha)
        result = sequencer.pop(manager.repository, entry.stash_sha)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    if result.outcome is PopOutcome.POPPED_WITH_CONFLICTS:
        console.print("[yellow]Changes applied with conflicts; resolve them before committing[/yellow]")
    elif result.outcome is PopOutcome.NOT_FOUND:
        console.print(f"Stash entry {sha} is already gone")
    else:
        console.print(f"[green]Popped {entry.stash_sha[:10]}[/green]")


@app.command()
def drop(
    sha: str = typer.Argument(..., help="Full commit hash of the stash entry"),
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Remove a stash entry. Dropping an entry that is already gone is not an error."""
    setup_logging(verbose)

    try:
        _, manager, sequencer = _open(repo, env_file)
        outcome = sequencer.drop(manager.repository, sha)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    if outcome is DropOutcome.DROPPED:
        console.print(f"[green]Dropped {sha}[/green]")
    else:
        console.print(f"No stashmark entry {sha}; nothing to drop")


@app.command()
def show(
    sha: str = typer.Argument(..., help=SHA_HELP),
    repo: str | None = typer.Option(None, "--repo", "-r", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Show the files changed by a stash entry."""
    setup_logging(verbose)

    try:
        _, manager, sequencer = _open(repo, env_file)
        entry = _resolve_entry(sequencer.catalog, manager.repository, sha)
        entry = sequencer.catalog.load_files(manager.repository, entry)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)
        return

    table = Table(title=f"{entry.name} ({entry.branch_name})")
    table.add_column("Status")
    table.add_column("Path", style="cyan")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")

    for change in entry.files.files:
        path = f"{change.old_path} -> {change.path}" if change.old_path else change.path
        if change.is_binary:
            table.add_row(change.status.value, path, "bin", "bin")
        else:
            table.add_row(change.status.value, path, str(change.additions), str(change.deletions))

    console.print(table)


@app.command()
def config(
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
) -> None:
    """Show current configuration."""
    try:
        cfg = StashmarkConfig(env_file=env_file)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    source = env_file or StashmarkConfig.find_env_file()
    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(f"  Env File: {source or 'none'}")
    console.print(f"  Stash Marker: {cfg.stash_marker}")
    console.print(f"  Git Executable: {cfg.git_executable}")
    console.print(f"  Sign Moved Entries: {cfg.sign_moved_entries}")
    console.print(f"  Include Untracked By Default: {cfg.default_include_untracked}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"stashmark version {__version__}")


if __name__ == "__main__":
    app()
