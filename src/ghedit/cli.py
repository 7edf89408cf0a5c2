"""Command-line interface for ghedit.

Clones a repository, rewrites one file with a regular expression, then
commits and pushes the result. This module is the only place that decides
the process exit code.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table
from rich.theme import Theme

from . import __version__
from .config import DEFAULT_USERNAME, RunConfig, log_config, validate_config
from .errors import ConfigError
from .orchestrator import EditOrchestrator, EditResult
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red bold",
    "success": "green bold",
    "muted": "dim",
})

console = Console(theme=custom_theme)
app = typer.Typer(
    name="ghedit",
    help="Edit one file in a remote git repository with a regex and push the change",
    add_completion=False,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[info]ghedit[/info] v{__version__}")
        raise typer.Exit()


@app.command()
def edit(
    repo: str = typer.Option(
        "",
        "--repo", "-r",
        help="Repository to clone, e.g. github.com/owner/name",
    ),
    branch: str = typer.Option(
        "",
        "--branch", "-b",
        help="Branch to check out",
    ),
    file: str = typer.Option(
        "",
        "--file", "-f",
        help="File to modify, relative to the repository root",
    ),
    regex: str = typer.Option(
        "",
        "--regEx", "-e",
        help="Regular expression to find",
    ),
    value: str = typer.Option(
        "",
        "--val", "-v",
        help="Replacement value",
    ),
    token: str = typer.Option(
        "",
        "--token", "-t",
        envvar=["GHEDIT_TOKEN", "GITHUB_TOKEN"],
        show_envvar=False,
        help="Access token used for HTTPS authentication",
    ),
    username: str = typer.Option(
        DEFAULT_USERNAME,
        "--username", "-u",
        envvar="GHEDIT_USERNAME",
        help="Username paired with the token",
    ),
    message: str = typer.Option(
        "",
        "--message", "-m",
        help="Commit message (default: 'Update <file>')",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run", "-n",
        help="Edit the file in the clone without committing or pushing",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show git output and debug logging",
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Also write log files to this directory",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Clone, check out, edit one file with a regex, commit and push.

    Examples:
        ghedit -r github.com/acme/app -b main -f go.mod -e 'v1\\.2\\.\\d+' -v v1.2.9
        ghedit -r github.com/acme/app -b dev -f lint.go -e '// linter:\\d+' -v '// linter:9999' -n
    """
    setup_logging("DEBUG" if verbose else "INFO", log_dir)

    config = RunConfig(
        repo=repo,
        branch=branch,
        file=file,
        pattern=regex,
        replacement=value,
        token=token,
        username=username,
        message=message,
        dry_run=dry_run,
    )

    try:
        warnings = validate_config(config)
    except ConfigError as e:
        logger.error(str(e))
        console.print(f"[error]Error:[/error] {escape(str(e))}")
        raise typer.Exit(1)

    log_config(config)

    _show_config(config, warnings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting...", total=6)

        def on_progress(message: str, current: int, total: int) -> None:
            progress.update(task, completed=current, total=total, description=escape(message))

        orchestrator = EditOrchestrator(config=config, on_progress=on_progress)
        result = orchestrator.run()

    _show_result(result)

    raise typer.Exit(0 if result.success else 1)


def _show_config(config: RunConfig, warnings: list[str]) -> None:
    """Display the resolved configuration."""
    table = Table(title="Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for label, value in config.as_rows():
        table.add_row(label, escape(value))

    console.print(table)

    for warning in warnings:
        console.print(f"[warning]Warning:[/warning] {escape(warning)}")


def _show_result(result: EditResult) -> None:
    """Display the run result."""
    status_style = "success" if result.success else "error"
    status_text = "SUCCESS" if result.success else "FAILED"
    console.print()
    console.print(Panel(
        f"[{status_style}]{status_text}[/{status_style}] {escape(result.summary)}",
        title="ghedit",
        border_style=status_style,
    ))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Step", style="dim")
    table.add_column("Result")

    table.add_row("Replacements", str(result.replacements))
    table.add_row("Committed", "yes" if result.committed else "no")
    table.add_row("Pushed", "yes" if result.pushed else "no")
    console.print(table)

    if result.errors:
        console.print()
        console.print("[error]Errors:[/error]")
        for error in result.errors:
            console.print(f"  [error]•[/error] {escape(error)}")

    if result.warnings:
        console.print()
        console.print("[warning]Warnings:[/warning]")
        for warning in result.warnings:
            console.print(f"  [warning]•[/warning] {escape(warning)}")


def main() -> None:
    """Entry point for the CLI."""
    load_dotenv(Path.cwd() / ".env")
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted by user[/warning]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[error]Unexpected error:[/error] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
