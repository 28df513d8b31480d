"""CLI commands."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape

from dft.errors import DftError, ExitCode

if TYPE_CHECKING:
    from dft.config import Config
    from dft.models import Project
    from dft.storage import ProjectStore

app = typer.Typer(
    name="dft",
    help="Depth-First Thinking - solve problems the depth-first way.",
    no_args_is_help=False,
)
console = Console()
err_console = Console(stderr=True)


def _get_config() -> Config:
    """Lazy import and load config."""
    from dft.config import Config

    return Config.load()


def _get_store(cfg: Config) -> ProjectStore:
    from dft.storage import ProjectStore

    return ProjectStore(cfg.projects_dir)


def _fail(message: str, code: ExitCode) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(int(code))


def _load_or_exit(store: ProjectStore, name: str) -> Project:
    try:
        return store.load(name)
    except DftError as e:
        raise _fail(str(e), e.exit_code)


def _version_callback(value: bool) -> None:
    if value:
        from dft import __version__

        console.print(__version__, highlight=False)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V", callback=_version_callback, is_eager=True, help="Show version"
        ),
    ] = False,
):
    """List projects if no command given."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    if ctx.invoked_subcommand is None:
        list_projects()


@app.command(name="add", hidden=True)
@app.command(name="init", hidden=True)
@app.command(name="create", hidden=True)
@app.command()
def new(
    name: Annotated[str, typer.Argument(help="Project name")],
    root_title: Annotated[
        list[str] | None, typer.Argument(help="Root problem (words are joined)")
    ] = None,
):
    """Create a new project."""
    from dft.operations import DEFAULT_ROOT_TITLE, new_project
    from dft.validation import normalize_project_name, validate_project_name, validate_title

    result = validate_project_name(name)
    if not result.is_valid:
        raise _fail(result.error, ExitCode.INVALID_NAME)

    title = " ".join(root_title) if root_title else DEFAULT_ROOT_TITLE
    title_result = validate_title(title)
    if not title_result.is_valid:
        raise _fail(title_result.error, ExitCode.INVALID_NAME)

    normalized = normalize_project_name(name)
    cfg = _get_config()
    store = _get_store(cfg)

    if store.exists(normalized):
        raise _fail(
            f"Project '{normalized}' already exists. Use 'dft open {normalized}' to work on it.",
            ExitCode.ALREADY_EXISTS,
        )

    try:
        store.save(new_project(normalized, title))
    except DftError as e:
        raise _fail(str(e), e.exit_code)

    console.print(f"[green]✓[/green] Created project '{normalized}'")


@app.command(name="show", hidden=True)
@app.command(name="projects", hidden=True)
@app.command(name="ls", hidden=True)
@app.command(name="list")
def list_projects():
    """List all projects, newest first."""
    cfg = _get_config()
    projects = _get_store(cfg).list()

    if not projects:
        console.print("No projects found. Create one with [bold]dft new <name>[/bold]")
        return

    console.print("[bold]Projects:[/bold]")
    for info in projects:
        word = "task" if info.task_count == 1 else "tasks"
        console.print(f"  • [cyan]{info.name}[/cyan] [dim]({info.task_count} {word})[/dim]")


@app.command(name="remove", hidden=True)
@app.command(name="rm", hidden=True)
@app.command()
def delete(
    name: Annotated[str, typer.Argument(help="Project to delete")],
    yes: Annotated[bool, typer.Option("-y", "--yes", help="Skip confirmation prompt")] = False,
):
    """Delete a project and all its tasks."""
    from dft.validation import normalize_project_name

    normalized = normalize_project_name(name)
    cfg = _get_config()
    store = _get_store(cfg)

    if not store.exists(normalized):
        raise _fail(
            f"Project '{normalized}' not found. Use 'dft list' to see available projects.",
            ExitCode.NOT_FOUND,
        )

    if not yes and cfg.confirm_delete:
        if not typer.confirm(
            f"Are you sure you want to delete project '{normalized}'?", default=False
        ):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(int(ExitCode.CANCELLED))

    try:
        store.delete(normalized)
    except DftError as e:
        raise _fail(str(e), e.exit_code)

    console.print(f"[yellow]✓[/yellow] Deleted project '{normalized}'")


def _pick_project(store: ProjectStore) -> str:
    """Interactive project picker used when `open` gets no name."""
    from dft.ui.rich_menu import RichTerminalMenu

    if not sys.stdin.isatty():
        raise _fail("Specify a project name", ExitCode.NOT_FOUND)

    projects = store.list()
    if not projects:
        raise _fail("No projects found. Create one with 'dft new <name>'", ExitCode.NOT_FOUND)

    options = [f"{p.name}  ({p.task_count} tasks)" for p in projects]
    choice = RichTerminalMenu().select(options, title="Open project")
    if choice is None:
        raise typer.Exit(int(ExitCode.CANCELLED))
    return projects[choice].name


@app.command(name="run", hidden=True)
@app.command(name="start", hidden=True)
@app.command(name="use", hidden=True)
@app.command(name="open")
def open_project(
    name: Annotated[str | None, typer.Argument(help="Project to open")] = None,
):
    """Launch the interactive session."""
    from dft.ui.interactive import run_session

    cfg = _get_config()
    store = _get_store(cfg)
    project = _load_or_exit(store, name if name is not None else _pick_project(store))

    project.open_count = (project.open_count or 0) + 1
    try:
        store.save(project)
    except DftError as e:
        err_console.print(f"[yellow]Warning:[/yellow] Failed to update open count: {escape(str(e))}")

    try:
        run_session(project, store, cfg)
    except Exception as e:
        raise _fail(f"TUI error occurred: {e}", ExitCode.TUI_ERROR)


@app.command(name="view", hidden=True)
@app.command()
def tree(
    name: Annotated[str, typer.Argument(help="Project to print")],
    status: Annotated[
        bool, typer.Option("--status/--no-status", help="Show [x]/[ ] markers")
    ] = True,
):
    """Print the whole tree to stdout."""
    from dft.ui.formatting import format_tree

    cfg = _get_config()
    project = _load_or_exit(_get_store(cfg), name)
    for line in format_tree(project.root, show_status=status):
        console.print(line, markup=False, highlight=False)


@app.command()
def update():
    """Check whether a newer version is published."""
    from dft import __version__
    from dft.update import compare_versions, fetch_latest_version

    console.print(f"Current version: {__version__}")
    latest = fetch_latest_version()
    if latest is None:
        raise _fail(
            "Failed to check for updates. Please check your internet connection.",
            ExitCode.FILESYSTEM_ERROR,
        )

    comparison = compare_versions(__version__, latest)
    if comparison == 0:
        console.print(f"[green]✓[/green] You are using the latest version ({__version__})")
    elif comparison < 0:
        console.print(f"[yellow]Update available:[/yellow] {latest}")
        console.print("  Run: [bold]pip install -U depth-first-thinking[/bold]")
    else:
        console.print(
            f"You are using a newer version ({__version__}) than the published one ({latest})"
        )


@app.command()
def config(
    key: Annotated[str | None, typer.Argument(help="Setting to change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show settings, or set one."""
    from dft.config import ConfigMeta

    cfg = _get_config()
    if key is None:
        descriptions = {**ConfigMeta.TOGGLES, **ConfigMeta.SETTINGS}
        for setting, current in cfg.items():
            console.print(
                f"[bold]{setting}[/bold] = {escape(repr(current))}  "
                f"[dim]{escape(descriptions.get(setting, ''))}[/dim]"
            )
        console.print(f"[dim]projects: {cfg.projects_dir}[/dim]")
        return

    if value is None:
        try:
            console.print(escape(repr(getattr(cfg, key))))
        except AttributeError:
            raise _fail(f"Unknown setting: {key}", ExitCode.INVALID_NAME)
        return

    try:
        cfg.set(key, value)
    except KeyError:
        raise _fail(f"Unknown setting: {key}", ExitCode.INVALID_NAME)
    except ValueError as e:
        raise _fail(f"Invalid value for {key}: {e}", ExitCode.INVALID_NAME)
    console.print(f"[green]✓[/green] {key} = {escape(repr(getattr(cfg, key)))}")


def _known_commands() -> set[str]:
    names = {"--help", "-h", "--version", "-V"}
    for command in app.registered_commands:
        if command.name:
            names.add(command.name)
        elif command.callback is not None:
            names.add(command.callback.__name__.replace("_", "-"))
    return names


def expand_shorthand(argv: list[str]) -> list[str]:
    """Rewrite ``dft <project>`` to ``dft open <project>``."""
    from dft.validation import is_valid_project_name

    for i, arg in enumerate(argv):
        if arg in ("-v", "--verbose"):
            continue
        if arg.startswith("-") or arg in _known_commands() or not is_valid_project_name(arg):
            return argv
        return [*argv[:i], "open", *argv[i:]]
    return argv


def main() -> None:
    """Console-script entry point."""
    app(args=expand_shorthand(sys.argv[1:]), prog_name="dft")
