"""CLI commands for installing and restoring the kit."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    import typer
    from typer import Typer as TyperType
else:  # pragma: no cover - runtime fallback for typing
    typer = importlib.import_module("typer")
    TyperType = Any

from rich.console import Console

from linksmith.chains.install_chain import (
    InstallChain,
    InstallOptions,
    RestoreChain,
    pick_backups,
)
from linksmith.core.config import LinksmithConfig, resolve_config
from linksmith.core.constants import COMMANDS_DIR_NAME
from linksmith.core.errors import LinksmithError
from linksmith.core.layout import (
    backup_directories,
    default_layout,
    expand_layout,
    list_markdown_files,
)
from linksmith.core.schemas import LinkEntry
from linksmith.utils.logging import configure_logging

app: TyperType = typer.Typer(help="Install kit files as symlinks and restore backups.")

RootOption = Annotated[
    Path | None,
    typer.Option("--root", help="Kit repository root (defaults to $LINKSMITH_ROOT or cwd)."),
]
HomeOption = Annotated[
    Path | None,
    typer.Option("--home", help="Home directory (defaults to $LINKSMITH_HOME or $HOME)."),
]
YesFlag = Annotated[
    bool,
    typer.Option("--yes", "-y", help="Do not ask for confirmation."),
]
ForceFlag = Annotated[
    bool,
    typer.Option("--force", help="Back up files and remove directories in the way."),
]
JsonFlag = Annotated[
    bool,
    typer.Option("--json", help="Emit JSON instead of formatted text."),
]
VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every filesystem change."),
]
NameOption = Annotated[
    list[str] | None,
    typer.Option("--name", help="Only restore backups of this file name."),
]
BackupOption = Annotated[
    list[str] | None,
    typer.Option("--backup", help="Only restore this backup file name."),
]
CommandNames = Annotated[
    list[str] | None,
    typer.Argument(help="Commands to install (defaults to all)."),
]


@app.callback()
def main(verbose: VerboseFlag = False) -> None:
    """Install kit files as symlinks and restore backups."""

    configure_logging(verbose)


def _fail(message: str) -> typer.Exit:
    typer.secho(message, err=True, fg=typer.colors.RED)
    return typer.Exit(code=1)


def _load(root: Path | None, home: Path | None) -> tuple[LinksmithConfig, list[LinkEntry]]:
    try:
        config = resolve_config(root, home)
        entries = expand_layout(default_layout(config))
    except LinksmithError as exc:
        raise _fail(str(exc)) from exc
    return config, entries


def setup(
    root: RootOption = None,
    home: HomeOption = None,
    yes: YesFlag = False,
    force: ForceFlag = False,
) -> None:
    """Link agents, skills, hooks, config and memory into place."""

    _, entries = _load(root, home)
    console = Console()
    chain = InstallChain(ui=console)

    conflicts = chain.preview(entries)
    force_replace = force

    if conflicts:
        chain.show_conflicts(conflicts)
        if not (force or yes) and not typer.confirm(
            "Do you want to proceed? (Symlinks will be replaced, existing files "
            "will be backed up, directories will be removed)"
        ):
            typer.echo("Setup cancelled")
            raise typer.Exit(code=0)
        force_replace = True
    elif not yes and not typer.confirm("This will create symlinks. Continue?"):
        typer.echo("Setup cancelled")
        raise typer.Exit(code=0)

    summary = chain.install(
        entries,
        InstallOptions(force_replace=force_replace, show_progress=console.is_terminal),
    )
    chain.show_summary(summary)

    if summary.has_failures:
        raise _fail(f"Setup completed with {summary.failed_count} error(s)")
    typer.secho("Setup complete!", fg=typer.colors.GREEN)


def check(
    root: RootOption = None,
    home: HomeOption = None,
    json_output: JsonFlag = False,
) -> None:
    """Show what setup would have to replace, without changing anything."""

    _, entries = _load(root, home)
    chain = InstallChain(ui=Console())
    conflicts = chain.preview(entries)

    if json_output:
        typer.echo(json.dumps([c.model_dump(mode="json") for c in conflicts], indent=2))
        return

    if not conflicts:
        typer.echo("No conflicts found.")
        return
    chain.show_conflicts(conflicts)


def restore(
    root: RootOption = None,
    home: HomeOption = None,
    names: NameOption = None,
    backups: BackupOption = None,
    yes: YesFlag = False,
) -> None:
    """Restore backups made by setup over the current files or links.

    When a file has several backups only the oldest is restored unless
    ``--backup`` picks another; the rest stay on disk.
    """

    config, _ = _load(root, home)
    console = Console()
    chain = RestoreChain(ui=console)

    records = chain.find(backup_directories(config, default_layout(config)))
    if names:
        records = [record for record in records if record.name in names]
    if backups:
        records = [record for record in records if record.backup_path.name in backups]

    if not records:
        typer.echo("No backup files found.")
        return

    chosen = pick_backups(records)
    console.print(f"Found {len(records)} backup(s):")
    for record in records:
        line = f"  {record.backup_path.name} → {record.original_path}"
        if chosen[record.original_path] is not record:
            line += " (kept)"
        console.print(line)

    if not yes and not typer.confirm(
        f"Restore {len(chosen)} backup(s)? This will replace current files/symlinks."
    ):
        typer.echo("Restore cancelled")
        raise typer.Exit(code=0)

    summary = chain.restore(records, show_progress=console.is_terminal)
    chain.show_summary(summary)

    if summary.has_failures:
        raise _fail(f"Restore completed with {summary.failed_count} error(s)")
    typer.secho("Restore complete!", fg=typer.colors.GREEN)


def commands(
    command_names: CommandNames = None,
    root: RootOption = None,
    home: HomeOption = None,
) -> None:
    """Link markdown slash commands into the .claude commands directory."""

    config, _ = _load(root, home)
    source_dir = config.root_dir / COMMANDS_DIR_NAME
    target_dir = config.claude_dir / COMMANDS_DIR_NAME

    available = list_markdown_files(source_dir)
    if not available:
        raise _fail(f"No commands found in {source_dir}")

    selected = command_names or available
    unknown = [name for name in selected if name not in available]
    if unknown:
        raise _fail(f"Unknown command(s): {', '.join(unknown)}")

    console = Console()
    chain = InstallChain(ui=console)
    summary = chain.link_files(
        selected, source_dir, target_dir, suffix=".md", show_progress=console.is_terminal
    )
    chain.show_summary(summary)

    if summary.has_failures:
        raise _fail(f"Installed with {summary.failed_count} error(s)")


app.command("setup")(setup)
app.command("check")(check)
app.command("restore")(restore)
app.command("commands")(commands)
