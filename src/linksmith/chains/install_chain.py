"""Install and restore chains for batches of link entries.

This module provides the chains that drive the filesystem core over a
batch: one entry at a time, in caller order, with structured logging and
Rich console output. Outcomes are collected into a LinkSummary.
"""

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from linksmith.core.conflicts import detect_conflicts
from linksmith.core.reporting import LinkSummary, summarize
from linksmith.core.schemas import (
    BackupRecord,
    ConflictKind,
    ConflictReport,
    EntryType,
    LinkEntry,
    LinkOutcome,
    LinkStatus,
)
from linksmith.fs.backup import find_backups, restore_from_backup
from linksmith.fs.installer import (
    create_directory_symlink,
    create_file_symlink,
    create_symlink,
)


@dataclass
class InstallOptions:
    """Options for install operations.

    Attributes:
        force_replace: Back up occupying files and remove occupying
            directories instead of failing
        show_progress: Render a Rich progress bar while installing
    """

    force_replace: bool = False
    show_progress: bool = True


def describe_conflict(conflict: ConflictReport) -> str:
    """Describe what occupies a conflicting target."""
    if conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK:
        return (
            f"{conflict.target_path} is a symlink pointing to: "
            f"{conflict.existing_link_target}"
        )
    if conflict.conflict_kind == ConflictKind.EXISTING_DIRECTORY:
        return f"{conflict.target_path} is an existing directory"
    return f"{conflict.target_path} is an existing file"


def describe_action(conflict: ConflictReport) -> str:
    """Describe what a forced install will do about a conflict."""
    if conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK:
        return "Will remove old symlink and create new one"
    if conflict.entry_type == EntryType.DIRECTORY:
        if conflict.conflict_kind == ConflictKind.EXISTING_DIRECTORY:
            return "Will remove directory and create symlink"
        return "Cannot be replaced automatically, remove it manually"
    return "Will backup file and create symlink"


class _BatchChain:
    def __init__(self, logger: Any = None, ui: Console | None = None) -> None:
        """Initialize chain.

        Args:
            logger: Optional structlog logger instance
            ui: Optional Rich console for output
        """
        self._logger = logger or structlog.get_logger()
        self._ui = ui or Console()

    def _run(
        self,
        label: str,
        items: Sequence[Any],
        step: Callable[[Any], LinkOutcome],
        bound_logger: Any,
        show_progress: bool = True,
    ) -> LinkSummary:
        outcomes: list[LinkOutcome] = []

        with self._create_progress(disable=not show_progress) as progress:
            task = progress.add_task(label, total=len(items))
            for item in items:
                start_time = time.time()
                outcome = step(item)
                elapsed_ms = int((time.time() - start_time) * 1000)

                bound_logger.info(
                    f"{label}.item",
                    name=outcome.name,
                    status=outcome.status.value,
                    message=outcome.message,
                    elapsed_ms=elapsed_ms,
                )
                outcomes.append(outcome)
                progress.advance(task)

        for outcome in outcomes:
            self.show_outcome(outcome)

        summary = summarize(outcomes)
        bound_logger.info(
            f"{label}.summary",
            total=summary.total,
            installed_count=summary.installed_count,
            skipped_count=summary.skipped_count,
            failed_count=summary.failed_count,
        )
        return summary

    def _create_progress(self, disable: bool = False) -> Progress:
        """Create Rich progress display."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self._ui,
            transient=True,
            disable=disable,
        )

    def show_outcome(self, outcome: LinkOutcome) -> None:
        """Show Rich output for a single outcome."""
        if outcome.status == LinkStatus.INSTALLED:
            self._ui.print(f"✅ [green]{outcome.name}[/green]: {outcome.message}")
        elif outcome.status == LinkStatus.SKIPPED:
            self._ui.print(f"⏭️ [blue]{outcome.name}[/blue]: {outcome.message}")
        elif outcome.status == LinkStatus.FAILED:
            self._ui.print(f"❌ [red]{outcome.name}[/red]: {outcome.message}")
        else:
            self._ui.print(f"💾 [cyan]{outcome.name}[/cyan]: {outcome.message}")

    def show_summary(self, summary: LinkSummary) -> None:
        """Print non-zero counts of a summary."""
        self._ui.print()
        if summary.installed_count:
            self._ui.print(f"[green]Installed: {summary.installed_count}[/green]")
        if summary.skipped_count:
            self._ui.print(f"[blue]Skipped: {summary.skipped_count}[/blue]")
        if summary.failed_count:
            self._ui.print(f"[red]Failed: {summary.failed_count}[/red]")


class InstallChain(_BatchChain):
    """Previews and installs link entries."""

    def preview(self, entries: Iterable[LinkEntry]) -> list[ConflictReport]:
        """Return conflicts that an install would have to resolve."""
        conflicts = detect_conflicts(entries)
        self._logger.info("install.preview", conflict_count=len(conflicts))
        return conflicts

    def show_conflicts(self, conflicts: Sequence[ConflictReport]) -> None:
        """Print each conflict with the action a forced install takes."""
        self._ui.print(f"⚠️ [yellow]Found {len(conflicts)} conflict(s):[/yellow]")
        for conflict in conflicts:
            self._ui.print(f"  [bold]{conflict.name}[/bold]:")
            self._ui.print(f"    {describe_conflict(conflict)}")
            self._ui.print(f"    {describe_action(conflict)}")

    def install(
        self, entries: Sequence[LinkEntry], opts: InstallOptions | None = None
    ) -> LinkSummary:
        """Install every entry in order.

        Args:
            entries: Entries to link
            opts: Install options (defaults to no force replace)

        Returns:
            LinkSummary with one outcome per entry
        """
        opts = opts or InstallOptions()
        bound_logger = self._logger.bind(
            entry_count=len(entries), force_replace=opts.force_replace
        )

        def step(entry: LinkEntry) -> LinkOutcome:
            install = (
                create_directory_symlink
                if entry.entry_type == EntryType.DIRECTORY
                else create_file_symlink
            )
            return install(
                entry.name,
                entry.source_dir,
                entry.target_dir,
                force_replace=opts.force_replace,
            )

        return self._run("install", entries, step, bound_logger, opts.show_progress)

    def link_files(
        self,
        names: Sequence[str],
        source_dir: Path,
        target_dir: Path,
        *,
        suffix: str = "",
        show_progress: bool = True,
    ) -> LinkSummary:
        """Link ``source_dir/<name><suffix>`` files using absolute values.

        Existing links are replaced and existing files are backed up
        without asking.
        """
        bound_logger = self._logger.bind(
            source_dir=str(source_dir), target_dir=str(target_dir)
        )

        def step(name: str) -> LinkOutcome:
            file_name = f"{name}{suffix}"
            return create_symlink(Path(source_dir) / file_name, target_dir, file_name)

        return self._run("link", names, step, bound_logger, show_progress)


class RestoreChain(_BatchChain):
    """Finds and restores backups."""

    def find(self, directories: Iterable[Path]) -> list[BackupRecord]:
        """Collect backups from each directory, in directory order."""
        records: list[BackupRecord] = []
        for directory in directories:
            found = find_backups(directory)
            self._logger.debug(
                "restore.scan", directory=str(directory), backup_count=len(found)
            )
            records.extend(found)
        return records

    def restore(
        self, records: Sequence[BackupRecord], *, show_progress: bool = True
    ) -> LinkSummary:
        """Restore each backup in order.

        Only the first record for an original path is restored. Later
        records for the same path are left on disk and reported as
        skipped, so one restore never overwrites another.
        """
        bound_logger = self._logger.bind(backup_count=len(records))
        chosen = pick_backups(records)

        def step(record: BackupRecord) -> LinkOutcome:
            first = chosen[record.original_path]
            if first is not record:
                return LinkOutcome(
                    name=record.name,
                    status=LinkStatus.SKIPPED,
                    message=(
                        f"kept {record.backup_path.name}, "
                        f"restoring from {first.backup_path.name}"
                    ),
                )
            return restore_from_backup(record)

        return self._run("restore", records, step, bound_logger, show_progress)


def pick_backups(records: Iterable[BackupRecord]) -> dict[Path, BackupRecord]:
    """Map each original path to the first of its backups.

    :func:`find_backups` lists ``name.bak`` before its timestamped
    siblings, and those in time order, so the first record is the oldest.
    """
    chosen: dict[Path, BackupRecord] = {}
    for record in records:
        chosen.setdefault(record.original_path, record)
    return chosen
