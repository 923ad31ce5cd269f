"""Backup manager.

Backups live next to the file they save: ``<name>.bak`` for the first
generation and ``<name>.bak.<timestamp>`` for later ones, where the
timestamp is a UTC ISO-8601 string with ``:`` and ``.`` replaced by ``-``.
Backups are found again by scanning the directory, there is no index.
"""

import os
import shutil
from pathlib import Path

import structlog

from linksmith.core.constants import (
    BACKUP_MARKER,
    BACKUP_SUFFIX_PATTERN,
    MAX_BACKUP_ATTEMPTS,
)
from linksmith.core.schemas import BackupRecord, LinkOutcome, LinkStatus
from linksmith.fs.paths import backup_timestamp
from linksmith.fs.probe import exists, is_symlink, remove_entry
from linksmith.utils.debug import debug

logger = structlog.get_logger(__name__)


def backup_path(original: Path) -> Path:
    """Compute a backup path for ``original`` that does not exist yet.

    Args:
        original: File that is about to be backed up

    Returns:
        ``original.bak`` when free, otherwise a timestamped name

    Raises:
        FileExistsError: If no free name is found (only under extreme churn)
    """
    original = Path(original)
    candidate = original.with_name(original.name + BACKUP_MARKER)
    if not os.path.lexists(candidate):
        return candidate

    stamped = f"{original.name}{BACKUP_MARKER}.{backup_timestamp()}"
    candidate = original.with_name(stamped)
    if not os.path.lexists(candidate):
        return candidate

    # Same millisecond as an earlier backup
    for counter in range(1, MAX_BACKUP_ATTEMPTS):
        candidate = original.with_name(f"{stamped}-{counter}")
        if not os.path.lexists(candidate):
            return candidate

    raise FileExistsError(f"no free backup name for {original}")


def backup_file(path: Path) -> Path | None:
    """Copy a plain file to its backup path, preserving mode bits.

    Symlinks are never backed up: copying one would save the content of
    its target and lose the fact that it was a link.

    Args:
        path: File to back up

    Returns:
        Path of the new backup, or None when nothing was backed up
        (missing path, symlink, or copy failure)
    """
    path = Path(path)
    if not exists(path) or is_symlink(path):
        return None

    try:
        destination = backup_path(path)
        shutil.copy2(path, destination)
    except OSError as exc:
        logger.warning("backup.failed", path=str(path), error=str(exc))
        return None

    logger.info("backup.created", name=path.name, backup=destination.name)
    return destination


def find_backups(directory: Path) -> list[BackupRecord]:
    """List backups in ``directory`` (non-recursive).

    Every name containing the backup marker is a candidate; the original
    name is what remains after stripping the trailing marker and optional
    timestamp. Candidates where the marker is not a suffix are ignored.

    Returns:
        Records sorted by backup file name; empty when the directory is
        missing or unreadable
    """
    directory = Path(directory)
    try:
        names = sorted(os.listdir(directory))
    except OSError:
        return []

    records: list[BackupRecord] = []
    for file_name in names:
        if BACKUP_MARKER not in file_name:
            continue

        match = BACKUP_SUFFIX_PATTERN.search(file_name)
        if match is None or match.start() == 0:
            debug(f"Ignoring non-backup name: {file_name}")
            continue

        original_name = file_name[: match.start()]
        records.append(
            BackupRecord(
                backup_path=directory / file_name,
                original_path=directory / original_name,
                name=original_name,
            )
        )

    return records


def restore_from_backup(record: BackupRecord) -> LinkOutcome:
    """Move a backup back over its original location.

    Whatever file or symlink sits at the original path is replaced. A
    directory there is not removed and makes the restore fail.

    Returns:
        ``installed`` on success, ``failed`` with the cause otherwise
    """
    backup = record.backup_path
    original = record.original_path

    try:
        if not os.path.lexists(backup):
            raise FileNotFoundError(f"backup not found: {backup}")

        if is_symlink(original) or os.path.isfile(original):
            remove_entry(original)

        os.replace(backup, original)
    except OSError as exc:
        logger.warning(
            "restore.failed",
            name=record.name,
            backup=str(backup),
            error=str(exc),
        )
        return LinkOutcome(
            name=record.name,
            status=LinkStatus.FAILED,
            message=f"failed to restore: {exc}",
        )

    logger.info("restore.completed", name=record.name, backup=backup.name)
    return LinkOutcome(
        name=record.name,
        status=LinkStatus.INSTALLED,
        message=f"restored from {backup.name}",
    )
