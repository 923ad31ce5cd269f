"""Symlink installation with conflict handling and backups.

Each function installs one link and reports a LinkOutcome instead of
raising. File and directory installs write relative link values so the
installed tree stays relocatable; :func:`create_symlink` writes absolute
values.
"""

import os
from pathlib import Path

import structlog

from linksmith.core.schemas import LinkOutcome, LinkStatus
from linksmith.fs.backup import backup_file
from linksmith.fs.paths import ensure_parent_dir, normalize_path, relative_link_value
from linksmith.fs.probe import exists, is_directory, remove_directory, remove_entry
from linksmith.fs.state import (
    CorrectLink,
    OccupiedDirectory,
    OccupiedFile,
    StaleLink,
    classify_target,
    is_occupied,
)
from linksmith.utils.debug import debug

logger = structlog.get_logger(__name__)


def _outcome(name: str, status: LinkStatus, message: str) -> LinkOutcome:
    return LinkOutcome(name=name, status=status, message=message)


def _failed(name: str, message: str) -> LinkOutcome:
    logger.warning("link.failed", name=name, reason=message)
    return _outcome(name, LinkStatus.FAILED, message)


def _remove_stale_link(name: str, target: Path, state: StaleLink) -> LinkOutcome | None:
    try:
        remove_entry(target)
    except OSError as exc:
        return _failed(name, f"failed to remove existing symlink at {target}: {exc}")
    debug(f"Removed stale symlink {target} -> {state.value}")
    return None


def _link(name: str, value: str, target: Path, message: str) -> LinkOutcome:
    try:
        os.symlink(value, target)
    except OSError as exc:
        return _failed(name, f"failed to create symlink: {exc}")

    logger.info("link.created", name=name, target=str(target), value=value)
    return _outcome(name, LinkStatus.INSTALLED, message)


def create_file_symlink(
    name: str,
    source_dir: Path,
    target_dir: Path,
    *,
    force_replace: bool = False,
) -> LinkOutcome:
    """Link ``target_dir/name`` to ``source_dir/name`` with a relative path.

    Args:
        name: Entry name
        source_dir: Directory holding the source file
        target_dir: Directory that receives the link
        force_replace: Back up and replace an occupying file

    Returns:
        LinkOutcome describing what happened
    """
    source = Path(source_dir) / name
    target = Path(target_dir) / name

    if not exists(source):
        return _outcome(name, LinkStatus.SKIPPED, "source file does not exist")

    try:
        ensure_parent_dir(target)
    except OSError as exc:
        return _failed(name, f"failed to create target directory: {exc}")

    state = classify_target(source, target)

    if isinstance(state, CorrectLink):
        return _outcome(name, LinkStatus.SKIPPED, "already configured")

    if isinstance(state, StaleLink):
        failure = _remove_stale_link(name, target, state)
        if failure is not None:
            return failure
    elif is_occupied(state):
        if not force_replace:
            return _failed(
                name,
                f"file exists at {target}. Use force replace to backup and replace it.",
            )
        if backup_file(target) is None:
            return _failed(name, f"failed to backup existing file at {target}")
        try:
            remove_entry(target)
        except OSError as exc:
            return _failed(name, f"failed to remove existing file at {target}: {exc}")

    relative = relative_link_value(source, target)
    return _link(name, relative, target, f"created symlink → {relative}")


def create_directory_symlink(
    name: str,
    source_dir: Path,
    target_dir: Path,
    *,
    force_replace: bool = False,
) -> LinkOutcome:
    """Link ``target_dir/name`` to the directory ``source_dir/name``.

    An occupying directory is removed only with ``force_replace`` and is
    never backed up. Any other occupant (e.g. a plain file) always fails
    and is left for manual cleanup.
    """
    source = Path(source_dir) / name
    target = Path(target_dir) / name

    if not is_directory(source):
        return _outcome(name, LinkStatus.SKIPPED, "source directory does not exist")

    try:
        ensure_parent_dir(target)
    except OSError as exc:
        return _failed(name, f"failed to create target directory: {exc}")

    state = classify_target(source, target)

    if isinstance(state, CorrectLink):
        return _outcome(name, LinkStatus.SKIPPED, "already configured")

    if isinstance(state, StaleLink):
        failure = _remove_stale_link(name, target, state)
        if failure is not None:
            return failure
    elif isinstance(state, OccupiedDirectory):
        if not force_replace:
            return _failed(
                name, f"directory exists at {target}. Use force replace to remove it."
            )
        if not remove_directory(target):
            return _failed(name, f"failed to remove existing directory at {target}")
        logger.info("directory.removed", name=name, path=str(target))
    elif is_occupied(state):
        return _failed(name, f"{target} exists but is not a symlink or directory.")

    relative = relative_link_value(source, target)
    return _link(name, relative, target, f"created symlink → {relative}")


def create_symlink(source: Path, target_dir: Path, link_name: str) -> LinkOutcome:
    """Link ``target_dir/link_name`` to ``source`` using an absolute value.

    Existing links are always replaced and existing plain files are backed
    up first, no force flag is needed.

    Args:
        source: File the link points to (made absolute)
        target_dir: Directory that receives the link
        link_name: Name of the link
    """
    source = normalize_path(source)
    target = Path(target_dir) / link_name

    try:
        Path(target_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return _failed(link_name, f"failed to create target directory: {exc}")

    state = classify_target(source, target)

    if isinstance(state, CorrectLink):
        return _outcome(link_name, LinkStatus.SKIPPED, "already linked")

    if isinstance(state, StaleLink):
        try:
            remove_entry(target)
        except OSError as exc:
            return _failed(
                link_name, f"failed to remove existing symlink at {target}: {exc}"
            )
    elif isinstance(state, OccupiedFile):
        if backup_file(target) is None:
            return _failed(link_name, f"failed to backup existing file at {target}")
        try:
            remove_entry(target)
        except OSError as exc:
            return _failed(
                link_name, f"failed to remove existing file at {target}: {exc}"
            )
    elif is_occupied(state):
        return _failed(link_name, f"{target} exists but is not a symlink or file.")

    return _link(link_name, str(source), target, "created")
