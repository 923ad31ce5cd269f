"""Read-only conflict detection.

Used to preview what an install would have to replace, so a caller can ask
for confirmation before passing ``force_replace``. Nothing here mutates
the filesystem and nothing is cached between calls.
"""

from collections.abc import Iterable
from pathlib import Path

from linksmith.core.schemas import ConflictKind, ConflictReport, EntryType, LinkEntry
from linksmith.fs.probe import exists, is_directory
from linksmith.fs.state import (
    CorrectLink,
    NoTarget,
    OccupiedDirectory,
    StaleLink,
    TargetState,
    classify_target,
)


def check_file_conflict(
    name: str, source_dir: Path, target_dir: Path
) -> ConflictReport | None:
    """Report what occupies the target of a file entry, if anything.

    Returns:
        None when the source is missing, the target is absent, or the
        target is already the intended link; a ConflictReport otherwise
    """
    source = Path(source_dir) / name
    target = Path(target_dir) / name

    if not exists(source):
        return None

    return _report(name, source, target, EntryType.FILE, classify_target(source, target))


def check_directory_conflict(
    name: str, source_dir: Path, target_dir: Path
) -> ConflictReport | None:
    """Report what occupies the target of a directory entry, if anything.

    Same as :func:`check_file_conflict` except the source must be a
    directory and an occupying directory is reported as
    ``existing_directory``.
    """
    source = Path(source_dir) / name
    target = Path(target_dir) / name

    if not is_directory(source):
        return None

    return _report(
        name, source, target, EntryType.DIRECTORY, classify_target(source, target)
    )


def detect_conflicts(entries: Iterable[LinkEntry]) -> list[ConflictReport]:
    """Run the matching conflict check for each entry, in order."""
    conflicts: list[ConflictReport] = []
    for entry in entries:
        if entry.entry_type == EntryType.DIRECTORY:
            conflict = check_directory_conflict(
                entry.name, entry.source_dir, entry.target_dir
            )
        else:
            conflict = check_file_conflict(entry.name, entry.source_dir, entry.target_dir)
        if conflict is not None:
            conflicts.append(conflict)
    return conflicts


def _report(
    name: str,
    source: Path,
    target: Path,
    entry_type: EntryType,
    state: TargetState,
) -> ConflictReport | None:
    if isinstance(state, NoTarget | CorrectLink):
        return None

    if isinstance(state, StaleLink):
        kind = ConflictKind.EXISTING_SYMLINK
        link_target: str | None = state.value or ""
    elif entry_type == EntryType.DIRECTORY and isinstance(state, OccupiedDirectory):
        kind = ConflictKind.EXISTING_DIRECTORY
        link_target = None
    else:
        kind = ConflictKind.EXISTING_FILE
        link_target = None

    return ConflictReport(
        name=name,
        source_path=source,
        target_path=target,
        entry_type=entry_type,
        conflict_kind=kind,
        existing_link_target=link_target,
    )
