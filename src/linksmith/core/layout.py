"""Kit layout: which source entries are linked where.

A layout is a list of LinkGroups. Each group either names its entries
explicitly or discovers them by listing its source directory, skipping
hidden names and backups.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel

from linksmith.core import constants
from linksmith.core.config import LinksmithConfig
from linksmith.core.errors import LayoutError
from linksmith.core.schemas import EntryType, LinkEntry


@dataclass
class DirectoryItems:
    """Files and directories found directly inside a directory."""

    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)


class LinkGroup(BaseModel):
    """A set of entries sharing a source directory and a target directory.

    Attributes:
        label: Group name used in messages (e.g. 'agents')
        source_dir: Directory holding the sources
        target_dir: Directory receiving the links
        entry_type: Kind of entries in this group
        names: Explicit entry names; None discovers them from source_dir
    """

    label: str
    source_dir: Path
    target_dir: Path
    entry_type: EntryType = EntryType.FILE
    names: tuple[str, ...] | None = None

    model_config = {"frozen": True}


def list_directory_items(directory: Path) -> DirectoryItems:
    """List files and directories in ``directory``.

    Hidden names and names containing the backup marker are skipped.
    Symlinks are not followed. A missing or unreadable directory yields
    empty lists.
    """
    items = DirectoryItems()
    try:
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.name.startswith(".") or constants.BACKUP_MARKER in entry.name:
                    continue
                if entry.is_dir(follow_symlinks=False):
                    items.directories.append(entry.name)
                elif entry.is_file(follow_symlinks=False):
                    items.files.append(entry.name)
    except OSError:
        pass

    return items


def list_markdown_files(directory: Path) -> list[str]:
    """Return the stems of ``*.md`` files in ``directory``."""
    return [
        name[: -len(".md")]
        for name in list_directory_items(directory).files
        if name.endswith(".md")
    ]


def default_layout(config: LinksmithConfig) -> list[LinkGroup]:
    """Build the standard kit layout for ``config``."""
    root = config.root_dir
    claude_dir = config.claude_dir

    return [
        LinkGroup(
            label=constants.AGENTS_DIR_NAME,
            source_dir=root / constants.AGENTS_DIR_NAME,
            target_dir=claude_dir / constants.AGENTS_DIR_NAME,
        ),
        LinkGroup(
            label=constants.SKILLS_DIR_NAME,
            source_dir=root / constants.SKILLS_DIR_NAME,
            target_dir=claude_dir / constants.SKILLS_DIR_NAME,
            entry_type=EntryType.DIRECTORY,
        ),
        LinkGroup(
            label=constants.HOOKS_DIR_NAME,
            source_dir=root / constants.HOOKS_DIR_NAME,
            target_dir=claude_dir / constants.HOOKS_DIR_NAME,
        ),
        LinkGroup(
            label="config",
            source_dir=root,
            target_dir=config.home_dir,
            names=constants.HOME_FILE_SYMLINKS,
        ),
        LinkGroup(
            label=constants.MEMORY_DIR_NAME,
            source_dir=root / constants.MEMORY_DIR_NAME,
            target_dir=claude_dir,
            names=(constants.MEMORY_FILE_NAME,),
        ),
    ]


def expand_group(group: LinkGroup) -> list[LinkEntry]:
    """Expand one group into entries.

    Raises:
        LayoutError: If the source path exists but is not a directory, or
            an explicit name is not a plain entry name
    """
    if os.path.exists(group.source_dir) and not os.path.isdir(group.source_dir):
        raise LayoutError(group.label, "source is not a directory", str(group.source_dir))

    if group.names is not None:
        names = list(group.names)
        for name in names:
            if not name or name in (".", "..") or os.sep in name:
                raise LayoutError(group.label, f"invalid entry name {name!r}")
    else:
        items = list_directory_items(group.source_dir)
        names = items.directories if group.entry_type == EntryType.DIRECTORY else items.files

    return [
        LinkEntry(
            name=name,
            source_dir=group.source_dir,
            target_dir=group.target_dir,
            entry_type=group.entry_type,
        )
        for name in names
    ]


def expand_layout(groups: Iterable[LinkGroup]) -> list[LinkEntry]:
    """Expand groups into a flat, ordered list of entries."""
    entries: list[LinkEntry] = []
    for group in groups:
        entries.extend(expand_group(group))
    return entries


def backup_directories(
    config: LinksmithConfig, groups: Iterable[LinkGroup] = ()
) -> list[Path]:
    """Directories searched for backups during restore.

    The .claude and home directories come first, followed by every group
    target directory not already listed.
    """
    directories: list[Path] = [config.claude_dir, config.home_dir]
    for group in groups:
        if group.target_dir not in directories:
            directories.append(group.target_dir)
    return directories
