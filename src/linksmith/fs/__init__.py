"""Filesystem operations for conflict-aware symlink installation.

This module provides the probe predicates, target classification, backup
manager and installer used to link kit entries into place.
"""

from linksmith.fs.backup import (
    backup_file,
    backup_path,
    find_backups,
    restore_from_backup,
)
from linksmith.fs.installer import (
    create_directory_symlink,
    create_file_symlink,
    create_symlink,
)
from linksmith.fs.paths import normalize_path
from linksmith.fs.probe import exists, is_directory, is_symlink
from linksmith.fs.state import classify_target

__all__ = [
    "backup_file",
    "backup_path",
    "classify_target",
    "create_directory_symlink",
    "create_file_symlink",
    "create_symlink",
    "exists",
    "find_backups",
    "is_directory",
    "is_symlink",
    "normalize_path",
    "restore_from_backup",
]
