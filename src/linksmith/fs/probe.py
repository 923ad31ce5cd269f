"""Filesystem probe.

The predicates in this module are the only way the rest of linksmith
inspects the filesystem. None of them raise: every error is folded into a
definite answer so callers can branch on plain booleans.
"""

import errno
import os
import shutil
import stat
from pathlib import Path

import structlog

from linksmith.fs.paths import normalize_path
from linksmith.utils.debug import debug

logger = structlog.get_logger(__name__)


def exists(path: Path | str) -> bool:
    """Return True if ``path`` resolves via normal (link-following) access.

    Dangling and cyclic links report False.
    """
    try:
        os.stat(path)
        return True
    except (OSError, ValueError):
        return False


def is_symlink(path: Path | str) -> bool:
    """Return True if ``path`` itself is a symbolic link.

    Uses a non-following stat, so dangling links count. A link-loop error
    is itself evidence of a symlink and also returns True.
    """
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError as exc:
        return exc.errno == errno.ELOOP
    except ValueError:
        return False


def is_directory(path: Path | str) -> bool:
    """Return True if ``path`` is a directory after following links."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def read_link(path: Path | str) -> str | None:
    """Return the raw value stored in a symlink, or None if unreadable."""
    try:
        return os.readlink(path)
    except (OSError, ValueError):
        return None


def resolve_link(path: Path | str) -> Path | None:
    """Resolve a symlink's stored value to a normalized absolute path.

    Relative values are resolved against the link's own directory. The
    result is lexical: the pointed-to object need not exist.

    Returns:
        Normalized absolute path, or None when the link cannot be read
    """
    value = read_link(path)
    if value is None:
        return None
    link_dir = normalize_path(path).parent
    return normalize_path(value, root=link_dir)


def remove_directory(path: Path | str) -> bool:
    """Remove a directory tree.

    Symlinks inside the tree are unlinked, never followed. A missing
    directory counts as removed.

    Returns:
        True when nothing remains at ``path``
    """
    if not os.path.lexists(path):
        return True

    try:
        shutil.rmtree(path)
    except OSError as exc:
        logger.warning("directory.remove_failed", path=str(path), error=str(exc))
        return False

    debug(f"Removed directory tree: {path}")
    return True


def remove_entry(path: Path | str) -> None:
    """Unlink a file or symlink if present.

    Raises:
        OSError: If the entry exists but cannot be removed
    """
    try:
        os.unlink(path)
    except FileNotFoundError:
        return
    debug(f"Removed entry: {path}")
