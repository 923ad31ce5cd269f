"""Path utilities for filesystem operations.

This module provides the lexical path handling used when comparing and
writing symlink values, plus the timestamp format used for backup names.
"""

import os
import unicodedata
from datetime import UTC, datetime
from pathlib import Path

from linksmith.core.constants import TIMESTAMP_UNSAFE_CHARS


def normalize_path(path: Path | str, root: Path | None = None) -> Path:
    """Normalize a path for consistent comparison.

    Normalization is lexical: ``..`` segments are collapsed but symlinks
    along the way are not followed, so a link's stored value and the
    intended source compare the same way they were written.

    Args:
        path: Path to normalize
        root: Optional base directory for relative paths (defaults to cwd)

    Returns:
        Normalized absolute path
    """
    path = Path(path)

    if not path.is_absolute():
        base = Path(root) if root is not None else Path.cwd()
        path = base / path

    normalized = os.path.normpath(str(path))

    # Normalize Unicode (NFC on macOS, NFD handling)
    if os.name == "posix":
        normalized = unicodedata.normalize("NFC", normalized)

    return Path(normalized)


def relative_link_value(source: Path, link_path: Path) -> str:
    """Compute the relative value to store in a symlink at ``link_path``.

    The value is relative to the link's containing directory so the
    installed tree stays valid when both sides are relocated together.
    """
    link_dir = normalize_path(link_path).parent
    return os.path.relpath(normalize_path(source), link_dir)


def ensure_parent_dir(path: Path) -> None:
    """Ensure parent directory exists for a path.

    Args:
        path: Path whose parent directory should exist

    Raises:
        OSError: If parent directory cannot be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def backup_timestamp(now: datetime | None = None) -> str:
    """Return a sortable, filesystem-safe UTC timestamp.

    Matches an ISO-8601 string with millisecond precision and a ``Z``
    suffix, with ``:`` and ``.`` replaced by ``-``:
    ``2024-01-15T10-30-00-123Z``.
    """
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"
    return TIMESTAMP_UNSAFE_CHARS.sub("-", iso)
