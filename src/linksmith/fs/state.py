"""Classification of a target path against its intended source.

Both the read-only conflict preview and the installer branch on the
value returned by :func:`classify_target`, so the two always agree on
what occupies a target.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from linksmith.fs.paths import normalize_path
from linksmith.fs.probe import exists, is_directory, is_symlink, read_link, resolve_link


@dataclass(frozen=True)
class NoTarget:
    """Nothing exists at the target path."""


@dataclass(frozen=True)
class CorrectLink:
    """The target is a symlink that already resolves to the source."""

    value: str


@dataclass(frozen=True)
class StaleLink:
    """The target is a symlink pointing somewhere else (or nowhere).

    Attributes:
        value: Raw link value, or None when it could not be read
        dangling: True when the link does not resolve to anything
    """

    value: str | None
    dangling: bool = False


@dataclass(frozen=True)
class OccupiedFile:
    """A regular file occupies the target."""


@dataclass(frozen=True)
class OccupiedDirectory:
    """A real directory (not a link) occupies the target."""


@dataclass(frozen=True)
class OccupiedOther:
    """Something that is neither a file, a directory nor a link."""


TargetState = (
    NoTarget | CorrectLink | StaleLink | OccupiedFile | OccupiedDirectory | OccupiedOther
)


def classify_target(source: Path, target: Path) -> TargetState:
    """Classify what currently occupies ``target``.

    Symlinks are checked first so a link to a directory is never mistaken
    for a real directory. Link values are compared after resolving them
    against the link's own directory, so relative and absolute links to
    the same source are both recognized.

    Args:
        source: Path the link is meant to point to
        target: Path where the link should live

    Returns:
        One of the TargetState variants
    """
    if is_symlink(target):
        value = read_link(target)
        resolved = resolve_link(target)
        if value is not None and resolved == normalize_path(source):
            return CorrectLink(value=value)
        return StaleLink(value=value, dangling=not exists(target))

    if is_directory(target):
        return OccupiedDirectory()

    if os.path.isfile(target):
        return OccupiedFile()

    if exists(target):
        return OccupiedOther()

    return NoTarget()


def is_occupied(state: TargetState) -> bool:
    """Return True for states where a non-link object holds the target."""
    return isinstance(state, OccupiedFile | OccupiedDirectory | OccupiedOther)
