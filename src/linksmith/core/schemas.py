"""Pydantic schemas for the conflict/install/restore pipeline.

These schemas define the values passed between the core and its callers:
- LinkEntry: a named file or directory to link from a source into a target
- LinkOutcome: result of one install or restore operation
- ConflictReport: read-only description of an occupied target
- BackupRecord: a backup file found on disk, mapped back to its original

All schemas are immutable and use Pydantic v2 for validation and
serialization.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, field_serializer, model_validator


class LinkStatus(str, Enum):
    """Status of a single install or restore operation."""

    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"
    BACKED_UP = "backed_up"


class EntryType(str, Enum):
    """Kind of filesystem object an entry links to."""

    FILE = "file"
    DIRECTORY = "directory"


class ConflictKind(str, Enum):
    """What currently occupies a target path."""

    EXISTING_SYMLINK = "existing_symlink"
    EXISTING_FILE = "existing_file"
    EXISTING_DIRECTORY = "existing_directory"


class LinkOutcome(BaseModel):
    """Per-entry result of an install or restore.

    Attributes:
        name: Logical entry name (file or directory name)
        status: Final status of the operation
        message: Human-readable explanation
    """

    name: str
    status: LinkStatus
    message: str

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status != LinkStatus.FAILED


class LinkEntry(BaseModel):
    """A named entry linked from ``source_dir/name`` to ``target_dir/name``."""

    name: str
    source_dir: Path
    target_dir: Path
    entry_type: EntryType = EntryType.FILE

    model_config = {"frozen": True}

    @property
    def source_path(self) -> Path:
        return self.source_dir / self.name

    @property
    def target_path(self) -> Path:
        return self.target_dir / self.name

    @field_serializer("source_dir", "target_dir")
    def serialize_dir(self, path: Path) -> str:
        return str(path)


class ConflictReport(BaseModel):
    """A target occupied by something other than the intended link.

    Attributes:
        name: Entry name
        source_path: Path the link should point to
        target_path: Path where the link should live
        entry_type: Whether the entry is a file or a directory
        conflict_kind: What currently occupies the target
        existing_link_target: Raw value of the existing link
            (only for ``existing_symlink``)
    """

    name: str
    source_path: Path
    target_path: Path
    entry_type: EntryType
    conflict_kind: ConflictKind
    existing_link_target: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_link_target(self) -> "ConflictReport":
        is_link = self.conflict_kind == ConflictKind.EXISTING_SYMLINK
        if is_link and self.existing_link_target is None:
            raise ValueError("existing_symlink conflicts require a link target")
        if not is_link and self.existing_link_target is not None:
            raise ValueError(
                "existing_link_target is only valid for existing_symlink conflicts"
            )
        return self

    @field_serializer("source_path", "target_path")
    def serialize_path(self, path: Path) -> str:
        return str(path)


class BackupRecord(BaseModel):
    """A backup file and the original path it restores to.

    Several records may share ``name`` when a file was backed up more than
    once (one record per backup generation).
    """

    backup_path: Path
    original_path: Path
    name: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_name(self) -> "BackupRecord":
        if self.name != self.original_path.name:
            raise ValueError("name must match the original path's file name")
        return self

    @field_serializer("backup_path", "original_path")
    def serialize_path(self, path: Path) -> str:
        return str(path)
