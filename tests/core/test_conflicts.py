"""Tests for read-only conflict detection."""

import os
from pathlib import Path

import pytest

from linksmith.core.conflicts import (
    check_directory_conflict,
    check_file_conflict,
    detect_conflicts,
)
from linksmith.core.schemas import ConflictKind, EntryType, LinkEntry, LinkStatus
from linksmith.fs.installer import create_directory_symlink, create_file_symlink


class TestCheckFileConflict:
    def test_missing_source(self, source_dir: Path, target_dir: Path) -> None:
        (target_dir / "file.txt").write_text("x")
        assert check_file_conflict("file.txt", source_dir, target_dir) is None

    def test_missing_target(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        assert check_file_conflict("file.txt", source_dir, target_dir) is None

    def test_correct_absolute_symlink(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        (target_dir / "file.txt").symlink_to(source_dir / "file.txt")
        assert check_file_conflict("file.txt", source_dir, target_dir) is None

    def test_correct_relative_symlink(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        (target_dir / "file.txt").symlink_to("../source/file.txt")
        assert check_file_conflict("file.txt", source_dir, target_dir) is None

    def test_symlink_elsewhere(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        other = source_dir / "other.txt"
        other.write_text("o")
        (target_dir / "file.txt").symlink_to(other)

        conflict = check_file_conflict("file.txt", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK
        assert conflict.existing_link_target == str(other)
        assert conflict.entry_type == EntryType.FILE
        assert conflict.source_path == source_dir / "file.txt"
        assert conflict.target_path == target_dir / "file.txt"

    def test_existing_file(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        (target_dir / "file.txt").write_text("existing")

        conflict = check_file_conflict("file.txt", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_FILE
        assert conflict.existing_link_target is None

    def test_does_not_mutate(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        (target_dir / "file.txt").write_text("existing")

        first = check_file_conflict("file.txt", source_dir, target_dir)
        second = check_file_conflict("file.txt", source_dir, target_dir)

        assert first == second
        assert os.listdir(target_dir) == ["file.txt"]
        assert (target_dir / "file.txt").read_text() == "existing"

    def test_dangling_symlink(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "file.txt").write_text("x")
        (target_dir / "file.txt").symlink_to(source_dir / "gone.txt")

        conflict = check_file_conflict("file.txt", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK
        assert conflict.existing_link_target == str(source_dir / "gone.txt")

        outcome = create_file_symlink("file.txt", source_dir, target_dir)

        assert outcome.status == LinkStatus.INSTALLED


class TestCheckDirectoryConflict:
    def test_missing_source(self, source_dir: Path, target_dir: Path) -> None:
        assert check_directory_conflict("sub", source_dir, target_dir) is None

    def test_file_source_is_not_a_directory(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").write_text("x")
        (target_dir / "sub").mkdir()
        assert check_directory_conflict("sub", source_dir, target_dir) is None

    def test_missing_target(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        assert check_directory_conflict("sub", source_dir, target_dir) is None

    def test_correct_symlink(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        (target_dir / "sub").symlink_to(source_dir / "sub")
        assert check_directory_conflict("sub", source_dir, target_dir) is None

    def test_dangling_symlink(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        (target_dir / "sub").symlink_to("../source/gone")

        conflict = check_directory_conflict("sub", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK
        assert conflict.existing_link_target == "../source/gone"

    def test_symlink_elsewhere(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        (source_dir / "other").mkdir()
        (target_dir / "sub").symlink_to(source_dir / "other")

        conflict = check_directory_conflict("sub", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_SYMLINK
        assert conflict.existing_link_target == str(source_dir / "other")
        assert conflict.entry_type == EntryType.DIRECTORY

    def test_existing_directory(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        (target_dir / "sub").mkdir()

        conflict = check_directory_conflict("sub", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_DIRECTORY

    def test_existing_file(self, source_dir: Path, target_dir: Path) -> None:
        (source_dir / "sub").mkdir()
        (target_dir / "sub").write_text("x")

        conflict = check_directory_conflict("sub", source_dir, target_dir)

        assert conflict is not None
        assert conflict.conflict_kind == ConflictKind.EXISTING_FILE


def test_detect_conflicts_keeps_order(source_dir: Path, target_dir: Path) -> None:
    (source_dir / "b.txt").write_text("b")
    (source_dir / "a").mkdir()
    (source_dir / "clean.txt").write_text("c")
    (target_dir / "b.txt").write_text("existing")
    (target_dir / "a").mkdir()

    entries = [
        LinkEntry(name="b.txt", source_dir=source_dir, target_dir=target_dir),
        LinkEntry(name="clean.txt", source_dir=source_dir, target_dir=target_dir),
        LinkEntry(
            name="a",
            source_dir=source_dir,
            target_dir=target_dir,
            entry_type=EntryType.DIRECTORY,
        ),
    ]

    conflicts = detect_conflicts(entries)

    assert [c.name for c in conflicts] == ["b.txt", "a"]
    assert [c.conflict_kind for c in conflicts] == [
        ConflictKind.EXISTING_FILE,
        ConflictKind.EXISTING_DIRECTORY,
    ]


@pytest.mark.parametrize(
    "arrange",
    ["absent", "correct_absolute", "correct_relative", "no_source"],
)
def test_no_conflict_means_install_succeeds(
    source_dir: Path, target_dir: Path, arrange: str
) -> None:
    if arrange != "no_source":
        (source_dir / "f.txt").write_text("f")
        (source_dir / "d").mkdir()
    if arrange == "correct_absolute":
        (target_dir / "f.txt").symlink_to(source_dir / "f.txt")
        (target_dir / "d").symlink_to(source_dir / "d")
    elif arrange == "correct_relative":
        (target_dir / "f.txt").symlink_to("../source/f.txt")
        (target_dir / "d").symlink_to("../source/d")

    assert check_file_conflict("f.txt", source_dir, target_dir) is None
    assert check_directory_conflict("d", source_dir, target_dir) is None

    file_outcome = create_file_symlink("f.txt", source_dir, target_dir)
    dir_outcome = create_directory_symlink("d", source_dir, target_dir)

    assert file_outcome.status in (LinkStatus.INSTALLED, LinkStatus.SKIPPED)
    assert dir_outcome.status in (LinkStatus.INSTALLED, LinkStatus.SKIPPED)
