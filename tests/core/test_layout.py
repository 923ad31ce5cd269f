"""Tests for layout discovery and expansion."""

from pathlib import Path

import pytest

from linksmith.core.config import LinksmithConfig
from linksmith.core.errors import LayoutError
from linksmith.core.layout import (
    LinkGroup,
    backup_directories,
    default_layout,
    expand_group,
    expand_layout,
    list_directory_items,
    list_markdown_files,
)
from linksmith.core.schemas import EntryType


class TestListDirectoryItems:
    def test_splits_files_and_directories(self, tmp_path: Path) -> None:
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "sub").mkdir()

        items = list_directory_items(tmp_path)

        assert items.files == ["a.md", "b.md"]
        assert items.directories == ["sub"]

    def test_skips_hidden_and_backups(self, tmp_path: Path) -> None:
        (tmp_path / ".hidden").write_text("h")
        (tmp_path / "a.md.bak").write_text("b")
        (tmp_path / "a.md.bak.2024-01-15T10-30-00-123Z").write_text("b")
        (tmp_path / "a.md").write_text("a")

        assert list_directory_items(tmp_path).files == ["a.md"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        items = list_directory_items(tmp_path / "missing")
        assert items.files == []
        assert items.directories == []

    def test_does_not_follow_symlinks(self, tmp_path: Path) -> None:
        (tmp_path / "real").mkdir()
        (tmp_path / "link").symlink_to(tmp_path / "real")

        assert list_directory_items(tmp_path).directories == ["real"]

    def test_markdown_stems(self, tmp_path: Path) -> None:
        (tmp_path / "deploy.md").write_text("d")
        (tmp_path / "review.md").write_text("r")
        (tmp_path / "notes.txt").write_text("n")

        assert list_markdown_files(tmp_path) == ["deploy", "review"]


class TestExpandLayout:
    def test_default_layout_entries(self, kit: dict[str, Path]) -> None:
        config = LinksmithConfig(root_dir=kit["root"], home_dir=kit["home"])

        entries = expand_layout(default_layout(config))

        by_name = {entry.name: entry for entry in entries}
        assert list(by_name) == [
            "reviewer.md",
            "pdf",
            "pre-commit.sh",
            ".mcp.json",
            "CLAUDE.md",
        ]
        assert by_name["pdf"].entry_type == EntryType.DIRECTORY
        assert by_name["pdf"].target_path == kit["home"] / ".claude" / "skills" / "pdf"
        assert by_name[".mcp.json"].target_path == kit["home"] / ".mcp.json"
        assert by_name["CLAUDE.md"].source_path == kit["root"] / "memory" / "CLAUDE.md"
        assert by_name["CLAUDE.md"].target_path == kit["home"] / ".claude" / "CLAUDE.md"

    def test_missing_source_directory_yields_nothing(self, tmp_path: Path) -> None:
        group = LinkGroup(
            label="agents", source_dir=tmp_path / "missing", target_dir=tmp_path
        )
        assert expand_group(group) == []

    def test_source_file_instead_of_directory(self, tmp_path: Path) -> None:
        (tmp_path / "agents").write_text("oops")
        group = LinkGroup(label="agents", source_dir=tmp_path / "agents", target_dir=tmp_path)

        with pytest.raises(LayoutError) as exc_info:
            expand_group(group)

        assert exc_info.value.group == "agents"

    def test_invalid_explicit_name(self, tmp_path: Path) -> None:
        group = LinkGroup(
            label="config", source_dir=tmp_path, target_dir=tmp_path, names=("../x",)
        )
        with pytest.raises(LayoutError):
            expand_group(group)

    def test_backup_directories(self, kit: dict[str, Path]) -> None:
        config = LinksmithConfig(root_dir=kit["root"], home_dir=kit["home"])
        claude = kit["home"] / ".claude"

        directories = backup_directories(config, default_layout(config))

        assert directories == [
            claude,
            kit["home"],
            claude / "agents",
            claude / "skills",
            claude / "hooks",
        ]
