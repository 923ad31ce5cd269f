"""Pytest configuration and fixtures for linksmith tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a CLI test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source directory."""
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty target directory."""
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def kit(tmp_path: Path) -> dict[str, Path]:
    """A kit repository and an empty home directory.

    Layout:
        kit/agents/reviewer.md
        kit/skills/pdf/SKILL.md
        kit/hooks/pre-commit.sh
        kit/commands/deploy.md
        kit/.mcp.json
        kit/memory/CLAUDE.md
    """
    root = tmp_path / "kit"
    home = tmp_path / "home"
    (root / "agents").mkdir(parents=True)
    (root / "skills" / "pdf").mkdir(parents=True)
    (root / "hooks").mkdir()
    (root / "commands").mkdir()
    (root / "memory").mkdir()
    home.mkdir()

    (root / "agents" / "reviewer.md").write_text("# reviewer")
    (root / "skills" / "pdf" / "SKILL.md").write_text("# pdf skill")
    (root / "hooks" / "pre-commit.sh").write_text("#!/bin/sh\nexit 0\n")
    (root / "commands" / "deploy.md").write_text("# deploy")
    (root / ".mcp.json").write_text("{}")
    (root / "memory" / "CLAUDE.md").write_text("# memory")

    return {"root": root, "home": home}


@pytest.fixture
def points_to():
    """Return a check that a symlink value resolves to an expected path."""

    def check(link: Path, expected: Path) -> bool:
        if not link.is_symlink():
            return False
        return (link.parent / link.readlink()).resolve() == expected.resolve()

    return check
