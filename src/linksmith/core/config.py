"""Configuration for linksmith.

The kit root and home directory are resolved once and passed explicitly
to the layout and chains, so everything can run against temporary
directories in tests.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel

from linksmith.core.constants import CLAUDE_DIR_NAME, HOME_ENV_VAR, ROOT_ENV_VAR
from linksmith.core.errors import ConfigurationError

__all__ = ["LinksmithConfig", "resolve_config"]


class LinksmithConfig(BaseModel):
    """Resolved directories for one run.

    Attributes:
        root_dir: Kit repository holding agents, skills, hooks, etc.
        home_dir: Home directory receiving the links
    """

    root_dir: Path
    home_dir: Path

    model_config = {"frozen": True}

    @property
    def claude_dir(self) -> Path:
        return self.home_dir / CLAUDE_DIR_NAME


def _choose(explicit: str | Path | None, *env_vars: str) -> str | Path | None:
    if explicit is not None:
        return explicit
    for env_var in env_vars:
        value = os.getenv(env_var)
        if value:
            return value
    return None


def resolve_config(
    root_dir: str | Path | None = None,
    home_dir: str | Path | None = None,
) -> LinksmithConfig:
    """Resolve the kit root and home directory.

    Precedence for each value: explicit argument, environment variable
    (``LINKSMITH_ROOT``; ``LINKSMITH_HOME`` then ``HOME``), default
    (current directory; ``Path.home()``).

    Raises:
        ConfigurationError: If the kit root is not a directory
    """
    chosen_root = _choose(root_dir, ROOT_ENV_VAR) or Path.cwd()
    chosen_home = _choose(home_dir, HOME_ENV_VAR, "HOME") or Path.home()

    root = Path(chosen_root).expanduser().absolute()
    home = Path(chosen_home).expanduser().absolute()

    if not root.is_dir():
        raise ConfigurationError("root_dir", f"{root} is not a directory")
    if home.exists() and not home.is_dir():
        raise ConfigurationError("home_dir", f"{home} is not a directory")

    return LinksmithConfig(root_dir=root, home_dir=home)
