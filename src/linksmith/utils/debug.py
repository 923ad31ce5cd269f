"""Filesystem tracing toggled by the LINKSMITH_DEBUG environment variable.

Trace lines go to stderr so they never mix with JSON written to stdout.
"""

import os
import sys
from typing import Any

from linksmith.core.constants import DEBUG_ENV_VAR

_TRUTHY = frozenset({"1", "true", "yes"})


def debug_enabled() -> bool:
    """Return True when LINKSMITH_DEBUG is '1', 'true' or 'yes'."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY


def debug(msg: Any) -> None:
    """Write ``msg`` to stderr when tracing is on.

    The variable is checked on every call.
    """
    if debug_enabled():
        print(f"[linksmith] {msg}", file=sys.stderr)
