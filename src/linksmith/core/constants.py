"""Core constants for linksmith.

This module defines constants used throughout the package:
- The backup marker and timestamp format written next to replaced files
- Environment variables consulted when resolving configuration
- The default kit layout (source subdirectories and install locations)
"""

import re

# ============================================================================
# Backups
# ============================================================================

#: Suffix appended to a file name to mark it as a saved copy
BACKUP_MARKER: str = ".bak"

#: Characters in an ISO-8601 timestamp that are not filesystem-safe
TIMESTAMP_UNSAFE_CHARS: re.Pattern[str] = re.compile(r"[:.]")

#: Matches the marker plus an optional timestamp suffix at the end of a name,
#: e.g. ``.bak`` or ``.bak.2024-01-15T10-30-00-123Z`` (optionally ``-N``)
BACKUP_SUFFIX_PATTERN: re.Pattern[str] = re.compile(
    r"\.bak(\.\d{4}-\d{2}-\d{2}T[0-9A-Za-z-]*)?$"
)

#: Upper bound on counter suffixes tried when a timestamped name is taken
MAX_BACKUP_ATTEMPTS: int = 1000

# ============================================================================
# Configuration
# ============================================================================

#: Environment variable overriding the kit repository root
ROOT_ENV_VAR: str = "LINKSMITH_ROOT"

#: Environment variable overriding the home directory
HOME_ENV_VAR: str = "LINKSMITH_HOME"

#: Environment variable enabling filesystem tracing on stderr
DEBUG_ENV_VAR: str = "LINKSMITH_DEBUG"

#: Directory under the home directory that receives most links
CLAUDE_DIR_NAME: str = ".claude"

# ============================================================================
# Default layout
# ============================================================================

AGENTS_DIR_NAME: str = "agents"
SKILLS_DIR_NAME: str = "skills"
HOOKS_DIR_NAME: str = "hooks"
COMMANDS_DIR_NAME: str = "commands"
MEMORY_DIR_NAME: str = "memory"

#: Files in the kit root linked directly into the home directory
HOME_FILE_SYMLINKS: tuple[str, ...] = (".mcp.json",)

#: Memory file linked into the .claude directory
MEMORY_FILE_NAME: str = "CLAUDE.md"
