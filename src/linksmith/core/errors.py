"""Custom exceptions for linksmith.

Filesystem operations never raise; they report failures through
``LinkOutcome``. The exceptions here cover the layers around them:
resolving configuration and expanding a layout into entries.
"""

from typing import Any


class LinksmithError(Exception):
    """Base exception for all linksmith errors."""

    pass


class ConfigurationError(LinksmithError):
    """Raised when a configuration value cannot be resolved or is invalid.

    Attributes:
        field: Configuration field that failed (e.g. 'root_dir')
        reason: Human-readable reason
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        return {
            "error": "configuration_error",
            "field": self.field,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"ConfigurationError(field={self.field!r}, reason={self.reason!r})"


class LayoutError(LinksmithError):
    """Raised when a link group cannot be expanded into entries.

    Attributes:
        group: Name of the offending link group
        reason: Human-readable reason
        path: Optional path involved in the failure
    """

    def __init__(self, group: str, reason: str, path: str | None = None) -> None:
        self.group = group
        self.reason = reason
        self.path = path

        message = f"Layout group '{group}' is invalid: {reason}"
        if path:
            message += f" ({path})"

        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        result: dict[str, Any] = {
            "error": "layout_error",
            "group": self.group,
            "reason": self.reason,
        }

        if self.path is not None:
            result["path"] = self.path

        return result

    def __repr__(self) -> str:
        return (
            f"LayoutError(group={self.group!r}, "
            f"reason={self.reason!r}, path={self.path!r})"
        )
