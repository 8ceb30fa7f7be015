"""SQL layer errors."""

from __future__ import annotations


class SQLBuilderError(ValueError):
    """Raised when criteria cannot be rendered into allowlisted SQL."""
