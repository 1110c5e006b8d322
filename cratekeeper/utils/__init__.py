"""
Utility helpers for cratekeeper.

This package provides reusable utilities used across cratekeeper:

- Logging configuration and retrieval
- Version ordering and comparison helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from cratekeeper.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from cratekeeper.utils.version_utils import (
    format_version,
    get_update_type,
    max_version,
    optional_version_key,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Version utilities
    "format_version",
    "get_update_type",
    "max_version",
    "optional_version_key",
]
