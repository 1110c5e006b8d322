"""
Core functionality exports for cratekeeper.

Importing from here keeps user-facing imports clean and stable:

    from cratekeeper.core import FreshnessChecker, ReleaseStore
"""

from __future__ import annotations

from cratekeeper.core.checker import FreshnessChecker
from cratekeeper.core.data_store import ReleaseStore

__all__ = [
    "FreshnessChecker",
    "ReleaseStore",
]
