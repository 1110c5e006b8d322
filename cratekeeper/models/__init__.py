"""
Unified data model exports for cratekeeper.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``cratekeeper.models`` instead of individual submodules.

Example:
    >>> from cratekeeper.models import CrateName, CrateDeps, ExternalDep
"""

from __future__ import annotations

from cratekeeper.models.crate_name import CrateName
from cratekeeper.models.release import CrateRelease
from cratekeeper.models.dependency import (
    CrateDep,
    CrateDeps,
    ExternalDep,
    InternalDep,
)
from cratekeeper.models.manifest import (
    CrateManifest,
    MixedManifest,
    PackageManifest,
    WorkspaceManifest,
    manifest_deps,
    manifest_members,
)
from cratekeeper.models.analysis import AnalyzedDependencies, AnalyzedDependency

__all__ = [
    "CrateName",
    "CrateRelease",
    "CrateDep",
    "CrateDeps",
    "ExternalDep",
    "InternalDep",
    "CrateManifest",
    "PackageManifest",
    "WorkspaceManifest",
    "MixedManifest",
    "manifest_deps",
    "manifest_members",
    "AnalyzedDependency",
    "AnalyzedDependencies",
]
