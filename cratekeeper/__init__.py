"""
cratekeeper: dependency freshness analysis for Rust crates

cratekeeper models the dependencies a Cargo manifest declares and decides,
per dependency, whether a release exists that is newer than the best one
its version requirement admits.

Features include:
    • Validated crate names and the three Cargo dependency groups
    • Package, workspace and mixed manifest shapes
    • Yank- and pre-release-aware release lookups
    • An ``any outdated`` verdict for badges and CI checks

Manifest parsing and registry access are left to the embedding
application; cratekeeper works on already-typed values.
"""

from __future__ import annotations

from cratekeeper.__version__ import __version__
from cratekeeper.config import CrateKeeperConfig, load_config
from cratekeeper.core import FreshnessChecker, ReleaseStore
from cratekeeper.exceptions import (
    ConfigError,
    CrateKeeperError,
    InvalidNameError,
    ReleaseDataError,
)
from cratekeeper.models import (
    AnalyzedDependencies,
    AnalyzedDependency,
    CrateDep,
    CrateDeps,
    CrateManifest,
    CrateName,
    CrateRelease,
    ExternalDep,
    InternalDep,
    MixedManifest,
    PackageManifest,
    WorkspaceManifest,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "cratekeeper Contributors"
__license__ = "Apache-2.0"
__description__ = "Dependency freshness analysis for Rust crates."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Models
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
    "AnalyzedDependency",
    "AnalyzedDependencies",
    # Core
    "ReleaseStore",
    "FreshnessChecker",
    # Configuration
    "CrateKeeperConfig",
    "load_config",
    # Errors
    "CrateKeeperError",
    "InvalidNameError",
    "ReleaseDataError",
    "ConfigError",
]
