"""
Crate release model for cratekeeper.

A :class:`CrateRelease` is one published version of a crate as reported
by a registry. Releases are read-only facts; only
:class:`~cratekeeper.core.data_store.ReleaseStore` looks at ``yanked``.
"""

from __future__ import annotations

from dataclasses import dataclass

from semantic_version import Version

from cratekeeper.models.crate_name import CrateName


@dataclass(frozen=True)
class CrateRelease:
    """One published release of a crate.

    Attributes:
        name: The crate this release belongs to.
        version: The published version.
        yanked: Whether the release was withdrawn from the registry.
    """

    name: CrateName
    version: Version
    yanked: bool = False

    def __str__(self) -> str:
        suffix = " (yanked)" if self.yanked else ""
        return f"{self.name} {self.version}{suffix}"
