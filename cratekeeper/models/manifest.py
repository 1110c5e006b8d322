"""
Manifest models for cratekeeper.

A manifest file declares a standalone package, a workspace of member
crates, or both at once. ``CrateManifest`` is the closed union of
:class:`PackageManifest`, :class:`WorkspaceManifest` and
:class:`MixedManifest`. The manifest loader that builds these values
lives outside this package.

Manifests hash by name and members only. ``deps`` still takes part in
equality but not in the hash, since :class:`CrateDeps` is mutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional, Tuple, Union

from cratekeeper.models.crate_name import CrateName
from cratekeeper.models.dependency import CrateDeps


@dataclass(frozen=True)
class PackageManifest:
    """A standalone crate.

    Attributes:
        name: The crate's name.
        deps: The crate's declared dependencies.
    """

    name: CrateName
    deps: CrateDeps = field(hash=False)


@dataclass(frozen=True)
class WorkspaceManifest:
    """A workspace root that declares no dependencies of its own.

    Attributes:
        members: Member crate paths relative to the workspace root.
    """

    members: Tuple[PurePosixPath, ...] = ()


@dataclass(frozen=True)
class MixedManifest:
    """A crate that is also the root of a workspace.

    Attributes:
        name: The crate's name.
        deps: The crate's declared dependencies.
        members: Member crate paths relative to the workspace root.
    """

    name: CrateName
    deps: CrateDeps = field(hash=False)
    members: Tuple[PurePosixPath, ...] = ()


CrateManifest = Union[PackageManifest, WorkspaceManifest, MixedManifest]


def manifest_deps(manifest: CrateManifest) -> Optional[CrateDeps]:
    """Return the dependencies a manifest declares for itself.

    ``None`` for a :class:`WorkspaceManifest`, which owns no dependencies.
    """
    if isinstance(manifest, (PackageManifest, MixedManifest)):
        return manifest.deps
    if isinstance(manifest, WorkspaceManifest):
        return None
    raise TypeError(f"not a crate manifest: {type(manifest).__name__}")


def manifest_members(manifest: CrateManifest) -> Tuple[PurePosixPath, ...]:
    """Return workspace member paths; empty for a :class:`PackageManifest`."""
    if isinstance(manifest, (WorkspaceManifest, MixedManifest)):
        return manifest.members
    if isinstance(manifest, PackageManifest):
        return ()
    raise TypeError(f"not a crate manifest: {type(manifest).__name__}")
