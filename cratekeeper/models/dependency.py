"""
Dependency declaration models for cratekeeper.

A declared dependency is either an :class:`ExternalDep`, resolved from the
registry through a version requirement, or an :class:`InternalDep`,
resolved through a relative path to a sibling crate. ``CrateDep`` is the
closed union of the two; code dispatches on it with ``isinstance``.

:class:`CrateDeps` holds the three dependency groups of a manifest. Each
group is a ``dict`` and keeps manifest declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, Iterator, Tuple, Union

from semantic_version import SimpleSpec

from cratekeeper.constants import DEPENDENCY_GROUPS
from cratekeeper.models.crate_name import CrateName


@dataclass(frozen=True)
class ExternalDep:
    """A dependency fetched from the registry.

    Attributes:
        requirement: The declared version requirement, e.g. ``^1.0``.
    """

    requirement: SimpleSpec

    def is_external(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self.requirement)


@dataclass(frozen=True)
class InternalDep:
    """A dependency on a sibling crate, referenced by relative path.

    Attributes:
        path: Path of the sibling crate relative to the declaring manifest.
    """

    path: PurePosixPath

    def is_external(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"path:{self.path}"


CrateDep = Union[ExternalDep, InternalDep]


@dataclass
class CrateDeps:
    """Dependencies declared by one crate, split into three groups.

    Groups are independent: the same crate may be declared in several
    groups, with a different kind in each.

    Attributes:
        main: Runtime dependencies (``[dependencies]``).
        dev: Test and example dependencies (``[dev-dependencies]``).
        build: Build script dependencies (``[build-dependencies]``).
    """

    main: Dict[CrateName, CrateDep] = field(default_factory=dict)
    dev: Dict[CrateName, CrateDep] = field(default_factory=dict)
    build: Dict[CrateName, CrateDep] = field(default_factory=dict)

    def groups(self) -> Iterator[Tuple[str, Dict[CrateName, CrateDep]]]:
        """Yield ``(group_name, mapping)`` pairs as main, dev, build."""
        for group in DEPENDENCY_GROUPS:
            yield group, getattr(self, group)

    def __len__(self) -> int:
        return len(self.main) + len(self.dev) + len(self.build)
