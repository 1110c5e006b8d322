"""
Freshness analysis models for cratekeeper.

:class:`AnalyzedDependency` tracks, for one external dependency, the
newest release overall and the newest release its requirement admits.
:class:`AnalyzedDependencies` mirrors the three groups of a
:class:`~cratekeeper.models.dependency.CrateDeps` and keeps only the
external entries, since path dependencies have no registry releases.

Both version fields start out as ``None`` and are filled in by a registry
collaborator such as :class:`~cratekeeper.core.checker.FreshnessChecker`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from semantic_version import SimpleSpec, Version

from cratekeeper.constants import DEPENDENCY_GROUPS
from cratekeeper.exceptions import ReleaseDataError
from cratekeeper.models.crate_name import CrateName
from cratekeeper.models.dependency import CrateDep, CrateDeps, ExternalDep
from cratekeeper.utils.version_utils import (
    format_version,
    get_update_type,
    optional_version_key,
)


@dataclass
class AnalyzedDependency:
    """Freshness state of one external dependency.

    Attributes:
        required: The declared version requirement.
        latest_that_matches: Newest eligible release admitted by
            ``required``, or ``None`` if none is (or nothing is known yet).
        latest: Newest eligible release overall, or ``None`` if the crate
            has no releases (or nothing is known yet).
    """

    required: SimpleSpec
    latest_that_matches: Optional[Version] = None
    latest: Optional[Version] = None

    _resolved: bool = field(default=False, init=False, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    @property
    def is_resolved(self) -> bool:
        """True once :meth:`resolve` has recorded release data."""
        return self._resolved

    def resolve(
        self,
        *,
        latest: Optional[Version],
        latest_that_matches: Optional[Version],
        strict: bool = False,
        crate: Optional[str] = None,
    ) -> None:
        """Record release data for this dependency.

        May be called once, and only while both version fields are still
        ``None``; values assigned directly count as recorded data.
        ``latest_that_matches`` above ``latest`` breaks the assumption that
        ``latest`` is the maximum over all releases; it is stored as given
        unless ``strict`` is set.

        Args:
            latest: Newest eligible release overall.
            latest_that_matches: Newest eligible release matching
                :attr:`required`.
            strict: Reject inconsistent data instead of storing it.
            crate: Crate name, used in error details only.

        Raises:
            ReleaseDataError: Data was already recorded or assigned, or
                ``strict`` is set and the data is inconsistent.
        """
        already_set = self.latest is not None or self.latest_that_matches is not None
        if self._resolved or already_set:
            raise ReleaseDataError(
                "release data already recorded",
                crate=crate,
                latest=format_version(self.latest),
                latest_that_matches=format_version(self.latest_that_matches),
            )

        if strict and not _consistent(latest, latest_that_matches):
            raise ReleaseDataError(
                "matching release is newer than the latest release",
                crate=crate,
                latest=format_version(latest),
                latest_that_matches=format_version(latest_that_matches),
            )

        self.latest = latest
        self.latest_that_matches = latest_that_matches
        self._resolved = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_outdated(self) -> bool:
        """True if a release exists that the requirement does not admit.

        Compares ``latest`` against ``latest_that_matches`` with ``None``
        ordered below every version, so a crate with releases but no
        matching release is outdated and a crate with no releases is not.
        """
        return optional_version_key(self.latest) > optional_version_key(
            self.latest_that_matches
        )

    def is_consistent(self) -> bool:
        """False if ``latest_that_matches`` is newer than ``latest``."""
        return _consistent(self.latest, self.latest_that_matches)

    def update_type(self) -> str:
        """Classify the step from the best matching release to the latest.

        See :func:`~cratekeeper.utils.version_utils.get_update_type`.
        """
        return get_update_type(self.latest_that_matches, self.latest)

    def to_json(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "required": str(self.required),
            "latest_that_matches": format_version(self.latest_that_matches),
            "latest": format_version(self.latest),
            "outdated": self.is_outdated(),
        }


def _consistent(
    latest: Optional[Version],
    latest_that_matches: Optional[Version],
) -> bool:
    if latest_that_matches is None:
        return True
    return latest is not None and latest_that_matches <= latest


@dataclass
class AnalyzedDependencies:
    """Freshness state of every external dependency of one crate.

    Build instances with :meth:`from_deps`; ``main``, ``dev`` and
    ``build`` keep the declaration order of the source groups.
    """

    main: Dict[CrateName, AnalyzedDependency] = field(default_factory=dict)
    dev: Dict[CrateName, AnalyzedDependency] = field(default_factory=dict)
    build: Dict[CrateName, AnalyzedDependency] = field(default_factory=dict)

    @classmethod
    def from_deps(cls, deps: CrateDeps) -> "AnalyzedDependencies":
        """Project declared dependencies into unresolved analysis entries.

        Internal (path) dependencies are dropped; every external one gets
        a fresh :class:`AnalyzedDependency` carrying its requirement.
        """
        return cls(
            main=_project(deps.main),
            dev=_project(deps.dev),
            build=_project(deps.build),
        )

    def groups(self) -> Iterator[Tuple[str, Dict[CrateName, AnalyzedDependency]]]:
        """Yield ``(group_name, mapping)`` pairs as main, dev, build."""
        for group in DEPENDENCY_GROUPS:
            yield group, getattr(self, group)

    def any_outdated(self) -> bool:
        """True if any dependency in any group is outdated."""
        return any(
            dep.is_outdated()
            for _, entries in self.groups()
            for dep in entries.values()
        )

    def iter_outdated(self) -> Iterator[Tuple[str, CrateName, AnalyzedDependency]]:
        """Yield ``(group_name, crate_name, dependency)`` for outdated entries."""
        for group, entries in self.groups():
            for name, dep in entries.items():
                if dep.is_outdated():
                    yield group, name, dep

    def count_outdated(self) -> int:
        """Number of outdated entries across all groups."""
        return sum(1 for _ in self.iter_outdated())

    def __len__(self) -> int:
        return len(self.main) + len(self.dev) + len(self.build)

    def to_json(self) -> Dict[str, Any]:
        """Serialize all groups to a JSON-compatible dictionary."""
        result: Dict[str, Any] = {
            group: {name: dep.to_json() for name, dep in entries.items()}
            for group, entries in self.groups()
        }
        result["any_outdated"] = self.any_outdated()
        return result


def _project(
    group: Dict[CrateName, CrateDep],
) -> Dict[CrateName, AnalyzedDependency]:
    return {
        name: AnalyzedDependency(dep.requirement)
        for name, dep in group.items()
        if isinstance(dep, ExternalDep)
    }
