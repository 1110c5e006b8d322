"""In-memory release store for cratekeeper.

Holds the :class:`~cratekeeper.models.release.CrateRelease` facts a
registry collaborator has observed, grouped by crate name, and answers
the two questions freshness analysis needs:

* the newest eligible release of a crate (:meth:`ReleaseStore.latest`);
* the newest eligible release matching a requirement
  (:meth:`ReleaseStore.latest_matching`).

"Eligible" excludes yanked releases and pre-releases unless asked
otherwise. This is the only place in cratekeeper that reads
``CrateRelease.yanked``.

Typical usage::

    store = ReleaseStore()
    store.extend(releases_from_registry)
    store.latest("serde")                          # Version('1.0.197')
    store.latest_matching("serde", SimpleSpec("^0.9"))
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from semantic_version import SimpleSpec, Version

from cratekeeper.models.crate_name import CrateName
from cratekeeper.models.release import CrateRelease
from cratekeeper.utils.logger import get_logger
from cratekeeper.utils.version_utils import max_version

logger = get_logger("data_store")

# Public API
__all__ = ["ReleaseStore"]


class ReleaseStore:
    """Release facts indexed by crate name.

    Releases can be added in any order; lookups return them newest first.
    A release with the same name and version as a stored one replaces it,
    so a registry refresh that marks a version as yanked takes effect.

    Args:
        releases: Optional initial releases.
    """

    def __init__(self, releases: Optional[Iterable[CrateRelease]] = None) -> None:
        self._releases: Dict[CrateName, Dict[Version, CrateRelease]] = {}
        if releases is not None:
            self.extend(releases)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add(self, release: CrateRelease) -> None:
        """Store one release, replacing any previous entry for its version."""
        self._releases.setdefault(release.name, {})[release.version] = release

    def extend(self, releases: Iterable[CrateRelease]) -> None:
        """Store every release in ``releases``."""
        count = 0
        for release in releases:
            self.add(release)
            count += 1
        logger.debug("Stored %d releases (%d crates known)", count, len(self))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._releases

    def __len__(self) -> int:
        return len(self._releases)

    def crate_names(self) -> List[CrateName]:
        """Names of all crates with at least one stored release, sorted."""
        return sorted(self._releases)

    def get_releases(self, name: str) -> List[CrateRelease]:
        """Return every stored release of ``name``, newest first.

        Unknown crates yield an empty list.
        """
        by_version = self._releases.get(name, {})
        return sorted(by_version.values(), key=lambda r: r.version, reverse=True)

    def eligible_versions(
        self,
        name: str,
        *,
        include_yanked: bool = False,
        include_prereleases: bool = False,
    ) -> List[Version]:
        """Versions of ``name`` that count towards freshness, newest first.

        Args:
            name: Crate name.
            include_yanked: Keep releases withdrawn from the registry.
            include_prereleases: Keep versions with a pre-release tag.
        """
        return [
            release.version
            for release in self.get_releases(name)
            if (include_yanked or not release.yanked)
            and (include_prereleases or not release.version.prerelease)
        ]

    def latest(
        self,
        name: str,
        *,
        include_yanked: bool = False,
        include_prereleases: bool = False,
    ) -> Optional[Version]:
        """Newest eligible version of ``name``, or ``None``."""
        return max_version(
            self.eligible_versions(
                name,
                include_yanked=include_yanked,
                include_prereleases=include_prereleases,
            )
        )

    def latest_matching(
        self,
        name: str,
        requirement: SimpleSpec,
        *,
        include_yanked: bool = False,
        include_prereleases: bool = False,
    ) -> Optional[Version]:
        """Newest eligible version of ``name`` admitted by ``requirement``.

        Returns:
            The matching version, or ``None`` when no eligible release
            satisfies ``requirement``.
        """
        versions = self.eligible_versions(
            name,
            include_yanked=include_yanked,
            include_prereleases=include_prereleases,
        )
        return max_version(v for v in versions if requirement.match(v))
