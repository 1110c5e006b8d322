"""Freshness checking for cratekeeper.

:class:`FreshnessChecker` turns declared dependencies into a fully
populated :class:`~cratekeeper.models.analysis.AnalyzedDependencies`
using release data from a :class:`~cratekeeper.core.data_store.ReleaseStore`.

For each external dependency it records:

1. ``latest``: the newest eligible release of the crate;
2. ``latest_that_matches``: the newest eligible release the declared
   requirement admits.

Eligibility (yanked releases, pre-releases) and the handling of
inconsistent data come from :class:`~cratekeeper.config.CrateKeeperConfig`.
The result is built in full before it is returned, so callers never see a
partially populated analysis.

Typical usage::

    store   = ReleaseStore(releases)
    checker = FreshnessChecker(store, config=load_config())
    analysis = checker.check_manifest(manifest)

    if analysis is not None and analysis.any_outdated():
        for group, name, dep in analysis.iter_outdated():
            print(f"[{group}] {name}: {dep.required} -> {dep.latest}")
"""

from __future__ import annotations

from typing import Optional

from cratekeeper.config import CrateKeeperConfig
from cratekeeper.core.data_store import ReleaseStore
from cratekeeper.models.analysis import AnalyzedDependencies, AnalyzedDependency
from cratekeeper.models.dependency import CrateDep, CrateDeps, ExternalDep
from cratekeeper.models.manifest import CrateManifest, manifest_deps
from cratekeeper.utils.logger import get_logger

logger = get_logger("checker")


class FreshnessChecker:
    """Populate dependency freshness from a release store.

    Args:
        store: Release data to check against. **Required**.
        config: Eligibility and consistency settings. Defaults to a
            :class:`CrateKeeperConfig` with default values.

    Raises:
        TypeError: If *store* is ``None``.
    """

    def __init__(
        self,
        store: ReleaseStore,
        config: Optional[CrateKeeperConfig] = None,
    ) -> None:
        if store is None:
            raise TypeError("store must not be None; pass a ReleaseStore instance")

        self.store: ReleaseStore = store
        self.config: CrateKeeperConfig = config or CrateKeeperConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check_dependency(
        self,
        name: str,
        dep: CrateDep,
    ) -> Optional[AnalyzedDependency]:
        """Analyze a single declared dependency.

        Args:
            name: Crate name the dependency is declared under.
            dep: The declaration.

        Returns:
            A resolved :class:`AnalyzedDependency`, or ``None`` for an
            internal (path) dependency.

        Raises:
            ReleaseDataError: ``strict_consistency`` is enabled and the
                store reports a matching version above the latest one.
        """
        if not isinstance(dep, ExternalDep):
            return None

        analyzed = AnalyzedDependency(dep.requirement)
        self._resolve(name, analyzed)
        return analyzed

    def check_deps(self, deps: CrateDeps) -> AnalyzedDependencies:
        """Analyze every external dependency in ``deps``.

        Returns:
            A new :class:`AnalyzedDependencies` with every entry resolved.

        Raises:
            ReleaseDataError: See :meth:`check_dependency`.
        """
        analysis = AnalyzedDependencies.from_deps(deps)

        for group, entries in analysis.groups():
            for name, analyzed in entries.items():
                logger.debug(
                    "Checking %s dependency %s %s", group, name, analyzed.required
                )
                self._resolve(name, analyzed)

        logger.info(
            "Checked %d external dependencies (%d outdated)",
            len(analysis),
            analysis.count_outdated(),
        )
        return analysis

    def check_manifest(self, manifest: CrateManifest) -> Optional[AnalyzedDependencies]:
        """Analyze the dependencies a manifest declares for itself.

        Returns:
            ``None`` for a workspace-only manifest, otherwise the result of
            :meth:`check_deps`.
        """
        deps = manifest_deps(manifest)
        if deps is None:
            logger.debug("Workspace manifest declares no dependencies; skipping")
            return None
        return self.check_deps(deps)

    # ------------------------------------------------------------------
    # Resolution (private)
    # ------------------------------------------------------------------

    def _resolve(self, name: str, analyzed: AnalyzedDependency) -> None:
        """Look up release data for ``name`` and record it on ``analyzed``."""
        include_yanked = self.config.include_yanked
        include_prereleases = self.config.include_prereleases

        if name not in self.store:
            logger.debug("No releases known for %s", name)

        latest = self.store.latest(
            name,
            include_yanked=include_yanked,
            include_prereleases=include_prereleases,
        )
        latest_that_matches = self.store.latest_matching(
            name,
            analyzed.required,
            include_yanked=include_yanked,
            include_prereleases=include_prereleases,
        )

        analyzed.resolve(
            latest=latest,
            latest_that_matches=latest_that_matches,
            strict=self.config.strict_consistency,
            crate=name,
        )

        if not analyzed.is_consistent():
            logger.warning(
                "Inconsistent release data for %s: matching %s is newer than latest %s",
                name,
                latest_that_matches,
                latest,
            )
