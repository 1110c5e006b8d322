"""
Version comparison utilities for cratekeeper.

Helpers for ordering optional versions and classifying the distance
between two semantic versions. Versions are ``semantic_version.Version``
instances; nothing here parses requirement syntax.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from semantic_version import Version


def optional_version_key(version: Optional[Version]) -> Tuple:
    """Sort key for an optional version.

    ``None`` sorts strictly below every present version and two ``None``
    values compare equal.

    Examples:
        >>> optional_version_key(None) < optional_version_key(Version("0.0.0"))
        True
    """
    if version is None:
        return (0,)
    return (1, version)


def max_version(versions: Iterable[Version]) -> Optional[Version]:
    """Return the highest version in ``versions``, or ``None`` if empty."""
    return max(versions, default=None)


def format_version(version: Optional[Version]) -> Optional[str]:
    """Render a version as a string, passing ``None`` through."""
    return str(version) if version is not None else None


def get_update_type(
    current_version: Optional[Version],
    target_version: Optional[Version],
) -> str:
    """Determine the semantic update type between two versions.

    Args:
        current_version: The version currently reachable, or ``None``.
        target_version: The version to move to, or ``None``.

    Returns:
        One of:
            - ``"new"``       : No current version exists
            - ``"same"``      : Versions are identical
            - ``"downgrade"`` : Target version is lower than current
            - ``"major"``     : Major version change
            - ``"minor"``     : Minor version change
            - ``"patch"``     : Patch-level change
            - ``"update"``    : Pre-release or build-only change
            - ``"unknown"``   : No target version to compare against

    Examples:
        >>> get_update_type(Version("1.0.0"), Version("2.0.0"))
        'major'
        >>> get_update_type(None, Version("1.0.0"))
        'new'
    """
    if target_version is None:
        return "unknown"

    if current_version is None:
        return "new"

    if target_version == current_version:
        return "same"

    if target_version < current_version:
        return "downgrade"

    return _classify_upgrade(current_version, target_version)


def _classify_upgrade(current: Version, target: Version) -> str:
    """Classify an upgrade between two versions."""
    if current.major != target.major:
        return "major"

    if current.minor != target.minor:
        return "minor"

    if current.patch != target.patch:
        return "patch"

    # Covers pre-release -> release
    return "update"
