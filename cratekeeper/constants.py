"""
Centralized constants for cratekeeper.

This module defines immutable values used across cratekeeper, including
the crate-name charset, configuration file names, option defaults and
logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, FrozenSet, Tuple

# ---------------------------------------------------------------------------
# Crate names
# ---------------------------------------------------------------------------

#: Pattern a crate name must match in full. Empty names are accepted.
CRATE_NAME_PATTERN: Final[str] = r"[A-Za-z0-9_-]*"

# ---------------------------------------------------------------------------
# Dependency groups
# ---------------------------------------------------------------------------

#: Dependency group names, in reporting order.
DEPENDENCY_GROUPS: Final[Tuple[str, ...]] = ("main", "dev", "build")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Environment variable holding an explicit configuration path.
CONFIG_ENV_VAR: Final[str] = "CRATEKEEPER_CONFIG"

#: Dedicated configuration file, settings under ``[cratekeeper]``.
CONFIG_FILE_NAME: Final[str] = "cratekeeper.toml"

#: Cargo manifest that may carry a ``metadata.cratekeeper`` table.
CARGO_MANIFEST_NAME: Final[str] = "Cargo.toml"

#: Tables of ``Cargo.toml`` searched for settings, in priority order.
CARGO_METADATA_TABLES: Final[Tuple[str, ...]] = ("workspace", "package")

#: Count yanked releases when computing latest versions.
DEFAULT_INCLUDE_YANKED: Final[bool] = False

#: Count pre-release versions when computing latest versions.
DEFAULT_INCLUDE_PRERELEASES: Final[bool] = False

#: Reject release data where the best match exceeds the latest release.
DEFAULT_STRICT_CONSISTENCY: Final[bool] = False

#: Every recognised option key.
CONFIG_OPTIONS: Final[FrozenSet[str]] = frozenset(
    {"include_yanked", "include_prereleases", "strict_consistency"}
)

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
