"""Configuration file loader for cratekeeper.

Settings decide which releases count towards freshness and how
inconsistent release data is treated. They are read from one of:

- ``cratekeeper.toml``: settings under the ``[cratekeeper]`` table
- ``Cargo.toml``: settings under ``[workspace.metadata.cratekeeper]`` or
  ``[package.metadata.cratekeeper]``

Lookup order, first hit wins:

1. Explicit path passed to :func:`load_config`
2. Path in the ``CRATEKEEPER_CONFIG`` environment variable
3. ``cratekeeper.toml`` in current directory
4. ``Cargo.toml`` with a ``metadata.cratekeeper`` table in current directory

Typical usage::

    config = load_config()
    checker = FreshnessChecker(store, config)

Example (``cratekeeper.toml``)::

    [cratekeeper]
    include_yanked = false
    include_prereleases = false
    strict_consistency = true
"""

from __future__ import annotations

import os
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from cratekeeper.exceptions import ConfigError
from cratekeeper.utils.logger import get_logger
from cratekeeper.constants import (
    CARGO_MANIFEST_NAME,
    CARGO_METADATA_TABLES,
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    CONFIG_OPTIONS,
    DEFAULT_INCLUDE_PRERELEASES,
    DEFAULT_INCLUDE_YANKED,
    DEFAULT_STRICT_CONSISTENCY,
)

logger = get_logger("config")


@dataclass
class CrateKeeperConfig:
    """Parsed and validated cratekeeper configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        include_yanked: Count yanked releases when computing the latest
            and latest matching versions.
        include_prereleases: Count pre-release versions (``1.0.0-beta``).
        strict_consistency: Raise when release data reports a matching
            version newer than the latest version instead of logging it.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    include_yanked: bool = DEFAULT_INCLUDE_YANKED
    include_prereleases: bool = DEFAULT_INCLUDE_PRERELEASES
    strict_consistency: bool = DEFAULT_STRICT_CONSISTENCY

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "include_yanked": self.include_yanked,
            "include_prereleases": self.include_prereleases,
            "strict_consistency": self.strict_consistency,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: An explicit or environment path does not exist.
    """
    if explicit_path is None:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        if env_value:
            logger.debug("Using %s=%s", CONFIG_ENV_VAR, env_value)
            explicit_path = Path(env_value)

    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    config_toml = cwd / CONFIG_FILE_NAME
    if config_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, config_toml)
        return config_toml

    cargo_toml = cwd / CARGO_MANIFEST_NAME
    if cargo_toml.is_file() and _cargo_has_cratekeeper_section(cargo_toml):
        logger.debug("Found cratekeeper metadata in Cargo.toml: %s", cargo_toml)
        return cargo_toml

    logger.debug("No configuration file found")
    return None


def _cargo_metadata_section(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Return the ``metadata.cratekeeper`` table of a parsed Cargo.toml.

    ``[workspace.metadata.cratekeeper]`` wins over
    ``[package.metadata.cratekeeper]``. Keys holding something other than
    a table on the way down count as absent.
    """
    for table in CARGO_METADATA_TABLES:
        owner = raw.get(table)
        if not isinstance(owner, dict):
            continue
        metadata = owner.get("metadata")
        if not isinstance(metadata, dict):
            continue
        section = metadata.get("cratekeeper")
        if section is not None:
            return section
    return None


def _cargo_has_cratekeeper_section(path: Path) -> bool:
    """Check if Cargo.toml carries a cratekeeper metadata table.

    Parse errors count as "no section" so a broken manifest does not stop
    discovery; the manifest loader reports those.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return _cargo_metadata_section(raw) is not None


def load_config(config_path: Optional[Path] = None) -> CrateKeeperConfig:
    """Load and validate cratekeeper configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`CrateKeeperConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return CrateKeeperConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == CARGO_MANIFEST_NAME:
        section = _cargo_metadata_section(raw) or {}
    else:
        section = raw.get("cratekeeper", {})

    if not isinstance(section, dict):
        raise ConfigError(
            "cratekeeper settings must be a table",
            config_path=str(resolved),
        )

    if not section:
        logger.debug("Config file found but no cratekeeper section, using defaults")
        return CrateKeeperConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> CrateKeeperConfig:
    """Parse and validate a cratekeeper configuration table.

    Rejects unknown keys and non-boolean values.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    unknown = set(section.keys()) - CONFIG_OPTIONS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = CrateKeeperConfig()

    for option in sorted(CONFIG_OPTIONS):
        if option not in section:
            continue
        val = section[option]
        if not isinstance(val, bool):
            raise ConfigError(
                f"{option} must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    return config
