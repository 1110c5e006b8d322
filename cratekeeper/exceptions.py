"""
Custom exception hierarchy for cratekeeper.

This module defines structured exception types used across cratekeeper.
All exceptions inherit from :class:`CrateKeeperError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class CrateKeeperError(Exception):
    """Base exception for all cratekeeper errors.

    All cratekeeper-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class InvalidNameError(CrateKeeperError, ValueError):
    """Raised when a crate name contains a disallowed character.

    Args:
        message: Error description.
        name: The rejected input, truncated in ``details``.
    """

    __slots__ = ("name",)

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        if name is not None:
            details["name"] = _truncate(name)

        super().__init__(message, details)

        self.name = name


class ReleaseDataError(CrateKeeperError):
    """Raised when release data handed to an analyzed dependency is unusable.

    Covers a second attempt to record versions on the same dependency and,
    in strict mode, a best matching version above the latest version.

    Args:
        message: Error description.
        crate: Name of the crate the data belongs to.
        latest: The latest version that was offered.
        latest_that_matches: The matching version that was offered.
    """

    __slots__ = ("crate", "latest", "latest_that_matches")

    def __init__(
        self,
        message: str,
        *,
        crate: Optional[str] = None,
        latest: Optional[str] = None,
        latest_that_matches: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "crate", crate)
        _add_if(details, "latest", latest)
        _add_if(details, "latest_that_matches", latest_that_matches)

        super().__init__(message, details)

        self.crate = crate
        self.latest = latest
        self.latest_that_matches = latest_that_matches


class ConfigError(CrateKeeperError):
    """Raised when configuration cannot be found, parsed or validated.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: The offending option key, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
