"""
cratekeeper version information.

Single source of truth for the package version; ``pyproject.toml`` reads
it at build time. Follows Semantic Versioning: https://semver.org/
"""

from __future__ import annotations

__version__ = "0.1.0.dev0"
