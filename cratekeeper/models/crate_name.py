"""
Crate name model for cratekeeper.

A :class:`CrateName` is a ``str`` restricted to ASCII letters, digits,
``_`` and ``-``. Because it is a ``str``, it hashes, compares and sorts
exactly like the underlying text, and plain strings look up the same
dictionary entries without building a new name.
"""

from __future__ import annotations

import re

from cratekeeper.constants import CRATE_NAME_PATTERN
from cratekeeper.exceptions import InvalidNameError

_NAME_RE = re.compile(CRATE_NAME_PATTERN)


class CrateName(str):
    """Validated crate identifier.

    The value is stored as given: no normalization and no case folding,
    so ``CrateName("Serde") != CrateName("serde")``. Empty names are
    accepted.

    Raises:
        InvalidNameError: The input contains a character outside
            ``[A-Za-z0-9_-]``.

    Example::

        >>> deps = {CrateName("serde"): "^1.0"}
        >>> deps["serde"]
        '^1.0'
    """

    __slots__ = ()

    def __new__(cls, value: str) -> "CrateName":
        if not isinstance(value, str):
            raise TypeError(
                f"crate name must be a str, not {type(value).__name__}"
            )
        if _NAME_RE.fullmatch(value) is None:
            raise InvalidNameError(
                f"failed to validate crate name: {value}",
                name=value,
            )
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, value: str) -> "CrateName":
        """Validate ``value`` and wrap it. Same as calling the class."""
        if isinstance(value, cls):
            return value
        return cls(value)

    def as_str(self) -> str:
        """Return the name for use where a plain ``str`` is expected.

        The name already is a ``str``; no copy is made.
        """
        return self

    def __repr__(self) -> str:
        return f"CrateName({str.__repr__(self)})"
