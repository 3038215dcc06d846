"""
Error taxonomy for the connectivity derivation.

All errors are deterministic for a given input and are raised before any
output is returned.
"""

from __future__ import annotations

from typing import Mapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class ConfigurationError(ValueError):
    pass


class DuplicateLocationError(ConfigurationError):
    def __init__(self, location: str) -> None:
        super().__init__(
            f"Duplicate hub network location '{location}': "
            "each hub network must resolve to a unique location"
        )
        self.location = location


class MissingReferenceError(KeyError):
    """Lookup into a computed map with a key that was never derived."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"No {kind} found for {key!r}")
        self.kind = kind
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


def require(mapping: Mapping[K, V], key: K, kind: str) -> V:
    try:
        return mapping[key]
    except KeyError:
        raise MissingReferenceError(kind, key) from None
