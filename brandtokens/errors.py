"""Exception hierarchy for token exports."""

from __future__ import annotations

from typing import Sequence


class BrandTokensError(RuntimeError):
    """Base class for failures that abort an export."""


class ConfigError(BrandTokensError):
    """Raised when an export configuration cannot be parsed."""


class SourceError(BrandTokensError):
    """Raised when a variable snapshot is missing or malformed."""


class CollectionsNotFoundError(BrandTokensError):
    """Raised when the token or primitive collection id is unknown."""

    def __init__(self, message: str = "Collections not found - please check your collection IDs") -> None:
        super().__init__(message)


class CircularAliasError(BrandTokensError):
    """Raised when alias resolution re-enters a variable it is already resolving."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = list(chain)
        super().__init__(f"Circular alias detected: {' → '.join(self.chain)}")


__all__ = [
    "BrandTokensError",
    "CircularAliasError",
    "CollectionsNotFoundError",
    "ConfigError",
    "SourceError",
]
