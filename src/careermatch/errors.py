"""Domain exceptions raised by the recommendation system."""

from __future__ import annotations


class CareerMatchError(Exception):
    """Base class for recommendation errors."""


class InvalidSkillError(CareerMatchError, ValueError):
    """Raised when a raw skill string cannot be normalized."""


class InvalidInputError(CareerMatchError, ValueError):
    """Raised when a recommendation request is malformed."""


class CatalogLoadError(CareerMatchError, ValueError):
    """Raised when a catalog source contains malformed entries."""

    def __init__(self, errors: list[str]):
        super().__init__("Catalog loading failed")
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Catalog loading failed: {self.errors}"


__all__ = [
    "CareerMatchError",
    "InvalidSkillError",
    "InvalidInputError",
    "CatalogLoadError",
]
