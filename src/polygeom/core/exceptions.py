"""
Custom exceptions for polygeom.

All polygeom exceptions inherit from PolygeomError for easy catching.
"""

from typing import Any


class PolygeomError(Exception):
    """Base exception for all polygeom errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(PolygeomError):
    """Raised when configuration is invalid or missing."""

    pass


class GeometryError(PolygeomError):
    """Raised when a geometry is constructed or queried against its contract."""

    pass


class ArityError(GeometryError):
    """Raised when an element arity does not fit the mesh or the query."""

    def __init__(
        self,
        message: str,
        arity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.arity = arity


class ElementIndexError(GeometryError, IndexError):
    """Raised when a local index falls outside ``[0, count)``."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(
            f"Local index {index} out of range for element of {count} vertices",
            details={"index": index, "count": count},
        )
        self.index = index
        self.count = count


class BuilderFrozenError(PolygeomError):
    """Raised when a mesh builder is used after it has been frozen."""

    pass
