"""
Core module - Exceptions, logging, configuration and memoization.
"""

from polygeom.core.config import GeometrySettings, LoggingSettings, Settings, load_settings
from polygeom.core.exceptions import (
    ArityError,
    BuilderFrozenError,
    ConfigurationError,
    ElementIndexError,
    GeometryError,
    PolygeomError,
)
from polygeom.core.memo import Memoizer, memoized

__all__ = [
    # Config
    "GeometrySettings",
    "LoggingSettings",
    "Settings",
    "load_settings",
    # Exceptions
    "PolygeomError",
    "ConfigurationError",
    "GeometryError",
    "ArityError",
    "ElementIndexError",
    "BuilderFrozenError",
    # Memoization
    "Memoizer",
    "memoized",
]
