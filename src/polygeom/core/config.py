"""
Configuration for polygeom.

Geometric tolerances are deliberately not given library defaults: the
coplanarity test compares a triple product, whose magnitude grows with the cube
of the coordinate scale, so a useful threshold depends on the data. Settings
are validated with pydantic and can be loaded from the ``geometry`` and
``logging`` sections of a YAML file.

Example:
    >>> settings = GeometrySettings(relative_tolerance=1e-9)
    >>> tol = settings.resolve_tolerance(mesh.vertices)
    >>> merged = mesh.merge_coplanar(tol)
"""

from pathlib import Path
from typing import Any, Optional

import numpy as np
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from polygeom.core.exceptions import ConfigurationError


class GeometrySettings(BaseModel):
    """Tolerance settings for coplanarity-based queries."""

    coplanar_tolerance: Optional[float] = Field(default=None, gt=0)
    relative_tolerance: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _exactly_one_tolerance(self) -> "GeometrySettings":
        if (self.coplanar_tolerance is None) == (self.relative_tolerance is None):
            raise ValueError(
                "exactly one of coplanar_tolerance or relative_tolerance is required"
            )
        return self

    def resolve_tolerance(self, vertices: Any) -> float:
        """
        Return the absolute coplanarity tolerance for a vertex buffer.

        Args:
            vertices: ``(n, 3)`` array-like of positions. Only used when the
                settings carry a relative tolerance.

        Returns:
            Absolute tolerance for :func:`polygeom.geometry.operations.coplanar`.
        """
        if self.coplanar_tolerance is not None:
            return self.coplanar_tolerance
        # Deferred: polygeom.geometry reaches this module through core.logging
        from polygeom.geometry.operations import scaled_tolerance

        return scaled_tolerance(np.asarray(vertices, dtype=np.float64), self.relative_tolerance)


class LoggingSettings(BaseModel):
    """Logging output settings consumed by ``configure_logging``."""

    level: str = "INFO"
    json_output: bool = False
    log_file: Optional[str] = None


class Settings(BaseModel):
    """Top-level settings document."""

    geometry: GeometrySettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(path: str | Path) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Path to a YAML document with a ``geometry`` section and an
            optional ``logging`` section.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse settings: {path}",
            details={"error": str(e)},
        ) from e

    if not isinstance(data, dict) or "geometry" not in data:
        raise ConfigurationError(
            f"Settings file has no 'geometry' section: {path}",
        )

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings: {path}",
            details={"error": str(e)},
        ) from e
