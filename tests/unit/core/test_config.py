"""
Unit tests for settings and configuration loading.
"""

import numpy as np
import pytest

from polygeom.core.config import GeometrySettings, LoggingSettings, Settings, load_settings
from polygeom.core.exceptions import ConfigurationError, PolygeomError


class TestGeometrySettings:
    """Tests for GeometrySettings model."""

    def test_absolute_tolerance(self):
        """Test an absolute tolerance is returned unchanged."""
        settings = GeometrySettings(coplanar_tolerance=1e-6)
        assert settings.resolve_tolerance(np.zeros((0, 3))) == 1e-6

    def test_relative_tolerance_scales_with_cube_of_extent(self):
        """Test relative tolerance uses the bounding box diagonal cubed."""
        settings = GeometrySettings(relative_tolerance=1e-9)
        vertices = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])

        assert settings.resolve_tolerance(vertices) == pytest.approx(1e-9 * 125.0)

    def test_requires_a_tolerance(self):
        """Test that omitting both tolerances is rejected."""
        with pytest.raises(ValueError, match="exactly one"):
            GeometrySettings()

    def test_rejects_both_tolerances(self):
        """Test that giving both tolerances is rejected."""
        with pytest.raises(ValueError, match="exactly one"):
            GeometrySettings(coplanar_tolerance=1e-6, relative_tolerance=1e-9)

    def test_rejects_non_positive(self):
        """Test that a zero tolerance is rejected."""
        with pytest.raises(ValueError):
            GeometrySettings(coplanar_tolerance=0.0)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_load_valid(self, tmp_path):
        """Test loading a complete settings file."""
        path = tmp_path / "settings.yaml"
        path.write_text(
            """
geometry:
  relative_tolerance: 1.0e-9
logging:
  level: DEBUG
  json_output: true
"""
        )

        settings = load_settings(path)

        assert isinstance(settings, Settings)
        assert settings.geometry.relative_tolerance == 1e-9
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_output is True

    def test_logging_section_optional(self, tmp_path):
        """Test the logging section falls back to defaults."""
        path = tmp_path / "settings.yaml"
        path.write_text("geometry:\n  coplanar_tolerance: 0.001\n")

        settings = load_settings(path)

        assert settings.geometry.coplanar_tolerance == 0.001
        assert settings.logging == LoggingSettings()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_missing_geometry_section(self, tmp_path):
        """Test a file without a geometry section is rejected."""
        path = tmp_path / "settings.yaml"
        path.write_text("logging:\n  level: INFO\n")

        with pytest.raises(ConfigurationError, match="geometry"):
            load_settings(path)

    def test_invalid_yaml(self, tmp_path):
        """Test unparsable YAML raises ConfigurationError."""
        path = tmp_path / "settings.yaml"
        path.write_text("geometry: [unclosed\n")

        with pytest.raises(ConfigurationError, match="parse"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        """Test validation errors are wrapped with details."""
        path = tmp_path / "settings.yaml"
        path.write_text("geometry:\n  coplanar_tolerance: -1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)

        assert isinstance(exc_info.value, PolygeomError)
        assert "error" in exc_info.value.details
