"""
Procedural module — fields, surfaces and curves, and samplers that turn them
into meshes.
"""

from polygeom.procedural.base import (
    Curve,
    Field,
    FunctionCurve,
    FunctionField,
    FunctionSurface,
    Procedural,
    Surface,
)
from polygeom.procedural.shapes import (
    CircleCurve,
    LineCurve,
    PlaneSurface,
    SphereSurface,
    UniformField,
    sample_curve,
    sample_field,
    tessellate,
)

__all__ = [
    "Procedural",
    "Field",
    "Surface",
    "Curve",
    "FunctionField",
    "FunctionSurface",
    "FunctionCurve",
    "UniformField",
    "PlaneSurface",
    "SphereSurface",
    "LineCurve",
    "CircleCurve",
    "tessellate",
    "sample_curve",
    "sample_field",
]
