"""
Procedural geometry contracts.

A procedural object is a pure map from a parameter space into 3D:

- :class:`Field` maps a 3D point to a 3D vector
- :class:`Surface` maps a 2D parameter ``(u, v)`` to a 3D position
- :class:`Curve` maps a scalar parameter ``t`` to a 3D position

Implementations hold no mutable state. What happens outside the declared
domain is up to each implementation.
"""

from abc import ABC, abstractmethod
from typing import Callable, Sequence

import numpy as np


class Procedural(ABC):
    """Base class for procedural maps; instances are callable."""

    @abstractmethod
    def evaluate(self, x) -> np.ndarray:
        """Return the 3D value at parameter ``x``."""

    def __call__(self, x) -> np.ndarray:
        return self.evaluate(x)


class Field(Procedural):
    """Vector field: 3D point -> 3D vector."""

    @abstractmethod
    def evaluate(self, point: Sequence[float]) -> np.ndarray:
        pass


class Surface(Procedural):
    """Parametric surface: ``(u, v)`` -> 3D position."""

    @abstractmethod
    def evaluate(self, uv: Sequence[float]) -> np.ndarray:
        pass


class Curve(Procedural):
    """Parametric curve: ``t`` -> 3D position."""

    @abstractmethod
    def evaluate(self, t: float) -> np.ndarray:
        pass


class FunctionField(Field):
    """Field backed by a plain function ``f(point) -> vector``."""

    def __init__(self, function: Callable[[np.ndarray], Sequence[float]]) -> None:
        self.function = function

    def evaluate(self, point: Sequence[float]) -> np.ndarray:
        return np.asarray(self.function(np.asarray(point, dtype=np.float64)), dtype=np.float64)


class FunctionSurface(Surface):
    """Surface backed by a plain function ``f(u, v) -> position``."""

    def __init__(self, function: Callable[[float, float], Sequence[float]]) -> None:
        self.function = function

    def evaluate(self, uv: Sequence[float]) -> np.ndarray:
        u, v = uv
        return np.asarray(self.function(float(u), float(v)), dtype=np.float64)


class FunctionCurve(Curve):
    """Curve backed by a plain function ``f(t) -> position``."""

    def __init__(self, function: Callable[[float], Sequence[float]]) -> None:
        self.function = function

    def evaluate(self, t: float) -> np.ndarray:
        return np.asarray(self.function(float(t)), dtype=np.float64)
