"""Two-dimensional vectors used for positions and velocities."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vector2D:
    """A mutable 2D vector with component-wise arithmetic."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        return self * scalar

    def __truediv__(self, scalar: float) -> Vector2D:
        """Divide by a scalar; dividing by zero yields an unchanged copy."""
        if scalar == 0:
            return Vector2D(self.x, self.y)
        return Vector2D(self.x / scalar, self.y / scalar)

    def __iadd__(self, other: Vector2D) -> Vector2D:
        self.x += other.x
        self.y += other.y
        return self

    def __isub__(self, other: Vector2D) -> Vector2D:
        self.x -= other.x
        self.y -= other.y
        return self

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"