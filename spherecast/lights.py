"""
Light sources for the ray tracer.

Only point lights exist: a position and a scalar intensity, no color and
no distance falloff.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Vec3, Point3


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Point lights emit light equally in all directions from a single point.
    They produce hard shadows.
    """
    position: Point3
    intensity: float = 1.0

    def direction_from(self, point: Point3) -> Vec3:
        """Unit direction from `point` toward the light."""
        return (self.position - point).normalize()

    def __repr__(self) -> str:
        return f"PointLight(position={self.position}, intensity={self.intensity})"
