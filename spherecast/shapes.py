"""
Geometric shapes for the ray tracer.

Spheres are the only primitive. Each sphere carries its own Phong surface
parameters, so there is no separate material type.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple
import math

from .vec3 import Vec3, Point3, Color
from .ray import Ray


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center and radius, with Phong surface parameters.

    Attributes:
        center: Center point of the sphere
        radius: Radius of the sphere (expected > 0)
        color: Linear RGB diffuse color, unclamped
        albedo: Split between local shading (albedo) and mirror
            reflection (1 - albedo)
        specular_exponent: Phong highlight sharpness
    """
    center: Point3
    radius: float
    color: Color = field(default_factory=lambda: Color(0.5, 0.5, 0.5))
    albedo: float = 0.5
    specular_exponent: float = 50.0

    def intersect(self, ray: Ray) -> Tuple[bool, float]:
        """Find the first point where the ray meets the sphere.

        Geometric solution: project the center onto the ray, then step back
        by the half-chord length. When the near root lies behind the origin
        (origin inside the sphere) the far root is used instead.

        Returns:
            (hit, t) where t is the smallest non-negative parameter along
            ray.direction. On a miss, (False, 0.0).
        """
        L = self.center - ray.origin
        tca = L.dot(ray.direction)
        d2 = L.length_squared() - tca * tca
        r2 = self.radius * self.radius
        if d2 > r2:
            return False, 0.0

        thc = math.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return False, 0.0
        return True, t0

    def normal_at(self, point: Point3) -> Vec3:
        """Outward unit normal at a point on the surface."""
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
