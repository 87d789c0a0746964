"""
Rays cast by the tracer.

Three kinds are built per shaded point, all as plain Ray values:
- primary rays from the camera origin through a pixel center
- shadow rays from a biased hit point toward each light
- reflection rays from a biased hit point along the mirror direction
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """Origin plus direction; P(t) = origin + t * direction.

    Sphere.intersect measures t in units of the direction's length, so
    callers pass unit directions. Nothing here normalizes or checks that.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Point reached after travelling t along the direction."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
