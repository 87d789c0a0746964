"""
Camera module for generating primary rays.

A pinhole camera fixed at the world origin, looking down -z with +y up.
There is no camera transform; the scene is placed in front of the camera
instead.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


def pixel_direction(i: int, j: int, width: int, height: int, fov: float) -> Vec3:
    """Unit camera-space direction through the center of pixel (i, j).

    Args:
        i: Column index, 0 at the left edge
        j: Row index, 0 at the top edge
        width: Frame width in pixels
        height: Frame height in pixels
        fov: Field of view in radians, spanning the frame height
    """
    half = math.tan(fov / 2)
    x = (2 * (i + 0.5) / width - 1) * half * width / height
    y = -(2 * (j + 0.5) / height - 1) * half
    return Vec3(x, y, -1.0).normalize()


class Camera:
    """A pinhole camera at the origin."""

    def __init__(self, width: int, height: int, fov: float = math.pi / 3):
        """Create a camera.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            fov: Field of view in radians
        """
        self.width = width
        self.height = height
        self.fov = fov
        self.origin = Point3(0, 0, 0)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def get_ray(self, i: int, j: int) -> Ray:
        """Generate the primary ray for pixel (i, j)."""
        return Ray(self.origin, pixel_direction(i, j, self.width, self.height, self.fov))

    def __repr__(self) -> str:
        return f"Camera({self.width}x{self.height}, fov={math.degrees(self.fov):.1f}deg)"
