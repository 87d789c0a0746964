"""
Scene container.

A scene is an ordered list of spheres and an ordered list of lights. It is
built once before rendering and only read while casting rays.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Tuple, Union

from .ray import Ray
from .shapes import Sphere
from .lights import PointLight


class Scene:
    """Spheres and lights for a single render.

    Iterating a scene, and len(scene), cover the spheres only, the same
    way a hittable list does; lights are reached through `scene.lights`.
    """

    def __init__(self, spheres: Optional[List[Sphere]] = None,
                 lights: Optional[List[PointLight]] = None):
        self.spheres: List[Sphere] = list(spheres) if spheres else []
        self.lights: List[PointLight] = list(lights) if lights else []

    def add_sphere(self, sphere: Sphere) -> None:
        self.spheres.append(sphere)

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def add(self, item: Union[Sphere, PointLight]) -> None:
        """Add a sphere or a light, dispatching on type."""
        if isinstance(item, Sphere):
            self.add_sphere(item)
        elif isinstance(item, PointLight):
            self.add_light(item)
        else:
            raise TypeError(f"Cannot add {type(item).__name__} to a scene")

    def nearest_hit(self, ray: Ray) -> Tuple[Optional[Sphere], float]:
        """Find the closest sphere along the ray.

        Spheres are scanned in insertion order with a strict comparison, so
        on equal distances the earlier sphere wins.

        Returns:
            (sphere, t) for the closest hit, or (None, inf) on a miss.
        """
        closest = float('inf')
        hit_sphere = None
        for sphere in self.spheres:
            hit, t = sphere.intersect(ray)
            if hit and t < closest:
                closest = t
                hit_sphere = sphere
        return hit_sphere, closest

    def is_occluded(self, ray: Ray) -> bool:
        """True if the ray hits any sphere at any distance.

        Hits farther away than the light still count as blocking.
        """
        for sphere in self.spheres:
            hit, _ = sphere.intersect(ray)
            if hit:
                return True
        return False

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)

    def __len__(self) -> int:
        return len(self.spheres)

    def __repr__(self) -> str:
        return f"Scene(spheres={len(self.spheres)}, lights={len(self.lights)})"
