"""
Recursive Whitted-style ray caster.

For each ray:
- Find the nearest sphere hit
- Sum Phong diffuse and specular terms from every unshadowed light
- Recurse along the mirror direction until the depth budget runs out
- Blend local shading and reflected color by the sphere's albedo
"""

from __future__ import annotations
from typing import Tuple

from .vec3 import Vec3, Point3, Color, BLACK, WHITE
from .ray import Ray
from .shapes import Sphere
from .scene import Scene

BACKGROUND_COLOR = Color(0.2, 0.7, 0.8)

# Offset applied to secondary ray origins along the surface normal
SHADOW_BIAS = 1e-3


def offset_origin(point: Point3, normal: Vec3, direction: Vec3) -> Point3:
    """Push a secondary ray origin off the surface on the side it leaves from."""
    if direction.dot(normal) < 0:
        return point - normal * SHADOW_BIAS
    return point + normal * SHADOW_BIAS


def shade(sphere: Sphere, point: Point3, normal: Vec3, view_dir: Vec3,
          scene: Scene) -> Tuple[float, float]:
    """Accumulate diffuse and specular light intensity at a surface point.

    Args:
        sphere: The sphere that was hit
        point: Hit point on the sphere
        normal: Outward unit normal at the hit point
        view_dir: Direction of the incoming ray
        scene: Scene supplying lights and occluders

    Returns:
        (diffuse, specular) intensity sums over all unoccluded lights
    """
    diffuse = 0.0
    specular = 0.0
    for light in scene.lights:
        light_dir = light.direction_from(point)
        shadow_ray = Ray(offset_origin(point, normal, light_dir), light_dir)
        if scene.is_occluded(shadow_ray):
            continue

        diffuse += light.intensity * max(0.0, light_dir.dot(normal))
        reflection = (-light_dir).reflect(normal).normalize()
        specular += max(0.0, reflection.dot(-view_dir)) ** sphere.specular_exponent * light.intensity
    return diffuse, specular


def cast_ray(ray: Ray, scene: Scene, depth: int,
             background: Color = BACKGROUND_COLOR) -> Color:
    """Compute the linear color seen along a ray.

    Args:
        ray: The ray to trace (unit direction)
        scene: Spheres and lights to trace against
        depth: Remaining recursion budget; 0 or less returns black
        background: Color returned when nothing is hit

    Returns:
        Unclamped linear RGB color
    """
    if depth <= 0:
        return BLACK

    sphere, t = scene.nearest_hit(ray)
    if sphere is None:
        return background

    point = ray.at(t)
    normal = sphere.normal_at(point)
    diffuse, specular = shade(sphere, point, normal, ray.direction, scene)

    reflect_dir = ray.direction.reflect(normal).normalize()
    reflect_ray = Ray(offset_origin(point, normal, reflect_dir), reflect_dir)
    reflect_color = cast_ray(reflect_ray, scene, depth - 1, background)

    # Specular is added unscaled by albedo
    return (
        sphere.color * (diffuse * sphere.albedo)
        + WHITE * specular
        + reflect_color * (1.0 - sphere.albedo)
    )
