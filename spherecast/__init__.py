"""
spherecast - A Whitted-style ray tracer for spheres

A small recursive ray tracer with:
- Ray-sphere intersection
- Phong diffuse and specular shading from point lights
- Hard shadows
- Recursive mirror reflection
- PNG output via Pillow
"""

__version__ = "0.1.0"
__author__ = "spherecast contributors"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Sphere
from .lights import PointLight
from .scene import Scene
from .tracer import cast_ray, shade, offset_origin, BACKGROUND_COLOR, SHADOW_BIAS
from .camera import Camera, pixel_direction
from .output import FrameSink, ArraySink, ImageSink, SinkError, color_to_rgba, to_rgba
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
