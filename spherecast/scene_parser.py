"""
Scene description parser.

Reads a YAML (or JSON) scene description with:
- Render settings
- Spheres with their surface parameters
- Point lights

Example scene file:
```yaml
render:
  width: 640
  height: 480
  fov: 60          # degrees
  max_depth: 4
  background: [0.2, 0.7, 0.8]

spheres:
  - center: [-3, 0, -16]
    radius: 2
    color: [0.4, 0.4, 0.3]
    albedo: 0.6
    specular_exponent: 50

  - center: [1.5, -0.5, -18]
    radius: 3
    color: "#4c1919"
    albedo: 0.9
    specular_exponent: 10

lights:
  - position: [-20, 20, 20]
    intensity: 1.5
```
"""

from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from .vec3 import Vec3, Color
from .shapes import Sphere
from .lights import PointLight
from .scene import Scene
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.scene = Scene()
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Scene, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (.yaml/.yml or .json)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e
        else:
            try:
                import yaml
            except ImportError:
                raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml")
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        scene, settings = self.parse_dict(data)
        logger.debug("Loaded %s: %d spheres, %d lights", path, len(scene.spheres), len(scene.lights))
        return scene, settings

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        if 'spheres' in data:
            self._parse_spheres(self._expect(data['spheres'], list, 'spheres'))

        if 'lights' in data:
            self._parse_lights(self._expect(data['lights'], list, 'lights'))

        if 'render' in data:
            self._parse_settings(self._expect(data['render'], dict, 'render'))
        else:
            self.settings = RenderSettings()

        return self.scene, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an {x, y, z} mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._to_float(c, 'Vec3 component') for c in data))
        elif isinstance(data, dict):
            return Vec3(
                self._to_float(data.get('x', 0), 'x'),
                self._to_float(data.get('y', 0), 'y'),
                self._to_float(data.get('z', 0), 'z')
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an {r, g, b} mapping or a hex string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._to_float(c, 'Color component') for c in data))
        elif isinstance(data, dict):
            return Color(
                self._to_float(data.get('r', 0), 'r'),
                self._to_float(data.get('g', 0), 'g'),
                self._to_float(data.get('b', 0), 'b')
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    try:
                        r = int(hex_color[0:2], 16) / 255.0
                        g = int(hex_color[2:4], 16) / 255.0
                        b = int(hex_color[4:6], 16) / 255.0
                    except ValueError as e:
                        raise SceneParseError(f"Cannot parse color from string: {data}") from e
                    return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _expect(self, value: Any, kind: type, section: str) -> Any:
        if not isinstance(value, kind):
            raise SceneParseError(f"'{section}' must be a {kind.__name__}, got {value!r}")
        return value

    def _to_float(self, value: Any, what: str) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"{what} must be a number, got {value!r}") from e

    def _parse_number(self, data: Dict[str, Any], key: str, default: float) -> float:
        return self._to_float(data.get(key, default), f"'{key}'")

    def _parse_int(self, data: Dict[str, Any], key: str, default: int) -> int:
        value = data.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"'{key}' must be an integer, got {value!r}") from e

    def _parse_spheres(self, spheres_data: list) -> None:
        """Parse spheres section."""
        for sphere_data in spheres_data:
            if not isinstance(sphere_data, dict):
                raise SceneParseError(f"Invalid sphere entry: {sphere_data}")
            if 'center' not in sphere_data:
                raise SceneParseError(f"Sphere is missing 'center': {sphere_data}")

            self.scene.add_sphere(Sphere(
                center=self._parse_vec3(sphere_data['center']),
                radius=self._parse_number(sphere_data, 'radius', 1.0),
                color=self._parse_color(sphere_data.get('color', [0.5, 0.5, 0.5])),
                albedo=self._parse_number(sphere_data, 'albedo', 0.5),
                specular_exponent=self._parse_number(sphere_data, 'specular_exponent', 50.0),
            ))

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in lights_data:
            if not isinstance(light_data, dict):
                raise SceneParseError(f"Invalid light entry: {light_data}")
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            position = self._parse_vec3(light_data.get('position', [0, 5, 0]))
            intensity = self._parse_number(light_data, 'intensity', 1.0)
            self.scene.add_light(PointLight(position, intensity))

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section. `fov` is given in degrees."""
        defaults = RenderSettings()
        background = None
        if 'background' in settings_data:
            background = self._parse_color(settings_data['background'])

        self.settings = RenderSettings(
            width=self._parse_int(settings_data, 'width', defaults.width),
            height=self._parse_int(settings_data, 'height', defaults.height),
            fov=math.radians(self._parse_number(settings_data, 'fov', math.degrees(defaults.fov))),
            max_depth=self._parse_int(settings_data, 'max_depth', defaults.max_depth),
            tile_size=self._parse_int(settings_data, 'tile_size', defaults.tile_size),
            num_threads=self._parse_int(settings_data, 'threads', defaults.num_threads),
            background_color=background
        )


def load_scene(filepath: Union[str, Path]) -> Tuple[Scene, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
