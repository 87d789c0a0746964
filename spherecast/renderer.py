"""
Renderer module - drives the ray caster over the pixel grid.

Implements:
- One primary ray per pixel through a fixed pinhole camera
- Optional multi-threaded tile-based rendering
- Quantized output to any FrameSink (in-memory or image file)
"""

from __future__ import annotations
import logging
import math
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Tuple, Union
import numpy as np

from .vec3 import Color
from .camera import Camera
from .scene import Scene
from .tracer import cast_ray, BACKGROUND_COLOR
from .output import FrameSink, ImageSink, to_rgba

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 1024
    height: int = 768
    fov: float = math.pi / 3  # radians
    max_depth: int = 4
    tile_size: int = 32
    num_threads: int = 1  # 0 = auto-detect
    background_color: Color = None

    def __post_init__(self):
        if self.background_color is None:
            self.background_color = BACKGROUND_COLOR
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Whitted ray tracing renderer with optional multi-threading."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def make_camera(self) -> Camera:
        return Camera(self.settings.width, self.settings.height, self.settings.fov)

    def render(self, scene: Scene) -> np.ndarray:
        """Render the scene and return the linear image as a numpy array.

        Args:
            scene: Spheres and lights to render

        Returns:
            Unclamped linear image of shape (height, width, 3)
        """
        width = self.settings.width
        height = self.settings.height
        max_depth = self.settings.max_depth
        background = self.settings.background_color
        camera = self.make_camera()

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure
        progress_lock = threading.Lock()

        logger.debug("Rendering %r at %dx%d, depth %d, %d tiles on %d thread(s)",
                     scene, width, height, max_depth, total_tiles, self.settings.num_threads)

        def render_tile(tile: Tile) -> Tuple[Tile, np.ndarray]:
            """Render a single tile."""
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for j in range(y0, y1):
                for i in range(x0, x1):
                    color = cast_ray(camera.get_ray(i, j), scene, max_depth, background)
                    tile_image[j - y0, i - x0] = color.to_array()

            with progress_lock:
                completed_tiles[0] += 1
                if self._progress_callback:
                    self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tiles))
        else:
            results = [render_tile(tile) for tile in tiles]

        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        return image

    def render_to(self, scene: Scene, sink: FrameSink):
        """Render the scene and write quantized pixels to a sink.

        Pixels are written in raster order. Errors from finalizing the
        sink propagate to the caller.

        Returns:
            Whatever the sink's finalize() returns
        """
        if (sink.width, sink.height) != (self.settings.width, self.settings.height):
            raise ValueError(
                f"Sink is {sink.width}x{sink.height}, "
                f"settings are {self.settings.width}x{self.settings.height}"
            )

        rgba = to_rgba(self.render(scene))
        for y in range(sink.height):
            for x in range(sink.width):
                sink.put_pixel(x, y, tuple(int(c) for c in rgba[y, x]))
        return sink.finalize()

    def save_image(self, scene: Scene, filename: Union[str, Path]) -> Path:
        """Render the scene straight to an image file.

        Raises:
            SinkError: If the file cannot be written
        """
        sink = ImageSink(filename, self.settings.width, self.settings.height)
        return self.render_to(scene, sink)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Split the frame into tiles as (x0, y0, x1, y1) tuples."""
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
