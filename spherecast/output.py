"""
Color quantization and frame sinks.

Linear colors are scaled to [0, 255], clamped and truncated to 8 bits; no
gamma or tone mapping is applied. Quantized RGBA pixels are written to a
FrameSink, which either keeps them in memory or encodes them to an image
file with Pillow.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple, Union
import numpy as np

from .vec3 import Color

logger = logging.getLogger(__name__)

# Pillow formats that cannot store an alpha channel
OPAQUE_FORMATS = {'JPEG', 'PPM', 'EPS', 'PCX'}

RGBA = Tuple[int, int, int, int]


class SinkError(Exception):
    """The frame sink could not be opened, encoded or written."""
    pass


def color_to_rgba(color: Color) -> RGBA:
    """Quantize a linear color to an opaque 8-bit RGBA tuple."""
    scaled = (color * 255.0).clamp(0.0, 255.0)
    return (int(scaled.r), int(scaled.g), int(scaled.b), 255)


def to_rgba(image: np.ndarray) -> np.ndarray:
    """Quantize a linear (H, W, 3) float image to (H, W, 4) uint8 RGBA.

    Args:
        image: Linear float image, any range

    Returns:
        uint8 array with alpha fixed at 255
    """
    height, width = image.shape[:2]
    rgba = np.full((height, width, 4), 255, dtype=np.uint8)
    rgba[..., :3] = np.clip(image * 255.0, 0, 255).astype(np.uint8)
    return rgba


class FrameSink(ABC):
    """Destination for quantized pixels of a fixed width x height frame."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @abstractmethod
    def put_pixel(self, x: int, y: int, rgba: RGBA) -> None:
        """Store one pixel. Pixels arrive in raster order."""
        pass

    @abstractmethod
    def finalize(self):
        """Flush the frame. Raises SinkError if that fails."""
        pass

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} frame")


class ArraySink(FrameSink):
    """Keeps the frame in an (H, W, 4) uint8 numpy buffer."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.buffer = np.zeros((height, width, 4), dtype=np.uint8)

    def put_pixel(self, x: int, y: int, rgba: RGBA) -> None:
        self._check_bounds(x, y)
        self.buffer[y, x] = rgba

    def finalize(self) -> np.ndarray:
        return self.buffer


class ImageSink(ArraySink):
    """Encodes the frame to an image file on finalize.

    The format follows the file extension; a path without one is written
    as PNG. Formats without alpha support (JPEG and similar) get RGB.
    """

    def __init__(self, path: Union[str, Path], width: int, height: int,
                 format: Optional[str] = None):
        super().__init__(width, height)
        self.path = Path(path)
        self.format = format or (None if self.path.suffix else 'PNG')

    def finalize(self) -> Path:
        from PIL import Image as PILImage

        logger.debug("Encoding %dx%d frame to %s", self.width, self.height, self.path)
        image = PILImage.fromarray(self.buffer)
        target = self.format or PILImage.registered_extensions().get(self.path.suffix.lower())
        if target and target.upper() in OPAQUE_FORMATS:
            # Alpha is always 255 here
            image = image.convert('RGB')
        try:
            image.save(self.path, format=self.format)
        except (OSError, ValueError) as e:
            raise SinkError(f"Cannot write image to {self.path}: {e}") from e
        return self.path
