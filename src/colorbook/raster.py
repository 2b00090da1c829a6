from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union

import pygame


Color = Tuple[int, int, int, int]
Texel = Tuple[int, int]

BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)

_FORMAT = "RGBA"
_CHANNELS = 4


def to_rgba(value: Union[pygame.Color, Iterable[int]]) -> Color:
    channels = [int(c) for c in value]
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != _CHANNELS:
        raise ValueError(f"Expected 3 or 4 channels, got {len(channels)}")
    for channel in channels:
        if channel < 0 or channel > 255:
            raise ValueError(f"Channel value {channel} outside 0-255")
    r, g, b, a = channels
    return (r, g, b, a)


def colors_match(a: Color, b: Color, tolerance: float) -> bool:
    """True when every channel (alpha included) differs by at most ``tolerance``.

    ``tolerance`` is normalized to 0-1 and scaled to the 0-255 channel range.
    """
    limit = tolerance * 255
    return (
        abs(a[0] - b[0]) <= limit
        and abs(a[1] - b[1]) <= limit
        and abs(a[2] - b[2]) <= limit
        and abs(a[3] - b[3]) <= limit
    )


class PixelBuffer:
    """RGBA pixels, row-major, row 0 at the bottom."""

    def __init__(self, width: int, height: int, pixels: Union[bytes, bytearray]) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid raster size {width}x{height}")
        if len(pixels) != width * height * _CHANNELS:
            raise ValueError(
                f"Pixel data has {len(pixels)} bytes, expected {width * height * _CHANNELS}"
            )
        self.width = width
        self.height = height
        self._pixels = pixels

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"Texel ({x}, {y}) outside {self.width}x{self.height}")
        return (x + y * self.width) * _CHANNELS

    def get_pixel(self, x: int, y: int) -> Color:
        i = self._offset(x, y)
        px = self._pixels
        return (px[i], px[i + 1], px[i + 2], px[i + 3])

    def tobytes(self) -> bytes:
        return bytes(self._pixels)

    def to_surface(self) -> pygame.Surface:
        return pygame.image.frombytes(bytes(self._pixels), self.size, _FORMAT, True)


class RasterImage(PixelBuffer):
    """Read-only source image. Texel (0, 0) is the bottom-left corner."""

    def __init__(self, width: int, height: int, pixels: bytes, name: str = "") -> None:
        super().__init__(width, height, bytes(pixels))
        self.name = name

    @classmethod
    def from_surface(cls, surface: pygame.Surface, name: str = "") -> "RasterImage":
        width, height = surface.get_size()
        data = pygame.image.tobytes(surface, _FORMAT, True)
        return cls(width, height, data, name=name)

    @classmethod
    def filled(cls, width: int, height: int, color: Color, name: str = "") -> "RasterImage":
        return cls(width, height, bytes(color) * (width * height), name=name)

    def __repr__(self) -> str:
        return f"RasterImage({self.name!r}, {self.width}x{self.height})"


class Canvas(PixelBuffer):
    """Mutable working copy of a RasterImage."""

    def __init__(
        self,
        width: int,
        height: int,
        pixels: bytearray,
        source: Optional[RasterImage] = None,
    ) -> None:
        super().__init__(width, height, pixels)
        self.source = source

    @classmethod
    def copy_of(cls, raster: RasterImage) -> "Canvas":
        return cls(raster.width, raster.height, bytearray(raster.tobytes()), source=raster)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        i = self._offset(x, y)
        self._pixels[i:i + _CHANNELS] = bytes(color)

    def __repr__(self) -> str:
        source = self.source.name if self.source is not None else None
        return f"Canvas(source={source!r}, {self.width}x{self.height})"
