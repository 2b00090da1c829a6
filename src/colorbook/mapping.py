"""Pointer position to texel coordinate mapping.

UI pointers have their origin at the top-left; rasters and world space have
y pointing up, so every path flips the vertical axis once. Results are always
clamped into range, never rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from colorbook.raster import Texel

Vec2 = Tuple[float, float]
Size = Tuple[int, int]


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _floor_clamped(value: float, low: int, high: int) -> int:
    if math.isnan(value) or value < low:
        return low
    if value >= high + 1:
        return high
    return clamp(int(math.floor(value)), low, high)


def _ratio(value: float, extent: float) -> float:
    if extent == 0:
        return 0.0
    return value / extent


@dataclass(frozen=True)
class SubRegion:
    """Where a sprite lives inside an atlas texture.

    ``pivot`` is in texels relative to the rectangle's origin.
    """

    x: int
    y: int
    width: int
    height: int
    pivot: Vec2 = (0.0, 0.0)
    pixels_per_unit: float = 100.0

    def __post_init__(self) -> None:
        if not self.pixels_per_unit > 0:
            raise ValueError(f"pixels_per_unit must be positive, got {self.pixels_per_unit}")

    @classmethod
    def full(cls, size: Size, pixels_per_unit: float = 100.0) -> "SubRegion":
        width, height = size
        return cls(0, 0, width, height, (width / 2, height / 2), pixels_per_unit)

    @classmethod
    def inside(
        cls,
        atlas_size: Size,
        x: int,
        y: int,
        width: int,
        height: int,
        pivot: Vec2 = (0.0, 0.0),
        pixels_per_unit: float = 100.0,
    ) -> "SubRegion":
        region = cls(x, y, width, height, pivot, pixels_per_unit)
        if not region.within(atlas_size):
            raise ValueError(f"Sub-region {region} does not fit in atlas {atlas_size}")
        return region

    @property
    def size(self) -> Size:
        return (self.width, self.height)

    def within(self, atlas_size: Size) -> bool:
        atlas_w, atlas_h = atlas_size
        return (
            self.x >= 0
            and self.y >= 0
            and self.width > 0
            and self.height > 0
            and self.x + self.width <= atlas_w
            and self.y + self.height <= atlas_h
        )

    def world_bounds(self, position: Vec2) -> "Bounds":
        ppu = self.pixels_per_unit
        return Bounds(
            min_x=position[0] - self.pivot[0] / ppu,
            min_y=position[1] - self.pivot[1] / ppu,
            width=self.width / ppu,
            height=self.height / ppu,
        )


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    width: float
    height: float

    def local_uv(self, point: Vec2) -> Vec2:
        return (_ratio(point[0] - self.min_x, self.width), _ratio(point[1] - self.min_y, self.height))


@dataclass(frozen=True)
class OrthographicView:
    center: Vec2
    half_height: float
    aspect: float

    @property
    def visible_size(self) -> Vec2:
        height = 2.0 * self.half_height
        return (height * self.aspect, height)

    def screen_to_world(self, pos: Vec2, screen_size: Size) -> Vec2:
        u = _ratio(pos[0], screen_size[0])
        v = 1.0 - _ratio(pos[1], screen_size[1])
        visible_w, visible_h = self.visible_size
        return (
            self.center[0] + (u - 0.5) * visible_w,
            self.center[1] + (v - 0.5) * visible_h,
        )


@dataclass(frozen=True)
class UiSpace:
    """Local pixel rectangle of the display element that was tapped."""

    width: float
    height: float


@dataclass(frozen=True)
class WorldSpace:
    """World-space target; without a view the pointer is already a world point."""

    bounds: Bounds
    view: Optional[OrthographicView] = None
    screen_size: Optional[Size] = None

    def __post_init__(self) -> None:
        if self.view is not None and self.screen_size is None:
            raise ValueError("screen_size is required to project through a view")


InputSpace = Union[UiSpace, WorldSpace]


def _extent(size: Size) -> Size:
    return (_pixel_count(size[0]), _pixel_count(size[1]))


def _pixel_count(value: float) -> int:
    if not math.isfinite(value) or value < 1:
        return 1
    return int(value)


def _ui_to_texel(pos: Vec2, space: UiSpace, target_size: Size) -> Texel:
    u = _ratio(pos[0], space.width)
    v = 1.0 - _ratio(pos[1], space.height)
    width, height = target_size
    return (
        _floor_clamped(u * width, 0, width - 1),
        _floor_clamped(v * height, 0, height - 1),
    )


def _world_to_texel(pos: Vec2, space: WorldSpace, region: SubRegion, target_size: Optional[Size]) -> Texel:
    if space.view is not None and space.screen_size is not None:
        pos = space.view.screen_to_world(pos, space.screen_size)
    u, v = space.bounds.local_uv(pos)
    tex_x = u * region.width + region.x
    tex_y = v * region.height + region.y
    if target_size is not None:
        low_x, low_y = 0, 0
        high_x, high_y = target_size[0] - 1, target_size[1] - 1
    else:
        low_x, low_y = region.x, region.y
        high_x = region.x + max(region.width, 1) - 1
        high_y = region.y + max(region.height, 1) - 1
    return (_floor_clamped(tex_x, low_x, high_x), _floor_clamped(tex_y, low_y, high_y))


def map_to_texel(
    pointer_pos: Vec2,
    input_space: InputSpace,
    sub_region: Optional[SubRegion] = None,
    target_size: Optional[Size] = None,
) -> Texel:
    """Map a pointer position to an in-range texel of the target raster.

    For ``UiSpace`` the pointer spans the whole target raster: ``target_size``,
    else the sub-region size, else the element's own pixel grid. For
    ``WorldSpace`` the pointer is placed inside ``sub_region`` (the whole
    target when omitted) and clamped against ``target_size`` when the working
    canvas is known, else against the sub-region itself.

    Never raises: empty targets are treated as a single texel.
    """
    if target_size is not None:
        target_size = _extent(target_size)
    if isinstance(input_space, UiSpace):
        if target_size is None:
            if sub_region is not None:
                target_size = _extent(sub_region.size)
            else:
                target_size = _extent((input_space.width, input_space.height))
        return _ui_to_texel(pointer_pos, input_space, target_size)
    if sub_region is None:
        sub_region = SubRegion.full(target_size or (1, 1))
    return _world_to_texel(pointer_pos, input_space, sub_region, target_size)
