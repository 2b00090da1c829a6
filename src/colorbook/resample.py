from __future__ import annotations

import math
from typing import Tuple

import pygame

from colorbook.raster import Color

Size = Tuple[int, int]


def _scale(surface: pygame.Surface, size: Size) -> pygame.Surface:
    # smoothscale only handles 24 and 32 bit surfaces.
    if surface.get_bitsize() in {24, 32}:
        return pygame.transform.smoothscale(surface, size)
    return pygame.transform.scale(surface, size)


def _check_sizes(surface: pygame.Surface, size: Size) -> None:
    width, height = surface.get_size()
    if width <= 0 or height <= 0:
        raise ValueError("Cannot resample an empty surface")
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"Invalid target size {size}")


def resample_and_crop(surface: pygame.Surface, size: Size) -> pygame.Surface:
    """Scale ``surface`` to cover ``size`` and crop the overflow evenly on both sides."""
    _check_sizes(surface, size)
    width, height = surface.get_size()
    target_w, target_h = size
    scale = max(target_w / width, target_h / height)
    scaled_size = (
        max(target_w, int(math.ceil(width * scale))),
        max(target_h, int(math.ceil(height * scale))),
    )
    scaled = _scale(surface, scaled_size)
    crop = pygame.Rect(
        (scaled_size[0] - target_w) // 2,
        (scaled_size[1] - target_h) // 2,
        target_w,
        target_h,
    )
    return scaled.subsurface(crop).copy()


def resample_and_letterbox(surface: pygame.Surface, size: Size, background: Color) -> pygame.Surface:
    """Scale ``surface`` to fit inside ``size``, centered on ``background``."""
    _check_sizes(surface, size)
    width, height = surface.get_size()
    target_w, target_h = size
    scale = min(target_w / width, target_h / height)
    scaled_size = (
        min(target_w, max(1, int(round(width * scale)))),
        min(target_h, max(1, int(round(height * scale)))),
    )
    scaled = _scale(surface, scaled_size)
    result = pygame.Surface(size, pygame.SRCALPHA, 32)
    result.fill(background)
    rect = scaled.get_rect(center=(target_w // 2, target_h // 2))
    result.blit(scaled, rect)
    return result
