from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from colorbook.mapping import clamp
from colorbook.raster import BLACK, Color, PixelBuffer, Texel, to_rgba

logger = logging.getLogger(__name__)


def pick_color(image: PixelBuffer, texel: Texel) -> Color:
    x = clamp(int(texel[0]), 0, image.width - 1)
    y = clamp(int(texel[1]), 0, image.height - 1)
    return image.get_pixel(x, y)


class Palette:
    def __init__(self, colors: Iterable[Sequence[int]]) -> None:
        self.colors: List[Color] = [to_rgba(color) for color in colors]
        self.picked: Color = self.colors[0] if self.colors else BLACK

    def __len__(self) -> int:
        return len(self.colors)

    def select(self, index: int) -> Color:
        self.picked = self.colors[index]
        return self.picked

    def pick_from(self, image: PixelBuffer, texel: Texel) -> Color:
        self.picked = pick_color(image, texel)
        logger.debug("Picked color %s at %s", self.picked, texel)
        return self.picked
