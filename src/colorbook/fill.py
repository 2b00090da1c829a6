"""Scanline flood fill over a Canvas.

Two modes share one traversal:

* ``FillMode.AREA`` fills texels matching the seed's original color. The fill
  color doubles as the visited marker.
* ``FillMode.BORDER`` fills everything up to a border color and tracks
  processed texels in a byte-per-texel bitmap.

The seed itself must be eligible before anything is traversed: a seed on the
border, or an area seed already within tolerance of the fill color, paints
nothing.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Optional

from colorbook.errors import SeedOutOfBounds
from colorbook.raster import BLACK, Canvas, Color, Texel, colors_match, to_rgba

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.05


class FillMode(Enum):
    AREA = "area"
    BORDER = "border"


class _FillStrategy:
    def eligible(self, canvas: Canvas, x: int, y: int) -> bool:
        raise NotImplementedError

    def visit(self, canvas: Canvas, x: int, y: int) -> None:
        pass


class _AreaMatch(_FillStrategy):
    def __init__(self, reference: Color, fill_color: Color, tolerance: float) -> None:
        self.reference = reference
        self.fill_color = fill_color
        self.tolerance = tolerance

    def eligible(self, canvas: Canvas, x: int, y: int) -> bool:
        color = canvas.get_pixel(x, y)
        return colors_match(color, self.reference, self.tolerance) and not colors_match(
            color, self.fill_color, self.tolerance
        )


class _BorderStop(_FillStrategy):
    def __init__(self, border_color: Color, tolerance: float, canvas: Canvas) -> None:
        self.border_color = border_color
        self.tolerance = tolerance
        self.checked = bytearray(canvas.width * canvas.height)

    def eligible(self, canvas: Canvas, x: int, y: int) -> bool:
        if self.checked[x + y * canvas.width]:
            return False
        return not colors_match(canvas.get_pixel(x, y), self.border_color, self.tolerance)

    def visit(self, canvas: Canvas, x: int, y: int) -> None:
        self.checked[x + y * canvas.width] = 1


def _paint_run(
    canvas: Canvas,
    strategy: _FillStrategy,
    xs: range,
    y: int,
    fill_color: Color,
    nodes: Deque[Texel],
) -> int:
    painted = 0
    for x in xs:
        if not strategy.eligible(canvas, x, y):
            break
        canvas.set_pixel(x, y, fill_color)
        strategy.visit(canvas, x, y)
        painted += 1
        if y + 1 < canvas.height and strategy.eligible(canvas, x, y + 1):
            nodes.append((x, y + 1))
        if y - 1 >= 0 and strategy.eligible(canvas, x, y - 1):
            nodes.append((x, y - 1))
    return painted


def _scanline_fill(canvas: Canvas, seed: Texel, fill_color: Color, strategy: _FillStrategy) -> int:
    nodes: Deque[Texel] = deque([seed])
    painted = 0
    while nodes:
        x, y = nodes.popleft()
        painted += _paint_run(canvas, strategy, range(x, canvas.width), y, fill_color, nodes)
        painted += _paint_run(canvas, strategy, range(x - 1, -1, -1), y, fill_color, nodes)
    return painted


def fill(
    canvas: Canvas,
    seed: Texel,
    fill_color: Color,
    tolerance: float = DEFAULT_TOLERANCE,
    mode: FillMode = FillMode.BORDER,
    border_color: Optional[Color] = None,
) -> int:
    """Recolor the region around ``seed`` in place and return the texels painted.

    Raises SeedOutOfBounds (leaving the canvas untouched) when ``seed`` is not
    a texel of ``canvas``. A seed that starts ineligible paints nothing.
    """
    x, y = int(seed[0]), int(seed[1])
    if not canvas.in_bounds(x, y):
        raise SeedOutOfBounds((x, y), canvas.size)
    if not 0.0 <= tolerance <= 1.0:
        raise ValueError(f"Tolerance must be within [0, 1], got {tolerance}")

    fill_color = to_rgba(fill_color)
    strategy: _FillStrategy
    if mode is FillMode.AREA:
        strategy = _AreaMatch(canvas.get_pixel(x, y), fill_color, tolerance)
    else:
        border = to_rgba(border_color) if border_color is not None else BLACK
        strategy = _BorderStop(border, tolerance, canvas)

    if not strategy.eligible(canvas, x, y):
        logger.debug("%s fill at (%d, %d) skipped: seed not eligible", mode.value, x, y)
        return 0

    painted = _scanline_fill(canvas, (x, y), fill_color, strategy)
    logger.debug("%s fill at (%d, %d) painted %d texels", mode.value, x, y, painted)
    return painted


def flood_fill_area(canvas: Canvas, seed: Texel, fill_color: Color, tolerance: float = DEFAULT_TOLERANCE) -> int:
    return fill(canvas, seed, fill_color, tolerance, FillMode.AREA)


def flood_fill_border(
    canvas: Canvas,
    seed: Texel,
    fill_color: Color,
    border_color: Color = BLACK,
    tolerance: float = DEFAULT_TOLERANCE,
) -> int:
    return fill(canvas, seed, fill_color, tolerance, FillMode.BORDER, border_color)
