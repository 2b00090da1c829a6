from __future__ import annotations

from typing import Tuple


class ColorbookError(Exception):
    pass


class InvalidSource(ColorbookError):
    def __init__(self, message: str = "No source image to paint on") -> None:
        super().__init__(message)


class SeedOutOfBounds(ColorbookError):
    def __init__(self, seed: Tuple[int, int], size: Tuple[int, int]) -> None:
        self.seed = seed
        self.size = size
        super().__init__(f"Seed {seed} is outside canvas of size {size[0]}x{size[1]}")
