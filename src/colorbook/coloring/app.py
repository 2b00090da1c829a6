from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pygame

from colorbook.canvas import CanvasManager
from colorbook.config import fill_settings, load_config
from colorbook.errors import ColorbookError
from colorbook.fill import FillMode, fill
from colorbook.logs import configure_logging
from colorbook.mapping import UiSpace, map_to_texel
from colorbook.palette import Palette
from colorbook.paths import ensure_directories, get_data_root
from colorbook.raster import Canvas, Color, RasterImage, Texel, to_rgba
from colorbook.resample import resample_and_crop, resample_and_letterbox
from colorbook.ui.common import (
    Button,
    create_fullscreen_window,
    is_primary_pointer_event,
    pointer_event_pos,
)

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Size = Tuple[int, int]

PAGE_SUFFIXES = {".png", ".bmp", ".jpg", ".jpeg"}


def _save_surface_atomic(surface: pygame.Surface, path: Path) -> None:
    # pygame picks the encoder from the extension, so keep it last.
    tmp_path = path.with_name(f"{path.stem}.tmp{path.suffix}")
    pygame.image.save(surface, str(tmp_path))
    os.replace(tmp_path, path)


def _list_pages(pages_dir: Path) -> List[Path]:
    files = [path for path in pages_dir.iterdir() if path.suffix.lower() in PAGE_SUFFIXES]
    files.sort(key=lambda path: path.name.lower())
    return files


def _saved_path(saved_dir: Path, page_name: str, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H%M%S")
    candidate = saved_dir / f"{page_name}_{stamp}.png"
    counter = 1
    while candidate.exists():
        candidate = saved_dir / f"{page_name}_{stamp}_{counter}.png"
        counter += 1
    return candidate


def _fit_page(surface: pygame.Surface, size: Size, fit: str, background: Color) -> pygame.Surface:
    if fit == "crop":
        return resample_and_crop(surface, size)
    return resample_and_letterbox(surface, size, background)


def _load_page(path: Path, size: Size, fit: str, background: Color) -> Optional[RasterImage]:
    try:
        image = pygame.image.load(str(path))
    except (pygame.error, OSError):
        logger.warning("Could not load page %s", path)
        return None
    return RasterImage.from_surface(_fit_page(image, size, fit, background), name=path.stem)


def _default_page(size: Size) -> RasterImage:
    """Simple line-art page used when the pages folder is empty."""
    width, height = size
    surface = pygame.Surface(size, pygame.SRCALPHA, 32)
    surface.fill((255, 255, 255, 255))
    line = max(2, min(width, height) // 150)
    black = (0, 0, 0, 255)
    center = (width // 2, height // 2)
    radius = max(4, min(width, height) // 4)
    pygame.draw.rect(surface, black, surface.get_rect(), width=line)
    pygame.draw.circle(surface, black, center, radius, width=line)
    pygame.draw.circle(surface, black, center, radius // 2, width=line)
    pygame.draw.line(surface, black, (line, center[1]), (width - line, center[1]), line)
    pygame.draw.line(surface, black, (center[0], line), (center[0], height - line), line)
    return RasterImage.from_surface(surface, name="default")


class ColoringApp:
    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config if config is not None else load_config()
        self.data_root = get_data_root(self.config)
        dirs = ensure_directories(self.data_root)
        self.pages_dir = dirs["pages"]
        self.saved_dir = dirs["saved"]

        settings = fill_settings(self.config)
        self.fill_mode = settings.mode
        self.tolerance = settings.tolerance
        self.border_color = settings.border_color
        pages = self.config.get("pages", {})
        self.page_fit = str(pages.get("fit", "letterbox"))
        self.page_background = to_rgba(pages.get("background", (255, 255, 255)))

        self.screen, self.screen_rect = create_fullscreen_window()
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("sans", 18)

        self.margin = 16
        self.menu_pad = 10
        self.menu_gap = 10
        self.menu_bg = (238, 234, 226)
        panel_width = max(120, int(self.screen_rect.width * 0.12))
        self.controls_rect = pygame.Rect(
            self.margin,
            self.margin,
            panel_width,
            self.screen_rect.height - 2 * self.margin,
        )
        self.canvas_rect = pygame.Rect(
            self.controls_rect.right + self.margin,
            self.margin,
            self.screen_rect.width - panel_width - 3 * self.margin,
            self.screen_rect.height - 2 * self.margin,
        )

        self.palette = Palette(self.config.get("palette", []))
        self.picking = False
        self.palette_buttons: List[Button] = []
        self.action_buttons: Dict[str, Button] = {}
        self._build_ui()

        self.canvases = CanvasManager(display_sink=self._show_canvas)
        self.page_paths = _list_pages(self.pages_dir)
        self.page_index = 0
        self.page: RasterImage = self._open_page(0)
        self.page_surface = self.page.to_surface()

    def _build_ui(self) -> None:
        self.palette_buttons.clear()
        self.action_buttons.clear()

        pad = self.menu_pad
        gap = self.menu_gap
        left = self.controls_rect.left + pad
        inner_w = self.controls_rect.width - pad * 2
        action_h = self.font.get_height() + 16

        labels = ["next", "mode", "pick", "save"]
        bottom_top = self.controls_rect.bottom - pad - len(labels) * (action_h + gap) + gap
        for idx, key in enumerate(labels):
            rect = pygame.Rect(left, bottom_top + idx * (action_h + gap), inner_w, action_h)
            self.action_buttons[key] = Button(rect=rect, label=key.title(), fill=(245, 245, 245))

        palette_top = self.controls_rect.top + pad
        palette_height = max(0, bottom_top - gap - palette_top)
        rows = max(1, len(self.palette))
        swatch_gap = 8
        swatch_height = max(14, (palette_height - swatch_gap * (rows - 1)) // rows)
        for idx, color in enumerate(self.palette.colors):
            rect = pygame.Rect(left, palette_top + idx * (swatch_height + swatch_gap), inner_w, swatch_height)
            self.palette_buttons.append(Button(rect=rect, fill=color))

    def _open_page(self, index: int) -> RasterImage:
        size = self.canvas_rect.size
        if self.page_paths:
            index %= len(self.page_paths)
            page = _load_page(self.page_paths[index], size, self.page_fit, self.page_background)
            if page is not None:
                self.page_index = index
                return page
        self.page_index = 0
        return _default_page(size)

    def _show_canvas(self, canvas: Canvas) -> None:
        self.page_surface = canvas.to_surface()

    def _next_page(self) -> None:
        self.page = self._open_page(self.page_index + 1)
        self.page_surface = self.page.to_surface()
        logger.info("Showing page %r", self.page.name)

    def _page_texel(self, pos: Point) -> Texel:
        local_pos = (pos[0] - self.canvas_rect.left, pos[1] - self.canvas_rect.top)
        space = UiSpace(self.canvas_rect.width, self.canvas_rect.height)
        return map_to_texel(local_pos, space, target_size=self.page.size)

    def _handle_page_tap(self, pos: Point) -> None:
        texel = self._page_texel(pos)
        if self.picking:
            painted_page = self.canvases.current
            if painted_page is not None and painted_page.source is self.page:
                self.palette.pick_from(painted_page, texel)
            else:
                self.palette.pick_from(self.page, texel)
            self.picking = False
            return
        try:
            canvas = self.canvases.obtain_canvas(self.page)
            painted = fill(
                canvas,
                texel,
                self.palette.picked,
                self.tolerance,
                self.fill_mode,
                self.border_color,
            )
        except ColorbookError as exc:
            logger.warning("Fill skipped: %s", exc)
            return
        if painted:
            self.canvases.apply_edits(canvas)

    def _save_current(self) -> Optional[Path]:
        canvas = self.canvases.current
        if canvas is None or canvas.source is not self.page:
            logger.info("Nothing painted on %r yet", self.page.name)
            return None
        path = _saved_path(self.saved_dir, self.page.name)
        _save_surface_atomic(canvas.to_surface(), path)
        logger.info("Saved %s", path)
        return path

    def _toggle_mode(self) -> None:
        self.fill_mode = FillMode.AREA if self.fill_mode is FillMode.BORDER else FillMode.BORDER
        logger.info("Fill mode: %s", self.fill_mode.value)

    def _handle_pointer_down(self, pos: Point) -> None:
        if self.canvas_rect.collidepoint(pos):
            self._handle_page_tap(pos)
            return

        for idx, button in enumerate(self.palette_buttons):
            if button.hit(pos):
                self.palette.select(idx)
                return

        if self.action_buttons["next"].hit(pos):
            self._next_page()
        elif self.action_buttons["mode"].hit(pos):
            self._toggle_mode()
        elif self.action_buttons["pick"].hit(pos):
            self.picking = not self.picking
        elif self.action_buttons["save"].hit(pos):
            self._save_current()

    def _render(self) -> None:
        self.screen.fill((252, 248, 240))
        pygame.draw.rect(self.screen, self.menu_bg, self.controls_rect)
        self.screen.blit(self.page_surface, self.canvas_rect.topleft)
        pygame.draw.rect(self.screen, (200, 200, 200), self.canvas_rect, width=2)

        for idx, button in enumerate(self.palette_buttons):
            button.draw(self.screen, selected=self.palette.colors[idx] == self.palette.picked)

        for key, button in self.action_buttons.items():
            if key == "mode":
                button.label = f"Mode: {self.fill_mode.value}"
            selected = key == "pick" and self.picking
            button.draw(self.screen, self.font, selected=selected)

        pygame.display.flip()

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif is_primary_pointer_event(event, is_down=True):
                    pos = pointer_event_pos(event, self.screen_rect)
                    if pos is not None:
                        self._handle_pointer_down(pos)

            self._render()
            self.clock.tick(60)

        self.canvases.release()
        pygame.quit()


def main() -> None:
    config = load_config()
    configure_logging(config)
    try:
        ColoringApp(config).run()
    except Exception:
        logger.exception("Coloring app crashed")
        pygame.quit()
        raise


if __name__ == "__main__":
    main()
