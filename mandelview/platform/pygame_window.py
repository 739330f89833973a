from __future__ import annotations

from typing import Iterator, Optional

import numpy as np

from mandelview.interaction import Button, Event, PointerDown, PointerMove, PointerUp, Terminate
from mandelview.util.logging_setup import get_logger

_BUTTONS = {1: Button.PRIMARY, 3: Button.SECONDARY}

class PygameWindow:
    """Fixed-size pygame window that presents packed 0x00RRGGBB buffers."""

    def __init__(self, width: int, height: int, title: str = "mandelview"):
        logger = get_logger("platform")
        try:
            import pygame
        except Exception as e:
            raise RuntimeError(f"pygame not installed: {e}") from e

        self._pg = pygame
        try:
            pygame.display.init()
            self.screen = pygame.display.set_mode((width, height), 0, 32)
        except pygame.error as e:
            pygame.quit()
            raise RuntimeError(f"Failed to open {width}x{height} window: {e}") from e

        self.width = width
        self.height = height
        pygame.display.set_caption(title)
        logger.info("Window opened %sx%s driver=%s", width, height, pygame.display.get_driver())

    def translate(self, event) -> Optional[Event]:
        pg = self._pg
        if event.type == pg.QUIT:
            return Terminate()
        if event.type == pg.KEYDOWN and event.key == pg.K_ESCAPE:
            return Terminate()
        if event.type in (pg.MOUSEBUTTONDOWN, pg.MOUSEBUTTONUP):
            button = _BUTTONS.get(event.button)
            if button is None:
                return None
            x, y = event.pos
            if event.type == pg.MOUSEBUTTONUP:
                return PointerUp(x, y, button)
            return PointerDown(x, y, button)
        if event.type == pg.MOUSEMOTION:
            x, y = event.pos
            return PointerMove(x, y)
        return None

    def poll_events(self) -> Iterator[Event]:
        for raw in self._pg.event.get():
            event = self.translate(raw)
            if event is not None:
                yield event

    def present(self, buffer: np.ndarray) -> None:
        # surfarray is indexed (x, y)
        self._pg.surfarray.blit_array(self.screen, buffer.T)
        self._pg.display.flip()

    def set_status(self, text: str) -> None:
        self._pg.display.set_caption(text)

    def close(self) -> None:
        self._pg.display.quit()
        self._pg.quit()
