"""Full-screen flash and cinema-style black bars drawn over the video."""

from __future__ import annotations

import pygame

from midivideo.timing import TimeContext

FLASH_DURATION_MS = 100
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


class ScreenEffects:
    """State of the white flash and the two black letterbox bars."""

    def __init__(self, width: int, height: int) -> None:
        self.width = 0
        self.height = 0
        self.white_visible = False
        self.white_rect = pygame.Rect(0, 0, 0, 0)
        self.black_rect1 = pygame.Rect(0, 0, 0, 0)
        self.black_rect2 = pygame.Rect(0, 0, 0, 0)
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Lay the rectangles out for an output of the given size."""
        self.width = width
        self.height = height
        self.white_rect = pygame.Rect(0, 0, width, height)
        self.white_visible = False
        self.black_rect1 = pygame.Rect(0, -height, width, height)
        self.black_rect2 = pygame.Rect(0, height, width, height)

    def flash(self) -> None:
        """Start a white flash on the next render."""
        self.white_visible = True

    def set_bars(self, y: int) -> None:
        """Move the top bar to ``y`` and the bottom bar symmetrically to ``-y``."""
        self.black_rect1.y = y
        self.black_rect2.y = -y

    def render(self, surface: pygame.Surface, timing: TimeContext, now: int) -> None:
        """Draw the flash (while it lasts) and the black bars onto ``surface``."""
        if self.white_visible:
            timing.current_time = now
            timing.elapsed_time = now - timing.last_white_rect_change_time
            if timing.elapsed_time < FLASH_DURATION_MS:
                surface.fill(WHITE, self.white_rect)
            else:
                self.white_visible = False
        else:
            timing.last_white_rect_change_time = now

        surface.fill(BLACK, self.black_rect1)
        surface.fill(BLACK, self.black_rect2)