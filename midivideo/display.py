"""The output window and its fullscreen switching."""

from __future__ import annotations

import pygame

DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 540
WINDOW_TITLE = "MidiVideo"


class Display:
    """A window whose surface the video and effects are drawn onto."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        title: str = WINDOW_TITLE,
    ) -> None:
        self.width = width
        self.height = height
        self.title = title
        self.running = False
        self.fullscreen = False
        pygame.display.init()
        try:
            pygame.display.set_caption(title)
            self.surface = pygame.display.set_mode((width, height))
        except pygame.error:
            pygame.display.quit()
            raise
        self.running = True

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def size(self) -> tuple[int, int]:
        """Current size of the drawing surface."""
        return self.surface.get_size()

    def poll_event(self) -> pygame.event.Event | None:
        """Return the next pending event, or None; a quit event stops the app."""
        event = pygame.event.poll()
        if event.type == pygame.NOEVENT:
            return None
        if event.type == pygame.QUIT:
            self.running = False
        return event

    def toggle_fullscreen(self) -> tuple[int, int]:
        """Switch between desktop fullscreen and the window; return the new size."""
        if not self.fullscreen:
            sizes = pygame.display.get_desktop_sizes()
            size = sizes[0] if sizes else (0, 0)
            self.surface = pygame.display.set_mode(size, pygame.FULLSCREEN)
            pygame.mouse.set_visible(False)
        else:
            self.surface = pygame.display.set_mode((self.width, self.height))
            pygame.mouse.set_visible(True)
        self.fullscreen = not self.fullscreen
        return self.surface.get_size()

    def close(self) -> None:
        """Destroy the window."""
        self.running = False
        if pygame.display.get_init():
            pygame.display.quit()