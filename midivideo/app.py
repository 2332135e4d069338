"""Application wiring and the main render loop."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import pygame

from midivideo.commands import handle_key, handle_midi_message
from midivideo.display import DEFAULT_HEIGHT, DEFAULT_WIDTH, Display
from midivideo.effects import ScreenEffects
from midivideo.midi_input import DEFAULT_DEVICE_ID, MidiDeviceError, MidiInput
from midivideo.note_map import build_note_frame_map
from midivideo.timing import TimeContext
from midivideo.video import VideoError, VideoPlayer

log = logging.getLogger(__name__)

DEFAULT_VIDEO = "F.mp4"
LOOP_DELAY_S = 0.001
CLEAR_COLOR = (0, 0, 0)


class App:
    """The video, window, effects and MIDI input driven by one render loop.

    Components not passed in are created in order: video, window, effects,
    MIDI input. If one of them fails, those already set up are closed and the
    error propagates.
    """

    def __init__(
        self,
        video_path: str = DEFAULT_VIDEO,
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        device_id: int = DEFAULT_DEVICE_ID,
        video: Any = None,
        display: Any = None,
        midi: Any = None,
        note_map: Mapping[int, int] | None = None,
        clock: Callable[[], int] | None = None,
        sleep: Callable[[float], None] | None = None,
        present: Callable[[], None] | None = None,
    ) -> None:
        self.video = video if video is not None else VideoPlayer(video_path)

        if display is None:
            try:
                display = Display(width, height)
            except pygame.error:
                log.error("Window initialisation failed")
                self.video.close()
                raise
        self.display = display

        self.effects = ScreenEffects(*self.display.size)

        if midi is None:
            try:
                midi = MidiInput(device_id)
            except MidiDeviceError:
                log.error("MIDI initialisation failed")
                self.display.close()
                self.video.close()
                raise
        self.midi = midi

        self.timing = TimeContext()
        self.timing.reset()
        self.note_map = dict(note_map) if note_map is not None else build_note_frame_map()

        self._start = time.monotonic()
        self._clock = clock if clock is not None else self._elapsed_ms
        self._sleep = sleep if sleep is not None else time.sleep
        self._present = present if present is not None else pygame.display.flip

    def __enter__(self) -> App:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _elapsed_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)

    def _handle_input(self) -> None:
        event = self.display.poll_event()
        if event is not None and event.type == pygame.KEYDOWN:
            handle_key(event.key, self.display, self.video, self.timing, self.effects)

        message = self.midi.poll()
        if message is not None:
            handle_midi_message(
                message,
                self.note_map,
                self.video,
                self.timing,
                self.effects,
                self.display.size[1],
            )

    def _render_if_due(self) -> None:
        timing = self.timing
        timing.current_time = self._clock()
        timing.elapsed_time = timing.current_time - timing.last_frame_display_time
        if timing.elapsed_time < self.video.frame_delay // 2:
            return
        surface = self.display.surface
        surface.fill(CLEAR_COLOR)
        self.video.render(surface, timing)
        self.effects.render(surface, timing, self._clock())
        self._present()
        timing.last_frame_display_time = self._clock()

    def run(self) -> None:
        """Handle input and draw frames until the window is closed."""
        while self.display.running:
            self._handle_input()
            self._render_if_due()
            self._sleep(LOOP_DELAY_S)

    def close(self) -> None:
        """Close the MIDI input, the window and the video, in that order."""
        self.midi.close()
        self.display.close()
        self.video.close()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="midivideo",
        description="Play a video whose position is driven by MIDI notes.",
    )
    parser.add_argument("video", nargs="?", default=DEFAULT_VIDEO, help="video file to play")
    parser.add_argument("--device", type=int, default=DEFAULT_DEVICE_ID, help="MIDI device index")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="window width")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="window height")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the application; return the process exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        app = App(args.video, width=args.width, height=args.height, device_id=args.device)
    except (VideoError, MidiDeviceError, pygame.error) as exc:
        log.error("Application initialisation failed: %s", exc)
        return 1
    with app:
        app.run()
    return 0