"""Keyboard and MIDI commands that drive playback and screen effects."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import pygame

from midivideo.effects import ScreenEffects
from midivideo.note_map import frame_for_note
from midivideo.timing import TimeContext

log = logging.getLogger(__name__)

FLASH_NOTE = 127
COMMAND_CHANNEL = 15
BARS_CHANNEL = 2
BARS_CONTROL = 29
MIDI_VALUE_MAX = 127

KEY_JUMPS: dict[int, int] = {
    pygame.K_a: 0,
    pygame.K_z: 4501,
    pygame.K_e: 15800,
}


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def map_midi_rect_y(
    value: int, in_min: int, in_max: int, out_min: int, out_max: int
) -> int:
    """Map ``value`` linearly from [in_min, in_max] to [out_min, out_max]."""
    return out_min + _trunc_div((value - in_min) * (out_max - out_min), in_max - in_min)


def handle_key(
    key: int,
    display: Any,
    video: Any,
    timing: TimeContext,
    effects: ScreenEffects,
) -> bool:
    """Apply the command bound to ``key``; return whether the key was bound."""
    if key in KEY_JUMPS:
        video.seek(KEY_JUMPS[key])
    elif key == pygame.K_SPACE:
        video.pause(timing)
    elif key == pygame.K_p:
        effects.flash()
    elif key == pygame.K_f:
        width, height = display.toggle_fullscreen()
        effects.resize(width, height)
    else:
        return False
    return True


def handle_midi_message(
    message: Any,
    note_map: Mapping[int, int],
    video: Any,
    timing: TimeContext,
    effects: ScreenEffects,
    window_height: int,
) -> None:
    """Apply one incoming MIDI message.

    On channel 16, note-on jumps to the mapped frame (note 127 flashes the
    screen) and note-off pauses. Controller 29 on channel 3 moves the bars.
    """
    channel = getattr(message, "channel", None)
    if channel is None:
        return
    log.info("MIDI received: %s", message)

    if channel == COMMAND_CHANNEL:
        note = getattr(message, "note", None)
        if message.type == "note_on" and note != FLASH_NOTE:
            frame = frame_for_note(note_map, note)
            if frame is None:
                log.info("Note %d ignored: out of range or not mapped", note)
            else:
                video.seek(frame)
        elif message.type == "note_off" and note != FLASH_NOTE:
            video.pause(timing)
        elif message.type == "note_on" and note == FLASH_NOTE:
            effects.flash()

    if (
        channel == BARS_CHANNEL
        and message.type == "control_change"
        and message.control == BARS_CONTROL
    ):
        y = map_midi_rect_y(
            message.value,
            0,
            MIDI_VALUE_MAX,
            -window_height,
            _trunc_div(-window_height, 2),
        )
        effects.set_bars(y)