"""Mapping of MIDI note numbers to the video frames they jump to."""

from __future__ import annotations

from collections.abc import Mapping

MIDI_NOTE_COUNT = 128

_NOTE_FRAMES: dict[int, int] = {
    # Wake Me Up
    1: 0, 2: 1500, 3: 3000,
    # TMTYH
    5: 4505, 6: 6001, 7: 7501,
    # Shine a light
    9: 9002, 10: 10502,
    # Queen
    13: 12003, 14: 13503,
    # Old Man
    17: 15004, 18: 16504, 19: 18003,
    # Burning Game
    21: 19505, 22: 21005, 23: 22505,
    # Brother
    25: 24006, 26: 25509, 27: 27007, 28: 28507,
    # Bullshit
    29: 30007, 30: 31508, 31: 33008, 32: 34508,
    # Dear Friend
    33: 36009, 34: 37509, 35: 39009,
    # Government
    37: 40509, 38: 42010, 39: 43510, 40: 45010,
    # Loaded Gun
    41: 46510, 42: 48011, 43: 49511,
    # Man
    45: 51011, 46: 52512,
    # Graveyard
    49: 54012, 50: 55512, 51: 60013,
    # Hush Hush
    53: 60013, 54: 61513, 55: 63013, 56: 64513,
    # Rather
    57: 66014, 58: 67514, 59: 69014,
    # I'm Rolling
    61: 70514, 62: 72014,
}


def build_note_frame_map() -> dict[int, int]:
    """Return a fresh mapping of every mapped MIDI note to its start frame."""
    return dict(_NOTE_FRAMES)


def frame_for_note(note_map: Mapping[int, int], note: int) -> int | None:
    """Return the frame mapped to ``note``, or None if out of range or unmapped."""
    if not 0 <= note < MIDI_NOTE_COUNT:
        return None
    return note_map.get(note)