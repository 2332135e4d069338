"""Timestamps shared by the render loop, the flash effect and frame pacing."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass
class TimeContext:
    """Millisecond timestamps and counters used while rendering."""

    last_white_rect_change_time: int = 0
    frame_counter: int = 0
    last_frame_display_time: int = 0
    elapsed_time: int = 0
    current_time: int = 0

    def reset(self) -> None:
        """Set every timestamp and counter back to zero."""
        for field in fields(self):
            setattr(self, field.name, 0)