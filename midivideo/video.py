"""Video decoding, frame-accurate seeking and drawing of decoded frames."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import Any

import numpy as np
import pygame

from midivideo.timing import TimeContext

log = logging.getLogger(__name__)


class VideoError(Exception):
    """Raised when a video cannot be opened or used."""


class _ReaderFrames:
    """Random access to the frames of an imageio reader."""

    def __init__(self, reader: Any) -> None:
        self._reader = reader

    def __getitem__(self, index: int) -> np.ndarray:
        try:
            return self._reader.get_data(index)
        except (IndexError, StopIteration) as exc:
            raise IndexError(index) from exc
        except (RuntimeError, OSError, ValueError) as exc:
            log.error("Error while decoding frame %d: %s", index, exc)
            raise IndexError(index) from exc

    def close(self) -> None:
        self._reader.close()


def _open_reader(path: str | os.PathLike[str]) -> tuple[_ReaderFrames, float]:
    import imageio.v2 as iio

    try:
        reader = iio.get_reader(os.fspath(path))
    except (OSError, ValueError, RuntimeError, ImportError, KeyError) as exc:
        raise VideoError(f"Could not open video file {path!r}: {exc}") from exc
    try:
        fps = float(reader.get_meta_data().get("fps") or 0.0)
    except (OSError, ValueError, RuntimeError, TypeError) as exc:
        reader.close()
        raise VideoError(f"Could not find stream information: {exc}") from exc
    return _ReaderFrames(reader), fps


def _to_surface(frame: Any) -> pygame.Surface:
    """Turn an H x W (x C) image array into a pygame surface."""
    pixels = np.asarray(frame)
    if pixels.ndim == 2:
        pixels = np.stack([pixels] * 3, axis=-1)
    elif pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = np.repeat(pixels, 3, axis=2)
    elif pixels.ndim == 3 and pixels.shape[2] >= 3:
        pixels = pixels[:, :, :3]
    else:
        raise VideoError(f"Unsupported frame shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)
    return pygame.surfarray.make_surface(np.ascontiguousarray(pixels.swapaxes(0, 1)))


class VideoPlayer:
    """A video stream that can jump to any frame and draw itself onto a surface.

    ``source`` is either a path to a video file or a sequence of image arrays;
    for a sequence ``fps`` must be given.
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | Sequence[Any],
        fps: float | None = None,
    ) -> None:
        self._reader: _ReaderFrames | None = None
        if isinstance(source, (str, os.PathLike)):
            self._reader, stream_fps = _open_reader(source)
            self._frames: Any = self._reader
            if fps is None:
                fps = stream_fps
        else:
            self._frames = source
            if fps is None:
                raise VideoError("A frame rate is required for in-memory frames")
        if not fps or fps <= 0:
            self.close()
            raise VideoError(f"Invalid frame rate: {fps!r}")

        self.fps = float(fps)
        self.frame_delay = int(1000 / self.fps)
        self.is_playing = False
        self.current_frame_timestamp = 0
        self.current_frame_number = 0
        self._texture: pygame.Surface | None = None
        self._closed = False

    def __enter__(self) -> VideoPlayer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _read_frame(self) -> Any | None:
        index = self.current_frame_number
        try:
            frame = self._frames[index]
        except IndexError:
            return None
        self.current_frame_timestamp = int(index * 1000 / self.fps)
        self.current_frame_number = index + 1
        return frame

    def _check_open(self) -> None:
        if self._closed:
            raise VideoError("Video player is closed")

    def seek(self, frame_number: int) -> None:
        """Place the read head on ``frame_number`` and start playing after it."""
        self._check_open()
        if frame_number < 0:
            raise ValueError(f"Frame number must not be negative: {frame_number}")
        self.current_frame_number = frame_number
        if self._read_frame() is None:
            log.error("Error seeking frame %d", frame_number)
            self.current_frame_number = frame_number + 1
        self.is_playing = True

    def pause(self, timing: TimeContext) -> None:
        """Stop playback and reset the frame pacing counter."""
        self.is_playing = False
        timing.frame_counter = 0

    def render(self, surface: pygame.Surface, timing: TimeContext) -> None:
        """Draw the video onto ``surface``, decoding a new frame every other call."""
        if not self.is_playing:
            return
        self._check_open()
        timing.frame_counter += 1
        if timing.frame_counter <= 1:
            frame = self._read_frame()
            if frame is None:
                return
            image = _to_surface(frame)
            if image.get_size() != surface.get_size():
                image = pygame.transform.scale(image, surface.get_size())
            self._texture = image
            surface.blit(self._texture, (0, 0))
        else:
            if self._texture is not None:
                surface.blit(self._texture, (0, 0))
            timing.frame_counter = 0

    def close(self) -> None:
        """Release the decoder; further seeking or rendering raises VideoError."""
        self.is_playing = False
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        self._texture = None
        self._closed = True