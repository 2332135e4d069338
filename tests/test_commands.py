import mido
import numpy as np
import pygame
import pytest

from midivideo.commands import handle_key, handle_midi_message, map_midi_rect_y
from midivideo.effects import ScreenEffects
from midivideo.note_map import build_note_frame_map
from midivideo.timing import TimeContext
from midivideo.video import VideoPlayer


class _RecordingVideo:
    def __init__(self):
        self.seeks = []

    def seek(self, frame_number):
        self.seeks.append(frame_number)

    def pause(self, timing):
        raise AssertionError("pause not expected")


class _FakeDisplay:
    def __init__(self, size):
        self._size = size
        self.toggles = 0

    def toggle_fullscreen(self):
        self.toggles += 1
        return self._size


@pytest.fixture
def effects():
    return ScreenEffects(960, 540)


@pytest.fixture
def player():
    frames = [np.zeros((4, 4, 3), dtype=np.uint8) for _ in range(3)]
    with VideoPlayer(frames, fps=25) as video:
        yield video


def test_map_endpoints():
    assert map_midi_rect_y(0, 0, 127, -540, -270) == -540
    assert map_midi_rect_y(127, 0, 127, -540, -270) == -270


def test_map_is_monotonic():
    values = [map_midi_rect_y(v, 0, 127, -1080, -540) for v in range(128)]
    assert values == sorted(values)
    assert all(-1080 <= v <= -540 for v in values)


def test_map_truncates_toward_zero():
    assert map_midi_rect_y(1, 0, 2, 0, -1) == 0


def test_map_empty_input_range_raises():
    with pytest.raises(ZeroDivisionError):
        map_midi_rect_y(5, 3, 3, 0, 10)


@pytest.mark.parametrize(
    ("key", "frame"), [(pygame.K_a, 0), (pygame.K_z, 4501), (pygame.K_e, 15800)]
)
def test_jump_keys_seek(key, frame, effects):
    video = _RecordingVideo()
    assert handle_key(key, None, video, TimeContext(), effects)
    assert video.seeks == [frame]


def test_space_pauses(player, effects):
    timing = TimeContext(frame_counter=1)
    player.seek(0)
    assert handle_key(pygame.K_SPACE, None, player, timing, effects)
    assert not player.is_playing
    assert timing.frame_counter == 0


def test_p_flashes(effects):
    assert handle_key(pygame.K_p, None, _RecordingVideo(), TimeContext(), effects)
    assert effects.white_visible


def test_f_toggles_fullscreen_and_relayouts(effects):
    display = _FakeDisplay((1920, 1080))
    assert handle_key(pygame.K_f, display, _RecordingVideo(), TimeContext(), effects)
    assert display.toggles == 1
    assert (effects.width, effects.height) == (1920, 1080)
    assert effects.black_rect2.y == 1080


def test_unbound_key_does_nothing(effects):
    video = _RecordingVideo()
    assert not handle_key(pygame.K_q, None, video, TimeContext(), effects)
    assert video.seeks == []
    assert not effects.white_visible


def test_note_on_channel_16_seeks_mapped_frame(effects):
    video = _RecordingVideo()
    message = mido.Message("note_on", channel=15, note=2, velocity=100)
    handle_midi_message(message, build_note_frame_map(), video, TimeContext(), effects, 540)
    assert video.seeks == [1500]


def test_unmapped_note_is_ignored(effects):
    video = _RecordingVideo()
    message = mido.Message("note_on", channel=15, note=4, velocity=100)
    handle_midi_message(message, build_note_frame_map(), video, TimeContext(), effects, 540)
    assert video.seeks == []


def test_other_channel_is_ignored(effects):
    video = _RecordingVideo()
    message = mido.Message("note_on", channel=0, note=2, velocity=100)
    handle_midi_message(message, build_note_frame_map(), video, TimeContext(), effects, 540)
    assert video.seeks == []
    assert not effects.white_visible


def test_note_127_flashes(effects):
    video = _RecordingVideo()
    message = mido.Message("note_on", channel=15, note=127, velocity=100)
    handle_midi_message(message, build_note_frame_map(), video, TimeContext(), effects, 540)
    assert effects.white_visible
    assert video.seeks == []


def test_note_off_pauses(player, effects):
    timing = TimeContext(frame_counter=1)
    player.seek(0)
    message = mido.Message("note_off", channel=15, note=2)
    handle_midi_message(message, build_note_frame_map(), player, timing, effects, 540)
    assert not player.is_playing
    assert timing.frame_counter == 0


def test_note_off_127_keeps_playing(player, effects):
    player.seek(0)
    message = mido.Message("note_off", channel=15, note=127)
    handle_midi_message(message, build_note_frame_map(), player, TimeContext(), effects, 540)
    assert player.is_playing


def test_controller_29_moves_bars(effects):
    video = _RecordingVideo()
    low = mido.Message("control_change", channel=2, control=29, value=0)
    handle_midi_message(low, {}, video, TimeContext(), effects, 540)
    assert effects.black_rect1.y == -540
    assert effects.black_rect2.y == 540

    high = mido.Message("control_change", channel=2, control=29, value=127)
    handle_midi_message(high, {}, video, TimeContext(), effects, 540)
    assert effects.black_rect1.y == -270
    assert effects.black_rect2.y == -effects.black_rect1.y


def test_other_controller_leaves_bars(effects):
    message = mido.Message("control_change", channel=2, control=30, value=127)
    handle_midi_message(message, {}, _RecordingVideo(), TimeContext(), effects, 540)
    assert effects.black_rect1.y == -540
    assert effects.black_rect2.y == 540


def test_message_without_channel_is_ignored(effects):
    video = _RecordingVideo()
    handle_midi_message(
        mido.Message("clock"), build_note_frame_map(), video, TimeContext(), effects, 540
    )
    assert video.seeks == []
    assert not effects.white_visible