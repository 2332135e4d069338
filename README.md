# midivideo

`midivideo` plays one video file in a window. You drive it live from a MIDI
controller or from the keyboard. MIDI notes are mapped to cue frames.
Pressing a note jumps to its frame and starts playback, and releasing it
pauses. The screen can also flash white, and cinema-style black bars can be
slid in from the top and bottom edges.

## Installation

```
pip install .
```

Video files are read through imageio. imageio needs a plugin that can decode
the format you use. MIDI ports are opened through mido, which needs a working
MIDI backend.

To run the tests:

```
pip install .[test]
pytest
```

## Running

```
midivideo [VIDEO] [--device N] [--width W] [--height H]
```

- `VIDEO` is the file to play. It defaults to `F.mp4` in the current directory.
- `--device` is the index of the MIDI input to open. It defaults to `3`.
  Devices are numbered with every input first, then every output. The chosen
  index must be an input.
- `--width` and `--height` set the window size. The default is 960×540.

If the video, the window or the MIDI input cannot be set up, the program logs
the error and exits with status 1. Closing the window stops the program.

## Keyboard

| Key     | Action                                  |
|---------|-----------------------------------------|
| `a`     | jump to frame 0 and play                |
| `z`     | jump to frame 4501 and play             |
| `e`     | jump to frame 15800 and play            |
| `space` | pause                                   |
| `p`     | white flash (about 100 ms)              |
| `f`     | toggle desktop fullscreen               |

## MIDI

All note messages are read on channel 16:

- **Note on** for a mapped note jumps to that note's cue frame and plays. The
  table comes from `midivideo.note_map.build_note_frame_map()`. Unmapped notes
  are logged and ignored.
- **Note off** pauses playback.
- **Note on 127** triggers the white flash.

On channel 3, **control change 29** moves the black bars. A value of 0 keeps
them fully off screen. Higher values slide both bars towards the middle. At
127, each bar covers half the height, so the picture is fully blacked out.

The bar position comes from `midivideo.commands.map_midi_rect_y`. It is an
integer linear mapping from one range to another, rounding toward zero.

## Using the pieces

The building blocks can be used on their own:

```python
from midivideo.note_map import build_note_frame_map, frame_for_note
from midivideo.commands import map_midi_rect_y

notes = build_note_frame_map()
frame_for_note(notes, 5)                       # 4505
frame_for_note(notes, 4)                       # None (not mapped)
map_midi_rect_y(127, 0, 127, -540, -270)       # -270
```

Other useful pieces:

- `midivideo.midi_input.list_devices()` lists the MIDI devices mido can see.
- `describe_devices()` turns that list into a readable report.
- `MidiInput` opens one input and reads it without blocking through `poll()`.
- `midivideo.video.VideoPlayer` accepts either a file path or a sequence of
  image arrays with an explicit `fps`. It provides `seek()`, `pause()`,
  `render()` and `close()`.
- `midivideo.effects.ScreenEffects` draws the flash and the bars onto a
  pygame surface.
- `midivideo.app.App` wires everything together. Its `run()` method is the
  render loop. You can pass in your own video, display and MIDI objects.

## What it does not do

- It plays no audio, only pictures.
- The cue table is fixed in `midivideo.note_map`. It cannot be loaded from a
  file or changed from the command line.
- The keyboard cue frames cannot be configured.
- Decoded frames are scaled to fill the window, whatever their aspect ratio.