"""Live video playback with cue jumps, flash and black bars driven by MIDI and keys."""

__version__ = "0.1.0"