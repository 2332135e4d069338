"""Discovery of MIDI devices and non-blocking reading from one input port."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import mido

log = logging.getLogger(__name__)

DEFAULT_DEVICE_ID = 3

_BACKEND_ERRORS = (ImportError, OSError, RuntimeError, ValueError)


class MidiDeviceError(Exception):
    """Raised when MIDI devices cannot be listed, chosen or opened."""


@dataclass(frozen=True)
class MidiDevice:
    """One MIDI endpoint as reported by the backend."""

    index: int
    name: str
    interface: str = ""
    is_input: bool = False
    is_output: bool = False
    default_input: bool = False
    default_output: bool = False


def _backend_name() -> str:
    backend = getattr(mido, "backend", None)
    name = getattr(backend, "name", "")
    return str(name) if name else ""


def list_devices() -> list[MidiDevice]:
    """Return every input, then every output, numbered in that order."""
    try:
        inputs = list(mido.get_input_names())
        outputs = list(mido.get_output_names())
    except _BACKEND_ERRORS as exc:
        raise MidiDeviceError(f"Could not list MIDI devices: {exc}") from exc

    interface = _backend_name()
    devices = [
        MidiDevice(index, name, interface, is_input=True, default_input=index == 0)
        for index, name in enumerate(inputs)
    ]
    devices.extend(
        MidiDevice(
            index,
            name,
            interface,
            is_output=True,
            default_output=index == len(inputs),
        )
        for index, name in enumerate(outputs, start=len(inputs))
    )
    return devices


def describe_devices(devices: Iterable[MidiDevice]) -> str:
    """Return a human-readable report of ``devices``."""
    devices = list(devices)
    lines = [f"{len(devices)} MIDI devices available"]
    for device in devices:
        lines.append(f"Device {device.index}:")
        lines.append(f"  Name      : {device.name}")
        lines.append(f"  Interface : {device.interface}")
        lines.append(f"  Input     : {'yes' if device.is_input else 'no'}")
        lines.append(f"  Output    : {'yes' if device.is_output else 'no'}")
        if device.default_input:
            lines.append("  > default input")
        if device.default_output:
            lines.append("  > default output")
    return "\n".join(lines)


class MidiInput:
    """An opened MIDI input port that is read without blocking.

    ``devices`` defaults to :func:`list_devices`; ``open_port`` takes a port
    name and returns an object with ``poll()`` and ``close()`` (by default
    ``mido.open_input``).
    """

    def __init__(
        self,
        device_id: int = DEFAULT_DEVICE_ID,
        devices: Sequence[MidiDevice] | None = None,
        open_port: Callable[[str], Any] | None = None,
    ) -> None:
        self._port: Any = None
        found = list(list_devices() if devices is None else devices)
        if not found:
            raise MidiDeviceError("No MIDI device detected")
        if not 0 <= device_id < len(found):
            raise MidiDeviceError(
                f"Device id {device_id} out of range: {len(found)} devices detected"
            )
        device = found[device_id]
        if not device.is_input:
            raise MidiDeviceError(f"Device {device_id} ({device.name}) is not an input")

        opener = open_port if open_port is not None else mido.open_input
        try:
            port = opener(device.name)
        except _BACKEND_ERRORS as exc:
            raise MidiDeviceError(f"Could not open MIDI input {device.name!r}: {exc}") from exc
        if port is None:
            raise MidiDeviceError(f"Could not open MIDI input {device.name!r}")

        self.device = device
        self._port = port
        log.info("MIDI input opened: device %d (%s)", device_id, device.name)
        log.info("%s", describe_devices(found))

    def __enter__(self) -> MidiInput:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """True once the port has been closed."""
        return self._port is None

    def poll(self) -> Any | None:
        """Return the next pending message, or None if nothing is waiting."""
        if self._port is None:
            raise MidiDeviceError("MIDI input is closed")
        return self._port.poll()

    def close(self) -> None:
        """Close the port; calling it again does nothing."""
        if self._port is not None:
            port, self._port = self._port, None
            port.close()