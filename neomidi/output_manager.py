"""Choice of where played notes go, and the connection that sends them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import mido

from neomidi.midi_io import (
    InitError,
    MidiOutputConnection,
    MidiOutputManager,
    MidiOutputPort,
    SendError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MidiPortInfo:
    """An output port together with its position in the port list."""

    id: int
    port: MidiOutputPort

    def __str__(self) -> str:
        return str(self.port)


@dataclass(frozen=True)
class OutputDescriptor:
    """An output that can be chosen; without a port it is the silent output."""

    port: MidiPortInfo | None = None

    def __str__(self) -> str:
        return "No Output" if self.port is None else str(self.port)


DUMMY_OUTPUT = OutputDescriptor()


class _Output(Protocol):
    def midi_event(self, channel: int, message: mido.Message) -> None: ...

    def stop_all(self) -> list[tuple[int, int]]: ...

    def close(self) -> None: ...


class DummyOutput:
    """An output that discards everything, counting what it dropped."""

    def __init__(self) -> None:
        self.dropped = 0
        self.closed = False

    def midi_event(self, channel: int, message: mido.Message) -> None:
        """Discard ``message``."""
        self.dropped += 1

    def stop_all(self) -> list[tuple[int, int]]:
        """Nothing is ever held, so nothing is released."""
        return []

    def close(self) -> None:
        self.closed = True


class MidiOutput:
    """Sends messages to a MIDI port and remembers which notes are held."""

    def __init__(self, connection: MidiOutputConnection) -> None:
        self._connection = connection
        self._active: set[tuple[int, int]] = set()

    @property
    def active_notes(self) -> frozenset[tuple[int, int]]:
        """Held notes as ``(key, channel)`` pairs."""
        return frozenset(self._active)

    def _send(self, message: mido.Message) -> None:
        try:
            self._connection.send(bytes(message.bytes()))
        except SendError:
            pass

    def midi_event(self, channel: int, message: mido.Message) -> None:
        """Send ``message`` on ``channel``."""
        if message.type == "note_off":
            self._active.discard((message.note, channel))
        elif message.type == "note_on":
            self._active.add((message.note, channel))
        self._send(message.copy(channel=channel, time=0))

    def stop_all(self) -> list[tuple[int, int]]:
        """Release every held note; return the released ``(key, channel)`` pairs."""
        active, self._active = self._active, set()
        released = sorted(active)
        for key, channel in released:
            self._send(mido.Message("note_off", channel=channel, note=key, velocity=0))
        return released

    def close(self) -> None:
        """Release held notes and close the port."""
        self.stop_all()
        self._connection.close()

    def __enter__(self) -> MidiOutput:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MidiBackend:
    """Hardware and virtual MIDI output ports."""

    def __init__(self, manager: MidiOutputManager | None = None) -> None:
        self._manager = manager if manager is not None else MidiOutputManager()

    def outputs(self) -> list[OutputDescriptor]:
        return [
            OutputDescriptor(MidiPortInfo(index, port))
            for index, port in enumerate(self._manager.outputs())
        ]

    def new_output_connection(self, info: MidiPortInfo) -> MidiOutput | None:
        connection = self._manager.connect_output(info.port)
        return MidiOutput(connection) if connection is not None else None


_AUTO = object()


class OutputManager:
    """Holds the current output and forwards messages to it."""

    def __init__(self, midi_backend: MidiBackend | None | object = _AUTO) -> None:
        if midi_backend is _AUTO:
            try:
                midi_backend = MidiBackend()
            except InitError as err:
                logger.error("%s", err)
                midi_backend = None
        self._midi_backend: MidiBackend | None = midi_backend  # type: ignore[assignment]
        self._descriptor = DUMMY_OUTPUT
        self._connection: _Output = DummyOutput()

    @property
    def current(self) -> OutputDescriptor:
        """The output currently connected."""
        return self._descriptor

    def outputs(self) -> list[OutputDescriptor]:
        """All available outputs, ending with the silent one."""
        outputs: list[OutputDescriptor] = []
        if self._midi_backend is not None:
            outputs.extend(self._midi_backend.outputs())
        outputs.append(DUMMY_OUTPUT)
        return outputs

    def connect(self, descriptor: OutputDescriptor) -> None:
        """Switch to ``descriptor``; keep the current output if that fails."""
        if descriptor == self._descriptor:
            return
        if descriptor.port is None:
            connection: _Output | None = DummyOutput()
        elif self._midi_backend is not None:
            connection = self._midi_backend.new_output_connection(descriptor.port)
        else:
            connection = None
        if connection is None:
            return
        previous = self._connection
        self._descriptor, self._connection = descriptor, connection
        previous.close()

    def midi_event(self, channel: int, message: mido.Message) -> None:
        self._connection.midi_event(channel, message)

    def stop_all(self) -> list[tuple[int, int]]:
        """Release held notes on the current output; return what was released."""
        return self._connection.stop_all()