"""Enumeration of MIDI ports and connections to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import mido

_INIT_MESSAGE = "MIDI support could not be initialized"


class InitError(Exception):
    """MIDI support could not be initialized."""

    def __init__(self, message: str = _INIT_MESSAGE) -> None:
        super().__init__(message)


class SendError(Exception):
    """A MIDI message could not be sent."""

    def __init__(self, message: str, *, invalid_data: bool = False) -> None:
        super().__init__(message)
        self.invalid_data = invalid_data


@dataclass(frozen=True)
class MidiOutputPort:
    """An output port, identified by its name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MidiInputPort:
    """An input port, identified by its name."""

    name: str

    def __str__(self) -> str:
        return self.name


class MidiOutputConnection:
    """An open output port."""

    def __init__(self, port: Any) -> None:
        self._port = port

    def send(self, message: bytes) -> None:
        """Send one raw MIDI message."""
        try:
            parsed = mido.Message.from_bytes(list(message))
        except (ValueError, TypeError) as exc:
            raise SendError(f"invalid MIDI message: {exc}", invalid_data=True) from exc
        try:
            self._port.send(parsed)
        except Exception as exc:
            raise SendError(f"could not send MIDI message: {exc}") from exc

    def close(self) -> None:
        self._port.close()

    def __enter__(self) -> MidiOutputConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MidiInputConnection:
    """An open input port delivering raw messages to a callback."""

    def __init__(self, port: Any) -> None:
        self._port = port

    def close(self) -> None:
        self._port.close()

    def __enter__(self) -> MidiInputConnection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _probe(list_names: Callable[[], list[str]]) -> None:
    try:
        list_names()
    except Exception as exc:
        raise InitError() from exc


def _names(list_names: Callable[[], list[str]]) -> list[str]:
    try:
        return list(list_names())
    except Exception:
        return []


class MidiOutputManager:
    """Lists output ports and opens connections to them.

    ``backend`` provides ``get_output_names`` and ``open_output``; by default
    the installed mido backend is used.
    """

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend if backend is not None else mido
        _probe(self._backend.get_output_names)

    def outputs(self) -> list[MidiOutputPort]:
        return [MidiOutputPort(name) for name in _names(self._backend.get_output_names)]

    def connect_output(self, port: MidiOutputPort) -> MidiOutputConnection | None:
        """Open ``port``; return None if it is gone or cannot be opened."""
        if port.name not in _names(self._backend.get_output_names):
            return None
        try:
            handle = self._backend.open_output(port.name)
        except Exception:
            return None
        return MidiOutputConnection(handle)


class MidiInputManager:
    """Lists input ports and opens connections to them.

    ``backend`` provides ``get_input_names`` and ``open_input``; by default
    the installed mido backend is used.
    """

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend if backend is not None else mido
        _probe(self._backend.get_input_names)

    def inputs(self) -> list[MidiInputPort]:
        return [MidiInputPort(name) for name in _names(self._backend.get_input_names)]

    def connect_input(
        self, port: MidiInputPort, callback: Callable[[bytes], None]
    ) -> MidiInputConnection | None:
        """Open ``port`` and pass each incoming message's bytes to ``callback``."""
        if port.name not in _names(self._backend.get_input_names):
            return None

        def deliver(message: mido.Message) -> None:
            callback(bytes(message.bytes()))

        try:
            handle = self._backend.open_input(port.name, callback=deliver)
        except Exception:
            return None
        return MidiInputConnection(handle)