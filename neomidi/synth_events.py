"""Conversion of channel messages into software-synthesizer events."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import mido

PITCH_BEND_CENTER = 8192
"""Raw 14-bit pitch-bend value of the centre position."""

MIDI_CHANNELS = 16


class SynthEventKind(enum.Enum):
    """What a synthesizer event does."""

    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"
    POLYPHONIC_KEY_PRESSURE = "polyphonic_key_pressure"
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"
    CHANNEL_PRESSURE = "channel_pressure"
    PITCH_BEND = "pitch_bend"
    SYSTEM_RESET = "system_reset"
    ALL_NOTES_OFF = "all_notes_off"
    ALL_SOUND_OFF = "all_sound_off"


@dataclass(frozen=True)
class SynthEvent:
    """One event for a synthesizer; unused fields stay None."""

    kind: SynthEventKind
    channel: int | None = None
    key: int | None = None
    velocity: int | None = None
    controller: int | None = None
    value: int | None = None
    program: int | None = None


def to_synth_event(channel: int, message: mido.Message) -> SynthEvent:
    """Convert a channel voice message, sent on ``channel``, into a synth event."""
    kind = message.type
    if kind == "note_off":
        return SynthEvent(SynthEventKind.NOTE_OFF, channel, key=message.note)
    if kind == "note_on":
        return SynthEvent(
            SynthEventKind.NOTE_ON,
            channel,
            key=message.note,
            velocity=message.velocity,
        )
    if kind == "polytouch":
        return SynthEvent(
            SynthEventKind.POLYPHONIC_KEY_PRESSURE,
            channel,
            key=message.note,
            value=message.value,
        )
    if kind == "control_change":
        return SynthEvent(
            SynthEventKind.CONTROL_CHANGE,
            channel,
            controller=message.control,
            value=message.value,
        )
    if kind == "program_change":
        return SynthEvent(
            SynthEventKind.PROGRAM_CHANGE, channel, program=message.program
        )
    if kind == "aftertouch":
        return SynthEvent(
            SynthEventKind.CHANNEL_PRESSURE, channel, value=message.value
        )
    if kind == "pitchwheel":
        return SynthEvent(
            SynthEventKind.PITCH_BEND,
            channel,
            value=message.pitch + PITCH_BEND_CENTER,
        )
    raise ValueError(f"not a channel voice message: {kind}")


def stop_all_events() -> list[SynthEvent]:
    """Return the events that silence every channel."""
    events: list[SynthEvent] = []
    for channel in range(MIDI_CHANNELS):
        events.append(SynthEvent(SynthEventKind.ALL_NOTES_OFF, channel))
        events.append(SynthEvent(SynthEventKind.ALL_SOUND_OFF, channel))
    return events