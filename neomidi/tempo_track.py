"""Tempo map of a MIDI file: conversion from pulses to wall-clock time."""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable

import mido

DEFAULT_TEMPO = 500_000
"""Microseconds per quarter note (120 BPM)."""


def pulse_to_duration(
    pulses: int, tempo: int, pulses_per_quarter_note: int
) -> timedelta:
    """Convert a pulse count at a fixed tempo into a duration, floored to microseconds."""
    quarters = pulses / pulses_per_quarter_note
    # Floored to keep timing consistent with established players.
    return timedelta(microseconds=math.floor(quarters * tempo))


@dataclass(frozen=True)
class TempoEvent:
    """A tempo change at an absolute pulse position."""

    absolute_pulses: int
    timestamp: timedelta
    tempo: int
    """Tempo in microseconds per quarter note."""


@dataclass(frozen=True)
class TempoTrack:
    """Sorted tempo changes of a file plus its time division."""

    pulses_per_quarter_note: int
    events: tuple[TempoEvent, ...] = ()

    def tempo_event_for_pulses(self, pulses: int) -> TempoEvent | None:
        """Return the last tempo change at or before ``pulses``, if any."""
        index = bisect.bisect_right(
            self.events, pulses, key=lambda event: event.absolute_pulses
        )
        return self.events[index - 1] if index > 0 else None

    def pulses_to_duration(self, event_pulses: int) -> timedelta:
        """Return the wall-clock time of an absolute pulse position."""
        event = self.tempo_event_for_pulses(event_pulses)
        if event is None:
            start, start_pulses, tempo = timedelta(0), 0, DEFAULT_TEMPO
        else:
            start, start_pulses, tempo = (
                event.timestamp,
                event.absolute_pulses,
                event.tempo,
            )
        return start + pulse_to_duration(
            event_pulses - start_pulses, tempo, self.pulses_per_quarter_note
        )


def build_tempo_track(
    tracks: Iterable[Iterable[mido.Message]], pulses_per_quarter_note: int
) -> TempoTrack:
    """Collect the tempo changes of all tracks into one tempo map.

    Changes at the same pulse in several tracks are merged; the last one wins.
    """
    tempos: dict[int, int] = {}
    for events in tracks:
        pulses = 0
        for message in events:
            pulses += message.time
            if message.is_meta and message.type == "set_tempo":
                tempos[pulses] = message.tempo

    events: list[TempoEvent] = []
    previous_pulses = 0
    running_tempo = DEFAULT_TEMPO
    elapsed = timedelta(0)
    for pulses in sorted(tempos):
        elapsed += pulse_to_duration(
            pulses - previous_pulses, running_tempo, pulses_per_quarter_note
        )
        events.append(TempoEvent(pulses, elapsed, tempos[pulses]))
        running_tempo = tempos[pulses]
        previous_pulses = pulses

    return TempoTrack(pulses_per_quarter_note, tuple(events))