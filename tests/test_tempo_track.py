from datetime import timedelta

import mido

from neomidi.tempo_track import (
    DEFAULT_TEMPO,
    TempoTrack,
    build_tempo_track,
    pulse_to_duration,
)


def _tempo(tempo, time):
    return mido.MetaMessage("set_tempo", tempo=tempo, time=time)


def test_one_quarter_note_at_default_tempo():
    assert pulse_to_duration(480, DEFAULT_TEMPO, 480) == timedelta(
        microseconds=DEFAULT_TEMPO
    )


def test_pulse_to_duration_floors():
    third = pulse_to_duration(1, DEFAULT_TEMPO, 3)
    assert third * 3 <= timedelta(microseconds=DEFAULT_TEMPO)
    assert third.microseconds == third.total_seconds() * 1_000_000 % 1_000_000


def test_empty_track_uses_default_tempo():
    track = TempoTrack(480)
    assert track.tempo_event_for_pulses(100) is None
    assert track.pulses_to_duration(480) == timedelta(microseconds=DEFAULT_TEMPO)


def test_duplicate_tempo_events_are_merged():
    tracks = [[_tempo(250_000, 960)], [_tempo(250_000, 960)]]
    track = build_tempo_track(tracks, 480)
    assert len(track.events) == 1
    assert track.events[0].absolute_pulses == 960


def test_events_are_sorted_by_pulses():
    tracks = [[_tempo(300_000, 2000)], [_tempo(250_000, 100)]]
    track = build_tempo_track(tracks, 480)
    pulses = [event.absolute_pulses for event in track.events]
    assert pulses == sorted(pulses)
    timestamps = [event.timestamp for event in track.events]
    assert timestamps == sorted(timestamps)


def test_first_event_timestamp_at_default_tempo():
    track = build_tempo_track([[_tempo(250_000, 960)]], 480)
    assert track.events[0].timestamp == pulse_to_duration(960, DEFAULT_TEMPO, 480)


def test_lookup_before_and_at_event():
    track = build_tempo_track([[_tempo(250_000, 960)]], 480)
    assert track.tempo_event_for_pulses(959) is None
    assert track.tempo_event_for_pulses(960).tempo == 250_000
    assert track.tempo_event_for_pulses(5000).tempo == 250_000


def test_pulses_to_duration_continues_after_change():
    track = build_tempo_track([[_tempo(250_000, 960)]], 480)
    event = track.events[0]
    assert track.pulses_to_duration(960) == event.timestamp
    assert track.pulses_to_duration(960 + 480) == event.timestamp + pulse_to_duration(
        480, 250_000, 480
    )


def test_tempo_is_monotonic_in_pulses():
    track = build_tempo_track([[_tempo(250_000, 100), _tempo(800_000, 300)]], 96)
    durations = [track.pulses_to_duration(p) for p in range(0, 1000, 7)]
    assert durations == sorted(durations)


def test_non_tempo_messages_ignored():
    tracks = [[mido.Message("note_on", note=60, velocity=10, time=50)]]
    assert build_tempo_track(tracks, 480).events == ()