# neomidi

Building blocks for a piano-learning application that works with MIDI:
a tempo map that turns pulse positions into wall-clock time, MIDI port
listing and connections, an output manager that remembers sounding notes,
conversion of channel messages into synthesizer events, persistent user
settings, and the state behind a falling-notes keyboard display.

## Installation

```
pip install .
```

MIDI port access goes through `mido`; opening real ports additionally needs
a `mido` backend such as `python-rtmidi` installed on your system.

## Tempo map

`neomidi.tempo_track.build_tempo_track(tracks, pulses_per_quarter_note)`
collects the `set_tempo` meta messages of every track (message `time` values
are delta pulses, as in `mido` tracks) into a `TempoTrack`. Changes at the
same pulse are merged. Before the first change the tempo is 500 000
microseconds per quarter note (120 BPM).

```python
import mido
from neomidi.tempo_track import build_tempo_track

smf = mido.MidiFile("song.mid")
tempo = build_tempo_track(smf.tracks, smf.ticks_per_beat)
print(tempo.pulses_to_duration(960))          # a datetime.timedelta
print(tempo.tempo_event_for_pulses(960))      # last TempoEvent at or before, or None
```

`pulse_to_duration(pulses, tempo, pulses_per_quarter_note)` converts at a
fixed tempo, flooring to whole microseconds.

## MIDI ports

`neomidi.midi_io.MidiOutputManager` and `MidiInputManager` list ports
(`outputs()`, `inputs()`) and open them. `connect_output(port)` returns a
`MidiOutputConnection` whose `send(bytes)` raises `SendError` on invalid data
or a failed send; `connect_input(port, callback)` passes the raw bytes of each
incoming message to `callback`. Both return `None` when the port is gone or
cannot be opened. Creating a manager raises `InitError` when MIDI support is
unavailable. A different backend object (with `get_output_names`/`open_output`
or `get_input_names`/`open_input`) can be passed in place of `mido`.

## Output manager

`neomidi.output_manager.OutputManager` lists the available outputs (one
`OutputDescriptor` per MIDI port, followed by the silent "No Output") and
forwards messages to the connected one:

```python
import mido
from neomidi.output_manager import OutputManager

manager = OutputManager()
manager.connect(manager.outputs()[0])
manager.midi_event(0, mido.Message("note_on", note=60, velocity=100))
released = manager.stop_all()   # [(60, 0)] when a MIDI port is connected
```

A MIDI output remembers which `(key, channel)` pairs are held and sends
note-off for each of them on `stop_all()` and when it is replaced. If
connecting fails, the current output is kept.

## Synthesizer events

`neomidi.synth_events.to_synth_event(channel, message)` turns a channel
voice message into a `SynthEvent` (pitch bend as a raw 14-bit value centred
on 8192); other messages raise `ValueError`. `stop_all_events()` returns
"all notes off" and "all sound off" for each of the 16 channels.

## Settings

`neomidi.config.Config` holds the settings with their defaults (speed,
animation speed, colour schemes, background colour, chosen output and input,
sound font, last opened song, piano range 21–108). `load_config(path)` reads
a RON document, falling back to the defaults when the file is missing or
malformed; `save_config(config, path)` writes one. Without a path both use
`neomidi.resources.settings_path()`. `neomidi.resources.default_soundfont_path()`
returns the first existing default sound font, if any.

## Display helpers

- `neomidi.render`: `Color` (sRGB with linear conversion), `KeyState` (colour
  of a key held by the user or by a playing file), `border_radius`,
  `QuadInstance`, `QuadBatch`, `NoteInstance`, `WaterfallClock` and
  `BackgroundClock`.
- `neomidi.geometry`: `Point` and `Size`.
- `neomidi.keymap`: mapping of logical keys to `KeyCode`, mouse buttons,
  `Modifiers`, window placement on a `Monitor`, fullscreen and visibility by
  `Mode`, and physical-to-logical cursor coordinates.

## What this package does not do

It does not read MIDI files into notes and tracks, keep a playback clock,
track program changes per channel, name General MIDI instruments, or listen
to an input port on its own. It has no command-line player and does not draw
anything on screen or produce sound itself; the display helpers only hold the
values a renderer would use.