from pathlib import Path

import pytest

from neomidi.config import (
    ColorSchema,
    Config,
    default_color_schema,
    load_config,
    save_config,
)


def test_defaults_match_source_values():
    config = Config()
    assert config.speed_multiplier == 1.0
    assert config.animation_speed == 400.0
    assert config.playback_offset == 0.0
    assert config.vertical_guidelines is False
    assert config.output == "Buildin Synth"
    assert config.input is None
    assert config.piano_range == (21, 108)
    assert config.color_schema == default_color_schema()


def test_default_color_schema_first_entry():
    schemas = default_color_schema()
    assert len(schemas) == 6
    assert schemas[0] == ColorSchema(base=(210, 89, 222), dark=(125, 69, 134))
    assert schemas[0] == schemas[-1]


def test_piano_keys_inclusive():
    keys = Config(piano_range=(21, 108)).piano_keys()
    assert keys[0] == 21
    assert keys[-1] == 108
    assert 108 in keys


def test_set_output_and_input():
    config = Config()
    config.set_output(None)
    assert config.output is None
    config.set_input(42)
    assert config.input == "42"
    config.set_input(None)
    assert config.input is None


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.ron") == Config()


def test_round_trip(tmp_path):
    original = Config(
        speed_multiplier=1.25,
        vertical_guidelines=True,
        color_schema=[ColorSchema(base=(1, 2, 3), dark=(4, 5, 6))],
        background_color=(10, 20, 30),
        output=None,
        input='Keyboard "A"\\1',
        soundfont_path=Path("/fonts/piano.sf2"),
        last_opened_song=Path("/songs/song.mid"),
        piano_range=(36, 96),
    )
    path = tmp_path / "nested" / "settings.ron"
    assert save_config(original, path) == path
    assert load_config(path) == original


def test_saved_text_uses_ron_options(tmp_path):
    path = save_config(Config(), tmp_path / "settings.ron")
    text = path.read_text()
    assert 'output: Some("Buildin Synth")' in text
    assert "input: None" in text


def test_partial_file_fills_defaults(tmp_path):
    path = tmp_path / "settings.ron"
    path.write_text(
        """
        // user settings
        (
            speed_multiplier: 2.5,
            output: None,
            color_schema: [(base: (1, 2, 3), dark: (4, 5, 6))],
            /* block comment */
            last_opened_song: Some("/tmp/song.mid"),
            unknown_field: true,
        )
        """
    )
    config = load_config(path)
    assert config.speed_multiplier == 2.5
    assert config.output is None
    assert config.color_schema == [ColorSchema(base=(1, 2, 3), dark=(4, 5, 6))]
    assert config.last_opened_song == Path("/tmp/song.mid")
    assert config.animation_speed == 400.0
    assert config.piano_range == (21, 108)


def test_missing_output_uses_default_output(tmp_path):
    path = tmp_path / "settings.ron"
    path.write_text("(input: Some(\"Port 1\"))")
    config = load_config(path)
    assert config.output == "Buildin Synth"
    assert config.input == "Port 1"


@pytest.mark.parametrize(
    "text",
    [
        "(speed_multiplier: ",
        "(speed_multiplier: \"fast\")",
        "(piano_range: (21, 300))",
        "(color_schema: [(base: (1, 2, 3))])",
        "[1, 2, 3]",
        "(a: 1) trailing",
    ],
)
def test_malformed_file_gives_defaults(tmp_path, text):
    path = tmp_path / "settings.ron"
    path.write_text(text)
    assert load_config(path) == Config()