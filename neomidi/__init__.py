"""MIDI tempo maps, port management, settings and piano-roll display helpers."""

__version__ = "0.1.0"