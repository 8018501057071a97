"""User settings, stored as a RON document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from neomidi.resources import settings_path

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class ColorSchema:
    """Note colour for white keys (``base``) and black keys (``dark``)."""

    base: RGB = (0, 0, 0)
    dark: RGB = (0, 0, 0)


def default_color_schema() -> list[ColorSchema]:
    """Return the built-in track colours."""
    return [
        ColorSchema(base=(210, 89, 222), dark=(125, 69, 134)),
        ColorSchema(base=(93, 188, 255), dark=(48, 124, 255)),
        ColorSchema(base=(255, 126, 51), dark=(192, 73, 0)),
        ColorSchema(base=(51, 255, 102), dark=(0, 168, 2)),
        ColorSchema(base=(255, 51, 129), dark=(48, 124, 255)),
        ColorSchema(base=(210, 89, 222), dark=(125, 69, 134)),
    ]


DEFAULT_OUTPUT = "Buildin Synth"


@dataclass
class Config:
    """Application settings with their defaults."""

    speed_multiplier: float = 1.0
    animation_speed: float = 400.0
    playback_offset: float = 0.0
    vertical_guidelines: bool = False
    color_schema: list[ColorSchema] = field(default_factory=default_color_schema)
    background_color: RGB = (0, 0, 0)
    output: str | None = DEFAULT_OUTPUT
    input: str | None = None
    soundfont_path: Path | None = None
    last_opened_song: Path | None = None
    piano_range: tuple[int, int] = (21, 108)

    def piano_keys(self) -> range:
        """Return the MIDI keys of the piano range, both ends included."""
        low, high = self.piano_range
        return range(low, high + 1)

    def set_output(self, output: str | None) -> None:
        self.output = output

    def set_input(self, value: object | None) -> None:
        self.input = None if value is None else str(value)


# --- RON reading -----------------------------------------------------------

_LEXEME_PATTERN = re.compile(
    r"""
    (?P<skip>\s+|//[^\n]*|/\*.*?\*/)
    |(?P<string>"(?:[^"\\]|\\.)*")
    |(?P<number>[+-]?(?:\d[\d_]*(?:\.[\d_]*)?(?:[eE][+-]?\d+)?|\.\d+|inf\b|NaN\b))
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<punct>[()\[\]{}:,])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def _decode_string(literal: str) -> str:
    def replace(match: re.Match[str]) -> str:
        code = match.group(1)
        if code.startswith("u{"):
            return chr(int(code[2:-1], 16))
        if code.startswith("x") and len(code) == 3:
            return chr(int(code[1:], 16))
        try:
            return _SIMPLE_ESCAPES[code]
        except KeyError:
            raise ValueError(f"invalid escape: \\{code}") from None

    return _ESCAPE.sub(replace, literal[1:-1])


def _lex(text: str) -> list[tuple[str, str]]:
    lexemes: list[tuple[str, str]] = []
    position = 0
    while position < len(text):
        match = _LEXEME_PATTERN.match(text, position)
        if match is None:
            raise ValueError(f"unexpected character at offset {position}")
        kind = match.lastgroup
        if kind != "skip":
            lexemes.append((kind, match.group()))
        position = match.end()
    return lexemes


class _RonParser:
    def __init__(self, text: str) -> None:
        self._lexemes = _lex(text)
        self._pos = 0

    def parse(self) -> Any:
        value = self._value()
        if self._pos != len(self._lexemes):
            raise ValueError("trailing content after value")
        return value

    def _peek(self, offset: int = 0) -> tuple[str, str] | None:
        index = self._pos + offset
        return self._lexemes[index] if index < len(self._lexemes) else None

    def _next(self) -> tuple[str, str]:
        lexeme = self._peek()
        if lexeme is None:
            raise ValueError("unexpected end of document")
        self._pos += 1
        return lexeme

    def _expect(self, punct: str) -> None:
        if self._next() != ("punct", punct):
            raise ValueError(f"expected {punct!r}")

    def _at(self, punct: str) -> bool:
        return self._peek() == ("punct", punct)

    def _after_item(self, closing: str) -> bool:
        """Consume a separator; return True when the closing bracket follows."""
        if self._at(","):
            self._next()
            return self._at(closing)
        return True

    def _value(self) -> Any:
        kind, text = self._next()
        if kind == "string":
            return _decode_string(text)
        if kind == "number":
            cleaned = text.replace("_", "")
            if any(c in cleaned for c in ".eEnNa") or cleaned.lstrip("+-") == "inf":
                return float(cleaned)
            return int(cleaned)
        if kind == "ident":
            return self._ident(text)
        if text == "(":
            return self._paren()
        if text == "[":
            return self._list()
        if text == "{":
            return self._map()
        raise ValueError(f"unexpected {text!r}")

    def _ident(self, name: str) -> Any:
        if name == "true":
            return True
        if name == "false":
            return False
        if name == "None":
            return None
        if name == "Some":
            self._expect("(")
            inner = self._value()
            self._after_item(")")
            self._expect(")")
            return inner
        if self._at("("):
            self._next()
            return self._paren()
        return name

    def _paren(self) -> Any:
        if self._at(")"):
            self._next()
            return ()
        following = self._peek(1)
        if self._peek() is not None and self._peek()[0] == "ident" and following == (
            "punct",
            ":",
        ):
            fields: dict[str, Any] = {}
            while not self._at(")"):
                kind, name = self._next()
                if kind != "ident":
                    raise ValueError(f"expected field name, got {name!r}")
                self._expect(":")
                fields[name] = self._value()
                if self._after_item(")") and not self._at(")"):
                    raise ValueError("expected ',' or ')'")
            self._next()
            return fields
        items: list[Any] = []
        while not self._at(")"):
            items.append(self._value())
            if self._after_item(")") and not self._at(")"):
                raise ValueError("expected ',' or ')'")
        self._next()
        return tuple(items)

    def _list(self) -> list[Any]:
        items: list[Any] = []
        while not self._at("]"):
            items.append(self._value())
            if self._after_item("]") and not self._at("]"):
                raise ValueError("expected ',' or ']'")
        self._next()
        return items

    def _map(self) -> dict[Any, Any]:
        entries: dict[Any, Any] = {}
        while not self._at("}"):
            key = self._value()
            self._expect(":")
            entries[key] = self._value()
            if self._after_item("}") and not self._at("}"):
                raise ValueError("expected ',' or '}'")
        self._next()
        return entries


# --- conversion into Config ------------------------------------------------


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name}: expected a number")
    return float(value)


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name}: expected a boolean")
    return value


def _as_u8_tuple(value: Any, name: str, length: int) -> tuple[int, ...]:
    if not isinstance(value, (tuple, list)) or len(value) != length:
        raise ValueError(f"{name}: expected {length} values")
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
            raise ValueError(f"{name}: values must be integers in 0..=255")
    return tuple(value)


def _as_rgb(value: Any, name: str) -> RGB:
    return _as_u8_tuple(value, name, 3)  # type: ignore[return-value]


def _as_range(value: Any, name: str) -> tuple[int, int]:
    return _as_u8_tuple(value, name, 2)  # type: ignore[return-value]


def _as_optional_str(value: Any, name: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name}: expected a string")
    return value


def _as_optional_path(value: Any, name: str) -> Path | None:
    text = _as_optional_str(value, name)
    return None if text is None else Path(text)


def _as_schemas(value: Any, name: str) -> list[ColorSchema]:
    if not isinstance(value, list):
        raise ValueError(f"{name}: expected a list")
    schemas: list[ColorSchema] = []
    for entry in value:
        if not isinstance(entry, dict) or "base" not in entry or "dark" not in entry:
            raise ValueError(f"{name}: entries need 'base' and 'dark'")
        schemas.append(
            ColorSchema(
                base=_as_rgb(entry["base"], f"{name}.base"),
                dark=_as_rgb(entry["dark"], f"{name}.dark"),
            )
        )
    return schemas


_FIELDS: dict[str, Callable[[Any, str], Any]] = {
    "speed_multiplier": _as_float,
    "animation_speed": _as_float,
    "playback_offset": _as_float,
    "vertical_guidelines": _as_bool,
    "color_schema": _as_schemas,
    "background_color": _as_rgb,
    "output": _as_optional_str,
    "input": _as_optional_str,
    "soundfont_path": _as_optional_path,
    "last_opened_song": _as_optional_path,
    "piano_range": _as_range,
}


def _config_from_text(text: str) -> Config:
    document = _RonParser(text).parse()
    if not isinstance(document, dict):
        raise ValueError("settings must be a struct")
    values = {
        name: convert(document[name], name)
        for name, convert in _FIELDS.items()
        if name in document
    }
    return Config(**values)


# --- RON writing -----------------------------------------------------------


def _ron_string(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def _ron_tuple(values: tuple[int, ...]) -> str:
    return "(" + ", ".join(str(v) for v in values) + ")"


def _ron_option(value: object | None) -> str:
    return "None" if value is None else f"Some({_ron_string(str(value))})"


def _config_to_text(config: Config) -> str:
    indent = "    "
    schema_lines = []
    for schema in config.color_schema:
        schema_lines.append(f"{indent * 2}(")
        schema_lines.append(f"{indent * 3}base: {_ron_tuple(schema.base)},")
        schema_lines.append(f"{indent * 3}dark: {_ron_tuple(schema.dark)},")
        schema_lines.append(f"{indent * 2}),")
    lines = [
        "(",
        f"{indent}speed_multiplier: {float(config.speed_multiplier)!r},",
        f"{indent}animation_speed: {float(config.animation_speed)!r},",
        f"{indent}playback_offset: {float(config.playback_offset)!r},",
        f"{indent}vertical_guidelines: {'true' if config.vertical_guidelines else 'false'},",
        f"{indent}color_schema: [",
        *schema_lines,
        f"{indent}],",
        f"{indent}background_color: {_ron_tuple(config.background_color)},",
        f"{indent}output: {_ron_option(config.output)},",
        f"{indent}input: {_ron_option(config.input)},",
        f"{indent}soundfont_path: {_ron_option(config.soundfont_path)},",
        f"{indent}last_opened_song: {_ron_option(config.last_opened_song)},",
        f"{indent}piano_range: {_ron_tuple(config.piano_range)},",
        ")",
    ]
    return "\n".join(lines)


# --- public I/O ------------------------------------------------------------


def load_config(path: str | Path | None = None) -> Config:
    """Load settings from ``path`` (default: the settings file).

    A missing or unreadable file gives the defaults; a malformed one is
    logged and also gives the defaults.
    """
    target = Path(path) if path is not None else settings_path()
    if target is None:
        return Config()
    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return Config()
    try:
        return _config_from_text(text)
    except ValueError as err:
        logger.error("invalid settings file %s: %s", target, err)
        return Config()


def save_config(config: Config, path: str | Path | None = None) -> Path | None:
    """Write settings to ``path`` (default: the settings file).

    Returns the path written, or None when nothing could be written.
    """
    target = Path(path) if path is not None else settings_path()
    if target is None:
        return None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(_config_to_text(config), encoding="utf-8")
    except OSError:
        return None
    return target