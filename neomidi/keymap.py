"""Window-system input mapped onto the user-interface vocabulary.

Covers key codes, mouse buttons, modifier flags, window placement on a
monitor, fullscreen and visibility modes, and cursor coordinates.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from neomidi.geometry import Point


class _PositionKind(enum.Enum):
    DEFAULT = "default"
    CENTERED = "centered"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class Position:
    """Where a new window goes on the screen.

    The platform default, centred on the monitor, or at specific logical
    coordinates ``(x, y)``.
    """

    kind: _PositionKind = _PositionKind.DEFAULT
    x: int = 0
    y: int = 0

    @classmethod
    def default(cls) -> Position:
        return cls(_PositionKind.DEFAULT)

    @classmethod
    def centered(cls) -> Position:
        return cls(_PositionKind.CENTERED)

    @classmethod
    def specific(cls, x: int, y: int) -> Position:
        return cls(_PositionKind.SPECIFIC, x, y)

    @property
    def is_default(self) -> bool:
        return self.kind is _PositionKind.DEFAULT

    @property
    def is_centered(self) -> bool:
        return self.kind is _PositionKind.CENTERED


class Mode(enum.Enum):
    """How the application window is shown."""

    WINDOWED = "windowed"
    FULLSCREEN = "fullscreen"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class Monitor:
    """A monitor: physical origin, physical size and scale factor."""

    position: tuple[int, int] = (0, 0)
    size: tuple[int, int] = (0, 0)
    scale_factor: float = 1.0


class _WindowPlacement(NamedTuple):
    """A window position; ``physical`` tells physical from logical pixels."""

    x: float
    y: float
    physical: bool


class _Borderless(NamedTuple):
    """Borderless fullscreen; ``monitor`` None means the current monitor."""

    monitor: Monitor | None


class KeyCode(enum.Enum):
    """Keys the user interface distinguishes."""

    KEY_1 = enum.auto()
    KEY_2 = enum.auto()
    KEY_3 = enum.auto()
    KEY_4 = enum.auto()
    KEY_5 = enum.auto()
    KEY_6 = enum.auto()
    KEY_7 = enum.auto()
    KEY_8 = enum.auto()
    KEY_9 = enum.auto()
    KEY_0 = enum.auto()
    A = enum.auto()
    B = enum.auto()
    C = enum.auto()
    D = enum.auto()
    E = enum.auto()
    F = enum.auto()
    G = enum.auto()
    H = enum.auto()
    I = enum.auto()  # noqa: E741
    J = enum.auto()
    K = enum.auto()
    L = enum.auto()
    M = enum.auto()
    N = enum.auto()
    O = enum.auto()  # noqa: E741
    P = enum.auto()
    Q = enum.auto()
    R = enum.auto()
    S = enum.auto()
    T = enum.auto()
    U = enum.auto()
    V = enum.auto()
    W = enum.auto()
    X = enum.auto()
    Y = enum.auto()
    Z = enum.auto()
    ESCAPE = enum.auto()
    F1 = enum.auto()
    F2 = enum.auto()
    F3 = enum.auto()
    F4 = enum.auto()
    F5 = enum.auto()
    F6 = enum.auto()
    F7 = enum.auto()
    F8 = enum.auto()
    F9 = enum.auto()
    F10 = enum.auto()
    F11 = enum.auto()
    F12 = enum.auto()
    F13 = enum.auto()
    F14 = enum.auto()
    F15 = enum.auto()
    F16 = enum.auto()
    F17 = enum.auto()
    F18 = enum.auto()
    F19 = enum.auto()
    F20 = enum.auto()
    F21 = enum.auto()
    F22 = enum.auto()
    F23 = enum.auto()
    F24 = enum.auto()
    SNAPSHOT = enum.auto()
    SCROLL = enum.auto()
    PAUSE = enum.auto()
    INSERT = enum.auto()
    HOME = enum.auto()
    DELETE = enum.auto()
    END = enum.auto()
    PAGE_DOWN = enum.auto()
    PAGE_UP = enum.auto()
    LEFT = enum.auto()
    UP = enum.auto()
    RIGHT = enum.auto()
    DOWN = enum.auto()
    BACKSPACE = enum.auto()
    ENTER = enum.auto()
    SPACE = enum.auto()
    COMPOSE = enum.auto()
    NUMLOCK = enum.auto()
    APPS = enum.auto()
    CONVERT = enum.auto()
    MAIL = enum.auto()
    MEDIA_SELECT = enum.auto()
    MEDIA_STOP = enum.auto()
    MUTE = enum.auto()
    NAVIGATE_FORWARD = enum.auto()
    NAVIGATE_BACKWARD = enum.auto()
    NEXT_TRACK = enum.auto()
    NO_CONVERT = enum.auto()
    PLAY_PAUSE = enum.auto()
    POWER = enum.auto()
    PREV_TRACK = enum.auto()
    SLEEP = enum.auto()
    TAB = enum.auto()
    VOLUME_DOWN = enum.auto()
    VOLUME_UP = enum.auto()
    WAKE = enum.auto()
    WEB_BACK = enum.auto()
    WEB_FAVORITES = enum.auto()
    WEB_FORWARD = enum.auto()
    WEB_HOME = enum.auto()
    WEB_REFRESH = enum.auto()
    WEB_SEARCH = enum.auto()
    WEB_STOP = enum.auto()
    COPY = enum.auto()
    PASTE = enum.auto()
    CUT = enum.auto()
    UNLABELED = enum.auto()


_CHARACTER_KEYS: dict[str, KeyCode] = {
    **{digit: KeyCode[f"KEY_{digit}"] for digit in "1234567890"},
    **{letter: KeyCode[letter.upper()] for letter in "abcdefghijklmnopqrstuvwxyz"},
}

_NAMED_KEYS: dict[str, KeyCode] = {
    "Escape": KeyCode.ESCAPE,
    **{f"F{n}": KeyCode[f"F{n}"] for n in range(1, 25)},
    "PrintScreen": KeyCode.SNAPSHOT,
    "ScrollLock": KeyCode.SCROLL,
    "Pause": KeyCode.PAUSE,
    "Insert": KeyCode.INSERT,
    "Home": KeyCode.HOME,
    "Delete": KeyCode.DELETE,
    "End": KeyCode.END,
    "PageDown": KeyCode.PAGE_DOWN,
    "PageUp": KeyCode.PAGE_UP,
    "ArrowLeft": KeyCode.LEFT,
    "ArrowUp": KeyCode.UP,
    "ArrowRight": KeyCode.RIGHT,
    "ArrowDown": KeyCode.DOWN,
    "Backspace": KeyCode.BACKSPACE,
    "Enter": KeyCode.ENTER,
    "Space": KeyCode.SPACE,
    "Compose": KeyCode.COMPOSE,
    "NumLock": KeyCode.NUMLOCK,
    "AppSwitch": KeyCode.APPS,
    "Convert": KeyCode.CONVERT,
    "LaunchMail": KeyCode.MAIL,
    "MediaApps": KeyCode.MEDIA_SELECT,
    "MediaStop": KeyCode.MEDIA_STOP,
    "AudioVolumeMute": KeyCode.MUTE,
    "MediaStepForward": KeyCode.NAVIGATE_FORWARD,
    "MediaStepBackward": KeyCode.NAVIGATE_BACKWARD,
    "MediaSkipForward": KeyCode.NEXT_TRACK,
    "NonConvert": KeyCode.NO_CONVERT,
    "MediaPlayPause": KeyCode.PLAY_PAUSE,
    "Power": KeyCode.POWER,
    "MediaSkipBackward": KeyCode.PREV_TRACK,
    "PowerOff": KeyCode.SLEEP,
    "Tab": KeyCode.TAB,
    "AudioVolumeDown": KeyCode.VOLUME_DOWN,
    "AudioVolumeUp": KeyCode.VOLUME_UP,
    "WakeUp": KeyCode.WAKE,
    "BrowserBack": KeyCode.WEB_BACK,
    "BrowserFavorites": KeyCode.WEB_FAVORITES,
    "BrowserForward": KeyCode.WEB_FORWARD,
    "BrowserHome": KeyCode.WEB_HOME,
    "BrowserRefresh": KeyCode.WEB_REFRESH,
    "BrowserSearch": KeyCode.WEB_SEARCH,
    "BrowserStop": KeyCode.WEB_STOP,
    "Copy": KeyCode.COPY,
    "Paste": KeyCode.PASTE,
    "Cut": KeyCode.CUT,
}


def key_code(key: str) -> KeyCode:
    """Map a logical key to a key code.

    A single character is looked up among digits and lower-case letters;
    a longer string is taken as a named key such as ``"Escape"`` or
    ``"ArrowLeft"``. Anything else is ``KeyCode.UNLABELED``.
    """
    table = _CHARACTER_KEYS if len(key) == 1 else _NAMED_KEYS
    return table.get(key, KeyCode.UNLABELED)


@dataclass(frozen=True)
class MouseButton:
    """A mouse button: left, right, middle, or another one by number."""

    kind: str
    code: int | None = None

    LEFT: ClassVar[MouseButton]
    RIGHT: ClassVar[MouseButton]
    MIDDLE: ClassVar[MouseButton]

    @classmethod
    def other(cls, code: int) -> MouseButton:
        return cls("other", code)

    def __str__(self) -> str:
        return self.kind if self.code is None else f"{self.kind}({self.code})"


MouseButton.LEFT = MouseButton("left")
MouseButton.RIGHT = MouseButton("right")
MouseButton.MIDDLE = MouseButton("middle")

_BACK_BUTTON = 99
_FORWARD_BUTTON = 98

_NAMED_BUTTONS: dict[str, MouseButton] = {
    "left": MouseButton.LEFT,
    "right": MouseButton.RIGHT,
    "middle": MouseButton.MIDDLE,
    "back": MouseButton.other(_BACK_BUTTON),
    "forward": MouseButton.other(_FORWARD_BUTTON),
}


def mouse_button(button: str | int) -> MouseButton:
    """Map a window-system button name, or a button number, to a mouse button."""
    if isinstance(button, bool):
        raise TypeError("mouse button must be a name or a number")
    if isinstance(button, int):
        return MouseButton.other(button)
    try:
        return _NAMED_BUTTONS[button.lower()]
    except KeyError:
        raise ValueError(f"unknown mouse button: {button!r}") from None


class Modifiers(enum.Flag):
    """Held modifier keys."""

    SHIFT = enum.auto()
    CTRL = enum.auto()
    ALT = enum.auto()
    LOGO = enum.auto()


def modifiers(shift: bool, ctrl: bool, alt: bool, logo: bool) -> Modifiers:
    """Combine the state of each modifier key into a flag set."""
    result = Modifiers(0)
    for flag, held in (
        (Modifiers.SHIFT, shift),
        (Modifiers.CTRL, ctrl),
        (Modifiers.ALT, alt),
        (Modifiers.LOGO, logo),
    ):
        if held:
            result |= flag
    return result


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def window_position(
    monitor: Monitor | None, size: tuple[int, int], position: Position
) -> _WindowPlacement | None:
    """Place a window of logical ``size`` according to ``position``.

    Specific positions are logical; centred ones are physical and need a
    monitor. None leaves the choice to the platform.
    """
    if position.kind is _PositionKind.DEFAULT:
        return None
    if position.kind is _PositionKind.SPECIFIC:
        return _WindowPlacement(float(position.x), float(position.y), False)
    if monitor is None:
        return None

    width, height = size
    scale = monitor.scale_factor
    start_x, start_y = monitor.position
    resolution_w = monitor.size[0] / scale
    resolution_h = monitor.size[1] / scale
    centered_x = _round_half_away((resolution_w - width) / 2.0 * scale)
    centered_y = _round_half_away((resolution_h - height) / 2.0 * scale)
    return _WindowPlacement(start_x + centered_x, start_y + centered_y, True)


def fullscreen(monitor: Monitor | None, mode: Mode) -> _Borderless | None:
    """Return borderless fullscreen on ``monitor`` for fullscreen mode, else None."""
    if mode is Mode.FULLSCREEN:
        return _Borderless(monitor)
    return None


def visible(mode: Mode) -> bool:
    """Return whether a window in ``mode`` is shown."""
    return mode is not Mode.HIDDEN


def cursor_position(x: float, y: float, scale_factor: float) -> Point[float]:
    """Convert a physical cursor position to logical coordinates."""
    return Point(x / scale_factor, y / scale_factor)