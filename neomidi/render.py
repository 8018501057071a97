"""Render-side state: key colours, quad and note instances, animation clocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Iterator

from neomidi.config import ColorSchema

SHARP_RADIUS_MULTIPLIER = 1.0
NEUTRAL_RADIUS_MULTIPLIER = 3.5
RADIUS_FACTOR = 0.08

DEFAULT_WATERFALL_SPEED = 400.0
BACKGROUND_START_TIME = 10.0
"""The background animation starts a little way in."""


def _srgb_to_linear(component: float) -> float:
    if component <= 0.04045:
        return component / 12.92
    return ((component + 0.055) / 1.055) ** 2.4


@dataclass(frozen=True)
class Color:
    """An sRGB colour with components in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: float) -> Color:
        """Build a colour from 8-bit components and a 0..1 alpha."""
        for value in (r, g, b):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"colour component out of range: {value!r}")
        return cls(r / 255.0, g / 255.0, b / 255.0, float(a))

    def into_linear_rgb(self) -> tuple[float, float, float]:
        """Return the colour's components in linear light."""
        return (
            _srgb_to_linear(self.r),
            _srgb_to_linear(self.g),
            _srgb_to_linear(self.b),
        )

    def into_linear_rgba(self) -> tuple[float, float, float, float]:
        """Return the linear-light components with alpha unchanged."""
        return (*self.into_linear_rgb(), self.a)


def border_radius(width: float, is_sharp: bool) -> float:
    """Return the corner radius of a key of the given width."""
    multiplier = SHARP_RADIUS_MULTIPLIER if is_sharp else NEUTRAL_RADIUS_MULTIPLIER
    return width * RADIUS_FACTOR * multiplier


@dataclass
class KeyState:
    """Whether a piano key is held by the user or by the playing file."""

    is_sharp: bool
    pressed_by_file: Color | None = None
    pressed_by_user: bool = False

    def set_pressed_by_user(self, pressed: bool) -> None:
        self.pressed_by_user = pressed

    def pressed_by_file_on(self, schema: ColorSchema) -> None:
        """Mark the key as played by the file, coloured by ``schema``."""
        r, g, b = schema.dark if self.is_sharp else schema.base
        self.pressed_by_file = Color.from_rgba8(r, g, b, 1.0)

    def pressed_by_file_off(self) -> None:
        self.pressed_by_file = None

    def color(self) -> Color:
        """Return the colour the key is drawn with."""
        if self.pressed_by_user:
            grey = 0.3 if self.is_sharp else 0.5
            return Color(grey, grey, grey, 1.0)
        if self.pressed_by_file is not None:
            return self.pressed_by_file
        if self.is_sharp:
            return Color(0.0, 0.0, 0.0, 1.0)
        return Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class QuadInstance:
    """A rounded rectangle to draw."""

    position: tuple[float, float] = (0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    border_radius: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


@dataclass
class QuadBatch:
    """The quads queued for one frame."""

    instances: list[QuadInstance] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.instances)

    def __iter__(self) -> Iterator[QuadInstance]:
        return iter(self.instances)

    def clear(self) -> None:
        self.instances.clear()

    def push(self, instance: QuadInstance) -> None:
        self.instances.append(instance)

    def replace(self, instances: Iterable[QuadInstance]) -> None:
        """Drop the queued quads and queue ``instances`` instead."""
        self.instances = list(instances)


@dataclass(frozen=True)
class NoteInstance:
    """A falling note rectangle; ``position`` y is its start time in seconds."""

    position: tuple[float, float]
    size: tuple[float, float]
    color: tuple[float, float, float]
    radius: float


@dataclass
class WaterfallClock:
    """Time and scroll speed of the falling-notes animation."""

    time: float = 0.0
    speed: float = DEFAULT_WATERFALL_SPEED

    def set_speed(self, speed: float) -> None:
        self.speed = speed

    def update_time(self, time: float) -> None:
        self.time = time


@dataclass
class BackgroundClock:
    """Running time of the background animation."""

    time: float = BACKGROUND_START_TIME

    def update_time(self, delta: timedelta) -> None:
        """Advance the animation by ``delta``."""
        self.time += delta.total_seconds()