"""Shared layout constants, colours and integer rectangle geometry."""

from __future__ import annotations

import random
from dataclasses import dataclass

NAME_OF_GAME = "ship shape"
STARRINESS = 3000
PLANET_SIZE = 32
PLANET_DISTANCE = 6  # lower numbers are denser

WINDOW_W = 1024
WINDOW_H = 768
ARROW_KEY_MOVE_SPEED = 4  # larger numbers are faster

BUFFER = 4
BORDER = 1
BAR_HEIGHT = 4

PANEL_WIDTH = 200
PANEL_EXTERNAL_PADDING = 10
INCOME_RATE = 3

YEAR_LENGTH = 1200  # smaller numbers are faster
BASE_PRODUCTION_RATE = 3600  # smaller numbers are faster
SHIP_SPEED = 1  # smaller numbers are faster

TTF_REGULAR = "fonts/OpenSans_SemiCondensed-Regular.ttf"
TTF_BOLD = "fonts/OpenSans_SemiCondensed-Bold.ttf"


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


FOCUSED_COLOR = Color(0x78, 0xCC, 0xE2, 0xFF)
NON_FOCUS_COLOR = Color(0x7F, 0x7F, 0x7F, 0xFF)
LEVEL_PROGRESS_COLOR = Color(0x80, 0x00, 0x20, 0xFF)
BACKGROUND_COLOR = Color(0x00, 0x00, 0x00, 0xFF)


@dataclass(frozen=True)
class Rect:
    """A half-open integer rectangle; corners are put in order on creation."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.min_x > self.max_x:
            lo, hi = self.max_x, self.min_x
            object.__setattr__(self, "min_x", lo)
            object.__setattr__(self, "max_x", hi)
        if self.min_y > self.max_y:
            lo, hi = self.max_y, self.min_y
            object.__setattr__(self, "min_y", lo)
            object.__setattr__(self, "max_y", hi)

    def width(self) -> int:
        return self.max_x - self.min_x

    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def empty(self) -> bool:
        return self.min_x >= self.max_x or self.min_y >= self.max_y

    def contains(self, x: int, y: int) -> bool:
        """Whether the point lies inside; the max edges are excluded."""
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    def overlaps(self, other: Rect) -> bool:
        """Whether both rectangles are non-empty and share some area."""
        return (
            not self.empty
            and not other.empty
            and self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )


def star_field(w: int, h: int, rng: random.Random | None = None) -> list[tuple[int, int, int]]:
    """Scatter stars over a w by h field, returning (x, y, grey level) for each."""
    rng = rng or random.Random()
    stars = []
    for y in range(h):
        for x in range(w):
            if rng.randrange(STARRINESS) == 0:
                stars.append((x, y, rng.randrange(255)))
    return stars