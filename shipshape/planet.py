"""Planets: named, resource-bearing bodies that structures are built on."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence

from shipshape.resources import ResourceData
from shipshape.ui import FOCUSED_COLOR, NON_FOCUS_COLOR, PLANET_SIZE, Color, Rect

BASE_PLANET_RADIUS = 8

_LETTERS = (
    "alpha", "beta", "gamma", "delta", "epsilon", "zêta", "êta", "thêta",
    "iota", "kappa", "lambda", "mu", "nu", "xi", "omikron", "pi", "rho",
    "sigma", "tau", "upsilon", "phi", "chi", "psi", "omega",
)


def generate_name(rng: random.Random | None = None) -> str:
    """A random name such as 'sigma-42'."""
    rng = rng or random.Random()
    letter = _LETTERS[rng.randrange(len(_LETTERS))]
    return f"{letter}-{rng.randrange(1000)}"


class Planet:
    """A planet at a fixed position with levels (0-255) of planetary resources."""

    def __init__(
        self,
        x: int,
        y: int,
        resources: Mapping[int, int],
        rng: random.Random | None = None,
    ) -> None:
        rng = rng or random.Random()
        self.bounds = Rect(x, y, x + PLANET_SIZE, y + PLANET_SIZE)
        self.visible = True
        self.resources: dict[int, int] = dict(resources)
        self.name = generate_name(rng)
        self.radius = BASE_PLANET_RADIUS + rng.randrange(PLANET_SIZE // 2 - BASE_PLANET_RADIUS)
        self.highlighted = False

    def center(self) -> tuple[int, int]:
        return (
            self.bounds.min_x + self.bounds.width() // 2,
            self.bounds.min_y + self.bounds.height() // 2,
        )

    def replace_with_structure(self) -> None:
        """Hide the planet once a structure stands on it."""
        self.unhighlight()
        self.visible = False

    def highlight(self) -> None:
        self.highlighted = True

    def unhighlight(self) -> None:
        self.highlighted = False

    @property
    def outline_color(self) -> Color:
        return FOCUSED_COLOR if self.highlighted else NON_FOCUS_COLOR

    def mouse_button(self, x: int, y: int) -> bool:
        """Whether a click at (x, y) lands on this visible planet."""
        return self.visible and self.bounds.contains(x, y)

    def surface_color(self, resource_data: Sequence[ResourceData]) -> Color:
        """Blend the colours of the planet's resources, weighted by level."""
        if not self.resources:
            return Color(0, 0, 0)
        n = len(self.resources) * 255
        r = g = b = 0.0
        for resource, level in self.resources.items():
            color = resource_data[resource].color
            r += level * color.r / n
            g += level * color.g / n
            b += level * color.b / n
        return Color(int(r), int(g), int(b))