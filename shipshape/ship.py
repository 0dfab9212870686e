"""Ships carrying cargo or income between two structures."""

from __future__ import annotations

import math
import random
from enum import IntEnum

from shipshape.structure import Structure
from shipshape.ui import BORDER, SHIP_SPEED, Color, Rect

SHIP_W = 16
PLUME_W = 8
SHIP_H = 10

SHIP_COLOR = Color(0xCC, 0xCC, 0xCC, 0xFF)  # silver
INCOME_SHIP_COLOR = Color(0xD4, 0xAF, 0x47, 0xFF)  # gold
PLUME_OUTER = Color(0xFF, 0xA5, 0x00, 0xFF)  # orange
PLUME_INNER = Color(0xFF, 0xFF, 0x00, 0xFF)  # yellow
PLUME_CYCLE_TIME = 20
PLUME_FREQUENCY = 4


class ShipType(IntEnum):
    CARGO = 0
    INCOME = 1


def _span(a: int, b: int) -> tuple[int, int]:
    """Start and length of the interval between a and b, at least BORDER long."""
    if a == b:
        return a, BORDER
    return min(a, b), abs(a - b)


class Ship:
    """A ship flying in a straight line from its origin to its destination."""

    def __init__(
        self,
        origin: Structure,
        destination: Structure,
        ship_type: int,
        rng: random.Random | None = None,
    ) -> None:
        self.origin = origin
        self.destination = destination
        self.ship_type = ShipType(ship_type)
        self.plume_visible = True
        self.cargo = -1
        self.cargo_color = Color(0, 0, 0, 0)
        self._rng = rng or random.Random()

        x0, y0 = origin.planet.center()
        x1, y1 = destination.planet.center()
        self.x = float(x0)
        self.y = float(y0)

        base_x, w = _span(x0, x1)
        base_y, h = _span(y0, y1)
        self.bounds = Rect(base_x, base_y, base_x + w, base_y + h)

        self.theta = math.atan2(y1 - y0, x1 - x0)
        self.dx = math.cos(self.theta)
        self.dy = math.sin(self.theta)

    @property
    def hull_color(self) -> Color:
        return SHIP_COLOR if self.ship_type == ShipType.CARGO else INCOME_SHIP_COLOR

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    def manifest(self) -> tuple[int, Structure, Structure]:
        """The cargo (-1 for none) and the two ends of the journey."""
        return self.cargo, self.origin, self.destination

    def load_cargo(self, resource: int, color: Color) -> None:
        self.cargo = resource
        self.cargo_color = color

    def update(self, count: int) -> bool:
        """Advance one tick; return True once the ship is over its destination."""
        if count % PLUME_CYCLE_TIME == 0:
            self.plume_visible = self._rng.randrange(PLUME_FREQUENCY) != 0

        if self.destination.planet.bounds.contains(int(self.x), int(self.y)):
            return True
        if count % SHIP_SPEED == 0:
            self.x += self.dx
            self.y += self.dy
        return False