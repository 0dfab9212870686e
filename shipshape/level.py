"""A level: its map, its goal and the rule that tracks progress towards it."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shipshape.planet import Planet
from shipshape.resources import ResourceData, Source
from shipshape.ui import PLANET_DISTANCE, PLANET_SIZE

if TYPE_CHECKING:
    from shipshape.player import Player

CELL_SIZE = PLANET_SIZE * PLANET_DISTANCE


@dataclass(eq=False)
class Level:
    """One level of the game.

    ``rule`` is called every tick with the level and the player; it updates
    ``progress`` and ``message`` and returns True once the goal is reached.
    """

    title: str
    w: int
    h: int
    starting_money: int
    label: str
    goal: int
    message: str
    rule: Callable[[Level, Player], bool] = field(repr=False)
    allowed_resources: tuple[int, ...] = ()
    allowed_structures: tuple[int, ...] = ()
    next_level: Level | None = field(default=None, repr=False)
    progress: int = 0
    planets: list[Planet] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.goal <= 0:
            raise ValueError(f"level goal must be positive: {self.goal}")
        if self.starting_money < 0:
            raise ValueError(f"starting money must not be negative: {self.starting_money}")

    def generate_planets(
        self,
        resource_data: Sequence[ResourceData],
        rng: random.Random | None = None,
    ) -> list[Planet]:
        """Scatter one planet in each map cell, leaving the rightmost column free.

        Each planet gets a random level of every allowed planetary resource.
        """
        rng = rng or random.Random()
        if self.w == 0:
            self.w = 1
        if self.h == 0:
            self.h = 1

        planetary = [
            r for r in self.allowed_resources if resource_data[r].source == Source.PLANETARY
        ]
        self.planets = []
        # The last column stays empty so no planet sits beneath the panel.
        for row in range(self.h // CELL_SIZE):
            for col in range(self.w // CELL_SIZE - 1):
                x = col * CELL_SIZE + rng.randrange(CELL_SIZE - PLANET_SIZE * 2) + PLANET_SIZE
                y = row * CELL_SIZE + rng.randrange(CELL_SIZE - PLANET_SIZE * 2) + PLANET_SIZE
                resources = {r: rng.randrange(255) for r in planetary}
                self.planets.append(Planet(x, y, resources, rng))
        return self.planets

    def update(self, player: Player) -> bool:
        """Apply the level's rule; True once the goal is met."""
        return self.rule(self, player)

    def label_text(self) -> str:
        if self.progress >= self.goal:
            return f"{self.label} ({self.goal}/{self.goal}): DONE"
        return f"{self.label} ({self.progress}/{self.goal}):"

    def progress_bar_value(self) -> int:
        """Progress towards the goal on a 0-255 scale."""
        return max(0, min(255, int(255 * self.progress / self.goal)))