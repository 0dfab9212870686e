"""Structures built on planets: storage, workers, production and shipping."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from shipshape.planet import Planet
from shipshape.resources import Resource
from shipshape.structure_data import StructureClass, StructureData
from shipshape.ui import (
    BASE_PRODUCTION_RATE,
    BORDER,
    BUFFER,
    FOCUSED_COLOR,
    INCOME_RATE,
    NON_FOCUS_COLOR,
    PLANET_SIZE,
    YEAR_LENGTH,
    Color,
    Rect,
)

# Estimated metrics of the regular 13pt panel font, used to size the frame
# drawn around a structure's name.
TEXT_GLYPH_WIDTH = 7
TEXT_HEIGHT = 10


def _u8(value: int) -> int:
    """Storage counters are 8-bit and wrap."""
    return value & 0xFF


def _f32(value: float) -> float:
    """Round to single precision, as production timing is computed."""
    return struct.unpack("f", struct.pack("f", value))[0]


def text_size(text: str) -> tuple[int, int]:
    """Estimated (width, height) in pixels of a line of panel text."""
    return len(text) * TEXT_GLYPH_WIDTH, TEXT_HEIGHT


@dataclass
class Storage:
    """How much of one resource a structure holds, can hold and expects."""

    resource: int
    capacity: int
    amount: int = 0
    incoming: int = 0


class Structure:
    """A building standing on a planet."""

    def __init__(self, structure_type: int, data: StructureData, planet: Planet) -> None:
        self.structure_type = structure_type
        self.data = data
        self.planet = planet
        self.highlighted = False
        self.paused = False
        self.prioritized = False
        self.workers = 0
        self.accrued_income = 0.0

        self.bounds = self._create_bounds()
        self.planet.replace_with_structure()

        self.berths = data.berths
        self.ships = data.berths
        self.in_flight = 0
        if self.structure_class == StructureClass.TAX:
            self.ships = self.workers

        self.storage: dict[int, Storage] = {
            spec.resource: Storage(spec.resource, spec.capacity, spec.amount)
            for spec in data.storage
        }
        self._adjust_population_capacity()

    # --- read-only views -------------------------------------------------

    @property
    def name(self) -> str:
        return self.data.display_name

    @property
    def produces(self) -> int:
        return self.data.produces.resource

    @property
    def structure_class(self) -> int:
        return self.data.structure_class

    @property
    def income(self) -> int:
        """Whole units of income waiting to be collected."""
        return int(self.accrued_income)

    @property
    def worker_cost(self) -> int:
        return self.data.worker_cost

    @property
    def upgrade_to(self) -> int:
        return self.data.upgrade.structure

    @property
    def outline_color(self) -> Color:
        return FOCUSED_COLOR if self.highlighted else NON_FOCUS_COLOR

    def has_ships(self) -> bool:
        """Whether a ship is free to launch; refreshes the ship count."""
        if self.paused:
            return False
        if self.structure_class == StructureClass.TAX:
            self.ships = min(self.workers, self.berths) - self.in_flight
        if self.ships == 0 and self.in_flight == 0:
            self.ships = self.data.min_ships
        return self.ships != 0

    def labor_cost(self) -> int:
        return self.workers * self.data.worker_cost

    def can_produce(self) -> bool:
        if self.structure_class == StructureClass.TAX:
            return True
        stored = self.storage[self.produces]
        return stored.amount < stored.capacity

    def upgradeable(self) -> bool:
        """Whether an upgrade exists and every required resource is full."""
        if self.data.upgrade.structure <= 0:
            return False
        return all(
            self.storage[r].amount >= self.storage[r].capacity
            for r in self.data.upgrade.required
        )

    def worker_capacity(self) -> int:
        return 0 if self.paused else self.data.workers

    def workers_label(self) -> str:
        return (
            f"{self.workers}/{self.worker_capacity()} workers "
            f"(${self.labor_cost()}/year)"
        )

    def resource_label(self, display_name: str, resource: int) -> str:
        stored = self.storage[resource]
        return f"{display_name} ({stored.amount}/{stored.capacity})"

    def resource_bar(self, resource: int) -> int:
        """Fill level of a resource on a 0-255 scale."""
        stored = self.storage[resource]
        return _u8((255 * stored.amount) // stored.capacity)

    # --- state changes ---------------------------------------------------

    def pause(self) -> None:
        self.paused = True
        self.workers = 0

    def unpause(self) -> None:
        self.paused = False

    def prioritize(self) -> None:
        self.prioritized = True

    def deprioritize(self) -> None:
        self.prioritized = False

    def assign_workers(self, workers: int) -> None:
        self.workers = workers

    def collect_income(self) -> int:
        """Take the whole units of accrued income, leaving the fraction."""
        collected = int(self.accrued_income)
        self.accrued_income -= collected
        return collected

    def upgrade(self, structure_type: int, data: StructureData) -> None:
        """Turn into another kind of structure, keeping stored amounts that fit."""
        self.structure_type = structure_type
        self.data = data
        self.bounds = self._create_bounds()
        self.berths = data.berths
        self.ships = data.berths

        carryover = {stored.resource: stored.amount for stored in self.storage.values()}
        self.storage = {
            spec.resource: Storage(
                spec.resource,
                spec.capacity,
                min(carryover.get(spec.resource, 0), spec.capacity),
            )
            for spec in data.storage
        }
        self._adjust_population_capacity()

    def await_delivery(self, resource: int) -> None:
        stored = self.storage[resource]
        stored.incoming = _u8(stored.incoming + 1)

    def produce(self, count: int) -> bool:
        """Make one unit of the produced resource if this tick is due."""
        if self.paused:
            return False
        production = self.data.produces
        if production.rate <= 0:
            return False
        output = self.storage[production.resource]
        if output.resource != production.resource or output.amount >= output.capacity:
            return False

        rate = _f32(production.rate)
        for ingredient in production.requires:
            level = self.planet.resources.get(ingredient.resource, 0)
            if level > 0:
                rate = _f32(rate * _f32(level / 255))
            elif self.storage[ingredient.resource].amount < ingredient.quantity:
                rate = 0.0

        capacity = self.worker_capacity()
        if capacity > 0:
            rate = _f32(rate * _f32(self.workers / capacity))

        if rate <= 0:
            return False
        period = int(_f32(BASE_PRODUCTION_RATE / rate))
        if count % period != 0:
            return False

        self._restock(production.resource, output.amount + 1)
        for ingredient in production.requires:
            if self.planet.resources.get(ingredient.resource, 0) == 0:
                stored = self.storage[ingredient.resource]
                if stored.resource == ingredient.resource:
                    self._restock(ingredient.resource, stored.amount - ingredient.quantity)
        return True

    def launch_ship(self, resource: int) -> None:
        self.ships -= 1
        self.in_flight += 1
        if self.structure_class != StructureClass.TAX:
            self._restock(resource, self.storage[resource].amount - 1)

    def receive_cargo(self, resource: int) -> None:
        stored = self.storage[resource]
        if stored.amount < stored.capacity:
            self._restock(resource, stored.amount + 1)
        stored = self.storage[resource]
        if stored.incoming > 0:
            stored.incoming -= 1

    def return_ship(self) -> None:
        self.in_flight -= 1
        if self.ships < self.berths:
            self.ships += 1

    def generate_income(self) -> None:
        population = self.storage[Resource.POPULATION].amount
        self.accrued_income += (population * INCOME_RATE) / YEAR_LENGTH

    def consume(self, count: int) -> tuple[bool, int]:
        """Use up consumed resources that are due this tick.

        Returns whether anything was consumed and the structure type to
        downgrade to (0 for none) when a required resource ran out.
        """
        consumed = False
        downgrade = 0
        for consumption in self.data.consumes:
            period = int(_f32(BASE_PRODUCTION_RATE / _f32(consumption.rate)))
            if count % period != 0:
                continue
            stored = self.storage[consumption.resource]
            if stored.amount > 0:
                self._restock(consumption.resource, stored.amount - 1)
                consumed = True
            elif (
                self.data.downgrade.structure > 0
                and consumption.resource in self.data.downgrade.required
            ):
                downgrade = self.data.downgrade.structure
        return consumed, downgrade

    def highlight(self) -> None:
        self.highlighted = True
        self.planet.highlight()

    def unhighlight(self) -> None:
        self.highlighted = False
        self.planet.unhighlight()

    def mouse_button(self, x: int, y: int) -> bool:
        """Whether a click at (x, y) lands on this structure."""
        return self.bounds.contains(x, y)

    # --- internals -------------------------------------------------------

    def _restock(self, resource: int, amount: int) -> None:
        # A fresh entry replaces the old one; pending deliveries are not kept.
        capacity = self.storage[resource].capacity
        self.storage[resource] = Storage(resource, capacity, _u8(amount))

    def _adjust_population_capacity(self) -> None:
        if self.data.structure_class != StructureClass.RESIDENTIAL:
            return
        stored = self.storage[Resource.POPULATION]
        environment = self.planet.resources.get(Resource.ENVIRONMENT, 0)
        capacity = stored.capacity * (environment / 255)
        self.storage[Resource.POPULATION] = Storage(
            Resource.POPULATION, _u8(math.ceil(capacity)), stored.amount
        )

    def _create_bounds(self) -> Rect:
        text_w, text_h = text_size(self.data.display_name)
        content_w = max(text_w, PLANET_SIZE)
        w = BORDER + BUFFER + content_w + BUFFER + BORDER
        h = BORDER + BUFFER + text_h + BUFFER + PLANET_SIZE + BUFFER + BORDER
        cx, cy = self.planet.center()
        x = cx - w // 2
        y = cy - PLANET_SIZE // 2 - BUFFER - text_h - BUFFER - BORDER
        return Rect(x, y, x + w, y + h)