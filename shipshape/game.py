"""The game state and the per-tick simulation that drives it."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence

from shipshape.level import Level
from shipshape.levels import starting_level
from shipshape.panel import Panel
from shipshape.panels import show_build_options_panel, show_planet_panel, show_player_panel, show_structure_panel
from shipshape.player import Player
from shipshape.resources import Resource, ResourceData
from shipshape.ship import INCOME_SHIP_COLOR, Ship, ShipType
from shipshape.structure import Structure
from shipshape.structure_data import StructureClass, StructureData
from shipshape.ui import ARROW_KEY_MOVE_SPEED, WINDOW_H, WINDOW_W, YEAR_LENGTH

PRIORITY_BID_VALUE = 255
END_OF_LEVEL_KEEP = 7

KEYS = frozenset({"right", "left", "up", "down"})


def distance(x1: int, y1: int, x2: int, y2: int) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x1 - x2, y1 - y2)


def _ship_in_lane(ships: Iterable[Ship], a: Structure, b: Structure) -> bool:
    for ship in ships:
        _, origin, destination = ship.manifest()
        if (origin is a and destination is b) or (origin is b and destination is a):
            return True
    return False


class Game:
    """A running game: the current level, the player, the panel and the view."""

    def __init__(
        self,
        structure_data: Sequence[StructureData],
        resource_data: Sequence[ResourceData],
        rng: random.Random | None = None,
    ) -> None:
        self.structure_data = tuple(structure_data)
        self.resource_data = tuple(resource_data)
        self.rng = rng or random.Random()
        self.panel = Panel(WINDOW_W, WINDOW_H)
        self.offset_x = 0
        self.offset_y = 0
        self.window_w = WINDOW_W
        self.window_h = WINDOW_H
        self.mouse_drag_x = 0
        self.mouse_drag_y = 0
        self.dragging = False
        self.redraw_ps_layer = True
        self.count = 0
        self.player = Player()
        self.end_of_level_player_panel = False
        self.level: Level = starting_level()
        self.load(self.level)

    def load(self, level: Level) -> None:
        """Start a level from scratch with a new player."""
        self.count = 0
        self.player = Player()
        self.level = level
        level.generate_planets(self.resource_data, self.rng)
        self.player.add_money(level.starting_money)
        self.end_of_level_player_panel = False
        self.redraw_ps_layer = True
        self.panel.lock(0)
        self.panel.clear()
        self.panel.lock(show_player_panel(self))

    def layout(self, w: int, h: int) -> tuple[int, int]:
        """Accept a new window size, never smaller than the default window."""
        w = max(w, WINDOW_W)
        h = max(h, WINDOW_H)
        if self.window_w != w and self.window_h != h:
            self.panel.resize(w, h)
            self.window_w = w
            self.window_h = h
            self.redraw_ps_layer = True
        return w, h

    def update(self) -> None:
        """Advance the simulation one tick; input is fed in separately."""
        self.count += 1
        self.structures_produce()
        self.structures_consume()
        self.structures_bid_for_resources()
        self.collect_income()
        self.ships_arrive()
        self.update_population()
        self.structures_generate_income()
        if self.count % YEAR_LENGTH == 0:
            self.pay_workers()
            self.distribute_workers()
        self.update_level()

    def update_level(self) -> None:
        """Check the level goal, offering the next level once it is met."""
        if self.level.update(self.player) and not self.end_of_level_player_panel:
            self.panel.lock(END_OF_LEVEL_KEEP)
            self.panel.clear()
            if self.level.next_level is not None:
                self.panel.add_button(
                    "NEXT", lambda: self.load(self.level.next_level), lambda: True
                )
            self.panel.add_divider()
            self.panel.lock(END_OF_LEVEL_KEEP + 2)
            self.end_of_level_player_panel = True

    def update_population(self) -> None:
        population = max_population = workers_needed = 0
        for s in self.player.structures:
            stored = s.storage.get(Resource.POPULATION)
            if stored is not None:
                population += stored.amount
                max_population += stored.capacity
            workers_needed += s.worker_capacity()
        self.player.set_population(population, max_population, workers_needed)

    def structures_produce(self) -> None:
        for s in self.player.structures:
            s.produce(self.count)

    def structures_consume(self) -> None:
        for s in self.player.structures:
            _, downgrade = s.consume(self.count)
            if downgrade > 0:
                s.upgrade(downgrade, self.structure_data[downgrade])
                if s.highlighted:
                    self.panel.clear()
                    self.update_population()
                    show_structure_panel(self, s)

    def structures_bid_for_resources(self) -> None:
        """Send cargo from each producer to the structure bidding most for it."""
        structures = self.player.structures
        for s0 in structures:
            if s0.structure_class not in (StructureClass.EXTRACTOR, StructureClass.PROCESSOR):
                continue
            produced = s0.produces
            if not (s0.storage[produced].amount > 0 and s0.has_ships()):
                continue
            top: Structure | None = None
            top_value = 0.0
            for s1 in structures:
                if s1.paused or s1.produces == produced:
                    continue
                stored = s1.storage.get(produced)
                if stored is None or stored.amount + stored.incoming >= stored.capacity:
                    continue
                if s1.prioritized:
                    value = float(PRIORITY_BID_VALUE)
                else:
                    value = float(stored.capacity - stored.amount - stored.incoming)
                    value *= 255 / stored.capacity
                    value /= distance(*s0.planet.center(), *s1.planet.center())
                if value > top_value and not _ship_in_lane(self.player.ships.values(), s0, s1):
                    top, top_value = s1, value
            if top is not None and top_value > 0:
                ship = Ship(s0, top, ShipType.CARGO, self.rng)
                ship.load_cargo(produced, self.resource_data[produced].color)
                s0.launch_ship(produced)
                top.await_delivery(produced)
                self.player.ships[self.count] = ship

    def collect_income(self) -> None:
        """Send an income ship from the capitol to the best-paying structure."""
        capitol = self.player.capitol
        if capitol is None or not capitol.has_ships():
            return
        top: Structure | None = None
        top_value = 0.0
        for s in self.player.structures:
            if s.income <= 0:
                continue
            value = s.income / distance(*capitol.planet.center(), *s.planet.center())
            if value > top_value and not _ship_in_lane(self.player.ships.values(), capitol, s):
                top, top_value = s, value
        if top is not None and top_value > 0:
            ship = Ship(capitol, top, ShipType.INCOME, self.rng)
            capitol.launch_ship(0)
            self.player.ships[self.count] = ship

    def ships_arrive(self) -> None:
        """Move every ship and handle those that reached their destination."""
        ships = self.player.ships
        for key, ship in list(ships.items()):
            if not ship.update(self.count):
                continue
            cargo, origin, destination = ship.manifest()

            if ship.ship_type == ShipType.INCOME and origin.structure_class == StructureClass.TAX:
                returning = Ship(destination, origin, ShipType.INCOME, self.rng)
                returning.load_cargo(destination.collect_income(), INCOME_SHIP_COLOR)
                ships[key] = returning
                continue

            if (
                ship.ship_type == ShipType.INCOME
                and destination.structure_class == StructureClass.TAX
            ):
                self.player.add_money(max(cargo, 0))
                destination.return_ship()
                del ships[key]
                continue

            if cargo > 0:
                destination.receive_cargo(cargo)
                ships[key] = Ship(destination, origin, ShipType.CARGO, self.rng)
            else:
                destination.return_ship()
                del ships[key]

    def structures_generate_income(self) -> None:
        for s in self.player.structures:
            if s.structure_class == StructureClass.RESIDENTIAL:
                s.generate_income()

    def pay_workers(self) -> None:
        for s in self.player.structures:
            self.player.remove_money(s.labor_cost())

    def distribute_workers(self) -> None:
        """Hand out the population as workers, one at a time, while money lasts."""
        structures = self.player.structures
        for s in structures:
            s.assign_workers(0)
        budget = self.player.money
        to_assign = self.player.population
        while to_assign > 0:
            assigned = False
            for s in structures:
                if (
                    s.workers < s.worker_capacity()
                    and to_assign > 0
                    and s.can_produce()
                    and not s.paused
                    and budget >= s.worker_cost
                ):
                    budget -= s.worker_cost
                    s.assign_workers(s.workers + 1)
                    to_assign -= 1
                    assigned = True
            if not assigned:
                break

    def handle_key_presses(self, keys: Iterable[str]) -> None:
        """Scroll the view for each held arrow key: 'right', 'left', 'up', 'down'."""
        held = set(keys)
        unknown = held - KEYS
        if unknown:
            raise ValueError(f"unknown keys: {sorted(unknown)}")
        if "right" in held and -self.offset_x + self.window_w < self.level.w:
            self.redraw_ps_layer = True
            self.offset_x -= ARROW_KEY_MOVE_SPEED
        if "left" in held and self.offset_x < 0:
            self.redraw_ps_layer = True
            self.offset_x += ARROW_KEY_MOVE_SPEED
        if "up" in held and self.offset_y < 0:
            self.redraw_ps_layer = True
            self.offset_y += ARROW_KEY_MOVE_SPEED
        if "down" in held and -self.offset_y + self.window_h < self.level.h:
            self.redraw_ps_layer = True
            self.offset_y -= ARROW_KEY_MOVE_SPEED

    def press_mouse(self, x: int, y: int) -> None:
        """Left button went down at window position (x, y)."""
        if self.panel.left_mouse_button_press(x, y):
            return
        self.redraw_ps_layer = True
        cx = x - self.offset_x
        cy = y - self.offset_y
        self.panel.clear()

        clicked = False
        for planet in self.level.planets:
            if planet.mouse_button(cx, cy):
                clicked = True
                planet.highlight()
                show_planet_panel(
                    self.panel, planet, self.resource_data, self.level.allowed_resources
                )
                show_build_options_panel(self, planet)
            else:
                planet.unhighlight()

        for structure in self.player.structures:
            if structure.mouse_button(cx, cy):
                clicked = True
                structure.highlight()
                show_structure_panel(self, structure)
            else:
                structure.unhighlight()

        if not clicked:
            self.dragging = True
            self.mouse_drag_x, self.mouse_drag_y = x, y

    def release_mouse(self, x: int, y: int) -> None:
        """Left button came up at window position (x, y)."""
        self.redraw_ps_layer = True
        self.dragging = False
        self.panel.left_mouse_button_release(x, y)

    def drag_mouse(self, x: int, y: int) -> None:
        """Left button held with the cursor now at (x, y); scrolls while dragging."""
        if not self.dragging:
            return
        self.redraw_ps_layer = True
        if x < self.mouse_drag_x and -self.offset_x + self.window_w < self.level.w:
            self.offset_x += x - self.mouse_drag_x
            self.mouse_drag_x = x
        if x > self.mouse_drag_x and self.offset_x < 0:
            self.offset_x += x - self.mouse_drag_x
            self.mouse_drag_x = x
        if y > self.mouse_drag_y and self.offset_y < 0:
            self.offset_y += y - self.mouse_drag_y
            self.mouse_drag_y = y
        if y < self.mouse_drag_y and -self.offset_y + self.window_h < self.level.h:
            self.offset_y += y - self.mouse_drag_y
            self.mouse_drag_y = y