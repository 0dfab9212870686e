"""The player's holdings: structures, ships, money and population."""

from __future__ import annotations

from shipshape.ship import Ship
from shipshape.structure import Structure
from shipshape.structure_data import StructureClass


class Player:
    """Everything the player owns in the current level."""

    def __init__(self) -> None:
        self.structures: list[Structure] = []
        self.capitol: Structure | None = None
        self.ships: dict[int, Ship] = {}
        self.population = 0
        self.max_population = 0
        self.workers_needed = 0
        self.money = 0

    @staticmethod
    def _check_amount(money: int) -> int:
        if money < 0:
            raise ValueError(f"amount of money must not be negative: {money}")
        return money

    def add_money(self, money: int) -> None:
        self.money += self._check_amount(money)

    def remove_money(self, money: int) -> None:
        """Spend money; the bank never goes below zero."""
        self.money = max(0, self.money - self._check_amount(money))

    def set_population(self, population: int, max_population: int, workers_needed: int) -> None:
        self.population = population
        self.max_population = max_population
        self.workers_needed = workers_needed

    def add_structure(self, structure: Structure) -> None:
        """Own a new structure; a tax-collecting one becomes the capitol."""
        self.structures.append(structure)
        if structure.structure_class == StructureClass.TAX:
            self.capitol = structure

    def money_label(self) -> str:
        return f"bank: ${self.money}"

    def population_label(self) -> str:
        return (
            f"population: {self.population}/{self.max_population} "
            f"(need {self.workers_needed})"
        )