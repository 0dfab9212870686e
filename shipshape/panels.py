"""What the side panel shows for the player, planets and structures, and the actions its buttons run."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from typing import TYPE_CHECKING

from shipshape.panel import Panel
from shipshape.planet import Planet
from shipshape.resources import ResourceData
from shipshape.structure import Structure
from shipshape.structure_data import StructureClass, StructureType
from shipshape.ui import LEVEL_PROGRESS_COLOR, TTF_BOLD, TTF_REGULAR

if TYPE_CHECKING:
    from shipshape.game import Game

PLAYER_PANEL_SIZE = 9


def _always() -> bool:
    return True


def _can_afford(game: Game, cost: int) -> Callable[[], bool]:
    return lambda: game.player.money >= cost


def _refresh_structure_panel(game: Game, structure: Structure) -> None:
    game.panel.clear()
    game.update_population()
    show_structure_panel(game, structure)
    structure.highlight()


def show_build_options_panel(game: Game, planet: Planet) -> None:
    """Add a build button for every buildable structure the level allows."""
    for structure_type in game.level.allowed_structures:
        data = game.structure_data[structure_type]
        if not data.buildable:
            continue
        if data.structure_class == StructureClass.TAX:
            hq = game.structure_data[StructureType.HQ]
            game.panel.add_button(
                f"build {hq.display_name} (${hq.cost})",
                construction_callback(game, planet, StructureType.HQ),
                lambda hq_cost=hq.cost: game.player.capitol is None
                and game.player.money >= hq_cost,
            )
        else:
            game.panel.add_button(
                f"build {data.display_name} (${data.cost})",
                construction_callback(game, planet, structure_type),
                _can_afford(game, data.cost),
            )


def show_planet_panel(
    panel: Panel,
    planet: Planet,
    resource_data: Sequence[ResourceData],
    allowed: Sequence[int],
) -> None:
    """Add the planet's name and a bar for each allowed resource it holds."""
    panel.add_label(lambda: f"planet: {planet.name}", TTF_BOLD)
    for resource in allowed:
        if resource not in planet.resources:
            continue
        level = planet.resources[resource]
        name = resource_data[resource].display_name
        panel.add_label(lambda name=name: name, TTF_REGULAR)
        panel.add_bar(lambda level=level: level, resource_data[resource].color)


def show_player_panel(game: Game) -> int:
    """Add the level and player summary; returns how many widgets were added."""
    level = game.level
    panel = game.panel
    panel.add_inverted_label(lambda: level.title, TTF_BOLD)
    panel.add_label(game.player.population_label, TTF_REGULAR)
    panel.add_label(game.player.money_label, TTF_REGULAR)
    panel.add_divider()
    panel.add_label(lambda: level.message, TTF_REGULAR)
    panel.add_divider()
    panel.add_label(level.label_text, TTF_REGULAR)
    panel.add_bar(level.progress_bar_value, LEVEL_PROGRESS_COLOR)
    panel.add_divider()
    return PLAYER_PANEL_SIZE


def show_structure(
    panel: Panel,
    structure: Structure,
    resource_data: Sequence[ResourceData],
    allowed: Sequence[int],
) -> None:
    """Add the structure's name, workers and stored resources."""
    panel.add_label(lambda: structure.name, TTF_BOLD)
    if structure.worker_capacity() > 0:
        panel.add_label(structure.workers_label, TTF_REGULAR)
    if not structure.storage:
        return
    panel.add_divider()
    for resource in allowed:
        stored = structure.storage.get(resource)
        if stored is None:
            continue
        panel.add_label(
            partial(structure.resource_label, resource_data[resource].display_name, resource),
            TTF_REGULAR,
        )
        panel.add_bar(
            partial(structure.resource_bar, resource), resource_data[stored.resource].color
        )


def show_structure_panel(game: Game, structure: Structure) -> None:
    """Add a structure's details, its action buttons and its planet."""
    show_structure(game.panel, structure, game.resource_data, game.level.allowed_resources)
    data = game.structure_data[structure.structure_type]

    if data.workers > 0:
        if structure.paused:
            game.panel.add_button(
                "resume production", unpause_callback(game, structure), _always
            )
        else:
            game.panel.add_button("pause production", pause_callback(game, structure), _always)

    if data.prioritize > 0 and not structure.paused:
        if structure.prioritized:
            game.panel.add_button(
                "normal deliveries", unprioritize_callback(game, structure), _always
            )
        else:
            game.panel.add_button(
                f"prioritize deliveries (${data.prioritize})",
                prioritize_callback(game, structure),
                lambda: game.player.money
                >= game.structure_data[structure.structure_type].prioritize,
            )

    for allowed_type in game.level.allowed_structures:
        if allowed_type > 0 and allowed_type == structure.upgrade_to:
            target = game.structure_data[structure.upgrade_to]
            cost = target.cost
            game.panel.add_button(
                f"upgrade to {target.display_name} (${cost})",
                upgrade_callback(game, structure, structure.upgrade_to),
                lambda cost=cost: game.player.money >= cost and structure.upgradeable(),
            )

    game.panel.add_divider()
    show_planet_panel(
        game.panel, structure.planet, game.resource_data, game.level.allowed_resources
    )
    game.panel.add_divider()


def construction_callback(
    game: Game, planet: Planet, structure_type: int
) -> Callable[[], None]:
    """An action that builds a structure of the given type on the planet."""

    def build() -> None:
        game.redraw_ps_layer = True
        game.panel.clear()
        data = game.structure_data[structure_type]
        structure = Structure(structure_type, data, planet)
        game.player.remove_money(data.cost)
        game.player.add_structure(structure)
        game.update_population()
        show_structure_panel(game, structure)
        structure.highlight()

    return build


def upgrade_callback(
    game: Game, structure: Structure, to_structure: int
) -> Callable[[], None]:
    """An action that pays for and performs an upgrade."""

    def upgrade() -> None:
        game.redraw_ps_layer = True
        game.panel.clear()
        data = game.structure_data[to_structure]
        game.player.remove_money(data.cost)
        structure.upgrade(to_structure, data)
        game.update_population()
        show_structure_panel(game, structure)
        structure.highlight()

    return upgrade


def pause_callback(game: Game, structure: Structure) -> Callable[[], None]:
    def pause() -> None:
        structure.pause()
        _refresh_structure_panel(game, structure)

    return pause


def unpause_callback(game: Game, structure: Structure) -> Callable[[], None]:
    def unpause() -> None:
        structure.unpause()
        _refresh_structure_panel(game, structure)

    return unpause


def prioritize_callback(game: Game, structure: Structure) -> Callable[[], None]:
    def prioritize() -> None:
        structure.prioritize()
        game.player.remove_money(game.structure_data[structure.structure_type].prioritize)
        _refresh_structure_panel(game, structure)

    return prioritize


def unprioritize_callback(game: Game, structure: Structure) -> Callable[[], None]:
    def unprioritize() -> None:
        structure.deprioritize()
        _refresh_structure_panel(game, structure)

    return unprioritize