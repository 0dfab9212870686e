import random

import pytest

from shipshape.game import Game
from shipshape.level import Level
from shipshape.panel import Panel
from shipshape.panels import (
    PLAYER_PANEL_SIZE,
    construction_callback,
    show_build_options_panel,
    show_planet_panel,
    show_player_panel,
    show_structure,
    show_structure_panel,
)
from shipshape.planet import Planet
from shipshape.resources import RESOURCE_DATA_LENGTH, Resource, ResourceData, Source
from shipshape.structure import Structure
from shipshape.structure_data import (
    STRUCTURE_DATA_LENGTH,
    Consumption,
    Ingredient,
    Production,
    StorageSpec,
    StructureClass,
    StructureData,
    StructureType,
    Upgrade,
)
from shipshape.ui import WINDOW_H, WINDOW_W, Color
from shipshape.widgets import Bar, Button, Divider, Label

NAMES = [
    "environment", "ice", "iron", "water", "population", "ore", "metal",
    "machinery", "sand", "silicon", "integrated circuits", "computers",
]
PLANETARY = {Resource.ENVIRONMENT, Resource.ICE, Resource.IRON, Resource.SAND}


def make_resource_data():
    assert len(NAMES) == RESOURCE_DATA_LENGTH
    return tuple(
        ResourceData(
            display_name=name,
            source=Source.PLANETARY if i in PLANETARY else Source.PRODUCED,
            color=Color(i * 10, 100, 200),
        )
        for i, name in enumerate(NAMES)
    )


def make_structure_data():
    data = [StructureData() for _ in range(STRUCTURE_DATA_LENGTH)]
    data[StructureType.HQ] = StructureData(
        display_name="headquarters", workers=2, worker_cost=10, berths=2, cost=500,
        structure_class=StructureClass.TAX, buildable=True,
    )
    data[StructureType.OUTPOST] = StructureData(
        display_name="outpost",
        produces=Production(Resource.POPULATION, 20, (Ingredient(Resource.ENVIRONMENT, 1),)),
        storage=(StorageSpec(Resource.POPULATION, 20), StorageSpec(Resource.WATER, 5)),
        cost=400, structure_class=StructureClass.RESIDENTIAL,
        upgrade=Upgrade(StructureType.HABITAT, (Resource.WATER,)), buildable=True,
    )
    data[StructureType.WATER] = StructureData(
        display_name="ice harvester",
        produces=Production(Resource.WATER, 60, (Ingredient(Resource.ICE, 1),)),
        storage=(StorageSpec(Resource.WATER, 8),),
        workers=4, worker_cost=5, berths=1, min_ships=1, cost=300,
        structure_class=StructureClass.EXTRACTOR, buildable=True,
    )
    data[StructureType.HABITAT] = StructureData(
        display_name="habitat",
        produces=Production(Resource.POPULATION, 20, (Ingredient(Resource.ENVIRONMENT, 1),)),
        storage=(StorageSpec(Resource.POPULATION, 40), StorageSpec(Resource.WATER, 5)),
        consumes=(Consumption(Resource.WATER, 60),),
        cost=600, prioritize=50, structure_class=StructureClass.RESIDENTIAL,
        downgrade=Upgrade(StructureType.OUTPOST, (Resource.WATER,)),
    )
    return tuple(data)


def make_level():
    return Level(
        title="test level", w=2000, h=1500, starting_money=10000, label="things",
        goal=3, message="hello", rule=lambda lvl, p: False,
        allowed_resources=(Resource.ENVIRONMENT, Resource.ICE, Resource.WATER, Resource.POPULATION),
        allowed_structures=(StructureType.HQ, StructureType.OUTPOST, StructureType.WATER, StructureType.HABITAT),
    )


@pytest.fixture
def game():
    rng = random.Random(7)
    g = Game(make_structure_data(), make_resource_data(), rng)
    g.load(make_level())
    g.level.planets = [
        Planet(0, 0, {Resource.ENVIRONMENT: 255, Resource.ICE: 200}, rng),
        Planet(100, 0, {Resource.ENVIRONMENT: 255, Resource.ICE: 50}, rng),
    ]
    return g


def build(game, structure_type, planet):
    s = Structure(structure_type, game.structure_data[structure_type], planet)
    game.player.add_structure(s)
    return s


def buttons(panel):
    return {e.message: e for e in panel.elements if isinstance(e, Button)}


def label_texts(panel):
    return [e.message for e in panel.elements if isinstance(e, Label)]


def test_show_player_panel_adds_nine_widgets(game):
    game.panel.lock(0)
    game.panel.clear()
    n = show_player_panel(game)
    assert n == PLAYER_PANEL_SIZE
    assert len(game.panel.elements) == n
    first = game.panel.elements[0]
    assert first.inverted and first.message == "test level"
    assert game.player.money_label() in label_texts(game.panel)
    assert isinstance(game.panel.elements[-1], Divider)


def test_show_planet_panel_lists_allowed_resources():
    panel = Panel(WINDOW_W, WINDOW_H)
    planet = Planet(0, 0, {Resource.ENVIRONMENT: 255, Resource.ICE: 200, Resource.IRON: 50}, random.Random(1))
    show_planet_panel(panel, planet, make_resource_data(), (Resource.ENVIRONMENT, Resource.ICE, Resource.WATER))
    assert label_texts(panel) == [f"planet: {planet.name}", "environment", "ice"]
    bars = [e for e in panel.elements if isinstance(e, Bar)]
    assert [b.refresh() for b in bars] == [255, 200]


def test_build_options_respect_buildable_and_money(game):
    planet = game.level.planets[0]
    show_build_options_panel(game, planet)
    found = buttons(game.panel)
    assert set(found) == {
        "build headquarters ($500)", "build outpost ($400)", "build ice harvester ($300)",
    }
    assert all(b.active for b in found.values())
    game.player.money = 350
    assert found["build outpost ($400)"].refresh().value == "inactive"
    assert found["build ice harvester ($300)"].refresh().value == "active"


def test_headquarters_button_inactive_once_capitol_exists(game):
    build(game, StructureType.HQ, game.level.planets[1])
    show_build_options_panel(game, game.level.planets[0])
    hq_button = buttons(game.panel)["build headquarters ($500)"]
    assert hq_button.active is False


def test_show_structure_lists_workers_and_storage(game):
    s = build(game, StructureType.WATER, game.level.planets[0])
    panel = Panel(WINDOW_W, WINDOW_H)
    show_structure(panel, s, game.resource_data, game.level.allowed_resources)
    texts = label_texts(panel)
    assert texts == ["ice harvester", s.workers_label(), s.resource_label("water", Resource.WATER)]
    assert isinstance(panel.elements[2], Divider)


def test_construction_callback_builds_and_charges(game):
    planet = game.level.planets[0]
    money = game.player.money
    construction_callback(game, planet, StructureType.OUTPOST)()
    assert len(game.player.structures) == 1
    s = game.player.structures[0]
    assert s.structure_type == StructureType.OUTPOST
    assert game.player.money == money - game.structure_data[StructureType.OUTPOST].cost
    assert planet.visible is False
    assert s.highlighted
    assert "outpost" in label_texts(game.panel)


def test_pause_and_resume_buttons(game):
    s = build(game, StructureType.WATER, game.level.planets[0])
    s.assign_workers(3)
    show_structure_panel(game, s)
    buttons(game.panel)["pause production"].action()
    assert s.paused and s.workers == 0
    assert "resume production" in buttons(game.panel)
    buttons(game.panel)["resume production"].action()
    assert not s.paused
    assert "pause production" in buttons(game.panel)


def test_prioritize_costs_money_and_toggles(game):
    s = build(game, StructureType.HABITAT, game.level.planets[0])
    money = game.player.money
    show_structure_panel(game, s)
    buttons(game.panel)["prioritize deliveries ($50)"].action()
    assert s.prioritized
    assert game.player.money == money - game.structure_data[StructureType.HABITAT].prioritize
    buttons(game.panel)["normal deliveries"].action()
    assert not s.prioritized


def test_upgrade_button_needs_full_storage(game):
    s = build(game, StructureType.OUTPOST, game.level.planets[0])
    show_structure_panel(game, s)
    upgrade = buttons(game.panel)["upgrade to habitat ($600)"]
    assert upgrade.active is False
    s.storage[Resource.WATER].amount = s.storage[Resource.WATER].capacity
    assert upgrade.refresh().value == "active"
    money = game.player.money
    upgrade.action()
    assert s.structure_type == StructureType.HABITAT
    assert game.player.money == money - game.structure_data[StructureType.HABITAT].cost