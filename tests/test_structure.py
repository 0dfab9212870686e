import random

import pytest

from shipshape.planet import Planet
from shipshape.resources import Resource
from shipshape.structure import Storage, Structure
from shipshape.structure_data import (
    Consumption,
    Ingredient,
    Production,
    StorageSpec,
    StructureClass,
    StructureData,
    StructureType,
    Upgrade,
)
from shipshape.ui import BASE_PRODUCTION_RATE


def _planet(resources=None):
    return Planet(200, 200, resources or {}, random.Random(7))


HQ = StructureData(
    display_name="Headquarters",
    berths=2,
    min_ships=1,
    workers=4,
    worker_cost=5,
    structure_class=StructureClass.TAX,
)

OUTPOST = StructureData(
    display_name="Outpost",
    storage=(
        StorageSpec(resource=Resource.POPULATION, capacity=200, amount=0),
        StorageSpec(resource=Resource.WATER, capacity=10, amount=0),
    ),
    consumes=(Consumption(resource=Resource.WATER, rate=100),),
    structure_class=StructureClass.RESIDENTIAL,
    upgrade=Upgrade(structure=StructureType.HABITAT, required=(Resource.WATER,)),
    downgrade=Upgrade(structure=StructureType.OUTPOST, required=(Resource.WATER,)),
)

HABITAT = StructureData(
    display_name="Habitat",
    storage=(
        StorageSpec(resource=Resource.POPULATION, capacity=250),
        StorageSpec(resource=Resource.WATER, capacity=5),
    ),
    structure_class=StructureClass.RESIDENTIAL,
)

ICE_HARVESTER = StructureData(
    display_name="Ice",
    produces=Production(
        resource=Resource.WATER,
        rate=100,
        requires=(Ingredient(resource=Resource.ICE, quantity=1),),
    ),
    storage=(StorageSpec(resource=Resource.WATER, capacity=3),),
    berths=1,
    worker_cost=7,
    structure_class=StructureClass.EXTRACTOR,
)

SMELTER = StructureData(
    display_name="Smelter",
    produces=Production(
        resource=Resource.METAL,
        rate=100,
        requires=(Ingredient(resource=Resource.ORE, quantity=1),),
    ),
    storage=(
        StorageSpec(resource=Resource.METAL, capacity=8),
        StorageSpec(resource=Resource.ORE, capacity=8, amount=1),
    ),
    workers=2,
    worker_cost=3,
    structure_class=StructureClass.PROCESSOR,
)

PERIOD = BASE_PRODUCTION_RATE // 100


def test_new_structure_copies_storage_and_hides_planet():
    planet = _planet({Resource.ICE: 255})
    s = Structure(StructureType.WATER, ICE_HARVESTER, planet)
    assert s.storage == {Resource.WATER: Storage(Resource.WATER, 3, 0, 0)}
    assert planet.visible is False
    assert s.name == "Ice"
    assert s.produces == Resource.WATER


def test_tax_structure_falls_back_to_min_ships():
    s = Structure(StructureType.HQ, HQ, _planet())
    assert s.ships == 0
    assert s.has_ships() is True
    assert s.ships == HQ.min_ships


def test_tax_ships_limited_by_workers_and_berths():
    s = Structure(StructureType.HQ, HQ, _planet())
    s.assign_workers(4)
    assert s.has_ships() is True
    assert s.ships == HQ.berths
    s.launch_ship(0)
    assert s.in_flight == 1
    assert s.has_ships() is True
    assert s.ships == HQ.berths - 1


def test_paused_structure_has_no_ships_or_workers():
    s = Structure(StructureType.HQ, HQ, _planet())
    s.assign_workers(3)
    s.pause()
    assert s.has_ships() is False
    assert s.workers == 0
    assert s.worker_capacity() == 0
    s.unpause()
    assert s.worker_capacity() == HQ.workers


def test_population_capacity_follows_environment():
    full = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    barren = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 0}))
    assert full.storage[Resource.POPULATION].capacity == 200
    assert barren.storage[Resource.POPULATION].capacity == 0


def test_produce_from_planet_resource_on_schedule():
    s = Structure(StructureType.WATER, ICE_HARVESTER, _planet({Resource.ICE: 255}))
    assert s.produce(PERIOD - 1) is False
    assert s.storage[Resource.WATER].amount == 0
    assert s.produce(PERIOD) is True
    assert s.storage[Resource.WATER].amount == 1


def test_produce_stops_at_capacity():
    s = Structure(StructureType.WATER, ICE_HARVESTER, _planet({Resource.ICE: 255}))
    for _ in range(5):
        s.produce(PERIOD)
    assert s.storage[Resource.WATER].amount == s.storage[Resource.WATER].capacity
    assert s.produce(PERIOD) is False
    assert s.can_produce() is False


def test_produce_consumes_stored_ingredients():
    s = Structure(StructureType.SMELTER, SMELTER, _planet())
    s.assign_workers(2)
    assert s.produce(PERIOD) is True
    assert s.storage[Resource.METAL].amount == 1
    assert s.storage[Resource.ORE].amount == 0
    assert s.produce(PERIOD) is False
    assert s.storage[Resource.METAL].amount == 1


def test_produce_needs_workers():
    s = Structure(StructureType.SMELTER, SMELTER, _planet())
    assert s.produce(PERIOD) is False
    assert s.storage[Resource.ORE].amount == 1


def test_paused_structure_does_not_produce():
    s = Structure(StructureType.WATER, ICE_HARVESTER, _planet({Resource.ICE: 255}))
    s.pause()
    assert s.produce(PERIOD) is False


def test_launch_and_return_ship():
    s = Structure(StructureType.WATER, ICE_HARVESTER, _planet({Resource.ICE: 255}))
    s.produce(PERIOD)
    s.launch_ship(Resource.WATER)
    assert s.storage[Resource.WATER].amount == 0
    assert (s.ships, s.in_flight) == (0, 1)
    s.return_ship()
    assert (s.ships, s.in_flight) == (1, 0)
    s.return_ship()
    assert s.ships == s.berths


def test_await_and_receive_cargo():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    s.await_delivery(Resource.WATER)
    assert s.storage[Resource.WATER].incoming == 1
    s.receive_cargo(Resource.WATER)
    assert s.storage[Resource.WATER].amount == 1
    assert s.storage[Resource.WATER].incoming == 0


def test_receive_cargo_when_full_keeps_amount():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    for _ in range(20):
        s.receive_cargo(Resource.WATER)
    assert s.storage[Resource.WATER].amount == s.storage[Resource.WATER].capacity
    s.await_delivery(Resource.WATER)
    s.receive_cargo(Resource.WATER)
    assert s.storage[Resource.WATER].incoming == 0
    assert s.upgradeable() is True


def test_consume_and_downgrade():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    s.receive_cargo(Resource.WATER)
    assert s.consume(PERIOD - 1) == (False, 0)
    assert s.consume(PERIOD) == (True, 0)
    assert s.storage[Resource.WATER].amount == 0
    assert s.consume(PERIOD) == (False, StructureType.OUTPOST)


def test_upgrade_clamps_carried_amounts():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    for _ in range(10):
        s.receive_cargo(Resource.WATER)
    s.upgrade(StructureType.HABITAT, HABITAT)
    assert s.structure_type == StructureType.HABITAT
    assert s.name == "Habitat"
    assert s.storage[Resource.WATER].amount == s.storage[Resource.WATER].capacity
    assert s.storage[Resource.POPULATION].capacity == 250
    assert s.upgradeable() is False


def test_not_upgradeable_until_storage_full():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    assert s.upgradeable() is False
    assert s.upgrade_to == StructureType.HABITAT


def test_income_accrues_and_is_collected():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    s.storage[Resource.POPULATION].amount = 200
    for _ in range(4):
        s.generate_income()
    before = s.income
    assert before > 0
    assert s.collect_income() == before
    assert s.income == 0


def test_labels_and_bars():
    s = Structure(StructureType.OUTPOST, OUTPOST, _planet({Resource.ENVIRONMENT: 255}))
    assert s.resource_label("Water", Resource.WATER) == "Water (0/10)"
    assert s.resource_bar(Resource.WATER) == 0
    for _ in range(10):
        s.receive_cargo(Resource.WATER)
    assert s.resource_bar(Resource.WATER) == 255


def test_workers_label_and_labor_cost():
    s = Structure(StructureType.SMELTER, SMELTER, _planet())
    s.assign_workers(2)
    assert s.labor_cost() == 2 * SMELTER.worker_cost
    assert s.workers_label().startswith("2/2 workers ($")


def test_highlight_mirrors_to_planet_and_click_hits_center():
    planet = _planet()
    s = Structure(StructureType.HQ, HQ, planet)
    s.highlight()
    assert s.highlighted and planet.highlighted
    s.unhighlight()
    assert not s.highlighted and not planet.highlighted
    assert s.mouse_button(*planet.center()) is True
    assert s.mouse_button(0, 0) is False


def test_missing_storage_raises():
    s = Structure(StructureType.HQ, HQ, _planet())
    with pytest.raises(KeyError):
        s.receive_cargo(Resource.WATER)
    assert s.can_produce() is True