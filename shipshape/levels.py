"""The campaign: six levels, each teaching one part of the economy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipshape.level import Level
from shipshape.resources import Resource
from shipshape.structure_data import StructureType

if TYPE_CHECKING:
    from shipshape.player import Player


# Level 1: the first outposts.

WELCOME_MESSAGE = """Hello, and welcome aboard!

Your job is to grow a busy
society out among the stars.

You do that by placing STRUCTURES
on PLANETS. Select any planet to
learn what it offers.

Every planet has an ENVIRONMENT
rating. The higher it is, the more
people a home there can hold.

Pick a planet with a strong
ENVIRONMENT and put an OUTPOST
on it. Tip: a bar that is nearly
all green is a good sign."""

WELCOME_FIRST_OUTPOST = """Nicely done!

The people in your OUTPOST will
now multiply until it is full.

Building costs money. Your bank
balance is shown above, next to
"bank:".

Put up some more outposts. Can
you house 120 POPULATION with
the funds you have left?"""

WELCOME_LOW_FUNDS = """Funds are getting thin.

Have some extra money, and keep
putting up outposts.

Planets with a strong ENVIRONMENT
give the biggest outposts.

Scroll the map: many more planets
lie beyond the ones in view."""

WELCOME_SPENT = """The bank is empty, but your
outposts can already hold 120
people.

Relax and let the population
fill them up!"""

WELCOME_DONE = """Excellent!

Outposts are now second nature.
They matter a great deal: they
are where your colonists live.

Press "next" to move on to
resources and upgrades."""


def _welcome(lvl: Level, player: Player) -> bool:
    lvl.progress = 0
    outposts = 0
    for s in player.structures:
        if s.structure_type == StructureType.OUTPOST:
            lvl.progress += s.storage[Resource.POPULATION].amount
            outposts += 1

    if outposts == 1:
        lvl.message = WELCOME_FIRST_OUTPOST

    if outposts > 1 and player.money < 800:
        if player.max_population < 120:
            player.add_money(800)
            lvl.message = WELCOME_LOW_FUNDS
        else:
            lvl.message = WELCOME_SPENT

    if lvl.progress >= lvl.goal:
        lvl.message = WELCOME_DONE
        return True
    return False


# Level 2: water and habitats.

UPGRADING_MESSAGE = """Upgrades need resources

An outpost can be turned into a
HABITAT, which holds more people.

To make that change an outpost
must be full of WATER.

Water comes from ICE, which many
planets have in their crust.

Put an ICE HARVESTER on an icy
planet, and an outpost or two on
planets with good ENVIRONMENT."""

UPGRADING_HABITAT = """Well played.

A HABITAT holds far more people
than an outpost, but they drink
a lot. Keep the water coming.

If a habitat runs dry, people
leave and it falls back to an
OUTPOST, which you must pay to
upgrade again.

Carry on building HABITATS.
"""

UPGRADING_ICE = """An ice harvester needs
WORKERS to run.

Workers are drawn from the people
living in outposts and habitats.
More staff means more output.

Wages cost money; select a
structure to see what it pays.

Goods are shipped on their own
to whichever structures need them.

When an outpost is full of water,
turn it into a HABITAT!"""

UPGRADING_DONE = """Great work!

Just as good ENVIRONMENT makes
outposts thrive, plenty of ICE
makes ICE HARVESTERS work faster.

Press 'next' to find out how to
earn money."""


def _upgrading(lvl: Level, player: Player) -> bool:
    lvl.progress = 0
    ice = False
    if player.money < 800:
        player.add_money(400)
    for s in player.structures:
        if s.structure_type == StructureType.HABITAT:
            lvl.progress += 1
        if s.structure_type == StructureType.WATER:
            ice = True

    if lvl.progress > 0:
        lvl.message = UPGRADING_HABITAT
    elif ice:
        lvl.message = UPGRADING_ICE

    if lvl.progress >= lvl.goal:
        lvl.message = UPGRADING_DONE
        return True
    return False


# Level 3: headquarters and income.

EARNING_MESSAGE = """Making money

Buildings and wages both cost
MONEY. Where does more come from?

People in outposts and habitats
keep producing REVENUE, but only
a HEADQUARTERS can collect it.

Build three HABITATS once more.
You start with less this time,
so you will need a HEADQUARTERS."""

EARNING_TOP_UP = """Here is enough extra money
for a HEADQUARTERS. Build one
early: without it, your OUTPOSTS
earn you nothing."""

EARNING_WARNING = """Your next building should
most likely be a HEADQUARTERS.

Without one your OUTPOSTS bring
in no money, and you may soon
run out."""

EARNING_HQ = """The headquarters sends ships
out to outposts and habitats to
pick up revenue, much as cargo
ships carry goods.

It works equally well on any
planet and needs no resources.

Tip: put structures that trade
with each other near one another.
Short trips keep goods moving."""

EARNING_DONE = """Superb!

Three habitats, and an economy
in balance.

Habitats can grow into
SETTLEMENTS, which hold and earn
even more, once they are supplied
with MACHINERY.

Making MACHINERY takes
MANUFACTURING.

Press 'next'."""


def _earning(lvl: Level, player: Player) -> bool:
    lvl.progress = 0
    hq = False
    for s in player.structures:
        if s.structure_type == StructureType.HABITAT:
            lvl.progress += 1
        if s.structure_type == StructureType.HQ:
            hq = True

    if not hq and player.money <= 900:
        lvl.message = EARNING_TOP_UP
        player.add_money(900 - player.money)

    if not hq and 900 < player.money <= 1350:
        lvl.message = EARNING_WARNING

    if hq:
        lvl.message = EARNING_HQ

    if lvl.progress >= lvl.goal:
        lvl.message = EARNING_DONE
        return True
    return False


# Level 4: mines and smelters.

MANUFACTURING_MESSAGE = """Some structures MANUFACTURE:
they turn raw materials into
new goods.

A SMELTER makes METAL from ORE
and water. Ore comes from MINES,
best placed on planets rich in
IRON. A smelter holds 8 metal,
so this goal needs two of them.
"""

MANUFACTURING_MINE = """MINES dig up ORE. When you
can afford it, add a SMELTER or
two to turn that ore into METAL.

Watch your budget. If a structure
costs too much to run, PAUSE
PRODUCTION there for a while."""

MANUFACTURING_SMELTER = """A SMELTER turns ORE and
WATER into METAL, but without
a mine it has nothing to work on.

Until a mine is running, think
about PAUSING PRODUCTION so you
do not pay for idle workers."""

MANUFACTURING_BOTH = """MINES feed SMELTERS, and
together they make METAL.

Smelters, outposts and habitats
all want water. Ships share it
out evenly, but for a small fee
you can PRIORITIZE DELIVERY to
chosen structures."""

MANUFACTURING_DONE = """Well done!

You have the hang of PRODUCTION.

Next come FACTORIES, which make
MACHINERY from METAL. Machinery
lets HABITATS grow into
SETTLEMENTS.

Press 'next' to go on."""


def _manufacturing(lvl: Level, player: Player) -> bool:
    lvl.progress = 0
    mine = smelter = False
    for s in player.structures:
        if s.structure_type == StructureType.SMELTER:
            lvl.progress += s.storage[Resource.METAL].amount
            smelter = True
        if s.structure_type == StructureType.MINE:
            mine = True

    if mine and not smelter:
        lvl.message = MANUFACTURING_MINE
    elif smelter and not mine:
        lvl.message = MANUFACTURING_SMELTER
    elif mine and smelter:
        lvl.message = MANUFACTURING_BOTH

    if lvl.progress >= lvl.goal:
        lvl.message = MANUFACTURING_DONE
        return True
    return False


# Level 5: factories and settlements.

FACTORIES_MESSAGE = """Two new structures are open
to you:

FACTORIES make MACHINERY out
of METAL.

With MACHINERY a habitat can
become a SETTLEMENT, home to
even more people.

Build two SETTLEMENTS.
"""

FACTORIES_DONE = """Very good!

Long supply chains are hard to
keep in balance. Keep trading
partners close to each other.

Press 'next' to go on."""


def _count_rule(structure_type: int, done_message: str):
    def rule(lvl: Level, player: Player) -> bool:
        lvl.progress = sum(1 for s in player.structures if s.structure_type == structure_type)
        if lvl.progress >= lvl.goal:
            lvl.message = done_message
            return True
        return False

    return rule


# Level 6: the open sandbox.

SANDBOX_MESSAGE = """Time to prove yourself by
making COMPUTERS!

SILICA PURIFIERS make SILICON;
put them where SAND is plentiful.
CHIP FOUNDRIES turn silicon into
INTEGRATED CIRCUITS, which let a
factory become an ASSEMBLY PLANT.
Assembly plants build COMPUTERS
from circuits and machinery.
COMPUTERS then turn a headquarters
into a CAPITOL, or a settlement
into a COLONY.

Build 4 COLONIES. Good luck!"""

SANDBOX_DONE = """Congratulations!

That took real skill. You have
finished the demo and learned the
basics of the game.

More is on the way.
Thanks for playing."""


_BASIC_RESOURCES = (Resource.ENVIRONMENT, Resource.POPULATION)
_WATER_RESOURCES = _BASIC_RESOURCES + (Resource.ICE, Resource.WATER)
_METAL_RESOURCES = _WATER_RESOURCES + (Resource.IRON, Resource.ORE, Resource.METAL)
_MACHINE_RESOURCES = _METAL_RESOURCES + (Resource.MACHINERY,)
_ALL_RESOURCES = _MACHINE_RESOURCES + (
    Resource.SAND,
    Resource.SILICON,
    Resource.INTEGRATED_CIRCUITS,
    Resource.COMPUTERS,
)

_WATER_STRUCTURES = (StructureType.OUTPOST, StructureType.WATER, StructureType.HABITAT)
_HQ_STRUCTURES = (StructureType.HQ,) + _WATER_STRUCTURES
_METAL_STRUCTURES = _HQ_STRUCTURES + (StructureType.MINE, StructureType.SMELTER)
_MACHINE_STRUCTURES = _METAL_STRUCTURES + (StructureType.FACTORY, StructureType.SETTLEMENT)
_ALL_STRUCTURES = _MACHINE_STRUCTURES + (
    StructureType.SILICA,
    StructureType.CHIP_FOUNDRY,
    StructureType.ASSEMBLY,
    StructureType.COLONY,
    StructureType.CAPITOL,
)


def build_levels() -> list[Level]:
    """Fresh copies of every level, in play order and linked by next_level."""
    levels = [
        Level(
            title="welcome!",
            w=1900,
            h=1080,
            starting_money=3200,
            label="total population",
            goal=120,
            message=WELCOME_MESSAGE,
            rule=_welcome,
            allowed_resources=_BASIC_RESOURCES,
            allowed_structures=(StructureType.OUTPOST,),
        ),
        Level(
            title="upgrading",
            w=1900,
            h=1080,
            starting_money=6000,
            label="habitats",
            goal=3,
            message=UPGRADING_MESSAGE,
            rule=_upgrading,
            allowed_resources=_WATER_RESOURCES,
            allowed_structures=_WATER_STRUCTURES,
        ),
        Level(
            title="earning money",
            w=1900,
            h=1080,
            starting_money=4000,
            label="habitats",
            goal=3,
            message=EARNING_MESSAGE,
            rule=_earning,
            allowed_resources=_WATER_RESOURCES,
            allowed_structures=_HQ_STRUCTURES,
        ),
        Level(
            title="manufacturing",
            w=1900,
            h=1080,
            starting_money=5000,
            label="metal",
            goal=16,
            message=MANUFACTURING_MESSAGE,
            rule=_manufacturing,
            allowed_resources=_METAL_RESOURCES,
            allowed_structures=_METAL_STRUCTURES,
        ),
        Level(
            title="factories",
            w=2048,
            h=2048,
            starting_money=5000,
            label="settlements",
            goal=2,
            message=FACTORIES_MESSAGE,
            rule=_count_rule(StructureType.SETTLEMENT, FACTORIES_DONE),
            allowed_resources=_MACHINE_RESOURCES,
            allowed_structures=_MACHINE_STRUCTURES,
        ),
        Level(
            title="sandbox",
            w=4096,
            h=4096,
            starting_money=10000,
            label="colonies",
            goal=5,
            message=SANDBOX_MESSAGE,
            rule=_count_rule(StructureType.COLONY, SANDBOX_DONE),
            allowed_resources=_ALL_RESOURCES,
            allowed_structures=_ALL_STRUCTURES,
        ),
    ]
    for current, following in zip(levels, levels[1:]):
        current.next_level = following
    return levels


def starting_level() -> Level:
    """The first level of a fresh campaign."""
    return build_levels()[0]