# shipshape

`shipshape` is the simulation core of a small space-colony economy game.
You build structures on randomly generated planets, staff them with
workers drawn from your population, and watch cargo ships carry goods
between them: ice becomes water, iron becomes ore and then metal, metal
becomes machinery, and so on up to computers. A headquarters sends ships
out to collect the revenue your residents generate.

## What is in it

- `shipshape.ui` – game constants (window size, year length, production
  rate and so on), `Color`, `Rect` and `star_field`.
- `shipshape.resources` – `Resource`, `Source`, `ResourceData`,
  `parse_resource_data` and `load_resource_data`.
- `shipshape.structure_data` – `StructureType`, `StructureClass`,
  `StructureData` and its parts, `parse_structure_data` and
  `load_structure_data`.
- `shipshape.planet` – `Planet`, with its resource levels (0–255), a
  generated name such as `sigma-42`, and `surface_color` which blends the
  colours of its resources.
- `shipshape.structure` – `Structure` and `Storage`: production,
  consumption and downgrades, ships in berth and in flight, workers,
  income, pausing, prioritising and upgrades.
- `shipshape.ship` – `Ship` and `ShipType`: cargo and income runs flown in
  a straight line between two structures.
- `shipshape.player` – `Player`: money (never below zero), population and
  owned structures; a tax-collecting structure becomes the capitol.
- `shipshape.level` and `shipshape.levels` – `Level`, and the six-level
  tutorial campaign from `build_levels()` / `starting_level()`.
- `shipshape.widgets` and `shipshape.panel` – a model of the side panel:
  `Label`, `Bar`, `Button` and `Divider` stacked in a `Panel`, whose first
  widgets can be locked so that `clear()` keeps them.
- `shipshape.panels` – what the panel shows for the player, a planet and
  a structure, and the callbacks behind its buttons (build, upgrade,
  pause, resume, prioritise).
- `shipshape.game` – `Game`, which ties everything together and advances
  the world one tick at a time.

## Data tables

The resource and structure tables are JSON arrays you supply. Object keys
are matched without regard to case:

- resources: `DisplayName`, `Source` (0 planetary, 1 produced) and
  `Color` with `R`, `G`, `B`, `A`;
- structures: `DisplayName`, `Produces` (`Resource`, `Rate`, `Requires`
  as a list of `Resource`/`Quantity`), `Storage` (list of `Resource`,
  `Capacity`, `Amount`, `Incoming`), `Consumes` (list of
  `Resource`/`Rate`), `Workers`, `WorkerCost`, `Berths`, `MinShips`,
  `Cost`, `Prioritize`, `Class`, `Upgrade` and `Downgrade`
  (`Structure`, `Required`), and `Buildable`.

The parsers always return exactly 12 resources and 13 structures,
indexed by `Resource` and `StructureType`: extra entries are dropped and
missing ones take default values. Malformed data raises `ValueError`.

## Using it

```python
import random

from shipshape.game import Game
from shipshape.resources import load_resource_data
from shipshape.structure_data import load_structure_data

game = Game(
    load_structure_data("structures.json"),
    load_resource_data("resources.json"),
    random.Random(42),
)

for _ in range(1200):  # one in-game year
    game.update()

print(game.player.money_label())
print(game.player.population_label())
```

A new `Game` loads the first level of the campaign; `Game.load(level)`
starts any other level with a fresh player. Each call to `Game.update()`
is one tick: structures produce and consume, producers bid to send cargo
where it is needed most, the capitol sends ships to collect income, ships
move and arrive, and once a year workers are paid and redistributed. When
a level's goal is met the panel gains a `NEXT` button that loads the
following level.

Input is fed in with plain methods:

- `Game.handle_key_presses(keys)` scrolls the view for the held keys
  `"right"`, `"left"`, `"up"` and `"down"`;
- `Game.press_mouse(x, y)`, `Game.drag_mouse(x, y)` and
  `Game.release_mouse(x, y)` select planets and structures, press panel
  buttons and drag the view;
- `Game.layout(w, h)` resizes the window, never below 1024×768.

Passing your own `random.Random` makes planet layouts, names and sizes,
and ship exhaust flicker, reproducible.

## What it does not do

- It draws nothing and plays no sound. There is no window, no rendering
  of planets, ships or the panel, and no command to start the game;
  widget and structure sizes use estimated text metrics.
- It ships no resource or structure tables; you provide both JSON files.
- It does not save or restore a game in progress.