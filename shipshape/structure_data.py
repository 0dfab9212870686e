"""Structure kinds and the static data that describes each of them."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

STRUCTURE_DATA_LENGTH = 13
STRUCTURES_JSON_FILE = "structures.json"


class StructureType(IntEnum):
    HQ = 0
    OUTPOST = 1
    WATER = 2
    HABITAT = 3
    SETTLEMENT = 4
    MINE = 5
    SMELTER = 6
    FACTORY = 7
    SILICA = 8
    CHIP_FOUNDRY = 9
    ASSEMBLY = 10
    COLONY = 11
    CAPITOL = 12


class StructureClass(IntEnum):
    TAX = 0
    RESIDENTIAL = 1
    EXTRACTOR = 2
    PROCESSOR = 3


@dataclass(frozen=True)
class Upgrade:
    structure: int = 0
    required: tuple[int, ...] = ()


@dataclass(frozen=True)
class Consumption:
    resource: int = 0
    rate: int = 0


@dataclass(frozen=True)
class Ingredient:
    resource: int = 0
    quantity: int = 0


@dataclass(frozen=True)
class Production:
    resource: int = 0
    rate: int = 0
    requires: tuple[Ingredient, ...] = ()


@dataclass(frozen=True)
class StorageSpec:
    resource: int = 0
    capacity: int = 0
    amount: int = 0
    incoming: int = 0


@dataclass(frozen=True)
class StructureData:
    """Everything fixed about one kind of structure."""

    display_name: str = ""
    produces: Production = field(default_factory=Production)
    storage: tuple[StorageSpec, ...] = ()
    consumes: tuple[Consumption, ...] = ()
    workers: int = 0
    worker_cost: int = 0
    berths: int = 0
    min_ships: int = 0
    cost: int = 0
    prioritize: int = 0
    structure_class: int = StructureClass.TAX
    upgrade: Upgrade = field(default_factory=Upgrade)
    downgrade: Upgrade = field(default_factory=Upgrade)
    buildable: bool = False


_UINT8 = (0, 255)


def _fields(obj: Any, what: str) -> dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"{what} must be a JSON object")
    return {key.lower(): value for key, value in obj.items()}


def _int(value: Any, what: str, bounds: tuple[int, int] | None = None) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise ValueError(f"{what} out of range: {value}")
    return value


def _bool(value: Any, what: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be a boolean, got {value!r}")
    return value


def _str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {value!r}")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a JSON array")
    return value


def _upgrade(obj: Any, what: str) -> Upgrade:
    parts = _fields(obj, what)
    return Upgrade(
        structure=_int(parts.get("structure"), f"{what}.Structure"),
        required=tuple(
            _int(r, f"{what}.Required") for r in _list(parts.get("required"), f"{what}.Required")
        ),
    )


def _ingredient(obj: Any) -> Ingredient:
    parts = _fields(obj, "Ingredient")
    return Ingredient(
        resource=_int(parts.get("resource"), "Ingredient.Resource"),
        quantity=_int(parts.get("quantity"), "Ingredient.Quantity", _UINT8),
    )


def _production(obj: Any) -> Production:
    parts = _fields(obj, "Produces")
    return Production(
        resource=_int(parts.get("resource"), "Produces.Resource"),
        rate=_int(parts.get("rate"), "Produces.Rate", _UINT8),
        requires=tuple(_ingredient(i) for i in _list(parts.get("requires"), "Produces.Requires")),
    )


def _storage(obj: Any) -> StorageSpec:
    parts = _fields(obj, "Storage")
    return StorageSpec(
        resource=_int(parts.get("resource"), "Storage.Resource"),
        capacity=_int(parts.get("capacity"), "Storage.Capacity", _UINT8),
        amount=_int(parts.get("amount"), "Storage.Amount", _UINT8),
        incoming=_int(parts.get("incoming"), "Storage.Incoming", _UINT8),
    )


def _consumption(obj: Any) -> Consumption:
    parts = _fields(obj, "Consumption")
    return Consumption(
        resource=_int(parts.get("resource"), "Consumption.Resource"),
        rate=_int(parts.get("rate"), "Consumption.Rate", _UINT8),
    )


def _structure(obj: Any) -> StructureData:
    parts = _fields(obj, "structure")
    return StructureData(
        display_name=_str(parts.get("displayname"), "DisplayName"),
        produces=_production(parts.get("produces")),
        storage=tuple(_storage(s) for s in _list(parts.get("storage"), "Storage")),
        consumes=tuple(_consumption(c) for c in _list(parts.get("consumes"), "Consumes")),
        workers=_int(parts.get("workers"), "Workers"),
        worker_cost=_int(parts.get("workercost"), "WorkerCost"),
        berths=_int(parts.get("berths"), "Berths"),
        min_ships=_int(parts.get("minships"), "MinShips"),
        cost=_int(parts.get("cost"), "Cost"),
        prioritize=_int(parts.get("prioritize"), "Prioritize"),
        structure_class=_int(parts.get("class"), "Class"),
        upgrade=_upgrade(parts.get("upgrade"), "Upgrade"),
        downgrade=_upgrade(parts.get("downgrade"), "Downgrade"),
        buildable=_bool(parts.get("buildable"), "Buildable"),
    )


def parse_structure_data(text: str | bytes) -> tuple[StructureData, ...]:
    """Parse a JSON array of structures into exactly STRUCTURE_DATA_LENGTH entries.

    Extra entries are dropped and missing ones take default values.
    Raises ValueError on malformed data.
    """
    data = json.loads(text)
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ValueError("structure data must be a JSON array")
    entries = [_structure(item) for item in data[:STRUCTURE_DATA_LENGTH]]
    entries.extend(StructureData() for _ in range(STRUCTURE_DATA_LENGTH - len(entries)))
    return tuple(entries)


def load_structure_data(path: str | os.PathLike[str]) -> tuple[StructureData, ...]:
    """Read and parse a structure data file."""
    return parse_structure_data(Path(path).read_text(encoding="utf-8"))