"""Resource kinds and their display data."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

from shipshape.ui import Color

RESOURCE_DATA_LENGTH = 12
RESOURCES_JSON_FILE = "resources.json"


class Source(IntEnum):
    PLANETARY = 0
    PRODUCED = 1


class Resource(IntEnum):
    ENVIRONMENT = 0
    ICE = 1
    IRON = 2
    WATER = 3
    POPULATION = 4
    ORE = 5
    METAL = 6
    MACHINERY = 7
    SAND = 8
    SILICON = 9
    INTEGRATED_CIRCUITS = 10
    COMPUTERS = 11


@dataclass(frozen=True)
class ResourceData:
    """How a resource is named, where it comes from and how it is drawn."""

    display_name: str = ""
    source: int = Source.PLANETARY
    color: Color = field(default_factory=lambda: Color(0, 0, 0, 0))


def _fields(obj: Any, what: str) -> dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"{what} must be a JSON object")
    return {key.lower(): value for key, value in obj.items()}


def _int(value: Any, what: str, lo: int | None = None, hi: int | None = None) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        raise ValueError(f"{what} out of range: {value}")
    return value


def _str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {value!r}")
    return value


def _color(obj: Any) -> Color:
    parts = _fields(obj, "Color")
    return Color(
        *(_int(parts.get(channel), f"Color.{channel.upper()}", 0, 255) for channel in "rgba")
    )


def _resource(obj: Any) -> ResourceData:
    parts = _fields(obj, "resource")
    return ResourceData(
        display_name=_str(parts.get("displayname"), "DisplayName"),
        source=_int(parts.get("source"), "Source"),
        color=_color(parts.get("color")),
    )


def parse_resource_data(text: str | bytes) -> tuple[ResourceData, ...]:
    """Parse a JSON array of resources into exactly RESOURCE_DATA_LENGTH entries.

    Extra entries are dropped and missing ones take default values.
    Raises ValueError on malformed data.
    """
    data = json.loads(text)
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ValueError("resource data must be a JSON array")
    entries = [_resource(item) for item in data[:RESOURCE_DATA_LENGTH]]
    entries.extend(ResourceData() for _ in range(RESOURCE_DATA_LENGTH - len(entries)))
    return tuple(entries)


def load_resource_data(path: str | os.PathLike[str]) -> tuple[ResourceData, ...]:
    """Read and parse a resource data file."""
    return parse_resource_data(Path(path).read_text(encoding="utf-8"))