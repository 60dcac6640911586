"""Placer dataclasses — placed modules, open nodes, and placement records."""

from __future__ import annotations

from dataclasses import dataclass, field

from stationgen.catalog.models import ModuleInfo
from stationgen.geometry import Vec3, Orientation


# Placement kinds
ROOT = "root"               # bootstrap connector at the origin
ATTACHED = "attached"       # attached directly to an open node
CONNECTOR = "connector"     # bridge connector inserted by the placer
FALLBACK = "fallback"       # detached, nothing could be attached
GRID = "grid"               # row-grid layout mode, no geometry


@dataclass(frozen=True)
class PlacedModule:
    """A module instance fixed in world space."""

    key: str
    position: Vec3
    info: ModuleInfo
    orientation: Orientation = Orientation.CANONICAL
    kind: str = ATTACHED


@dataclass(frozen=True)
class OpenNode:
    """An unused attachment point in world space."""

    position: Vec3
    direction: Vec3


@dataclass(frozen=True)
class Placement:
    """One positioned entry of a station plan, in placement order."""

    key: str
    position: Vec3
    orientation: Orientation = Orientation.CANONICAL
    kind: str = ATTACHED

    @classmethod
    def of(cls, module: PlacedModule) -> Placement:
        return cls(module.key, module.position, module.orientation, module.kind)


@dataclass
class StationLayout:
    """Complete layout of a station design, ready for the blueprint writer."""

    placements: list[Placement]
    mode: str = "attached"              # "attached" | "grid"
    modules: list[PlacedModule] = field(default_factory=list)

    @property
    def connector_count(self) -> int:
        return sum(1 for p in self.placements if p.kind == CONNECTOR)

    @property
    def fallback_count(self) -> int:
        return sum(1 for p in self.placements if p.kind == FALLBACK)

    def keys(self) -> list[str]:
        return [p.key for p in self.placements]
