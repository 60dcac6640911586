"""Catalog dataclasses — typed representations of catalog/modules.json entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from stationgen.geometry import Vec3, CARDINALS


DEFAULT_BUFFER = 50
FALLBACK_SIZE = (500, 500, 500)


@dataclass(frozen=True)
class ConnectionNode:
    """An attachment point relative to its module's centre."""

    offset: Vec3
    direction: Vec3                     # outward unit axis, e.g. (0, 0, -1)


@dataclass(frozen=True)
class ModuleInfo:
    size: Vec3                          # full bounding-box extents
    buffer: int = DEFAULT_BUFFER        # proposal clearance, not part of the collision box
    connections: tuple[ConnectionNode, ...] = ()

    @classmethod
    def box(cls, x: int, y: int, z: int, buffer: int = DEFAULT_BUFFER) -> ModuleInfo:
        """A box-shaped module with one connection node on each face.

        Nodes sit at the half-extent of their axis and face outward,
        ordered +X, -X, +Y, -Y, +Z, -Z.
        """
        size = Vec3(x, y, z)
        connections = tuple(
            ConnectionNode(
                offset=d * (size.component(d.axis()) // 2),
                direction=d,
            )
            for d in CARDINALS
        )
        return cls(size=size, buffer=buffer, connections=connections)

    def half_extents(self) -> Vec3:
        """Truncated half size per axis, as used by the collision box."""
        return Vec3(self.size.x // 2, self.size.y // 2, self.size.z // 2)

    def total_size(self) -> Vec3:
        """Size including the buffer on both sides of every axis."""
        pad = 2 * self.buffer
        return Vec3(self.size.x + pad, self.size.y + pad, self.size.z + pad)


@dataclass
class ValidationError:
    key: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.key}] {self.field}: {self.message}"


@dataclass(frozen=True, eq=False)
class Catalog:
    """Read-only module catalog.

    ``lookup`` is total: keys that are not in the catalog resolve to
    ``fallback`` so a station plan can always be laid out, even with
    modules the catalog has never heard of.
    """

    modules: Mapping[str, ModuleInfo]
    fallback: ModuleInfo = field(default_factory=lambda: ModuleInfo.box(*FALLBACK_SIZE))
    errors: tuple[ValidationError, ...] = ()
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mappings so a shared catalog can't drift between callers.
        object.__setattr__(self, "modules", MappingProxyType(dict(self.modules)))
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))
        object.__setattr__(self, "errors", tuple(self.errors))

    def lookup(self, key: str) -> ModuleInfo:
        return self.modules.get(key, self.fallback)

    def display_name(self, key: str) -> str:
        return self.names.get(key, key)

    def keys(self) -> list[str]:
        return list(self.modules)

    def __contains__(self, key: object) -> bool:
        return key in self.modules

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0
