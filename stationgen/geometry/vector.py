"""
Integer 3-vector and orientation value types.

All coordinates are in game units (metres), X = east, Y = up, Z = north.
Station modules never rotate, so orientation only exists to be written out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Vec3:
    x: int = 0
    y: int = 0
    z: int = 0

    ZERO: ClassVar[Vec3]

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: int) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def component(self, axis: int) -> int:
        """Return the x (0), y (1) or z (2) component."""
        return (self.x, self.y, self.z)[axis]

    def axis(self) -> int:
        """Index of the single non-zero component of a unit direction."""
        for i, v in enumerate(self.as_tuple()):
            if v:
                return i
        raise ValueError(f"{self} has no non-zero component")

    def manhattan(self) -> int:
        """|x| + |y| + |z| — distance from the origin on the module grid."""
        return abs(self.x) + abs(self.y) + abs(self.z)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, values) -> Vec3:
        """Build from any 3-item sequence (JSON lists, tuples)."""
        x, y, z = values
        return cls(int(x), int(y), int(z))


Vec3.ZERO = Vec3(0, 0, 0)


# Six cardinal unit directions, in the order connection nodes are generated.
CARDINALS: tuple[Vec3, ...] = (
    Vec3(1, 0, 0), Vec3(-1, 0, 0),
    Vec3(0, 1, 0), Vec3(0, -1, 0),
    Vec3(0, 0, 1), Vec3(0, 0, -1),
)


@dataclass(frozen=True)
class Orientation:
    """Yaw/pitch/roll in whole degrees."""

    yaw: int = 0
    pitch: int = 0
    roll: int = 0

    CANONICAL: ClassVar[Orientation]

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.yaw, self.pitch, self.roll)


Orientation.CANONICAL = Orientation(0, 0, 0)
