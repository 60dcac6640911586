"""Low-level geometry helpers for the placer."""

from __future__ import annotations

from typing import Iterable

from shapely.geometry import box as shapely_box
from shapely.ops import unary_union

from stationgen.catalog.models import ModuleInfo
from stationgen.geometry import Vec3

from .models import OpenNode, PlacedModule


def box_bounds(center: Vec3, info: ModuleInfo) -> tuple[Vec3, Vec3]:
    """Return (min_corner, max_corner) of a module's collision box.

    The buffer is not part of the box.  Half extents truncate, so an odd
    size loses one unit of box.
    """
    half = info.half_extents()
    return center - half, center + half


def box_extents(center: Vec3, info: ModuleInfo) -> tuple[tuple[int, int, int], tuple[int, int, int]]:
    """Same box as :func:`box_bounds`, as plain ``(x, y, z)`` int tuples."""
    half = info.half_extents()
    return (
        (center.x - half.x, center.y - half.y, center.z - half.z),
        (center.x + half.x, center.y + half.y, center.z + half.z),
    )


def extents_overlap(a, b) -> bool:
    """Strict intersection test on two :func:`box_extents` results."""
    (lo_a, hi_a), (lo_b, hi_b) = a, b
    return (
        lo_a[0] < hi_b[0] and hi_a[0] > lo_b[0]
        and lo_a[1] < hi_b[1] and hi_a[1] > lo_b[1]
        and lo_a[2] < hi_b[2] and hi_a[2] > lo_b[2]
    )


def overlaps(center_a: Vec3, info_a: ModuleInfo,
             center_b: Vec3, info_b: ModuleInfo) -> bool:
    """True if two module boxes strictly intersect on all three axes.

    Boxes whose faces coincide (``min_a == max_b``) only touch and are
    not overlapping, so modules can sit flush against each other.
    """
    return extents_overlap(box_extents(center_a, info_a), box_extents(center_b, info_b))


def attach_center(node: OpenNode, info: ModuleInfo, buffer: int) -> Vec3:
    """Centre of a module attached to *node*, pushed out along its direction.

    Only the node's own axis is offset, by half the module's size on that
    axis plus *buffer*; the other two coordinates stay on the node.
    """
    axis = node.direction.axis()
    return node.position + node.direction * (info.size.component(axis) // 2 + buffer)


def chained_center(
    anchor: Vec3, direction: Vec3,
    anchor_info: ModuleInfo, info: ModuleInfo,
    clearance: int,
) -> Vec3:
    """Centre of a module placed straight out from *anchor* along *direction*."""
    axis = direction.axis()
    reach = anchor_info.size.component(axis) // 2 + info.size.component(axis) // 2 + clearance
    return anchor + direction * reach


# ── Top-down footprint (X/Z plane) ─────────────────────────────────


def footprint(modules: Iterable[PlacedModule]):
    """Union of every module's box projected onto the X/Z plane."""
    rects = []
    for m in modules:
        lo, hi = box_bounds(m.position, m.info)
        rects.append(shapely_box(lo.x, lo.z, hi.x, hi.z))
    return unary_union(rects)


def footprint_bounds(modules: Iterable[PlacedModule]) -> tuple[float, float, float, float]:
    """(min_x, min_z, max_x, max_z) of the station footprint.

    Returns all zeros for an empty station.
    """
    shape = footprint(modules)
    if shape.is_empty:
        return (0.0, 0.0, 0.0, 0.0)
    return tuple(float(v) for v in shape.bounds)


def footprint_area(modules: Iterable[PlacedModule]) -> float:
    """Area of the station footprint in square metres, overlaps counted once."""
    return float(footprint(modules).area)
