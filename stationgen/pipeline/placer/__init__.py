"""Placer — grows a station outward from its root connector.

Submodules:
  models        Placed modules, open nodes, placement records.
  geometry      Box bounds, strict overlap test, attach offsets, footprint.
  state         Structure state (placed modules + open nodes).
  engine        Placement engine (direct, bridged, fallback) and layout_station.
  serialization JSON conversion (layout_to_dict, parse_layout).
"""

from .models import (
    PlacedModule, OpenNode, Placement, StationLayout,
    ROOT, ATTACHED, CONNECTOR, FALLBACK, GRID,
)
from .geometry import (
    box_bounds, box_extents, extents_overlap, overlaps, attach_center, chained_center,
    footprint_bounds, footprint_area,
)
from .state import StructureState
from .engine import PlacementEngine, layout_station, grid_positions, LAYOUT_MODES
from .serialization import placement_to_dict, layout_to_dict, parse_placement, parse_layout

__all__ = [
    # Models
    "PlacedModule", "OpenNode", "Placement", "StationLayout",
    "ROOT", "ATTACHED", "CONNECTOR", "FALLBACK", "GRID",
    # Geometry
    "box_bounds", "box_extents", "extents_overlap", "overlaps",
    "attach_center", "chained_center",
    "footprint_bounds", "footprint_area",
    # State / Engine
    "StructureState", "PlacementEngine", "layout_station", "grid_positions",
    "LAYOUT_MODES",
    # Serialization
    "placement_to_dict", "layout_to_dict", "parse_placement", "parse_layout",
]
