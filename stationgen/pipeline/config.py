"""Shared layout constants for the station pipeline.

These values describe how modules are spaced when the placer grows a
station outward from its root connector and where modules go when
nothing can be attached.  The row-grid spacing and the largest design
accepted for layout live here too.
Both the **placer** and the **layout** entry points read them from this
single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Placement rules for station modules.

    All distances are in game units (metres).
    """

    connector_key: str = "structures_arg_connector_cross_01_macro"
    """Six-way connector used as the station root and as the bridge
    module when nothing can be attached directly."""

    connector_buffer: int = 50
    """Clearance added when proposing a bridge connector off an open node."""

    chain_clearance: int = 100
    """Gap between a bridge connector and the module chained onto it."""

    fallback_origin_x: int = 20000
    """X coordinate where detached fallback placements start."""

    fallback_step: int = 1000
    """X advance per placed module (and per retry) for fallback placements."""

    grid_spacing: int = 5000
    """Distance between entries in row-grid mode."""

    grid_row_limit: int = 10
    """Entries per row in row-grid mode before wrapping along Z."""

    max_entry_count: int = 100
    """Largest count accepted for a single module entry or extra."""

    max_total_modules: int = 200
    """Largest number of modules (extras included) laid out for one design."""


# Module-level singleton — importable everywhere.
LAYOUT_RULES = LayoutRules()
