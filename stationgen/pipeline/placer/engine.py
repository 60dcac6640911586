"""Main placement engine — greedy open-node attachment with bridge connectors."""

from __future__ import annotations

import logging
from typing import Iterable

from stationgen.catalog.models import Catalog
from stationgen.geometry import Vec3
from stationgen.pipeline.config import LAYOUT_RULES, LayoutRules
from stationgen.pipeline.design.mapping import expand_design
from stationgen.pipeline.design.models import StationDesign

from .geometry import attach_center, chained_center, overlaps
from .models import (
    PlacedModule, Placement, StationLayout,
    ATTACHED, CONNECTOR, FALLBACK, GRID,
)
from .state import StructureState


log = logging.getLogger(__name__)

LAYOUT_MODES = ("attached", "grid")


class PlacementEngine:
    """Places station modules one request at a time.

    Every call to :meth:`place` succeeds.  The engine tries, in order:

    1. attaching the module directly to an open node,
    2. bridging with a connector and chaining the module onto it,
    3. a detached fallback position far out on +X.

    Open nodes are always tried nearest-to-origin first so the station
    stays compact around its root.
    """

    def __init__(
        self,
        catalog: Catalog,
        state: StructureState | None = None,
        rules: LayoutRules = LAYOUT_RULES,
    ) -> None:
        self.catalog = catalog
        self.rules = rules
        self.state = state or StructureState(catalog, rules)

    def place(self, key: str) -> list[Placement]:
        """Place one module; return every module placed for it, in order."""
        placed = (
            self._place_direct(key)
            or self._place_bridged(key)
            or self._place_fallback(key)
        )
        return [Placement.of(m) for m in placed]

    def place_many(self, requests: Iterable[tuple[str, int]]) -> list[Placement]:
        """Place ``count`` units of each ``(key, count)`` request, in order."""
        out: list[Placement] = []
        for key, count in requests:
            for _ in range(count):
                out.extend(self.place(key))
        return out

    # ── 1. Direct attachment ───────────────────────────────────────

    def _place_direct(self, key: str) -> list[PlacedModule]:
        info = self.catalog.lookup(key)
        for node in self.state.ranked_nodes():
            center = attach_center(node, info, info.buffer)
            if self.state.collides(center, info):
                continue
            module = self.state.add_module(key, center, kind=ATTACHED, info=info)
            self.state.consume(node)
            log.info("Attached %s at %s", key, center.as_tuple())
            return [module]
        return []

    # ── 2. Bridge connector ────────────────────────────────────────

    def _place_bridged(self, key: str) -> list[PlacedModule]:
        """Insert a connector off an open node and chain the module past it.

        Both positions are checked before either is committed, so a
        connector is never left behind without its module.
        """
        info = self.catalog.lookup(key)
        conn_key = self.rules.connector_key
        conn_info = self.catalog.lookup(conn_key)

        for node in self.state.ranked_nodes():
            conn_center = attach_center(node, conn_info, self.rules.connector_buffer)
            if self.state.collides(conn_center, conn_info):
                continue

            target = chained_center(
                conn_center, node.direction, conn_info, info,
                self.rules.chain_clearance,
            )
            if (self.state.collides(target, info)
                    or overlaps(conn_center, conn_info, target, info)):
                log.debug("Bridge at %s rejected: %s does not fit beyond it",
                          conn_center.as_tuple(), key)
                continue

            connector = self.state.add_module(conn_key, conn_center, kind=CONNECTOR, info=conn_info)
            self.state.consume(node)
            module = self.state.add_module(key, target, kind=ATTACHED, info=info)
            log.info("Bridged %s at %s via connector at %s",
                     key, target.as_tuple(), conn_center.as_tuple())
            return [connector, module]
        return []

    # ── 3. Fallback ────────────────────────────────────────────────

    def _place_fallback(self, key: str) -> list[PlacedModule]:
        """Park the module out on +X, stepping until it is clear."""
        info = self.catalog.lookup(key)
        x = self.rules.fallback_origin_x + self.state.module_count * self.rules.fallback_step
        center = Vec3(x, 0, 0)
        while self.state.collides(center, info):
            center = center + Vec3(self.rules.fallback_step, 0, 0)
        module = self.state.add_module(key, center, kind=FALLBACK, info=info)
        log.warning("No attachment point for %s, placed detached at %s",
                    key, center.as_tuple())
        return [module]


# ── Row-grid layout ───────────────────────────────────────────────


def grid_positions(count: int, rules: LayoutRules = LAYOUT_RULES) -> list[Vec3]:
    """Positions for *count* entries laid out in rows along X, wrapping on Z."""
    return [
        Vec3((i % rules.grid_row_limit) * rules.grid_spacing,
             0,
             (i // rules.grid_row_limit) * rules.grid_spacing)
        for i in range(count)
    ]


# ── Main layout function ──────────────────────────────────────────


def layout_station(
    design: StationDesign,
    catalog: Catalog,
    *,
    mode: str = "attached",
    rules: LayoutRules = LAYOUT_RULES,
) -> StationLayout:
    """Lay out every module of a station design.

    Parameters
    ----------
    design : StationDesign
        The parsed station design (share-link modules plus extras).
    catalog : Catalog
        The loaded module catalog.
    mode : str
        ``"attached"`` grows a connected station from a root connector;
        ``"grid"`` spaces modules on a plain row grid without geometry.

    Returns
    -------
    StationLayout
        All placements in order, root connector first in attached mode.
    """
    if mode not in LAYOUT_MODES:
        raise ValueError(f"Unknown layout mode '{mode}', expected one of {LAYOUT_MODES}")

    requests = expand_design(design)

    if mode == "grid":
        keys = [key for key, count in requests for _ in range(count)]
        modules = [
            PlacedModule(key=key, position=pos, info=catalog.lookup(key), kind=GRID)
            for key, pos in zip(keys, grid_positions(len(keys), rules))
        ]
        log.info("Grid layout: %d modules", len(modules))
        return StationLayout(
            placements=[Placement.of(m) for m in modules],
            mode=mode,
            modules=modules,
        )

    engine = PlacementEngine(catalog, rules=rules)
    placements = [Placement.of(engine.state.root)]
    placements.extend(engine.place_many(requests))

    layout = StationLayout(
        placements=placements,
        mode=mode,
        modules=list(engine.state.modules),
    )
    log.info(
        "Attached layout: %d placements (%d connectors, %d detached)",
        len(layout.placements), layout.connector_count, layout.fallback_count,
    )
    return layout
