"""Structure state — the placed modules and the attachment points still open."""

from __future__ import annotations

from stationgen.catalog.models import Catalog, ModuleInfo
from stationgen.geometry import Vec3, Orientation
from stationgen.pipeline.config import LAYOUT_RULES, LayoutRules

from .geometry import box_extents, extents_overlap
from .models import PlacedModule, OpenNode, ROOT, ATTACHED


class StructureState:
    """Growing station structure.

    Modules are only ever appended.  Each placement registers one open
    node per connection of the module; a node is removed only when it is
    used to anchor a new module.  The state starts with the root
    connector at the origin.
    """

    def __init__(self, catalog: Catalog, rules: LayoutRules = LAYOUT_RULES) -> None:
        self.catalog = catalog
        self.rules = rules
        self._modules: list[PlacedModule] = []
        self._extents: list[tuple[tuple[int, int, int], tuple[int, int, int]]] = []
        self._open_nodes: list[OpenNode] = []
        self.add_module(rules.connector_key, Vec3.ZERO, kind=ROOT)

    # ── Views ──────────────────────────────────────────────────────

    @property
    def modules(self) -> tuple[PlacedModule, ...]:
        return tuple(self._modules)

    @property
    def open_nodes(self) -> tuple[OpenNode, ...]:
        """Open nodes in creation order."""
        return tuple(self._open_nodes)

    @property
    def module_count(self) -> int:
        return len(self._modules)

    @property
    def root(self) -> PlacedModule:
        return self._modules[0]

    # ── Mutation ───────────────────────────────────────────────────

    def add_module(
        self,
        key: str,
        position: Vec3,
        *,
        kind: str = ATTACHED,
        info: ModuleInfo | None = None,
        open_nodes: bool = True,
    ) -> PlacedModule:
        """Append a module and register its connection nodes as open.

        No collision check happens here; callers decide where it is legal.
        """
        info = info or self.catalog.lookup(key)
        module = PlacedModule(
            key=key,
            position=position,
            info=info,
            orientation=Orientation.CANONICAL,
            kind=kind,
        )
        self._modules.append(module)
        self._extents.append(box_extents(position, info))
        if open_nodes:
            # Orientation is always canonical, so node offsets and
            # directions carry over untransformed.
            self._open_nodes.extend(
                OpenNode(position=position + conn.offset, direction=conn.direction)
                for conn in info.connections
            )
        return module

    def consume(self, node: OpenNode) -> None:
        """Remove one open node (the first equal one) after it anchored a module."""
        self._open_nodes.remove(node)

    # ── Queries ────────────────────────────────────────────────────

    def collides(self, center: Vec3, info: ModuleInfo) -> bool:
        """True if a box at *center* overlaps any placed module."""
        box = box_extents(center, info)
        return any(extents_overlap(box, placed) for placed in self._extents)

    def ranked_nodes(self) -> list[OpenNode]:
        """Open nodes nearest the origin first; ties keep creation order."""
        return sorted(self._open_nodes, key=lambda n: n.position.manhattan())
