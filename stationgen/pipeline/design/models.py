"""Station design dataclasses — what the user asked the station to contain."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ModuleRequest:
    module_id: str      # station-calculator id, e.g. "module_gen_prod_hullparts_01"
    count: int


@dataclass
class StationDesign:
    """Modules from a share link plus the docks and storage added on top."""

    modules: list[ModuleRequest] = field(default_factory=list)
    docks: int = 0
    piers: int = 0
    storage_container: int = 0
    storage_solid: int = 0
    storage_liquid: int = 0
    culture: str = "argon"
    plan_name: str = "Imported Plan"

    @property
    def module_count(self) -> int:
        """Total units requested from the share link (extras not included)."""
        return sum(m.count for m in self.modules)
