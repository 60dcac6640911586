"""Station design serialization — convert StationDesign to JSON-safe dicts."""

from __future__ import annotations

from .models import StationDesign


def design_to_dict(design: StationDesign) -> dict:
    """Convert a StationDesign to a JSON-serializable dict."""
    return {
        "modules": [
            {"module_id": m.module_id, "count": m.count}
            for m in design.modules
        ],
        "docks": design.docks,
        "piers": design.piers,
        "storage_container": design.storage_container,
        "storage_solid": design.storage_solid,
        "storage_liquid": design.storage_liquid,
        "culture": design.culture,
        "plan_name": design.plan_name,
    }
