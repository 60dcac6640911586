"""Placement serialization — JSON conversion."""

from __future__ import annotations

from stationgen.geometry import Vec3, Orientation

from .models import Placement, StationLayout


def placement_to_dict(p: Placement) -> dict:
    """Serialize one Placement to a JSON-safe dict."""
    return {
        "key": p.key,
        "position": list(p.position.as_tuple()),
        "orientation": {
            "yaw": p.orientation.yaw,
            "pitch": p.orientation.pitch,
            "roll": p.orientation.roll,
        },
        "kind": p.kind,
    }


def layout_to_dict(layout: StationLayout) -> dict:
    """Serialize a StationLayout to a JSON-safe dict."""
    return {
        "mode": layout.mode,
        "placements": [placement_to_dict(p) for p in layout.placements],
        "connector_count": layout.connector_count,
        "fallback_count": layout.fallback_count,
    }


def parse_placement(data: dict) -> Placement:
    """Parse a placement dict back into a Placement."""
    o = data.get("orientation") or {}
    return Placement(
        key=data["key"],
        position=Vec3.of(data["position"]),
        orientation=Orientation(
            yaw=int(o.get("yaw", 0)),
            pitch=int(o.get("pitch", 0)),
            roll=int(o.get("roll", 0)),
        ),
        kind=data.get("kind", "attached"),
    )


def parse_layout(data: dict) -> StationLayout:
    """Parse a layout.json dict back into a StationLayout (placements only)."""
    return StationLayout(
        placements=[parse_placement(p) for p in data["placements"]],
        mode=data.get("mode", "attached"),
    )
