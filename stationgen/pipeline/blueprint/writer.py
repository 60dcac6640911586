"""Construction-plan XML — the file format the game imports station plans from.

A plan looks like::

    <?xml version="1.0" encoding="UTF-8"?>
    <plans>
      <plan id="my_plan" name="My Plan" description="">
        <entry index="1" macro="structures_arg_connector_cross_01_macro">
          <offset>
            <position x="0" y="0" z="0" />
          </offset>
        </entry>
        <entry index="2" macro="prod_gen_hullparts_macro">
          <offset>
            <position x="550" y="0" z="0" />
            <rotation yaw="0" pitch="0" roll="0" />
          </offset>
        </entry>
      </plan>
    </plans>

Game-authored plans leave out ``rotation`` for an entry at the origin,
so the writer does the same.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable

from stationgen.geometry import Vec3, Orientation
from stationgen.pipeline.placer.models import Placement


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def plan_id(plan_name: str) -> str:
    """Plan id: lower-case name with spaces replaced by underscores."""
    return plan_name.lower().replace(" ", "_")


def build_plan_xml(placements: Iterable[Placement], plan_name: str, description: str = "") -> str:
    """Serialize placements into a construction-plan XML document."""
    plans = ET.Element("plans")
    plan = ET.SubElement(plans, "plan", {
        "id": plan_id(plan_name),
        "name": plan_name,
        "description": description,
    })

    for index, p in enumerate(placements, start=1):
        entry = ET.SubElement(plan, "entry", {"index": str(index), "macro": p.key})
        offset = ET.SubElement(entry, "offset")
        ET.SubElement(offset, "position", {
            "x": str(p.position.x),
            "y": str(p.position.y),
            "z": str(p.position.z),
        })
        if p.position != Vec3.ZERO:
            ET.SubElement(offset, "rotation", {
                "yaw": str(p.orientation.yaw),
                "pitch": str(p.orientation.pitch),
                "roll": str(p.orientation.roll),
            })

    ET.indent(plans, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(plans, encoding="unicode")


def parse_plan_xml(text: str) -> tuple[str, list[Placement]]:
    """Read a construction plan back into (plan name, placements).

    Only the first ``<plan>`` is read.  Entries come back in index order.
    """
    root = ET.fromstring(text.encode("utf-8"))
    plan = root if root.tag == "plan" else root.find("plan")
    if plan is None:
        raise ValueError("No <plan> element in construction plan")

    entries = sorted(plan.findall("entry"), key=lambda e: int(e.get("index", "0")))
    placements: list[Placement] = []
    for e in entries:
        pos = e.find("offset/position")
        rot = e.find("offset/rotation")
        position = Vec3.ZERO if pos is None else Vec3.of(
            round(float(pos.get(axis, "0"))) for axis in "xyz")
        orientation = Orientation.CANONICAL if rot is None else Orientation(
            int(rot.get("yaw", "0")), int(rot.get("pitch", "0")), int(rot.get("roll", "0")))
        placements.append(Placement(
            key=e.get("macro", ""),
            position=position,
            orientation=orientation,
        ))
    return plan.get("name", ""), placements
