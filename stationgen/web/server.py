"""
FastAPI web server — share link in, station layout / construction plan out.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from stationgen.catalog import Catalog, load_catalog, catalog_to_dict
from stationgen.pipeline.blueprint import build_plan_xml
from stationgen.pipeline.design import (
    StationDesign,
    parse_share_link, parse_design, validate_design, unknown_modules, design_to_dict,
)
from stationgen.pipeline.placer import (
    layout_station, layout_to_dict, footprint_bounds, footprint_area, LAYOUT_MODES,
)


log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Station Blueprint Generator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return load_catalog()


# ── Models ─────────────────────────────────────────────────────────

class ParseRequest(BaseModel):
    url: str


class ModuleEntry(BaseModel):
    module_id: str
    count: int = 1


class LayoutRequest(BaseModel):
    url: str | None = None
    modules: list[ModuleEntry] = []
    docks: int = 0
    piers: int = 0
    storage_container: int = 0
    storage_solid: int = 0
    storage_liquid: int = 0
    culture: str = "argon"
    plan_name: str = "Imported Plan"
    mode: str = "attached"


def _design_from_request(req: LayoutRequest) -> StationDesign:
    design = parse_design(req.model_dump())
    errors = validate_design(design)
    if req.mode not in LAYOUT_MODES:
        errors.append(f"Unknown layout mode '{req.mode}', expected one of {list(LAYOUT_MODES)}")
    if errors:
        raise HTTPException(status_code=400, detail={"errors": errors})
    return design


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/catalog")
def get_catalog_route():
    """Every module the placer knows the size of."""
    return catalog_to_dict(get_catalog())


@app.post("/api/parse")
def parse_route(req: ParseRequest):
    """Parse a share link into module requests."""
    modules = parse_share_link(req.url)
    return {
        "modules": [{"module_id": m.module_id, "count": m.count} for m in modules],
    }


@app.post("/api/layout")
def layout_route(req: LayoutRequest):
    """Lay out a station and return the placements as JSON."""
    design = _design_from_request(req)
    catalog = get_catalog()
    layout = layout_station(design, catalog, mode=req.mode)
    min_x, min_z, max_x, max_z = footprint_bounds(layout.modules)
    return {
        "design": design_to_dict(design),
        "layout": layout_to_dict(layout),
        "unknown_modules": unknown_modules(design, catalog),
        "footprint": {
            "min_x": min_x, "min_z": min_z,
            "max_x": max_x, "max_z": max_z,
            "area": footprint_area(layout.modules),
        },
    }


@app.post("/api/blueprint")
def blueprint_route(req: LayoutRequest):
    """Lay out a station and return the construction-plan XML."""
    design = _design_from_request(req)
    layout = layout_station(design, get_catalog(), mode=req.mode)
    xml = build_plan_xml(layout.placements, design.plan_name)
    log.info("Built plan '%s' with %d entries", design.plan_name, len(layout.placements))
    return Response(content=xml, media_type="application/xml")


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("stationgen.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
