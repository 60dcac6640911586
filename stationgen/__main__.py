"""
Station blueprint generator — entry point.

Usage:
    python -m stationgen generate <share-link> [options]
    python -m stationgen serve [--port PORT] [--host HOST]

generate options:
    --docks N              standard M docks to add (default 0)
    --piers N              3-dock L/XL piers to add (default 0)
    --storage-container N  L container storage to add (default 0)
    --storage-solid N      L solid storage to add (default 0)
    --storage-liquid N     L liquid storage to add (default 0)
    --culture NAME         argon | paranid | teladi | split | terran
    --name NAME            plan name (default "Imported Plan")
    --mode MODE            attached (default) | grid
    --out DIR              output folder (default: the game's plan folder)
    --overwrite            replace an existing plan file
"""

import logging
import sys
from pathlib import Path


USAGE = (
    "Usage: python -m stationgen generate <share-link> [--docks N] [--piers N] "
    "[--storage-container N] [--storage-solid N] [--storage-liquid N] "
    "[--culture NAME] [--name NAME] [--mode attached|grid] [--out DIR] [--overwrite]\n"
    "       python -m stationgen serve [--port PORT] [--host HOST]"
)

_INT_OPTIONS = {
    "--docks": "docks",
    "--piers": "piers",
    "--storage-container": "storage_container",
    "--storage-solid": "storage_solid",
    "--storage-liquid": "storage_liquid",
}


def _parse_generate_args(args: list[str]) -> dict:
    opts: dict = {"mode": "attached", "overwrite": False, "out": None}
    positional: list[str] = []
    i = 0
    while i < len(args):
        a = args[i]
        if a == "--overwrite":
            opts["overwrite"] = True
        elif a in _INT_OPTIONS or a in ("--culture", "--name", "--mode", "--out"):
            if i + 1 >= len(args):
                raise ValueError(f"Missing value for {a}")
            value = args[i + 1]
            if a in _INT_OPTIONS:
                try:
                    opts[_INT_OPTIONS[a]] = int(value)
                except ValueError:
                    raise ValueError(f"{a} expects an integer, got '{value}'") from None
            elif a == "--culture":
                opts["culture"] = value
            elif a == "--name":
                opts["plan_name"] = value
            else:
                opts[a[2:]] = value
            i += 1
        elif a.startswith("--"):
            raise ValueError(f"Unknown option: {a}")
        else:
            positional.append(a)
        i += 1

    if len(positional) != 1:
        raise ValueError("Expected exactly one share link")
    opts["url"] = positional[0]
    return opts


def generate(args: list[str]) -> int:
    from stationgen.catalog import load_catalog
    from stationgen.pipeline.blueprint import build_plan_xml
    from stationgen.pipeline.design import (
        StationDesign, parse_share_link, validate_design, unknown_modules,
    )
    from stationgen.pipeline.placer import layout_station, footprint_bounds
    from stationgen.plans import write_plan, PlanExistsError

    try:
        opts = _parse_generate_args(args)
    except ValueError as exc:
        print(f"Error: {exc}")
        print(USAGE)
        return 1

    design = StationDesign(
        modules=parse_share_link(opts["url"]),
        **{k: opts[k] for k in (*_INT_OPTIONS.values(), "culture", "plan_name") if k in opts},
    )
    errors = validate_design(design)
    if opts["mode"] not in ("attached", "grid"):
        errors.append(f"Unknown layout mode '{opts['mode']}'")
    if errors:
        for e in errors:
            print(f"Error: {e}")
        return 1

    print(f"{'Module ID':<48} {'Count':>5}")
    for m in design.modules:
        print(f"{m.module_id:<48} {m.count:>5}")

    catalog = load_catalog()
    for macro in unknown_modules(design, catalog):
        print(f"Warning: '{macro}' is not in the catalog, using a default-sized box")

    layout = layout_station(design, catalog, mode=opts["mode"])
    xml = build_plan_xml(layout.placements, design.plan_name)

    out_dir = Path(opts["out"]) if opts["out"] else None
    try:
        path = write_plan(xml, design.plan_name, out_dir, overwrite=opts["overwrite"])
    except PlanExistsError as exc:
        print(f"Error: {exc}. Use --overwrite or pick another --name.")
        return 1

    min_x, min_z, max_x, max_z = footprint_bounds(layout.modules)
    print(
        f"{len(layout.placements)} entries "
        f"({layout.connector_count} connectors, {layout.fallback_count} detached), "
        f"footprint {max_x - min_x:.0f} x {max_z - min_z:.0f} m"
    )
    print(f"Successfully saved blueprint to: {path}")
    return 0


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = sys.argv[1:]
    cmd = args[0] if args else ""

    if cmd == "generate":
        sys.exit(generate(args[1:]))
    elif cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from stationgen.web.server import main as serve
        serve(host=host, port=port)
    else:
        print(f"Unknown command: {cmd}" if cmd else "No command given")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
