"""Catalog loader — reads catalog/modules.json, parses and validates entries."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from stationgen.geometry import Vec3

from .models import ModuleInfo, ValidationError, Catalog, DEFAULT_BUFFER


CATALOG_PATH = Path(__file__).resolve().parent / "modules.json"

log = logging.getLogger(__name__)


# ── Validation ─────────────────────────────────────────────────────

def _validate_entry(data: dict) -> list[ValidationError]:
    """Run all validation checks on a single raw entry."""
    errs: list[ValidationError] = []
    key = data.get("key")
    if not isinstance(key, str) or not key:
        errs.append(ValidationError(str(key), "key", "Must be a non-empty string"))
        return errs

    size = data.get("size")
    if not isinstance(size, (list, tuple)) or len(size) != 3:
        errs.append(ValidationError(key, "size", "Must be a list of 3 integers"))
    else:
        for axis, v in zip("xyz", size):
            if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
                errs.append(ValidationError(key, f"size.{axis}", f"Must be a positive integer, got {v!r}"))

    buffer = data.get("buffer", DEFAULT_BUFFER)
    if not isinstance(buffer, int) or isinstance(buffer, bool) or buffer < 0:
        errs.append(ValidationError(key, "buffer", f"Must be a non-negative integer, got {buffer!r}"))

    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_entry(data: dict) -> ModuleInfo:
    size = Vec3.of(data["size"])
    return ModuleInfo.box(size.x, size.y, size.z, buffer=data.get("buffer", DEFAULT_BUFFER))


def build_catalog(entries: list[dict]) -> Catalog:
    """Build a Catalog from raw entry dicts.

    Invalid entries are skipped and recorded.  When a key appears more
    than once the first entry wins.
    """
    modules: dict[str, ModuleInfo] = {}
    names: dict[str, str] = {}
    errors: list[ValidationError] = []

    for data in entries:
        if not isinstance(data, dict):
            errors.append(ValidationError("_catalog", "modules", f"Entry is not an object: {data!r}"))
            continue
        entry_errors = _validate_entry(data)
        if entry_errors:
            errors.extend(entry_errors)
            continue
        key = data["key"]
        if key in modules:
            errors.append(ValidationError(key, "key", "Duplicate key, keeping first entry"))
            continue
        modules[key] = _parse_entry(data)
        names[key] = data.get("name", key)

    return Catalog(modules=modules, names=names, errors=tuple(errors))


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(path: Path | None = None) -> Catalog:
    """Load the module catalog from JSON.

    Never raises: read and parse failures are recorded on the returned
    catalog, whose lookups then resolve everything to the fallback box.
    """
    p = path or CATALOG_PATH
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        log.error("Catalog %s is not valid JSON: %s", p, exc)
        return Catalog(modules={}, errors=(ValidationError("_catalog", "json", f"Parse error: {exc}"),))
    except OSError as exc:
        log.error("Catalog %s could not be read: %s", p, exc)
        return Catalog(modules={}, errors=(ValidationError("_catalog", "file", f"Read error: {exc}"),))

    entries = raw.get("modules", []) if isinstance(raw, dict) else raw
    catalog = build_catalog(entries)
    for err in catalog.errors:
        log.warning("Catalog: %s", err)
    log.info("Loaded %d catalog modules from %s", len(catalog), p.name)
    return catalog
