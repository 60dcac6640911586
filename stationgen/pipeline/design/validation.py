"""Design validation — check a StationDesign before it is laid out."""

from __future__ import annotations

from stationgen.catalog import Catalog
from stationgen.pipeline.config import LAYOUT_RULES, LayoutRules

from .mapping import CULTURE_CODES, expand_design
from .models import StationDesign


_EXTRA_FIELDS = ("docks", "piers", "storage_container", "storage_solid", "storage_liquid")


def validate_design(design: StationDesign, rules: LayoutRules = LAYOUT_RULES) -> list[str]:
    """Validate a StationDesign. Returns error messages (empty = valid)."""
    errors: list[str] = []

    if not design.modules:
        errors.append("No modules found in the share link")

    for m in design.modules:
        if not m.module_id:
            errors.append("Module entry with an empty id")
        if m.count < 0:
            errors.append(f"Module '{m.module_id}': count must be >= 0, got {m.count}")
        elif m.count > rules.max_entry_count:
            errors.append(
                f"Module '{m.module_id}': count must be <= {rules.max_entry_count}, got {m.count}"
            )

    for name in _EXTRA_FIELDS:
        value = getattr(design, name)
        if value < 0:
            errors.append(f"'{name}' must be >= 0, got {value}")
        elif value > rules.max_entry_count:
            errors.append(f"'{name}' must be <= {rules.max_entry_count}, got {value}")

    total = design.module_count + sum(getattr(design, name) for name in _EXTRA_FIELDS)
    if total > rules.max_total_modules:
        errors.append(
            f"Station has {total} modules, at most {rules.max_total_modules} can be laid out"
        )

    if design.culture.strip().lower() not in CULTURE_CODES:
        errors.append(
            f"Unknown culture '{design.culture}', expected one of "
            f"{sorted(CULTURE_CODES)}"
        )

    if not design.plan_name.strip():
        errors.append("Plan name must not be empty")

    return errors


def unknown_modules(design: StationDesign, catalog: Catalog) -> list[str]:
    """Catalog keys of the design (extras included) that the catalog doesn't know.

    These still lay out (as fallback-sized boxes), so callers report
    them as warnings rather than errors.
    """
    seen: list[str] = []
    for key, _count in expand_design(design):
        if key not in catalog and key not in seen:
            seen.append(key)
    return seen
