"""Identifier mapping — calculator module ids and cultures to catalog keys."""

from __future__ import annotations

from .models import StationDesign


CULTURE_CODES = {
    "argon": "arg",
    "paranid": "par",
    "teladi": "tel",
    "split": "spl",
    "terran": "ter",
}
DEFAULT_CULTURE = "argon"

STORAGE_KINDS = ("container", "solid", "liquid")

_VARIANT_SUFFIXES = ("_01", "_02", "_03")


def culture_code(culture: str) -> str:
    """Three-letter race code for a culture name; unknown names map to Argon."""
    return CULTURE_CODES.get(culture.strip().lower(), CULTURE_CODES[DEFAULT_CULTURE])


def macro_for_module(module_id: str) -> str:
    """Map a station-calculator module id to the game's macro name.

    ``module_gen_prod_hullparts_01`` -> ``prod_gen_hullparts_macro``.
    The calculator's ``_01``..``_03`` variant suffix is not part of the
    game macro.
    """
    base = module_id
    if base.startswith("module_"):
        base = base[len("module_"):]
    if base.startswith("gen_prod_"):
        base = "prod_gen_" + base[len("gen_prod_"):]
    for suffix in _VARIANT_SUFFIXES:
        if base.endswith(suffix):
            base = base[:-len(suffix)]
            break
    return base + "_macro"


def dock_macro(culture: str) -> str:
    """M-size trade-station dock area (1M6S)."""
    return f"dockarea_{culture_code(culture)}_m_02_tradestation_01_macro"


def pier_macro(culture: str) -> str:
    """3-dock pier for L/XL ships."""
    return f"pier_{culture_code(culture)}_harbor_03_macro"


def storage_macro(culture: str, kind: str) -> str:
    """L-size storage of the given kind (container, solid, liquid)."""
    if kind not in STORAGE_KINDS:
        raise ValueError(f"Unknown storage kind '{kind}', expected one of {STORAGE_KINDS}")
    return f"storage_{culture_code(culture)}_l_{kind}_01_macro"


def expand_design(design: StationDesign) -> list[tuple[str, int]]:
    """Ordered (catalog key, count) requests for a design.

    Docks and piers come first, then container, solid and liquid storage,
    then the share-link modules in link order.  Zero counts are dropped.
    """
    culture = design.culture
    requests = [
        (dock_macro(culture), design.docks),
        (pier_macro(culture), design.piers),
        (storage_macro(culture, "container"), design.storage_container),
        (storage_macro(culture, "solid"), design.storage_solid),
        (storage_macro(culture, "liquid"), design.storage_liquid),
    ]
    requests.extend((macro_for_module(m.module_id), m.count) for m in design.modules)
    return [(key, count) for key, count in requests if count > 0]
