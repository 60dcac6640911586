"""Design parsing — share links and raw dicts into StationDesign."""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qs, unquote, urlsplit

from .models import ModuleRequest, StationDesign


log = logging.getLogger(__name__)

_L_PARAM_RE = re.compile(r"[?&]l=([^&]+)")
_ENTRY_RE = re.compile(r"\$module-([^,]+),count:(\d+)")


def _layout_param(url: str) -> str | None:
    """Extract the raw ``l`` parameter from a station-calculator link.

    The calculator uses hash routing, so the query usually sits inside
    the fragment (``…/#/station-calculator?l=…``).
    """
    parts = urlsplit(url)
    query = parts.query
    if not query and "?" in parts.fragment:
        query = parts.fragment.split("?", 1)[1]

    values = parse_qs(query).get("l")
    if values and values[0]:
        return values[0]

    match = _L_PARAM_RE.search(url)
    if match:
        return unquote(match.group(1))
    return None


def parse_share_link(url: str) -> list[ModuleRequest]:
    """Parse a station-calculator share link into module requests.

    Format of the ``l`` parameter::

        @$module-<id>,count:<n>;,$module-<id>,count:<n>;

    Entries that don't match are skipped.  A link without an ``l``
    parameter yields an empty list.
    """
    url = url.strip().strip("'\"").strip()
    raw = _layout_param(url)
    if not raw:
        log.warning("No 'l' parameter in share link: %s", url)
        return []

    if raw.startswith("@"):
        raw = raw[1:]

    modules: list[ModuleRequest] = []
    for entry in raw.split(";,"):
        entry = entry.rstrip(";")
        if not entry:
            continue
        match = _ENTRY_RE.search(entry)
        if match is None:
            log.debug("Skipping unrecognised share-link entry %r", entry)
            continue
        modules.append(ModuleRequest(module_id=match.group(1), count=int(match.group(2))))

    log.info("Parsed %d module entries from share link", len(modules))
    return modules


def parse_design(data: dict) -> StationDesign:
    """Parse a raw dict (from JSON / API input) into a StationDesign.

    Modules come from ``modules`` (a list of ``{module_id, count}``),
    from a share link in ``url``, or both (link entries first).
    """
    modules: list[ModuleRequest] = []
    if data.get("url"):
        modules.extend(parse_share_link(data["url"]))
    modules.extend(
        ModuleRequest(module_id=m["module_id"], count=int(m.get("count", 1)))
        for m in data.get("modules", [])
    )

    return StationDesign(
        modules=modules,
        docks=int(data.get("docks", 0)),
        piers=int(data.get("piers", 0)),
        storage_container=int(data.get("storage_container", 0)),
        storage_solid=int(data.get("storage_solid", 0)),
        storage_liquid=int(data.get("storage_liquid", 0)),
        culture=data.get("culture", "argon"),
        plan_name=data.get("plan_name", "Imported Plan"),
    )
