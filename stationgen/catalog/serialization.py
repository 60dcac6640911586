"""Catalog serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from typing import Any

from .models import ModuleInfo, Catalog


def catalog_to_dict(catalog: Catalog) -> dict:
    """Serialize a Catalog to a JSON-safe dict for the web API."""
    return {
        "ok": catalog.ok,
        "module_count": len(catalog),
        "modules": [
            module_info_to_dict(catalog.modules[key], key=key, name=catalog.display_name(key))
            for key in catalog
        ],
        "fallback": module_info_to_dict(catalog.fallback),
        "errors": [{"key": e.key, "field": e.field, "message": e.message}
                   for e in catalog.errors],
    }


def module_info_to_dict(info: ModuleInfo, key: str | None = None, name: str | None = None) -> dict:
    """Serialize a ModuleInfo to a JSON-safe dict."""
    d: dict[str, Any] = {
        "size": list(info.size.as_tuple()),
        "buffer": info.buffer,
        "connections": [
            {
                "offset": list(c.offset.as_tuple()),
                "direction": list(c.direction.as_tuple()),
            }
            for c in info.connections
        ],
    }
    if key is not None:
        d = {"key": key, "name": name or key, **d}
    return d
