"""Module catalog — load, validate, query, and serialize catalog/modules.json."""

from .models import (
    ConnectionNode, ModuleInfo, ValidationError, Catalog,
    DEFAULT_BUFFER, FALLBACK_SIZE,
)
from .loader import load_catalog, build_catalog, CATALOG_PATH
from .serialization import catalog_to_dict, module_info_to_dict

__all__ = [
    # Models
    "ConnectionNode", "ModuleInfo", "ValidationError", "Catalog",
    "DEFAULT_BUFFER", "FALLBACK_SIZE",
    # Loader
    "load_catalog", "build_catalog", "CATALOG_PATH",
    # Serialization
    "catalog_to_dict", "module_info_to_dict",
]
