"""Station design — dataclasses, share-link parsing, mapping, validation, and serialization."""

from .models import ModuleRequest, StationDesign
from .parsing import parse_share_link, parse_design
from .mapping import (
    macro_for_module, culture_code, dock_macro, pier_macro, storage_macro,
    expand_design, CULTURE_CODES,
)
from .validation import validate_design, unknown_modules
from .serialization import design_to_dict

__all__ = [
    # Models
    "ModuleRequest", "StationDesign",
    # Parsing
    "parse_share_link", "parse_design",
    # Mapping
    "macro_for_module", "culture_code", "dock_macro", "pier_macro",
    "storage_macro", "expand_design", "CULTURE_CODES",
    # Validation / Serialization
    "validate_design", "unknown_modules", "design_to_dict",
]
