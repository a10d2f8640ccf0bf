from .aliases import FIELD_LOOKUP, map_labels, normalize_label, resolve_field
from .normalization import clamp, safe_file_stem, sanitize_text, to_safe_number

__all__ = [
    "FIELD_LOOKUP",
    "clamp",
    "map_labels",
    "normalize_label",
    "resolve_field",
    "safe_file_stem",
    "sanitize_text",
    "to_safe_number",
]
