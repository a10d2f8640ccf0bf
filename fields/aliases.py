"""
LABEL RESOLUTION
----------------
Maps free-text labels to canonical field names.

Spreadsheet headers and keys returned by the vision model rarely match the
canonical field names. Every alias declared in FIELD_SPECS (plus the field
name itself) is reduced to a normalized key: lowercase, alphanumerics only.
Incoming labels are reduced the same way and looked up exactly, so
"Post-Purchase Revenue", "post purchase revenue" and "postPurchaseRevenue"
all land on the same field. There is no fuzzy or partial matching.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional

from domain.canonical import FIELD_SPECS

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_label(label: Any) -> str:
    return _NON_ALNUM.sub("", str("" if label is None else label).lower())


def _build_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for field, spec in FIELD_SPECS.items():
        lookup[normalize_label(field)] = field
        for alias in spec.aliases:
            lookup[normalize_label(alias)] = field
    return lookup


FIELD_LOOKUP: Dict[str, str] = _build_lookup()


def resolve_field(label: Any) -> Optional[str]:
    """Return the canonical field for `label`, or None if it has no exact alias match."""
    key = normalize_label(label)
    if not key:
        return None
    field = FIELD_LOOKUP.get(key)
    if field is None:
        logger.debug("No field alias for label %r", label)
    return field


def map_labels(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Re-key an arbitrary mapping onto canonical field names.

    Unresolved labels are dropped. When several labels resolve to the same
    field, the first one wins.
    """
    mapped: Dict[str, Any] = {}
    if not isinstance(raw, Mapping):
        return mapped

    for label, value in raw.items():
        field = resolve_field(label)
        if field is not None and field not in mapped:
            mapped[field] = value
    return mapped
