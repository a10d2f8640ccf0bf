"""
Conversion of raw partial records into the ReportRecord format.

This module provides the single normalization step every source goes through:
- normalize(): sanitize whatever canonical keys a source produced into a clean patch.
- materialize(): overlay a patch onto the default record so every field has a value.

Keys must already be canonical field names; external sources run their labels
through fields.aliases.map_labels first.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from domain.canonical import DEFAULT_RECORD, FIELD_SPECS, FieldKind, ReportRecord
from fields.normalization import clamp, sanitize_text, to_safe_number


def _clean_value(field: str, value: Any) -> Any:
    spec = FIELD_SPECS[field]
    if spec.kind is FieldKind.TEXT:
        return sanitize_text(value, spec.fallback)

    number = to_safe_number(value, spec.fallback)
    if spec.clamp_range is not None:
        lo, hi = spec.clamp_range
        number = clamp(number, lo, hi)
    return number


def normalize(raw: Any) -> Dict[str, Any]:
    """
    Sanitize a partial raw record into a partial clean record (a patch).

    Only canonical fields present in `raw` are emitted; anything that is not a
    mapping yields an empty patch.
    """
    if not isinstance(raw, Mapping):
        return {}

    return {field: _clean_value(field, raw[field]) for field in FIELD_SPECS if field in raw}


def materialize(patch: Mapping[str, Any], defaults: Optional[Mapping[str, Any]] = None) -> ReportRecord:
    """
    Overlay `patch` onto `defaults` and return a total ReportRecord.

    The patch is re-normalized first, so transient editor values (e.g. "" in a
    numeric field) resolve to safe defaults. Fields that are missing or None
    in the patch keep the default.
    """
    record = dict(DEFAULT_RECORD if defaults is None else defaults)
    present = {k: v for k, v in patch.items() if v is not None} if isinstance(patch, Mapping) else {}
    record.update(normalize(present))
    return ReportRecord(**record)
