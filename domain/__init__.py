from .canonical import (
    DEFAULT_RECORD,
    FIELD_SPECS,
    INITIAL_RECORD,
    NUMERIC_FIELDS,
    SCORE_FIELDS,
    TEXT_FIELDS,
    FieldKind,
    FieldSpec,
    ReportRecord,
)

__all__ = [
    "DEFAULT_RECORD",
    "FIELD_SPECS",
    "INITIAL_RECORD",
    "NUMERIC_FIELDS",
    "SCORE_FIELDS",
    "TEXT_FIELDS",
    "FieldKind",
    "FieldSpec",
    "ReportRecord",
]
