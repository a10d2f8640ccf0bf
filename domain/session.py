"""
Editing session state.

A ReportSession owns the working record for one editing session together with
the user-visible error message and the busy flags of the two upload paths.
Everything that changes the record goes through edit_field() or apply_patch().

The working record is a plain merge of patches and edits, so a numeric field
can hold "" while the user is typing. snapshot() resolves that through
materialize() at the rendering boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from extraction.to_canonical import materialize
from fields.normalization import safe_file_stem, sanitize_text, to_safe_number

from .canonical import FIELD_SPECS, INITIAL_RECORD, ReportRecord

logger = logging.getLogger(__name__)


class UnknownFieldError(KeyError):
    """Raised when an edit targets a name that is not a canonical field."""
    pass


def report_filename(store_name: Any) -> str:
    return f"Wiser_Report_{safe_file_stem(store_name, 'Store')}.html"


@dataclass
class ReportSession:
    data: Dict[str, Any] = field(default_factory=lambda: dict(INITIAL_RECORD))
    error_message: str = ""
    is_analyzing: bool = False
    is_parsing_spreadsheet: bool = False

    def edit_field(self, name: str, value: Any) -> None:
        """Apply one manual edit, keeping the previous value when numeric input is junk."""
        spec = FIELD_SPECS.get(name)
        if spec is None:
            raise UnknownFieldError(name)

        if spec.is_numeric:
            if value == "":
                new_value: Any = ""
            else:
                new_value = to_safe_number(value, self.data.get(name, spec.fallback))
        else:
            new_value = sanitize_text(value)

        self.data = {**self.data, name: new_value}

    def apply_patch(self, patch: Mapping[str, Any]) -> None:
        """Merge a normalized patch over the working record in one step."""
        if not patch:
            return
        self.data = {**self.data, **patch}
        logger.info("Merged %d field(s) into the working record", len(patch))

    def fail(self, message: str) -> None:
        self.error_message = message

    def clear_error(self) -> None:
        self.error_message = ""

    @property
    def error(self) -> Optional[str]:
        return self.error_message or None

    def snapshot(self) -> ReportRecord:
        return materialize(self.data)

    def report_filename(self) -> str:
        return report_filename(self.data.get("store_name"))
