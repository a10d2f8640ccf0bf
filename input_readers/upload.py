"""
UPLOAD CHECKS
-------------
Validates uploaded files before any bytes are read.
The payload mirrors the attributes of a web-framework upload object
(name, size, type, getvalue), so those objects can be passed straight in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from config import (
    ACCEPTED_SPREADSHEET_EXTENSIONS,
    ACCEPTED_SPREADSHEET_MIME_TYPES,
    MAX_UPLOAD_FILE_BYTES,
)


class InputRejectedError(ValueError):
    """Raised when an upload is missing, too large or of an unsupported type."""
    pass


@dataclass(frozen=True)
class UploadedPayload:
    name: str
    data: bytes
    type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    def getvalue(self) -> bytes:
        return self.data

    @classmethod
    def from_path(cls, path: Path, mime_type: Optional[str] = None) -> "UploadedPayload":
        path = path.expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return cls(name=path.name, data=path.read_bytes(), type=mime_type)


def _size_mb(size: int) -> str:
    return f"{size / (1024 * 1024):.1f}"


def check_upload(upload: Any, kind: str, max_bytes: int = MAX_UPLOAD_FILE_BYTES) -> None:
    """
    Reject a missing or oversized upload.

    Args:
        upload: object exposing `name` and `size`
        kind: "image" or "spreadsheet" (selects the message wording)
        max_bytes: size ceiling

    Raises:
        InputRejectedError: with a human-readable message
    """
    if upload is None:
        raise InputRejectedError("No file selected.")

    size = int(getattr(upload, "size", 0) or 0)
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        if kind == "image":
            raise InputRejectedError(
                f"Image is too large ({_size_mb(size)} MB). Please use an image under {limit_mb} MB."
            )
        raise InputRejectedError(
            f"Spreadsheet is too large ({_size_mb(size)} MB). Please use a file under {limit_mb} MB."
        )


def check_spreadsheet_type(upload: Any) -> str:
    """Return the lowercase extension to read the upload with, or raise InputRejectedError."""
    name = str(getattr(upload, "name", "") or "")
    suffix = Path(name).suffix.lower()
    if suffix in ACCEPTED_SPREADSHEET_EXTENSIONS:
        return suffix

    mime_type = (getattr(upload, "type", None) or "").lower()
    if mime_type == "text/csv":
        return ".csv"
    if mime_type == "application/vnd.ms-excel":
        return ".xls"
    if mime_type in ACCEPTED_SPREADSHEET_MIME_TYPES:
        return ".xlsx"

    raise InputRejectedError(
        f"Unsupported spreadsheet type: {name or mime_type or 'unknown'}. "
        f"Use one of: {', '.join(ACCEPTED_SPREADSHEET_EXTENSIONS)}."
    )
