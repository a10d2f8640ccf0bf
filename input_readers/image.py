"""
IMAGE READER
------------
Convert uploaded images to base64 for the extraction collaborator.
"""

from __future__ import annotations

import base64
import mimetypes
from typing import Optional


def image_to_base64(data: bytes, file_name: str = "", mime_type: Optional[str] = None) -> tuple[str, str]:
    """
    Convert image bytes to base64 with MIME type detection.

    Args:
        data: raw image bytes
        file_name: original file name, used to guess the MIME type
        mime_type: MIME type reported by the uploader, if any

    Returns:
        Tuple of (mime_type, base64_string); the base64 string is empty for empty input
    """
    if not mime_type:
        mime_type, _ = mimetypes.guess_type(file_name)
    if not mime_type:
        mime_type = "image/png"

    encoded = base64.b64encode(data or b"").decode("utf-8")

    return mime_type, encoded


def to_data_url(mime_type: str, b64_data: str) -> str:
    """Data URL format for vision API calls (data:image/png;base64,...)."""
    return f"data:{mime_type};base64,{b64_data}"
