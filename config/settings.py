"""
Central configuration for upload limits, retry policy and model defaults.

This module defines:
- The upload size ceiling shared by image and spreadsheet uploads.
- The accepted spreadsheet extensions and MIME types.
- Sheet limits to keep oversized spreadsheets out of memory.
- The backoff schedule for the AI extraction path.
- Default model / endpoint settings for the extraction collaborator.

All values are constants and should be imported where needed (no runtime logic here).
Secrets and endpoint overrides are read from the environment by the modules that use them.
"""

from __future__ import annotations


MAX_UPLOAD_FILE_BYTES = 8 * 1024 * 1024

ACCEPTED_SPREADSHEET_EXTENSIONS = (".xlsx", ".xls", ".csv")
ACCEPTED_SPREADSHEET_MIME_TYPES = (
    "text/csv",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
)

MAX_SHEET_ROWS = 10_000
MAX_SHEET_COLS = 100

# Waits between attempts; total attempts = len(RETRY_DELAYS_SECONDS) + 1
RETRY_DELAYS_SECONDS = (1, 2, 4, 8, 16)

DEFAULT_ANALYZE_ENDPOINT = "http://localhost:5173/api/analyze-dashboard"
REQUEST_TIMEOUT_SECONDS = 60
MIN_IMAGE_BASE64_CHARS = 100

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0
