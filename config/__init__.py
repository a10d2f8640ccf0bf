from .settings import (
    ACCEPTED_SPREADSHEET_EXTENSIONS,
    ACCEPTED_SPREADSHEET_MIME_TYPES,
    DEFAULT_ANALYZE_ENDPOINT,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_SHEET_COLS,
    MAX_SHEET_ROWS,
    MAX_UPLOAD_FILE_BYTES,
    MIN_IMAGE_BASE64_CHARS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_DELAYS_SECONDS,
)

__all__ = [
    "ACCEPTED_SPREADSHEET_EXTENSIONS",
    "ACCEPTED_SPREADSHEET_MIME_TYPES",
    "DEFAULT_ANALYZE_ENDPOINT",
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "MAX_SHEET_COLS",
    "MAX_SHEET_ROWS",
    "MAX_UPLOAD_FILE_BYTES",
    "MIN_IMAGE_BASE64_CHARS",
    "REQUEST_TIMEOUT_SECONDS",
    "RETRY_DELAYS_SECONDS",
]
