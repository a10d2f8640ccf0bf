from .image_client import ExtractionOutcome, ImageExtractionClient
from .spreadsheet import extract_sheet_fields, spreadsheet_to_patch
from .to_canonical import materialize, normalize
from .transport import (
    AnalyzeResponse,
    ExtractionError,
    HttpAnalyzeTransport,
    OpenAIVisionTransport,
    TransportError,
)

__all__ = [
    "AnalyzeResponse",
    "ExtractionError",
    "ExtractionOutcome",
    "HttpAnalyzeTransport",
    "ImageExtractionClient",
    "OpenAIVisionTransport",
    "TransportError",
    "extract_sheet_fields",
    "materialize",
    "normalize",
    "spreadsheet_to_patch",
]
