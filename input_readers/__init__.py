from .excel import SpreadsheetError, read_first_sheet
from .image import image_to_base64, to_data_url
from .upload import InputRejectedError, UploadedPayload, check_spreadsheet_type, check_upload

__all__ = [
    "InputRejectedError",
    "SpreadsheetError",
    "UploadedPayload",
    "check_spreadsheet_type",
    "check_upload",
    "image_to_base64",
    "read_first_sheet",
    "to_data_url",
]
