"""
Upload processing for an editing session.

ingest_image / ingest_spreadsheet take an upload (anything with name, size,
type and getvalue()), run it through the matching extractor and merge the
resulting patch into the session. They return True when a patch was merged
and False when the failure was reported on the session instead. Nothing is
raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

from domain.session import ReportSession
from input_readers.excel import SpreadsheetError
from input_readers.upload import InputRejectedError, check_spreadsheet_type, check_upload

from .image_client import UNREADABLE_IMAGE_MESSAGE, ImageExtractionClient
from .spreadsheet import spreadsheet_to_patch

logger = logging.getLogger(__name__)

SPREADSHEET_FAILURE_MESSAGE = "Failed to read spreadsheet. Please check the file format."


def ingest_image(session: ReportSession, upload: Any, client: ImageExtractionClient) -> bool:
    try:
        check_upload(upload, "image")
    except InputRejectedError as e:
        logger.warning("Rejected image upload: %s", e)
        session.fail(str(e))
        return False

    session.is_analyzing = True
    session.clear_error()
    try:
        try:
            data = upload.getvalue()
        except (OSError, AttributeError) as e:
            logger.warning("Could not read image upload: %s", e)
            session.fail(UNREADABLE_IMAGE_MESSAGE)
            return False

        outcome = client.extract(data, getattr(upload, "type", None), getattr(upload, "name", ""))
        if not outcome.ok:
            session.fail(outcome.error or UNREADABLE_IMAGE_MESSAGE)
            return False

        session.apply_patch(outcome.patch)
        return True
    finally:
        session.is_analyzing = False


def ingest_spreadsheet(session: ReportSession, upload: Any) -> bool:
    try:
        check_upload(upload, "spreadsheet")
        extension = check_spreadsheet_type(upload)
    except InputRejectedError as e:
        logger.warning("Rejected spreadsheet upload: %s", e)
        session.fail(str(e))
        return False

    session.is_parsing_spreadsheet = True
    session.clear_error()
    try:
        patch = spreadsheet_to_patch(upload.getvalue(), extension)
    except SpreadsheetError as e:
        logger.warning("Spreadsheet %r could not be used: %s", getattr(upload, "name", ""), e)
        session.fail(str(e) or SPREADSHEET_FAILURE_MESSAGE)
        return False
    except (OSError, AttributeError) as e:
        logger.warning("Could not read spreadsheet upload: %s", e)
        session.fail(SPREADSHEET_FAILURE_MESSAGE)
        return False
    else:
        session.apply_patch(patch)
        return True
    finally:
        session.is_parsing_spreadsheet = False
