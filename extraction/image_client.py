"""
AI image extraction with retries.

ImageExtractionClient sends a dashboard screenshot to the analysis
collaborator, maps whatever keys come back onto canonical fields, normalizes
them and retries on any failure using the configured backoff schedule.

extract() never raises. The caller gets an ExtractionOutcome holding either a
non-empty patch or the message of the last failed attempt.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from config import RETRY_DELAYS_SECONDS
from fields.aliases import map_labels
from input_readers.image import image_to_base64

from .prompts import build_dashboard_prompt
from .response_parsing import unwrap_extracted_data
from .retry import run_with_retries
from .to_canonical import normalize
from .transport import AnalyzeTransport, ExtractionError

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to analyze image. Please try again or fill the fields manually."
UNREADABLE_IMAGE_MESSAGE = "Unable to read the uploaded image. Please try another file."


@dataclass
class ExtractionOutcome:
    patch: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.patch)


class ImageExtractionClient:
    def __init__(
        self,
        transport: AnalyzeTransport,
        delays: Sequence[float] = RETRY_DELAYS_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.transport = transport
        self.delays = tuple(delays)
        self.sleep = sleep

    def _attempt(self, payload: Dict[str, str]) -> Dict[str, Any]:
        response = self.transport.send(payload)
        body = response.body

        if not response.ok:
            api_error = body.get("error") if isinstance(body, dict) else None
            raise ExtractionError(api_error if isinstance(api_error, str) else f"HTTP error {response.status_code}")

        patch = normalize(map_labels(unwrap_extracted_data(body)))
        if not patch:
            # An image with no recognizable metrics is retried like an upstream failure.
            raise ExtractionError("Invalid analysis response")
        return patch

    def extract(self, image_bytes: bytes, mime_type: Optional[str] = None, file_name: str = "") -> ExtractionOutcome:
        """Extract a normalized patch from an image; failures come back in the outcome."""
        mime_type, image_b64 = image_to_base64(image_bytes, file_name, mime_type)
        if not image_b64:
            logger.warning("Image %r has no readable data", file_name)
            return ExtractionOutcome(error=UNREADABLE_IMAGE_MESSAGE)

        payload = {"prompt": build_dashboard_prompt(), "mimeType": mime_type, "imageBase64": image_b64}

        result = run_with_retries(lambda: self._attempt(payload), delays=self.delays, sleep=self.sleep)
        attempts = result.machine.attempt

        if result.succeeded and result.value:
            logger.info("Image extraction mapped %d field(s) after %d attempt(s)", len(result.value), attempts)
            return ExtractionOutcome(patch=result.value, attempts=attempts)

        last_error = result.machine.last_error
        message = str(last_error) if last_error is not None else ""
        logger.warning("Image extraction failed after %d attempt(s): %s", attempts, message)
        return ExtractionOutcome(error=message or GENERIC_FAILURE_MESSAGE, attempts=attempts)
