"""
Transports to the image-analysis collaborator.

The extraction client only knows the request/response contract:

    request:  {"prompt": str, "mimeType": str, "imageBase64": str}
    response: AnalyzeResponse(status_code, body)
              body = {"extractedData": {...}} on success, {"error": str} on failure

HttpAnalyzeTransport posts to a proxy endpoint. OpenAIVisionTransport calls the
vision model in-process and answers with the same status contract the proxy uses,
so either can sit behind ImageExtractionClient.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import openai
import requests

from config import (
    DEFAULT_ANALYZE_ENDPOINT,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MIN_IMAGE_BASE64_CHARS,
    REQUEST_TIMEOUT_SECONDS,
)
from input_readers.image import to_data_url

from .llm_client import get_client, has_api_key
from .prompts import DASHBOARD_SYSTEM_PROMPT
from .response_parsing import parse_llm_response

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    """Raised for a failed extraction attempt (bad status, bad payload, nothing mapped)."""
    pass


class TransportError(ExtractionError):
    """Raised when the collaborator could not be reached at all."""
    pass


@dataclass(frozen=True)
class AnalyzeResponse:
    status_code: int
    body: Any = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AnalyzeTransport(Protocol):
    def send(self, payload: Dict[str, str]) -> AnalyzeResponse: ...


class HttpAnalyzeTransport:
    """POST the analysis payload as JSON to a proxy endpoint."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.endpoint = endpoint or os.getenv("ANALYZE_ENDPOINT_URL", DEFAULT_ANALYZE_ENDPOINT)
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, payload: Dict[str, str]) -> AnalyzeResponse:
        try:
            resp = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Could not reach analysis service: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}

        return AnalyzeResponse(status_code=resp.status_code, body=body)


def _error(status_code: int, message: str) -> AnalyzeResponse:
    return AnalyzeResponse(status_code=status_code, body={"error": message})


class OpenAIVisionTransport:
    """Run the vision model directly, answering with proxy-style status codes."""

    def __init__(self, client: Any = None, model: Optional[str] = None, temperature: float = DEFAULT_TEMPERATURE):
        self._client = client
        self.model = model or os.getenv("VISION_MODEL", DEFAULT_MODEL)
        self.temperature = temperature

    def send(self, payload: Dict[str, str]) -> AnalyzeResponse:
        image_b64 = payload.get("imageBase64")
        if not isinstance(image_b64, str) or len(image_b64) < MIN_IMAGE_BASE64_CHARS:
            return _error(400, "Invalid image payload.")

        if self._client is None and not has_api_key():
            return _error(500, "Missing OPENAI_API_KEY. Add it to .env and restart.")

        prompt = payload.get("prompt")
        if not isinstance(prompt, str) or not prompt.strip():
            prompt = "Analyze this dashboard screenshot and return JSON data."
        mime_type = payload.get("mimeType") or "image/png"

        client = self._client or get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": DASHBOARD_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": to_data_url(mime_type, image_b64)}},
                        ],
                    },
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            return _error(e.status_code, e.message or f"Model request failed with status {e.status_code}.")
        except openai.OpenAIError as e:
            raise TransportError(f"Model request failed: {e}") from e

        raw_output = response.choices[0].message.content if response.choices else None
        if not isinstance(raw_output, str) or not raw_output.strip():
            return _error(502, "Model returned no extractable JSON content.")

        try:
            extracted = parse_llm_response(raw_output)
        except ValueError:
            logger.warning("Vision model output was not valid JSON: %.200s", raw_output)
            return _error(502, "Model output was not valid JSON.")

        return AnalyzeResponse(status_code=200, body={"extractedData": extracted})
