"""
Parsing of collaborator / model output into plain dicts.

The collaborator may hand back a structured object, a JSON string, or a raw
provider envelope with the JSON buried in a text part. Model text may also be
wrapped in markdown fences or carry trailing commas.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Mapping


def _extract_json_from_text(text: str) -> str:
    """Extract the first JSON object from a response that may include markdown or extra text."""
    text = (text or "").strip()

    if "```" in text:
        match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, flags=re.DOTALL)
        if match:
            return match.group(1)
        text = re.sub(r"```(?:json)?", "", text).strip()

    match = re.search(r"\{.*\}", text, flags=re.DOTALL)
    return match.group(0) if match else text


def parse_llm_response(raw_response: str) -> Any:
    """Parse model output into JSON with minimal repair attempts."""
    if not raw_response or not raw_response.strip():
        raise ValueError("Model returned empty response")

    json_text = _extract_json_from_text(raw_response)

    try:
        return json.loads(json_text)
    except json.JSONDecodeError as e:
        error_details = f"Position {e.pos}: {e.msg}"

        json_text_fixed = re.sub(r",\s*([}\]])", r"\1", json_text)
        try:
            return json.loads(json_text_fixed)
        except json.JSONDecodeError:
            pass

        raise ValueError(
            f"Model output was not valid JSON. Error: {error_details}. "
            f"First 200 chars: {raw_response[:200]}"
        )


def _candidate_text(body: Mapping[str, Any]) -> Any:
    try:
        return body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


def unwrap_extracted_data(body: Any) -> Dict[str, Any]:
    """
    Pull the extracted field mapping out of a successful collaborator response.

    Looks at `extractedData`, then `data`, then a provider text candidate, and
    finally treats the body itself as the data. JSON strings are parsed.

    Raises:
        ValueError: if the payload is text that does not parse as JSON
    """
    if isinstance(body, str):
        body = parse_llm_response(body)
    if not isinstance(body, Mapping):
        return {}

    extracted = body.get("extractedData")
    if extracted is None:
        extracted = body.get("data")
    if extracted is None:
        extracted = _candidate_text(body)
    if extracted is None:
        extracted = body

    if isinstance(extracted, str):
        extracted = parse_llm_response(extracted)

    return dict(extracted) if isinstance(extracted, Mapping) else {}
