"""
OPENAI CLIENT
-------------
Loads .env and hands out one shared OpenAI client. OpenAIVisionTransport in
extraction.transport calls it to read dashboard screenshots in-process, and
checks has_api_key() first so a missing OPENAI_API_KEY becomes a 500-style
response instead of an exception from the SDK.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from openai import OpenAI

load_dotenv()

_client: OpenAI | None = None


def has_api_key() -> bool:
    return bool(os.getenv("OPENAI_API_KEY", "").strip())


def get_client() -> OpenAI:
    """Return a singleton OpenAI client instance."""
    global _client
    if _client is None:
        _client = OpenAI()
    return _client
