"""Scenarios for the retrying image extraction client."""

import base64
import json

from domain.canonical import FIELD_SPECS
from extraction.image_client import (
    GENERIC_FAILURE_MESSAGE,
    UNREADABLE_IMAGE_MESSAGE,
    ImageExtractionClient,
)
from extraction.transport import AnalyzeResponse, TransportError

from tests.fakes import ScriptedTransport, extracted, server_error


def _client(responses, sleep):
    transport = ScriptedTransport(responses)
    return ImageExtractionClient(transport, sleep=sleep), transport


def test_success_on_sixth_attempt(fake_png, sleep_recorder):
    client, transport = _client(
        [server_error()] * 5 + [extracted({"storeName": "Acme", "totalRevenue": "$1,000"})],
        sleep_recorder,
    )

    outcome = client.extract(fake_png, "image/png")

    assert outcome.ok
    assert outcome.error is None
    assert outcome.attempts == 6
    assert outcome.patch == {"store_name": "Acme", "total_revenue": 1000}
    assert sleep_recorder.calls == [1, 2, 4, 8, 16]
    assert len(transport.payloads) == 6


def test_all_attempts_fail_reports_last_error(fake_png, sleep_recorder):
    responses = [server_error(f"failure {n}") for n in range(1, 7)]
    client, transport = _client(responses, sleep_recorder)

    outcome = client.extract(fake_png, "image/png")

    assert not outcome.ok
    assert outcome.patch == {}
    assert outcome.error == "failure 6"
    assert len(transport.payloads) == 6


def test_status_without_error_text(fake_png, sleep_recorder):
    client, _ = _client([AnalyzeResponse(503, {})] * 6, sleep_recorder)
    assert client.extract(fake_png).error == "HTTP error 503"


def test_first_success_skips_retries(fake_png, sleep_recorder):
    client, transport = _client([extracted({"cart_rev": 5})], sleep_recorder)

    outcome = client.extract(fake_png, "image/jpeg")

    assert outcome.patch == {"cart_rev": 5}
    assert outcome.attempts == 1
    assert sleep_recorder.calls == []
    assert transport.payloads[0]["mimeType"] == "image/jpeg"


def test_payload_contract(fake_png, sleep_recorder):
    client, transport = _client([extracted({"cart_rev": 5})], sleep_recorder)
    client.extract(fake_png, None, "dashboard.jpg")

    payload = transport.payloads[0]
    assert set(payload) == {"prompt", "mimeType", "imageBase64"}
    assert payload["mimeType"] == "image/jpeg"
    assert base64.b64decode(payload["imageBase64"]) == fake_png
    for field in FIELD_SPECS:
        assert f"- {field} (" in payload["prompt"]
    assert "revenue_coverage (number 0-100)" in payload["prompt"]


def test_empty_result_is_retried(fake_png, sleep_recorder):
    client, _ = _client(
        [extracted({"nothing": "useful"}), extracted({"widget_utilization": 250})],
        sleep_recorder,
    )

    outcome = client.extract(fake_png)

    assert outcome.patch == {"widget_utilization": 100}
    assert outcome.attempts == 2


def test_transport_and_parse_failures_are_retried(fake_png, sleep_recorder):
    client, _ = _client(
        [
            TransportError("connection refused"),
            AnalyzeResponse(200, {"extractedData": "not json at all"}),
            AnalyzeResponse(200, {"candidates": [{"content": {"parts": [{"text": json.dumps({"store": "Acme"})}]}}]}),
        ],
        sleep_recorder,
    )

    outcome = client.extract(fake_png)

    assert outcome.patch == {"store_name": "Acme"}
    assert outcome.attempts == 3


def test_empty_error_message_uses_generic_text(fake_png, sleep_recorder):
    client, _ = _client([AnalyzeResponse(500, {"error": ""})] * 6, sleep_recorder)
    assert client.extract(fake_png).error == GENERIC_FAILURE_MESSAGE


def test_empty_image_never_reaches_collaborator(sleep_recorder):
    client, transport = _client([], sleep_recorder)

    outcome = client.extract(b"", "image/png")

    assert outcome.error == UNREADABLE_IMAGE_MESSAGE
    assert transport.payloads == []
