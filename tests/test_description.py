"""Tests for the Gemini image description provider.

The REST API is replaced with an httpx mock transport.
"""

import base64
import json

import httpx
import pytest

from locallens.api.exceptions import ANALYSIS_FAILED_MESSAGE, ImageAnalysisError
from locallens.api.metrics import MeteredDescriptionProvider, MetricsService
from locallens.providers.description import (
    DESCRIPTION_PROMPT,
    GeminiDescriptionProvider,
)


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_provider(handler, api_key: str = "test-key") -> GeminiDescriptionProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GeminiDescriptionProvider(api_key=api_key, model="gemini-test", client=client)


def test_describe_returns_trimmed_lowercase_keywords():
    """Test that the reply text is trimmed and lowercased."""
    provider = make_provider(lambda request: httpx.Response(200, json=gemini_reply("  Blue Striped T-Shirt \n")))

    assert provider.describe(b"img", "image/jpeg") == "blue striped t-shirt"


def test_describe_sends_image_and_prompt():
    """Test the request the provider sends."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=gemini_reply("red hat"))

    make_provider(handler).describe(b"\x89PNG", "image/png")

    assert seen["url"].endswith("/models/gemini-test:generateContent")
    assert seen["key"] == "test-key"
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[0]["inline_data"] == {
        "mime_type": "image/png",
        "data": base64.b64encode(b"\x89PNG").decode("ascii"),
    }
    assert parts[1]["text"] == DESCRIPTION_PROMPT


def test_describe_joins_multiple_text_parts():
    """Test that a reply split over several parts is joined."""
    reply = {"candidates": [{"content": {"parts": [{"text": "black "}, {"text": "boots"}]}}]}
    provider = make_provider(lambda request: httpx.Response(200, json=reply))

    assert provider.describe(b"img", "image/jpeg") == "black boots"


def test_empty_description_is_analysis_failure():
    """Test that a blank reply is an analysis failure."""
    provider = make_provider(lambda request: httpx.Response(200, json=gemini_reply("   ")))

    with pytest.raises(ImageAnalysisError) as exc_info:
        provider.describe(b"img", "image/jpeg")

    assert exc_info.value.message == ANALYSIS_FAILED_MESSAGE


def test_http_error_is_analysis_failure():
    """Test that an error status from the API is an analysis failure."""
    provider = make_provider(lambda request: httpx.Response(403, json={"error": "denied"}))

    with pytest.raises(ImageAnalysisError) as exc_info:
        provider.describe(b"img", "image/jpeg")

    assert exc_info.value.status_code == 502
    assert exc_info.value.details["error_type"] == "HTTPStatusError"


def test_malformed_reply_is_analysis_failure():
    """Test that a reply without candidates is an analysis failure."""
    provider = make_provider(lambda request: httpx.Response(200, json={"candidates": []}))

    with pytest.raises(ImageAnalysisError):
        provider.describe(b"img", "image/jpeg")


def test_missing_api_key_fails_without_calling_api():
    """Test that no request is sent when credentials are missing."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=gemini_reply("red hat"))

    provider = make_provider(handler, api_key="")

    with pytest.raises(ImageAnalysisError):
        provider.describe(b"img", "image/jpeg")
    assert calls == []


def test_missing_api_key_logs_warning(caplog):
    """Test that constructing a provider without credentials warns."""
    with caplog.at_level("WARNING"):
        GeminiDescriptionProvider(api_key="", client=httpx.Client())

    assert "API key not set" in caplog.text


def test_metered_provider_records_calls():
    """Test that the metering wrapper counts successes and failures."""
    metrics = MetricsService()
    metrics.reset()

    ok = MeteredDescriptionProvider(
        make_provider(lambda request: httpx.Response(200, json=gemini_reply("red hat"))),
        metrics=metrics,
    )
    failing = MeteredDescriptionProvider(
        make_provider(lambda request: httpx.Response(500)),
        metrics=metrics,
    )

    assert ok.describe(b"img", "image/jpeg") == "red hat"
    with pytest.raises(ImageAnalysisError):
        failing.describe(b"img", "image/jpeg")

    snapshot = metrics.get_metrics()
    assert snapshot["description_count"] == 2
    assert snapshot["description_failures"] == 1
    metrics.reset()


def test_non_object_reply_part_raises_analysis_error():
    """Test that a reply part that is not an object is an analysis failure."""
    body = {"candidates": [{"content": {"parts": ["blue"]}}]}
    provider = make_provider(lambda request: httpx.Response(200, json=body))

    with pytest.raises(ImageAnalysisError) as exc_info:
        provider.describe(b"img", "image/jpeg")

    assert exc_info.value.status_code == 502
    assert exc_info.value.details["error_type"] == "AttributeError"
