import asyncio
import json
import os
import sys

import httpx
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from sentiscope.schemas import Sentiment  # noqa: E402
from sentiscope.services.hf_client import HuggingFaceService, RemoteUnavailable  # noqa: E402


def make_service(handler, api_key="hf_test"):
    return HuggingFaceService(
        api_key=api_key,
        model="cardiffnlp/twitter-roberta-base-sentiment-latest",
        base_url="https://hf.test/models",
        transport=httpx.MockTransport(handler),
    )


def respond_with(payload, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


def test_negative_label_maps_with_raw_score():
    service = make_service(
        respond_with(
            [[
                {"label": "negative", "score": 0.93},
                {"label": "neutral", "score": 0.05},
                {"label": "positive", "score": 0.02},
            ]]
        )
    )
    result = asyncio.run(service.classify("  The delivery was late again  ", source="a.txt"))
    assert result.sentiment == Sentiment.negative
    assert result.confidence == pytest.approx(0.93)
    assert "93.0%" in result.explanation
    assert "advanced NLP analysis" in result.explanation
    assert result.text == "The delivery was late again"
    assert result.keywords == ["delivery", "late", "again"]
    assert result.source == "a.txt"


@pytest.mark.parametrize(
    "label,expected",
    [
        ("LABEL_2", Sentiment.positive),
        ("LABEL_0", Sentiment.negative),
        ("LABEL_1", Sentiment.neutral),
        ("POSITIVE", Sentiment.positive),
        ("Negative", Sentiment.negative),
        ("mixed", Sentiment.neutral),
    ],
)
def test_label_vocabulary_mapping(label, expected):
    service = make_service(respond_with([{"label": label, "score": 0.7}]))
    assert asyncio.run(service.classify("some text")).sentiment == expected


def test_score_ties_keep_first_candidate():
    service = make_service(
        respond_with([[{"label": "positive", "score": 0.5}, {"label": "negative", "score": 0.5}]])
    )
    assert asyncio.run(service.classify("hmm")).sentiment == Sentiment.positive


def test_request_shape_and_truncation():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[[{"label": "neutral", "score": 0.6}]])

    service = make_service(handler)
    service.max_input_chars = 10
    result = asyncio.run(service.classify("abcdefghijklmnopqrstuvwxyz"))
    assert seen["url"] == "https://hf.test/models/cardiffnlp/twitter-roberta-base-sentiment-latest"
    assert seen["auth"] == "Bearer hf_test"
    assert seen["body"] == {"inputs": "abcdefghij", "options": {"wait_for_model": True}}
    assert result.text == "abcdefghijklmnopqrstuvwxyz"


def test_missing_token_is_unavailable():
    service = make_service(respond_with([]), api_key=None)
    with pytest.raises(RemoteUnavailable):
        asyncio.run(service.classify("good"))


def test_empty_text_is_unavailable():
    service = make_service(respond_with([[{"label": "positive", "score": 0.9}]]))
    with pytest.raises(RemoteUnavailable):
        asyncio.run(service.classify("   "))


def test_non_success_status_is_unavailable():
    service = make_service(respond_with({"error": "unauthorized"}, status_code=401))
    with pytest.raises(RemoteUnavailable, match="401"):
        asyncio.run(service.classify("good"))


def test_transport_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(RemoteUnavailable):
        asyncio.run(make_service(handler).classify("good"))


def test_invalid_json_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(RemoteUnavailable):
        asyncio.run(make_service(handler).classify("good"))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        [[]],
        {"error": "Model is loading"},
        [[{"label": "positive"}]],
        [[{"label": "positive", "score": "high"}]],
        [[{"label": "positive", "score": 1.5}]],
        [["positive"]],
    ],
)
def test_malformed_payload_is_unavailable(payload):
    service = make_service(respond_with(payload))
    with pytest.raises(RemoteUnavailable):
        asyncio.run(service.classify("good"))
