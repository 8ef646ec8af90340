import asyncio
import json
import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure backend package is importable from tests dir
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

import main  # noqa: E402
from sentiscope.schemas import BatchItem, BatchRequest  # noqa: E402
from sentiscope.services import SentimentAnalyzer  # noqa: E402
from sentiscope.services.hf_client import RemoteUnavailable  # noqa: E402
from sentiscope.store import ResultStore  # noqa: E402


class DownRemote:
    async def classify(self, text, source=None):
        raise RemoteUnavailable("offline")


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "analyzer", SentimentAnalyzer(remote=DownRemote()))
    monkeypatch.setattr(main, "result_store", ResultStore())
    return TestClient(main.app)


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_analyze_single_text(client: TestClient):
    r = client.post("/analyze", json={"text": "  Terrible, awful, worst experience ever ", "source": "chat"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["text"] == "Terrible, awful, worst experience ever"
    assert data["sentiment"] == "negative"
    assert data["keywords"] == ["terrible", "awful", "worst"]
    assert data["source"] == "chat"
    assert "fallback" in data["explanation"]


def test_analyze_rejects_blank_text(client: TestClient):
    r = client.post("/analyze", json={"text": "   "})
    assert r.status_code == 422


def test_batch_drops_blank_items_and_keeps_order(client: TestClient):
    payload = {"items": [{"text": "good"}, {"text": "  "}, {"text": "bad", "source": "b"}]}
    r = client.post("/analyze/batch", json=payload)
    assert r.status_code == 200, r.text
    results = r.json()["results"]
    assert [item["text"] for item in results] == ["good", "bad"]
    assert [item["sentiment"] for item in results] == ["positive", "negative"]


def test_batch_with_only_blank_items_is_rejected(client: TestClient):
    r = client.post("/analyze/batch", json={"items": [{"text": " "}]})
    assert r.status_code == 400


def test_import_csv_file(client: TestClient):
    content = 'review,rating\n"Excellent service",5\nAwful food,1\n'
    r = client.post("/analyze/import", json={"filename": "reviews.csv", "content": content})
    assert r.status_code == 200, r.text
    results = r.json()["results"]
    assert [item["text"] for item in results] == ["Excellent service", "Awful food"]
    assert {item["source"] for item in results} == {"reviews.csv"}


def test_import_unsupported_type(client: TestClient):
    r = client.post("/analyze/import", json={"filename": "scan.pdf", "content": "%PDF"})
    assert r.status_code == 400


def test_import_invalid_json(client: TestClient):
    r = client.post("/analyze/import", json={"filename": "data.json", "content": "{nope"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid JSON format"


def test_results_history_summary_and_export(client: TestClient):
    client.post("/analyze", json={"text": "I love it"})
    client.post("/analyze", json={"text": "worst ever"})

    listed = client.get("/results").json()
    assert len(listed) == 2

    summary = client.get("/results/summary").json()
    assert summary["total"] == 2
    assert summary["positive"] == 1
    assert summary["negative"] == 1

    csv_response = client.get("/results/export", params={"format": "csv"})
    assert csv_response.status_code == 200
    assert csv_response.text.splitlines()[0] == "Text,Sentiment,Confidence,Keywords,Explanation,Timestamp"

    json_response = client.get("/results/export", params={"format": "json"})
    assert json.loads(json_response.text)["totalResults"] == 2

    html_response = client.get("/results/export", params={"format": "html"})
    assert "Sentiment Analysis Report" in html_response.text

    assert client.delete("/results").json() == {"removed": 2}
    assert client.get("/results").json() == []


def test_export_without_results_is_404(client: TestClient):
    assert client.get("/results/export").status_code == 404


class CrashingRemote:
    async def classify(self, text, source=None):
        raise RuntimeError("proxy blew up")


class HangingRemote:
    async def classify(self, text, source=None):
        await asyncio.sleep(30)


def test_analyze_stays_ok_when_remote_crashes(client: TestClient, monkeypatch):
    monkeypatch.setattr(main, "analyzer", SentimentAnalyzer(remote=CrashingRemote()))
    r = client.post("/analyze", json={"text": "I love it"})
    assert r.status_code == 200, r.text
    assert "using fallback analysis" in r.json()["explanation"]


def test_cancelled_batch_stores_nothing(monkeypatch):
    store = ResultStore()
    monkeypatch.setattr(main, "result_store", store)
    monkeypatch.setattr(
        main, "analyzer", SentimentAnalyzer(remote=HangingRemote(), remote_timeout=60)
    )
    request = BatchRequest(items=[BatchItem(text="good"), BatchItem(text="bad")])

    async def scenario():
        task = asyncio.create_task(main.analyze_batch(request))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return await store.list_results()

    assert asyncio.run(scenario()) == []
