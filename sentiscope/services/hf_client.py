from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..schemas import Sentiment, SentimentResult
from .explanation import explain_remote
from .keywords import extract_length_keywords

logger = logging.getLogger(__name__)


class RemoteUnavailable(RuntimeError):
    """The remote classifier could not produce a usable answer."""


class HuggingFaceService:
    """Calls the Hugging Face inference endpoint for sentiment analysis."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str = "https://router.huggingface.co/hf-inference/models",
        timeout: float = 15.0,
        max_input_chars: int = 512,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_input_chars = max_input_chars
        self._transport = transport
        self._url = f"{base_url.rstrip('/')}/{model}"

    async def classify(self, text: str, source: str | None = None) -> SentimentResult:
        cleaned = text.strip()
        if not cleaned:
            raise RemoteUnavailable("Nothing to classify: text is empty.")
        if not self.api_key:
            raise RemoteUnavailable(
                "HF_API_KEY is required to call the Hugging Face Inference API."
            )

        logger.info("Analyzing text: %s...", cleaned[:100])
        data = await self._post(cleaned[: self.max_input_chars])
        logger.debug("Hugging Face response: %s", data)

        candidate = self._top_candidate(data)
        sentiment = self._normalize_label(str(candidate["label"]))
        confidence = float(candidate["score"])
        return SentimentResult(
            text=cleaned,
            sentiment=sentiment,
            confidence=confidence,
            keywords=extract_length_keywords(cleaned),
            explanation=explain_remote(sentiment, confidence),
            source=source,
        )

    async def _post(self, text: str) -> Any:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        payload = {"inputs": text, "options": {"wait_for_model": True}}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self._url, headers=headers, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Hugging Face API error: %s", exc.response.text[:200])
            raise RemoteUnavailable(
                f"Hugging Face API error: {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            raise RemoteUnavailable("Unable to reach Hugging Face API") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteUnavailable("Hugging Face response was not valid JSON.") from exc

    @staticmethod
    def _top_candidate(data: Any) -> Mapping[str, Any]:
        # Responses are typically [[{label, score}, ...]]
        if isinstance(data, list) and data and isinstance(data[0], list):
            candidates = data[0]
        elif isinstance(data, list):
            candidates = data
        else:
            raise RemoteUnavailable("Hugging Face response is not a candidate list.")
        if not candidates:
            raise RemoteUnavailable("Hugging Face response contained no candidates.")

        for item in candidates:
            if not isinstance(item, dict) or "label" not in item:
                raise RemoteUnavailable("Malformed candidate in Hugging Face response.")
            score = item.get("score")
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise RemoteUnavailable("Candidate score is not a number.")
            if not 0.0 <= score <= 1.0:
                raise RemoteUnavailable(f"Candidate score out of range: {score}")

        # max() keeps the first candidate among equal scores.
        return max(candidates, key=lambda item: item["score"])

    @staticmethod
    def _normalize_label(label: str) -> Sentiment:
        lower = label.lower()
        if label == "LABEL_2" or "positive" in lower:
            return Sentiment.positive
        if label == "LABEL_0" or "negative" in lower:
            return Sentiment.negative
        return Sentiment.neutral
