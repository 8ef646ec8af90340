from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..schemas import BatchItem, Sentiment, SentimentResult
from .explanation import explain_fallback
from .hf_client import HuggingFaceService, RemoteUnavailable
from .lexicon import LexiconSentiment

logger = logging.getLogger(__name__)


class SentimentAnalyzer:
    """Remote classifier first, lexicon scorer when the remote call fails.

    ``analyze`` and ``analyze_batch`` never raise: every input yields exactly
    one ``SentimentResult``. Passing ``remote=None`` makes the lexicon scorer
    the primary path, which then reports its richer keyword explanation.
    """

    def __init__(
        self,
        remote: Optional[HuggingFaceService],
        local: Optional[LexiconSentiment] = None,
        remote_timeout: float = 15.0,
        batch_delay: float = 0.0,
        batch_concurrency: int = 1,
    ) -> None:
        self.remote = remote
        self.local = local or LexiconSentiment()
        self.remote_timeout = remote_timeout
        self.batch_delay = batch_delay
        self.batch_concurrency = max(1, batch_concurrency)

    async def analyze(self, text: str, source: str | None = None) -> SentimentResult:
        if self.remote is None:
            try:
                return self.local.analyze(text, source)
            except Exception:
                logger.exception("Local sentiment failed, using fallback")
                return self._safe_fallback(text, source)
        return await self._try_remote(text, source) or self._safe_fallback(text, source)

    async def analyze_batch(self, items: Sequence[BatchItem]) -> List[SentimentResult]:
        if self.batch_concurrency > 1:
            semaphore = asyncio.Semaphore(self.batch_concurrency)

            async def bounded(item: BatchItem) -> SentimentResult:
                async with semaphore:
                    return await self._analyze_item(item)

            # gather preserves input order.
            return list(await asyncio.gather(*(bounded(item) for item in items)))

        results: List[SentimentResult] = []
        for index, item in enumerate(items):
            if index and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)
            results.append(await self._analyze_item(item))
        return results

    def fallback(self, text: str, source: str | None = None) -> SentimentResult:
        sentiment, confidence = self.local.score(text)
        return SentimentResult(
            text=text,
            sentiment=sentiment,
            confidence=confidence,
            keywords=self.local.keywords(text, sentiment),
            explanation=explain_fallback(sentiment, confidence),
            source=source,
        )

    async def _try_remote(
        self, text: str, source: str | None
    ) -> Optional[SentimentResult]:
        assert self.remote is not None
        try:
            return await asyncio.wait_for(
                self.remote.classify(text, source), timeout=self.remote_timeout
            )
        except RemoteUnavailable as exc:
            logger.warning("Remote sentiment unavailable, using fallback: %s", exc)
        except asyncio.TimeoutError:
            logger.warning(
                "Remote sentiment timed out after %.1fs, using fallback",
                self.remote_timeout,
            )
        except Exception:
            logger.exception("Remote sentiment failed unexpectedly, using fallback")
        return None

    async def _analyze_item(self, item: BatchItem) -> SentimentResult:
        try:
            return await self.analyze(item.text, item.source)
        except Exception:
            logger.exception("Batch item failed (source=%s), using fallback", item.source)
            return self._safe_fallback(item.text, item.source)

    def _safe_fallback(self, text: str, source: str | None) -> SentimentResult:
        try:
            return self.fallback(text, source)
        except Exception:
            logger.exception("Fallback scoring failed, returning neutral default")
            return SentimentResult(
                text=text,
                sentiment=Sentiment.neutral,
                confidence=0.5,
                keywords=[],
                explanation=explain_fallback(Sentiment.neutral, 0.5),
                source=source,
            )
