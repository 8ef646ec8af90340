from __future__ import annotations

import asyncio
from typing import List, Sequence

from .schemas import SentimentResult, SentimentSummary
from .services.export import summarize


class ResultStore:
    """In-memory history of analysis results suitable for demos."""

    def __init__(self) -> None:
        self._results: List[SentimentResult] = []
        self._lock = asyncio.Lock()

    async def add_many(self, results: Sequence[SentimentResult]) -> None:
        async with self._lock:
            self._results.extend(results)

    async def list_results(self) -> List[SentimentResult]:
        async with self._lock:
            return list(self._results)

    async def clear(self) -> int:
        async with self._lock:
            removed = len(self._results)
            self._results.clear()
            return removed

    async def summary(self) -> SentimentSummary:
        return summarize(await self.list_results())
