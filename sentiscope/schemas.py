from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sentiment(str, Enum):
    positive = "positive"
    negative = "negative"
    neutral = "neutral"


class SentimentResult(BaseModel):
    """One analysis outcome, identical in shape for remote and local scoring."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    sentiment: Sentiment
    confidence: float = Field(..., ge=0.0, le=1.0)
    keywords: List[str] = Field(default_factory=list, max_length=5)
    explanation: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()


class BatchItem(BaseModel):
    text: str
    source: Optional[str] = None


class AnalyzeRequest(BaseModel):
    text: str = Field(..., description="Text to classify.")
    source: Optional[str] = Field(
        default=None, description="Where the text came from, e.g. a filename."
    )

    @field_validator("text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text is required")
        return value


class BatchRequest(BaseModel):
    items: List[BatchItem] = Field(..., min_length=1)


class ImportRequest(BaseModel):
    filename: str = Field(..., min_length=1, description="Used to pick the parser.")
    content: str = Field(..., description="Raw file content (.txt, .csv or .json).")


class BatchResponse(BaseModel):
    results: List[SentimentResult]


class SentimentSummary(BaseModel):
    total: int
    positive: int
    negative: int
    neutral: int
    average_confidence: float
