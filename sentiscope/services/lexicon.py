from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional, Tuple

from ..schemas import Sentiment, SentimentResult
from .explanation import explain
from .keywords import extract_lexicon_keywords, tokenize


@dataclass(frozen=True)
class Lexicon:
    positive: FrozenSet[str]
    negative: FrozenSet[str]
    neutral: FrozenSet[str]

    def words_for(self, sentiment: Sentiment | str) -> FrozenSet[str]:
        return self.as_mapping().get(Sentiment(sentiment).value, frozenset())

    def as_mapping(self) -> Mapping[str, FrozenSet[str]]:
        return {
            Sentiment.positive.value: self.positive,
            Sentiment.negative.value: self.negative,
            Sentiment.neutral.value: self.neutral,
        }


DEFAULT_LEXICON = Lexicon(
    positive=frozenset(
        {
            "excellent", "amazing", "fantastic", "wonderful", "great", "good",
            "awesome", "love", "perfect", "brilliant", "outstanding", "superb",
            "impressive", "delighted", "satisfied", "happy", "pleased",
            "recommend", "best",
        }
    ),
    negative=frozenset(
        {
            "terrible", "awful", "horrible", "bad", "worst", "hate",
            "disappointing", "poor", "useless", "pathetic", "disgusting",
            "annoying", "frustrated", "angry", "upset", "dissatisfied",
            "complaint", "problem", "issue",
        }
    ),
    neutral=frozenset(
        {
            "okay", "average", "normal", "standard", "typical", "regular",
            "fine", "acceptable", "moderate", "fair", "decent", "sufficient",
        }
    ),
)


class LexiconSentiment:
    """Offline sentiment scorer that counts hits against a fixed word lexicon."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        self.lexicon = lexicon or DEFAULT_LEXICON

    def score(self, text: str) -> Tuple[Sentiment, float]:
        positive = negative = neutral = 0
        for token in tokenize(text):
            if token in self.lexicon.positive:
                positive += 1
            if token in self.lexicon.negative:
                negative += 1
            if token in self.lexicon.neutral:
                neutral += 1

        total = positive + negative + neutral
        if total == 0:
            return Sentiment.neutral, 0.5

        # Ties between the leading categories land on neutral, even with no
        # neutral hits at all.
        if positive > negative and positive > neutral:
            return Sentiment.positive, min(0.95, 0.6 + (positive / total) * 0.4)
        if negative > positive and negative > neutral:
            return Sentiment.negative, min(0.95, 0.6 + (negative / total) * 0.4)
        return Sentiment.neutral, min(0.9, 0.5 + (neutral / total) * 0.4)

    def keywords(self, text: str, sentiment: Sentiment | str) -> list[str]:
        return extract_lexicon_keywords(text, sentiment, self.lexicon)

    def analyze(self, text: str, source: str | None = None) -> SentimentResult:
        sentiment, confidence = self.score(text)
        keywords = self.keywords(text, sentiment)
        return SentimentResult(
            text=text,
            sentiment=sentiment,
            confidence=confidence,
            keywords=keywords,
            explanation=explain(sentiment, keywords, confidence),
            source=source,
        )
