from __future__ import annotations

from typing import Sequence

from ..schemas import Sentiment


def confidence_label(confidence: float) -> str:
    if confidence > 0.8:
        return "high"
    if confidence > 0.6:
        return "moderate"
    return "low"


def _sentiment_word(sentiment: Sentiment | str) -> str:
    return Sentiment(sentiment).value


def explain(
    sentiment: Sentiment | str, keywords: Sequence[str], confidence: float
) -> str:
    """Explain a lexicon classification, quoting the words that drove it."""
    word = _sentiment_word(sentiment)
    label = confidence_label(confidence)
    if not keywords:
        return (
            f"This text was classified as {word} with {label} confidence "
            "based on overall tone and context."
        )

    if len(keywords) > 1:
        quoted = '", "'.join(keywords)
        keyword_text = f'words like "{quoted}"'
    else:
        keyword_text = f'the word "{keywords[0]}"'
    return (
        f"This text was classified as {word} with {label} confidence "
        f"primarily due to {keyword_text} which indicate {word} sentiment."
    )


def explain_remote(sentiment: Sentiment | str, confidence: float) -> str:
    word = _sentiment_word(sentiment)
    return (
        f"This text was classified as {word} with {confidence_label(confidence)} "
        f"confidence ({confidence * 100:.1f}%) using advanced NLP analysis."
    )


def explain_fallback(sentiment: Sentiment | str, confidence: float) -> str:
    word = _sentiment_word(sentiment)
    return (
        f"This text was classified as {word} with {confidence_label(confidence)} "
        "confidence using fallback analysis."
    )
