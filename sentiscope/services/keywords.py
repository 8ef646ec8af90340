from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..schemas import Sentiment
    from .lexicon import Lexicon

MAX_KEYWORDS = 5

# ASCII word characters only, so accented letters act as separators.
_SEPARATOR = re.compile(r"\W+", re.ASCII)


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it on runs of non-word characters."""
    return [token for token in _SEPARATOR.split(text.lower()) if token]


def extract_lexicon_keywords(
    text: str, sentiment: Sentiment | str, lexicon: Lexicon
) -> List[str]:
    """First lexicon hits for ``sentiment`` in scan order, duplicates kept."""
    try:
        relevant = lexicon.words_for(sentiment)
    except ValueError:
        return []
    return [token for token in tokenize(text) if token in relevant][:MAX_KEYWORDS]


def extract_length_keywords(text: str, min_length: int = 4) -> List[str]:
    return [token for token in tokenize(text) if len(token) >= min_length][
        :MAX_KEYWORDS
    ]
