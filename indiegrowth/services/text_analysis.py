"""Naive text analysis over the page's body text."""

import math
import re
from collections import Counter
from typing import List

from indiegrowth.constants import KEYWORD_CHARS, MAX_KEYWORDS, READING_WORDS_PER_MINUTE
from indiegrowth.models.scraper_models import Sentiment
from indiegrowth.services.heuristics import (
    BUSINESS_MODEL_RULES,
    INDUSTRY_RULES,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    STOP_WORDS,
    first_match,
)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens."""
    return len(text.split())


def reading_time_minutes(word_count: int) -> int:
    """Reading time in whole minutes, rounded up."""
    return math.ceil(word_count / READING_WORDS_PER_MINUTE)


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """Most frequent non-stop-word tokens of 4 to 14 characters.

    Ties keep first-encountered order.

    Args:
        text: Free text
        limit: Number of keywords to return

    Returns:
        Keywords ordered by descending frequency
    """
    shortest, longest = KEYWORD_CHARS
    words = _NON_WORD.sub(" ", text.lower()).split()
    counts = Counter(
        word
        for word in words
        if shortest <= len(word) <= longest and word not in STOP_WORDS
    )
    # Counter keeps insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


def _lexicon_hits(text: str, lexicon: tuple[str, ...]) -> int:
    return sum(len(re.findall(re.escape(word), text)) for word in lexicon)


def detect_sentiment(text: str) -> Sentiment:
    """Compare positive and negative lexicon hits (substrings count)."""
    lower = text.lower()
    positive = _lexicon_hits(lower, POSITIVE_WORDS)
    negative = _lexicon_hits(lower, NEGATIVE_WORDS)

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def _classification_text(text: str, title: str) -> str:
    return f"{text} {title}".lower()


def detect_business_model(text: str, title: str = "") -> str | None:
    """First business model whose tokens appear in text and title."""
    return first_match(BUSINESS_MODEL_RULES, _classification_text(text, title))


def detect_industry_category(text: str, title: str = "") -> str | None:
    """First industry whose tokens appear in text and title."""
    return first_match(INDUSTRY_RULES, _classification_text(text, title))
