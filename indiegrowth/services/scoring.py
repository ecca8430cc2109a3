"""Score stage: SEO heuristic score, completeness and scrape quality."""

import math
from typing import Sequence

from indiegrowth.constants import (
    COMPLETENESS_BASE,
    COMPLETENESS_BONUS,
    SEO_QUALITY_WEIGHT,
    SEO_SCORE_MAX,
)
from indiegrowth.models.scraper_models import ImageAsset
from indiegrowth.services.document_parser import ParsedPage


def _length_points(value: str, shortest: int, longest: int) -> int:
    """20 points inside the length band, 10 for any other non-empty value."""
    if shortest <= len(value) <= longest:
        return 20
    if value:
        return 10
    return 0


def alt_text_points(images: Sequence[ImageAsset]) -> int:
    """Up to 15 points in proportion to images carrying alt text.

    Halves round up (7.5 -> 8), not to the nearest even integer.
    """
    if not images:
        return 0
    with_alt = sum(1 for image in images if image.alt and image.alt.strip())
    return math.floor(15 * with_alt / len(images) + 0.5)


def calculate_seo_score(
    page: ParsedPage,
    title: str,
    description: str,
    headings: Sequence[str],
    images: Sequence[ImageAsset],
    meta_tags: dict[str, str],
) -> int:
    """Additive SEO score in [0, 100].

    Args:
        page: Parsed page (for h1/canonical/author/JSON-LD presence)
        title: Extracted title
        description: Extracted description
        headings: Collected headings
        images: Collected images
        meta_tags: Flattened meta map

    Returns:
        Score clamped to 100
    """
    score = 0

    # Title and description (max 20 each)
    score += _length_points(title, 10, 60)
    score += _length_points(description, 50, 160)

    # Heading structure (max 15)
    h1_count = len(page.select("h1"))
    if h1_count == 1:
        score += 10
    elif h1_count > 0:
        score += 5
    if len(headings) > 3:
        score += 5

    # Images with alt text (max 15)
    score += alt_text_points(images)

    # Meta tags (max 20)
    for key in ("robots", "viewport", "og:title", "og:description"):
        if meta_tags.get(key):
            score += 5

    # Technical SEO (max 10)
    if page.select_one('link[rel="canonical"]') is not None:
        score += 5
    if page.select_one('meta[name="author"]') is not None:
        score += 3
    if page.select_one('script[type="application/ld+json"]') is not None:
        score += 2

    return min(SEO_SCORE_MAX, score)


def calculate_completeness(
    title: str,
    description: str,
    image_count: int,
    social_link_count: int,
    email_count: int,
    feature_count: int,
) -> float:
    """0.5 base plus 0.1 per expected signal found, at most 1.0."""
    signals = (
        len(title) > 10,
        len(description) > 50,
        image_count > 0,
        social_link_count > 0,
        email_count > 0,
        feature_count > 0,
    )
    bonus = COMPLETENESS_BONUS * sum(signals)
    return round(min(1.0, COMPLETENESS_BASE + bonus), 2)


def calculate_scrape_quality(completeness: float, seo_score: int) -> float:
    """Completeness blended with 30% of the normalized SEO score, at most 1.0."""
    return min(1.0, completeness + (seo_score / 100) * SEO_QUALITY_WEIGHT)
