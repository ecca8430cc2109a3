"""Assembly stage: dedup-then-cap every collection and build the document."""

from typing import Hashable, Iterable, List, TypeVar

from indiegrowth import constants
from indiegrowth.models.scraper_models import (
    CompanyInfo,
    ContactInfo,
    FetchedPage,
    PerformanceMetrics,
    ScrapedDocument,
)
from indiegrowth.services.document_parser import parse_int_prefix
from indiegrowth.services.extractors import ExtractedFields
from indiegrowth.services.text_analysis import reading_time_minutes

H = TypeVar("H", bound=Hashable)


def dedupe(items: Iterable[H]) -> List[H]:
    """Drop repeats, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


def dedupe_and_cap(items: Iterable[H], limit: int | None) -> List[H]:
    """Deduplicate in document order, then keep at most ``limit`` items."""
    unique = dedupe(items)
    return unique if limit is None else unique[:limit]


def company_name(title: str) -> str:
    """Title up to the first ``" - "`` separator."""
    return title.split(" - ")[0] or title


def assemble_document(
    url: str,
    fetched: FetchedPage,
    fields: ExtractedFields,
    seo_score: int,
    completeness: float,
    scrape_quality: float,
    content_max_chars: int = constants.CONTENT_MAX_CHARS,
) -> ScrapedDocument:
    """Build the immutable ScrapedDocument from raw extractor output.

    Args:
        url: Normalized request URL
        fetched: Fetch result (timing, size, headers)
        fields: Raw extractor output
        seo_score: SEO heuristic score
        completeness: Completeness metric
        scrape_quality: Scrape quality metric
        content_max_chars: Body text budget

    Returns:
        The assembled document
    """
    contact = ContactInfo(
        emails=dedupe_and_cap(fields.contact_info.emails, constants.MAX_CONTACT_ENTRIES),
        phones=dedupe_and_cap(fields.contact_info.phones, constants.MAX_CONTACT_ENTRIES),
        addresses=[],
    )

    return ScrapedDocument(
        title=fields.title,
        description=fields.description,
        content=fields.body_text[:content_max_chars],
        url=url,
        meta_tags=fields.meta.meta_tags,
        open_graph_data=fields.meta.open_graph,
        twitter_card_data=fields.meta.twitter_card,
        json_ld_data=fields.json_ld,
        headings=dedupe_and_cap(fields.headings, constants.MAX_HEADINGS),
        paragraphs=dedupe_and_cap(fields.paragraphs, constants.MAX_PARAGRAPHS),
        lists=dedupe_and_cap(fields.lists, constants.MAX_LIST_ITEMS),
        features=dedupe_and_cap(fields.features, constants.MAX_FEATURES),
        benefits=dedupe_and_cap(fields.benefits, constants.MAX_BENEFITS),
        pricing=dedupe_and_cap(fields.pricing, constants.MAX_PRICING),
        testimonials=dedupe_and_cap(fields.testimonials, constants.MAX_TESTIMONIALS),
        # Images are capped in document order without dedup
        images=fields.images[: constants.MAX_IMAGES],
        videos=dedupe_and_cap(fields.videos, constants.MAX_VIDEOS),
        documents=dedupe_and_cap(fields.documents, constants.MAX_DOCUMENTS),
        logo_url=fields.logo_url,
        favicon=fields.favicon,
        social_links=dedupe_and_cap(fields.social_links, constants.MAX_SOCIAL_LINKS),
        contact_info=contact,
        technologies=dedupe(fields.technologies),
        performance_metrics=PerformanceMetrics(
            scrape_time=fetched.elapsed_ms,
            response_time=parse_int_prefix(fetched.headers.get("x-response-time")),
            page_size=fetched.page_size,
        ),
        seo_score=seo_score,
        mobile_optimized=fields.mobile_optimized,
        https_enabled=fields.https_enabled,
        word_count=fields.word_count,
        reading_time=reading_time_minutes(fields.word_count),
        language_detected=fields.language,
        keywords=fields.keywords[: constants.MAX_KEYWORDS],
        sentiment=fields.sentiment,
        company_info=CompanyInfo(
            name=company_name(fields.title),
            description=fields.description,
        ),
        business_model=fields.business_model,
        industry_category=fields.industry_category,
        navigation_menu=dedupe_and_cap(fields.navigation_menu, constants.MAX_NAVIGATION_LINKS),
        footer_links=dedupe_and_cap(fields.footer_links, constants.MAX_FOOTER_LINKS),
        internal_links=[],
        external_links=[],
        products=[],
        categories=[],
        payment_methods=dedupe(fields.payment_methods),
        shipping_info=None,
        analytics_tools=dedupe(fields.analytics_tools),
        tracking_pixels=[],
        scrape_quality=scrape_quality,
        completeness=completeness,
    )
