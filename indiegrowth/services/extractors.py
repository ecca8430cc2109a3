"""Extract stage: independent heuristic passes over one parsed page.

Every extractor is a pure function of a ParsedPage and is wrapped with
``isolated``: an exception inside one heuristic yields that field's empty
default and never aborts sibling extractors.

Collections are returned raw (duplicates included, uncapped); dedup and
caps are applied at assembly time.
"""

import functools
import json
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple, TypeVar

import logfire

from indiegrowth.constants import (
    DEFAULT_LANGUAGE,
    FEATURE_CHARS,
    LINK_TEXT_CHARS,
    LIST_ITEM_CHARS,
    MIN_HEADING_CHARS,
    MIN_PARAGRAPH_CHARS,
    TESTIMONIAL_CHARS,
    UNKNOWN_TITLE,
)
from indiegrowth.models.scraper_models import ContactInfo, ImageAsset, Sentiment, SocialLink
from indiegrowth.services.document_parser import (
    ParsedPage,
    element_text,
    parse_int_prefix,
    resolve_url,
)
from indiegrowth.services.heuristics import (
    ANALYTICS_FINGERPRINTS,
    DOCUMENT_SELECTOR,
    EMAIL_PATTERN,
    FAVICON_SELECTOR,
    FEATURE_SELECTORS,
    FOOTER_SELECTOR,
    HEADING_SELECTOR,
    IMAGE_PLACEHOLDER_TOKEN,
    LIST_ITEM_SELECTOR,
    LOGO_SELECTORS,
    NAVIGATION_SELECTOR,
    PAYMENT_FINGERPRINTS,
    PHONE_PATTERN,
    PRICE_PATTERN,
    PRICING_SELECTORS,
    SOCIAL_PLATFORMS,
    TECHNOLOGY_FINGERPRINTS,
    TESTIMONIAL_SELECTORS,
    VIDEO_SELECTOR,
    all_matches,
)
from indiegrowth.services import text_analysis

T = TypeVar("T")


def isolated(default_factory: Callable[[], T]) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Run an extractor and substitute ``default_factory()`` if it raises."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                # One failing heuristic must never abort the other extractors
                logfire.warning(
                    "Extractor failed, using default",
                    extractor=func.__name__,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return default_factory()

        return wrapper

    return decorator


def _within(text: str, bounds: Tuple[int, int]) -> bool:
    shortest, longest = bounds
    return shortest <= len(text) <= longest


def _texts_within(page: ParsedPage, selector: str, bounds: Tuple[int, int]) -> List[str]:
    return [text for text in page.texts(selector) if _within(text, bounds)]


# =============================================================================
# Identity and meta
# =============================================================================


@isolated(lambda: UNKNOWN_TITLE)
def extract_title(page: ParsedPage) -> str:
    """<title>, then og:title, then the first <h1>."""
    title = "".join(el.get_text() for el in page.select("title")).strip()
    if title:
        return title

    og_title = page.meta_content('meta[property="og:title"]')
    if og_title:
        return og_title

    h1 = page.select_one("h1")
    if h1 is not None and element_text(h1):
        return element_text(h1)

    return UNKNOWN_TITLE


@isolated(str)
def extract_description(page: ParsedPage) -> str:
    """description, og:description or twitter:description meta, then the first <p>."""
    for selector in (
        'meta[name="description"]',
        'meta[property="og:description"]',
        'meta[name="twitter:description"]',
    ):
        content = page.meta_content(selector)
        if content:
            return content

    paragraph = page.select_one("p")
    return element_text(paragraph) if paragraph is not None else ""


@dataclass
class MetaData:
    meta_tags: dict[str, str] = field(default_factory=dict)
    open_graph: dict[str, str] = field(default_factory=dict)
    twitter_card: dict[str, str] = field(default_factory=dict)


@isolated(MetaData)
def extract_meta(page: ParsedPage) -> MetaData:
    """Flatten <meta> name/property tags into maps.

    A tag carrying both ``name`` and ``property`` is recorded under each.
    """
    meta = MetaData()
    for element in page.select("meta"):
        name = element.get("name")
        prop = element.get("property")
        content = element.get("content") or ""
        if not content:
            continue

        if name:
            meta.meta_tags[name] = content
            if name.startswith("twitter:"):
                meta.twitter_card[name] = content

        if prop:
            meta.meta_tags[prop] = content
            if prop.startswith("og:"):
                meta.open_graph[prop] = content
    return meta


@isolated(list)
def extract_json_ld(page: ParsedPage) -> List[Any]:
    """Parsed body of every JSON-LD script; unparseable blocks are skipped."""
    data: List[Any] = []
    for element in page.select('script[type="application/ld+json"]'):
        try:
            data.append(json.loads(element.string or ""))
        except ValueError:
            continue
    return data


# =============================================================================
# Content structure
# =============================================================================


@isolated(list)
def extract_headings(page: ParsedPage) -> List[str]:
    return [t for t in page.texts(HEADING_SELECTOR) if len(t) >= MIN_HEADING_CHARS]


@isolated(list)
def extract_paragraphs(page: ParsedPage) -> List[str]:
    return [t for t in page.texts("p") if len(t) >= MIN_PARAGRAPH_CHARS]


@isolated(list)
def extract_list_items(page: ParsedPage) -> List[str]:
    return _texts_within(page, LIST_ITEM_SELECTOR, LIST_ITEM_CHARS)


# =============================================================================
# Commercial signals
# =============================================================================


@isolated(lambda: ([], []))
def extract_features_and_benefits(page: ParsedPage) -> Tuple[List[str], List[str]]:
    """Feature-ish list items, split into (features, benefits) by selector."""
    features: List[str] = []
    benefits: List[str] = []
    for selector, is_benefit in FEATURE_SELECTORS:
        target = benefits if is_benefit else features
        target.extend(_texts_within(page, selector, FEATURE_CHARS))
    return features, benefits


@isolated(list)
def extract_testimonials(page: ParsedPage) -> List[str]:
    testimonials: List[str] = []
    for selector in TESTIMONIAL_SELECTORS:
        testimonials.extend(_texts_within(page, selector, TESTIMONIAL_CHARS))
    return testimonials


@isolated(list)
def extract_pricing(page: ParsedPage) -> List[str]:
    """Price-named elements whose text has a currency marker or a digit."""
    pricing: List[str] = []
    for selector in PRICING_SELECTORS:
        pricing.extend(
            text for text in page.texts(selector) if text and PRICE_PATTERN.search(text)
        )
    return pricing


# =============================================================================
# Media
# =============================================================================


def _is_data_uri(src: str) -> bool:
    return src.lstrip().lower().startswith("data:") or "data:image" in src


@isolated(list)
def extract_images(page: ParsedPage) -> List[ImageAsset]:
    """Every usable <img>, src resolved against the page URL.

    An image whose src cannot be resolved is dropped on its own.
    """
    images: List[ImageAsset] = []
    for element in page.select("img"):
        src = element.get("src")
        if not src or _is_data_uri(src) or IMAGE_PLACEHOLDER_TOKEN in src:
            continue
        try:
            absolute = resolve_url(src, page.url)
        except ValueError:
            continue
        images.append(
            ImageAsset(
                src=absolute,
                alt=element.get("alt") or "",
                width=parse_int_prefix(element.get("width")),
                height=parse_int_prefix(element.get("height")),
            )
        )
    return images


@isolated(list)
def extract_videos(page: ParsedPage) -> List[str]:
    return [el["src"] for el in page.select(VIDEO_SELECTOR) if el.get("src")]


@isolated(list)
def extract_documents(page: ParsedPage) -> List[str]:
    return [el["href"] for el in page.select(DOCUMENT_SELECTOR) if el.get("href")]


@isolated(lambda: None)
def extract_logo(page: ParsedPage) -> str | None:
    """Logo image from the first logo selector with any match.

    The first matching selector decides even when its src is missing or
    unresolvable; lower-priority selectors are not consulted.
    """
    # NOTE: no fall-through to the next selector once one has matched
    for selector in LOGO_SELECTORS:
        element = page.select_one(selector)
        if element is None:
            continue
        src = element.get("src")
        if not src:
            return None
        try:
            return resolve_url(src, page.url)
        except ValueError:
            return None
    return None


@isolated(lambda: None)
def extract_favicon(page: ParsedPage) -> str | None:
    element = page.select_one(FAVICON_SELECTOR)
    if element is None or not element.get("href"):
        return None
    try:
        return resolve_url(element["href"], page.url)
    except ValueError:
        return None


# =============================================================================
# Contact and social
# =============================================================================


@isolated(list)
def extract_social_links(page: ParsedPage) -> List[SocialLink]:
    """Anchors pointing at a known platform; first matching domain wins."""
    links: List[SocialLink] = []
    for element in page.select("a[href]"):
        href = element.get("href")
        if not href:
            continue
        for domain, platform in SOCIAL_PLATFORMS:
            if domain in href:
                links.append(SocialLink(platform=platform, url=href))
                break
    return links


@isolated(ContactInfo)
def extract_contact_info(page: ParsedPage) -> ContactInfo:
    """Emails and phone numbers found in the body text. Addresses are not extracted."""
    text = page.body_text
    return ContactInfo(
        emails=[m.group(0) for m in EMAIL_PATTERN.finditer(text)],
        phones=[m.group(0) for m in PHONE_PATTERN.finditer(text)],
    )


# =============================================================================
# Technical fingerprints (substring checks on raw HTML)
# =============================================================================


@isolated(list)
def detect_technologies(page: ParsedPage) -> List[str]:
    return all_matches(TECHNOLOGY_FINGERPRINTS, page.html)


@isolated(list)
def detect_payment_methods(page: ParsedPage) -> List[str]:
    return all_matches(PAYMENT_FINGERPRINTS, page.html)


@isolated(list)
def detect_analytics_tools(page: ParsedPage) -> List[str]:
    return all_matches(ANALYTICS_FINGERPRINTS, page.html)


@isolated(bool)
def is_https(page: ParsedPage) -> bool:
    return page.url.lower().startswith("https://")


@isolated(bool)
def is_mobile_optimized(page: ParsedPage) -> bool:
    return page.select_one('meta[name="viewport"]') is not None


@isolated(lambda: DEFAULT_LANGUAGE)
def detect_language(page: ParsedPage) -> str:
    html = page.select_one("html")
    lang = html.get("lang") if html is not None else None
    return lang or DEFAULT_LANGUAGE


# =============================================================================
# Navigation
# =============================================================================


@isolated(list)
def extract_navigation_menu(page: ParsedPage) -> List[str]:
    return _texts_within(page, NAVIGATION_SELECTOR, LINK_TEXT_CHARS)


@isolated(list)
def extract_footer_links(page: ParsedPage) -> List[str]:
    return _texts_within(page, FOOTER_SELECTOR, LINK_TEXT_CHARS)


# =============================================================================
# Content analysis
# =============================================================================


@isolated(int)
def analyze_word_count(page: ParsedPage) -> int:
    return text_analysis.count_words(page.body_text)


@isolated(list)
def analyze_keywords(page: ParsedPage) -> List[str]:
    return text_analysis.extract_keywords(page.body_text)


@isolated(lambda: "neutral")
def analyze_sentiment(page: ParsedPage) -> Sentiment:
    return text_analysis.detect_sentiment(page.body_text)


@isolated(lambda: None)
def classify_business_model(page: ParsedPage, title: str) -> str | None:
    return text_analysis.detect_business_model(page.body_text, title)


@isolated(lambda: None)
def classify_industry(page: ParsedPage, title: str) -> str | None:
    return text_analysis.detect_industry_category(page.body_text, title)


@isolated(str)
def extract_body_text(page: ParsedPage) -> str:
    return page.body_text


# =============================================================================
# All passes
# =============================================================================


@dataclass
class ExtractedFields:
    """Raw extractor output for one page, before dedup and caps."""

    title: str
    description: str
    body_text: str
    meta: MetaData
    json_ld: List[Any]
    headings: List[str]
    paragraphs: List[str]
    lists: List[str]
    features: List[str]
    benefits: List[str]
    pricing: List[str]
    testimonials: List[str]
    images: List[ImageAsset]
    videos: List[str]
    documents: List[str]
    logo_url: str | None
    favicon: str | None
    social_links: List[SocialLink]
    contact_info: ContactInfo
    technologies: List[str]
    payment_methods: List[str]
    analytics_tools: List[str]
    https_enabled: bool
    mobile_optimized: bool
    language: str
    navigation_menu: List[str]
    footer_links: List[str]
    word_count: int
    keywords: List[str]
    sentiment: Sentiment
    business_model: str | None
    industry_category: str | None


def run_extractors(page: ParsedPage) -> ExtractedFields:
    """Run every extractor, one after another, over the same page."""
    title = extract_title(page)
    features, benefits = extract_features_and_benefits(page)
    return ExtractedFields(
        title=title,
        description=extract_description(page),
        body_text=extract_body_text(page),
        meta=extract_meta(page),
        json_ld=extract_json_ld(page),
        headings=extract_headings(page),
        paragraphs=extract_paragraphs(page),
        lists=extract_list_items(page),
        features=features,
        benefits=benefits,
        pricing=extract_pricing(page),
        testimonials=extract_testimonials(page),
        images=extract_images(page),
        videos=extract_videos(page),
        documents=extract_documents(page),
        logo_url=extract_logo(page),
        favicon=extract_favicon(page),
        social_links=extract_social_links(page),
        contact_info=extract_contact_info(page),
        technologies=detect_technologies(page),
        payment_methods=detect_payment_methods(page),
        analytics_tools=detect_analytics_tools(page),
        https_enabled=is_https(page),
        mobile_optimized=is_mobile_optimized(page),
        language=detect_language(page),
        navigation_menu=extract_navigation_menu(page),
        footer_links=extract_footer_links(page),
        word_count=analyze_word_count(page),
        keywords=analyze_keywords(page),
        sentiment=analyze_sentiment(page),
        business_model=classify_business_model(page, title),
        industry_category=classify_industry(page, title),
    )
