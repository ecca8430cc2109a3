"""Models for scraper results: the fetched page and the scraped document."""

from dataclasses import dataclass, field
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Sentiment = Literal["positive", "negative", "neutral"]


@dataclass
class FetchedPage:
    """Raw result of the single fetch performed per scrape."""

    requested_url: str
    final_url: str
    html: str
    status_code: int
    page_size: int
    elapsed_ms: int
    headers: dict[str, str] = field(default_factory=dict)


class _DocumentModel(BaseModel):
    """Immutable record serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ImageAsset(_DocumentModel):
    """An <img> found on the page with its source resolved to an absolute URL."""

    src: str
    alt: str = ""
    width: int | None = None
    height: int | None = None


class SocialLink(_DocumentModel):
    """A link to one of the known social platforms."""

    platform: str
    url: str


class ContactInfo(_DocumentModel):
    """Contact details found in the body text."""

    emails: List[str] = Field(default_factory=list)
    phones: List[str] = Field(default_factory=list)
    addresses: List[str] = Field(default_factory=list)


class PerformanceMetrics(_DocumentModel):
    """Timing and size of the fetch."""

    scrape_time: int = Field(..., ge=0, description="Fetch elapsed time (ms)")
    response_time: int | None = Field(
        default=None, description="Server-reported x-response-time, if any"
    )
    page_size: int | None = Field(
        default=None, ge=0, description="Response body size (bytes)"
    )


class CompanyInfo(_DocumentModel):
    """Company identity derived from title and description."""

    name: str | None = None
    description: str | None = None


class ScrapedDocument(_DocumentModel):
    """Structured output of one scrape.

    Built once per scrape and never mutated afterwards. Every string
    collection is deduplicated (first occurrence wins) and capped.
    """

    # Identity
    title: str
    description: str = ""
    content: str = ""
    url: str

    # Meta
    meta_tags: dict[str, str] = Field(default_factory=dict)
    open_graph_data: dict[str, str] = Field(default_factory=dict)
    twitter_card_data: dict[str, str] = Field(default_factory=dict)
    json_ld_data: List[Any] = Field(default_factory=list)

    # Content structure
    headings: List[str] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)
    lists: List[str] = Field(default_factory=list)

    # Commercial
    features: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    pricing: List[str] = Field(default_factory=list)
    testimonials: List[str] = Field(default_factory=list)

    # Media
    images: List[ImageAsset] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    documents: List[str] = Field(default_factory=list)
    logo_url: str | None = None
    favicon: str | None = None

    # Contact and social
    social_links: List[SocialLink] = Field(default_factory=list)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)

    # Technical
    technologies: List[str] = Field(default_factory=list)
    performance_metrics: PerformanceMetrics
    seo_score: int = Field(default=0, ge=0, le=100)
    mobile_optimized: bool = False
    https_enabled: bool = False

    # Content analysis
    word_count: int = Field(default=0, ge=0)
    reading_time: int = Field(default=0, ge=0, description="Minutes")
    language_detected: str = "en"
    keywords: List[str] = Field(default_factory=list)
    sentiment: Sentiment = "neutral"

    # Business
    company_info: CompanyInfo = Field(default_factory=CompanyInfo)
    business_model: str | None = None
    industry_category: str | None = None

    # Navigation
    navigation_menu: List[str] = Field(default_factory=list)
    footer_links: List[str] = Field(default_factory=list)
    internal_links: List[str] = Field(default_factory=list)
    external_links: List[str] = Field(default_factory=list)

    # E-commerce
    products: List[Any] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    payment_methods: List[str] = Field(default_factory=list)
    shipping_info: str | None = None

    # Analytics
    analytics_tools: List[str] = Field(default_factory=list)
    tracking_pixels: List[str] = Field(default_factory=list)

    # Quality
    scrape_quality: float = Field(default=0.0, ge=0.0, le=1.0)
    completeness: float = Field(default=0.0, ge=0.0, le=1.0)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, the shape downstream consumers store."""
        return self.model_dump(mode="json", by_alias=True)
