"""Request and response bodies for the HTTP surface."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from indiegrowth.models.scraper_models import ScrapedDocument


class ScrapeRequest(BaseModel):
    """Website URL input for scraping."""

    url: str = Field(..., description="URL or bare host to scrape")


class AnalyzeProductRequest(BaseModel):
    """Product registration input: the site to scrape plus listing details."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_url: str = Field(default="", description="Product website")
    product_name: str = Field(default="", description="Product display name")
    tagline: str | None = Field(default=None, description="Optional tagline")


class ProductProfile(BaseModel):
    """Product listing derived from a scrape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    tagline: str
    description: str
    url: str
    logo_url: str | None = None


class AnalyzeProductResponse(BaseModel):
    """Product listing together with the document it was derived from."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product: ProductProfile
    scraped_data: ScrapedDocument
