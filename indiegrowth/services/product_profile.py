"""Derive a product listing from a scraped document."""

from indiegrowth.constants import TAGLINE_MAX_CHARS
from indiegrowth.models.api_models import ProductProfile
from indiegrowth.models.scraper_models import ScrapedDocument


def _fallback_blurb(product_name: str) -> str:
    return f"{product_name} - innovative solution"


def build_product_profile(
    document: ScrapedDocument,
    product_name: str,
    product_url: str,
    tagline: str | None = None,
) -> ProductProfile:
    """
    Build the listing shown for a newly registered product.

    Explicit input wins over scraped values; scraped values win over the
    generic fallback blurb.

    Args:
        document: Scrape of the product website
        product_name: Name entered by the maker
        product_url: URL entered by the maker (stored as given)
        tagline: Optional tagline entered by the maker

    Returns:
        ProductProfile
    """
    blurb = _fallback_blurb(product_name)

    if not tagline:
        tagline = document.description[:TAGLINE_MAX_CHARS] or blurb

    logo_url = document.logo_url
    if not logo_url and document.images:
        logo_url = document.images[0].src

    return ProductProfile(
        name=product_name,
        tagline=tagline,
        description=document.description or blurb,
        url=product_url,
        logo_url=logo_url,
    )
