"""Scrape endpoints.

Thin HTTP layer over the scraping pipeline: rate limiting and input
validation happen here, everything else is delegated to scrape_website().
"""

from typing import Awaitable, Callable
from urllib.parse import urlsplit

import logfire
from fastapi import APIRouter, Depends, HTTPException, Request

from indiegrowth.logging_config import mask_url
from indiegrowth.middleware.rate_limiter import ScrapeRateLimiter, get_rate_limiter
from indiegrowth.models.api_models import (
    AnalyzeProductRequest,
    AnalyzeProductResponse,
    ScrapeRequest,
)
from indiegrowth.models.scraper_models import ScrapedDocument
from indiegrowth.services.fetcher import ScrapeError, normalize_target_url
from indiegrowth.services.product_profile import build_product_profile
from indiegrowth.services.website_scraper import scrape_website

router = APIRouter()

Scraper = Callable[[str], Awaitable[ScrapedDocument]]


def get_scraper() -> Scraper:
    """Dependency returning the scrape entry point (overridable in tests)."""
    return scrape_website


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "anonymous"


def enforce_rate_limit(
    request: Request,
    limiter: ScrapeRateLimiter = Depends(get_rate_limiter),
) -> None:
    """Reject the request with 429 once the client exhausted its scrapes."""
    client_id = _client_id(request)
    if not limiter.check_rate_limit(client_id):
        raise HTTPException(
            status_code=429,
            detail="Too many scrape requests, please try again later",
            headers={"Retry-After": str(limiter.retry_after_seconds(client_id))},
        )


async def _run_scrape(scraper: Scraper, url: str) -> ScrapedDocument:
    try:
        return await scraper(url)
    except ScrapeError as e:
        logfire.error("Scrape request failed", url=mask_url(url), error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.post(
    "/scrape",
    response_model=ScrapedDocument,
    response_model_by_alias=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def scrape(body: ScrapeRequest, scraper: Scraper = Depends(get_scraper)):
    """Scrape one page and return the structured document."""
    if not body.url.strip():
        raise HTTPException(status_code=400, detail="URL is required")
    return await _run_scrape(scraper, body.url)


@router.post(
    "/analyze-product",
    response_model=AnalyzeProductResponse,
    response_model_by_alias=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def analyze_product(
    body: AnalyzeProductRequest, scraper: Scraper = Depends(get_scraper)
):
    """Scrape a product website and derive its listing."""
    if not body.product_url.strip() or not body.product_name.strip():
        raise HTTPException(
            status_code=400, detail="Product URL and name are required"
        )

    try:
        target = normalize_target_url(body.product_url)
        if not urlsplit(target).hostname:
            raise ValueError("missing host")
    except (ScrapeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid URL format") from None

    document = await _run_scrape(scraper, body.product_url)
    product = build_product_profile(
        document,
        product_name=body.product_name.strip(),
        product_url=body.product_url,
        tagline=body.tagline,
    )
    logfire.info(
        "Product analyzed",
        product_name=product.name,
        url=mask_url(target),
        seo_score=document.seo_score,
        scrape_quality=document.scrape_quality,
    )
    return AnalyzeProductResponse(product=product, scraped_data=document)
