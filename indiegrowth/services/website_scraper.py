"""Website scraping pipeline.

One scrape runs four stages in sequence:
- Fetch: a single GET via a PageFetcher (the only I/O and the only failure
  a caller sees)
- Parse: raw HTML into a ParsedPage via DocumentParser
- Extract: every heuristic extractor over the same page
- Score and assemble: SEO score, completeness, quality, dedup and caps

Components can be injected for testing. A WebsiteScraper holds no state
between scrapes, so concurrent scrapes are independent.
"""

import logfire

from indiegrowth.config import get_settings
from indiegrowth.constants import CONTENT_MAX_CHARS
from indiegrowth.logging_config import mask_url
from indiegrowth.models.scraper_models import FetchedPage, ScrapedDocument
from indiegrowth.services.assembler import assemble_document
from indiegrowth.services.document_parser import DocumentParser
from indiegrowth.services.extractors import run_extractors
from indiegrowth.services.fetcher import (
    FetchError,
    HttpxPageFetcher,
    PageFetcher,
    ScrapeError,
    normalize_target_url,
)
from indiegrowth.services.scoring import (
    calculate_completeness,
    calculate_scrape_quality,
    calculate_seo_score,
)

__all__ = [
    "FetchError",
    "ScrapeError",
    "WebsiteScraper",
    "scrape_website",
]


class WebsiteScraper:
    """Coordinate the fetch, parse, extract, score and assemble stages."""

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        parser: DocumentParser | None = None,
        content_max_chars: int = CONTENT_MAX_CHARS,
    ):
        """Initialize the website scraper.

        Args:
            fetcher: Page fetcher implementation (defaults to HttpxPageFetcher)
            parser: Document parser (defaults to DocumentParser)
            content_max_chars: Body text budget stored on the document
        """
        self._fetcher = fetcher or HttpxPageFetcher()
        self._parser = parser or DocumentParser()
        self._content_max_chars = content_max_chars

    async def scrape(self, url: str) -> ScrapedDocument:
        """Scrape one page and return its structured document.

        Args:
            url: URL or bare host (``https://`` is assumed)

        Returns:
            ScrapedDocument

        Raises:
            ScrapeError: If the input is empty or the fetch fails; no
                partial document is returned
        """
        target = normalize_target_url(url)
        with logfire.span("scrape_website", url=mask_url(target)):
            logfire.info("Starting website scrape", url=mask_url(target))
            fetched = await self._fetcher.fetch(target)
            document = self.build_document(target, fetched)

        logfire.info(
            "Website scrape completed",
            url=mask_url(target),
            seo_score=document.seo_score,
            completeness=document.completeness,
            scrape_quality=document.scrape_quality,
            word_count=document.word_count,
            scrape_time_ms=fetched.elapsed_ms,
        )
        return document

    def build_document(self, url: str, fetched: FetchedPage) -> ScrapedDocument:
        """Run parse, extract, score and assemble over an already fetched page.

        Deterministic for a given input; never raises for malformed markup.

        Args:
            url: Normalized request URL stored on the document
            fetched: Fetch result; relative assets resolve against its final URL

        Returns:
            ScrapedDocument
        """
        page = self._parser.parse(fetched.html, fetched.final_url or url)
        fields = run_extractors(page)

        seo_score = calculate_seo_score(
            page,
            title=fields.title,
            description=fields.description,
            headings=fields.headings,
            images=fields.images,
            meta_tags=fields.meta.meta_tags,
        )
        completeness = calculate_completeness(
            title=fields.title,
            description=fields.description,
            image_count=len(fields.images),
            social_link_count=len(fields.social_links),
            email_count=len(fields.contact_info.emails),
            feature_count=len(fields.features),
        )
        scrape_quality = calculate_scrape_quality(completeness, seo_score)

        return assemble_document(
            url=url,
            fetched=fetched,
            fields=fields,
            seo_score=seo_score,
            completeness=completeness,
            scrape_quality=scrape_quality,
            content_max_chars=self._content_max_chars,
        )


async def scrape_website(url: str) -> ScrapedDocument:
    """Scrape a website using timeouts and limits from settings.

    Args:
        url: URL or bare host

    Returns:
        ScrapedDocument

    Raises:
        ScrapeError: If the fetch fails
    """
    settings = get_settings()
    scraper = WebsiteScraper(
        fetcher=HttpxPageFetcher(
            timeout=settings.scraper_timeout_seconds,
            max_redirects=settings.scraper_max_redirects,
        ),
        content_max_chars=settings.content_max_chars,
    )
    return await scraper.scrape(url)
