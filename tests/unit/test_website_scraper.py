"""Unit tests for the scraping pipeline end to end (network mocked)."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from indiegrowth.models.scraper_models import ImageAsset, SocialLink
from indiegrowth.services.website_scraper import (
    FetchError,
    ScrapeError,
    WebsiteScraper,
    scrape_website,
)


class TestLandingPage:
    """Test every field of a scrape of a realistic landing page."""

    @pytest.fixture
    def document(self, build_document, landing_page_html):
        return build_document(landing_page_html)

    def test_identity(self, document):
        assert document.title == "Acme Widgets - Team Planning Software"
        assert document.description.startswith("Acme helps small product teams")
        assert document.url == "https://acme.io/"
        assert document.company_info.name == "Acme Widgets"
        assert document.company_info.description == document.description

    def test_meta(self, document):
        assert document.meta_tags["robots"] == "index, follow"
        assert document.open_graph_data == {
            "og:title": "Acme Widgets",
            "og:description": "Plan launches with your team.",
        }
        assert document.twitter_card_data == {
            "twitter:card": "summary_large_image",
            "twitter:site": "@acme",
        }
        assert document.json_ld_data == [{"@type": "Organization", "name": "Acme"}]

    def test_content_structure(self, document):
        assert document.headings == [
            "Plan your next launch",
            "Why teams love Acme",
            "Features",
            "Pricing",
        ]
        assert document.paragraphs[0].startswith("Acme is the best")
        assert "Short one." not in document.paragraphs
        assert "Tiny" not in document.lists
        assert "Ship twice as fast with less chaos" in document.lists

    def test_commercial(self, document):
        assert document.features == [
            "Shared launch calendar for everyone",
            "Feedback inbox with tagging",
        ]
        assert document.benefits == ["Ship twice as fast with less chaos"]
        assert "Starter $9/month" in document.pricing
        assert "Contact sales" not in document.pricing
        assert document.testimonials == [
            "Acme completely changed how our team runs launches. - Jane"
        ]

    def test_media(self, document):
        assert document.images == [
            ImageAsset(src="https://acme.io/static/logo.png", alt="Acme logo"),
            ImageAsset(
                src="https://acme.io/hero.jpg", alt="Hero image", width=1200, height=600
            ),
            ImageAsset(src="https://cdn.acme.io/shot.png"),
        ]
        assert document.videos == [
            "https://cdn.acme.io/demo.mp4",
            "https://www.youtube.com/embed/abc123",
        ]
        assert document.documents == ["/docs/whitepaper.pdf"]
        assert document.logo_url == "https://acme.io/static/logo.png"
        assert document.favicon == "https://acme.io/favicon.ico"

    def test_contact_and_social(self, document):
        assert document.social_links == [
            SocialLink(platform="Twitter", url="https://twitter.com/acme"),
            SocialLink(platform="GitHub", url="https://github.com/acme"),
        ]
        assert document.contact_info.emails == ["hello@acme.io", "sales@acme.io"]
        assert document.contact_info.phones == ["(555) 123-4567"]

    def test_technical(self, document):
        assert "Stripe" in document.technologies
        assert document.payment_methods == ["Stripe"]
        assert document.analytics_tools == ["Google Analytics"]
        assert document.https_enabled is True
        assert document.mobile_optimized is True
        assert document.language_detected == "en-GB"

    def test_navigation(self, document):
        assert document.navigation_menu == ["Features", "Pricing"]
        assert document.footer_links == [
            "Privacy",
            "Terms",
            "Twitter",
            "GitHub",
            "Twitter again",
        ]

    def test_analysis(self, document):
        assert document.word_count > 0
        assert document.reading_time == 1
        assert document.keywords[0] == "acme"
        assert document.sentiment == "positive"
        assert document.business_model == "subscription"
        assert document.industry_category == "SaaS"

    def test_scores(self, document):
        assert document.seo_score == 95
        assert document.completeness == 1.0
        assert document.scrape_quality == 1.0


class TestGracefulDegradation:
    """Test pages on which no heuristic matches."""

    def test_empty_page_returns_full_document(self, build_document, empty_page_html):
        document = build_document(empty_page_html)

        assert document.title == "Unknown Title"
        assert document.description == ""
        assert document.headings == []
        assert document.images == []
        assert document.social_links == []
        assert document.logo_url is None
        assert document.favicon is None
        assert document.word_count == 0
        assert document.reading_time == 0
        assert document.keywords == []
        assert document.sentiment == "neutral"
        assert document.language_detected == "en"
        assert document.business_model is None
        assert document.industry_category is None
        # Only the fallback title earns points
        assert document.seo_score == 20
        assert document.completeness == 0.6
        assert document.scrape_quality == pytest.approx(0.66)

    @pytest.mark.parametrize(
        "html",
        ["", "not html at all", "<div><p><ul><li>unclosed", "<<<>>>", "\x00\x01"],
    )
    def test_malformed_html_never_raises(self, build_document, html):
        document = build_document(html)

        assert 0 <= document.seo_score <= 100
        assert 0.0 <= document.completeness <= 1.0

    def test_https_flag_follows_final_url(self, make_fetched_page):
        fetched = make_fetched_page("<html></html>", url="http://acme.io/")

        document = WebsiteScraper().build_document("http://acme.io/", fetched)

        assert document.https_enabled is False

    def test_relative_assets_resolve_against_final_url(self, make_fetched_page):
        fetched = make_fetched_page('<img src="a.png">', url="https://www.acme.io/en/")

        document = WebsiteScraper().build_document("https://acme.io", fetched)

        assert document.url == "https://acme.io"
        assert document.images[0].src == "https://www.acme.io/en/a.png"


class TestWebsiteScraper:
    """Test WebsiteScraper.scrape() with an injected fetcher."""

    @pytest.mark.asyncio
    async def test_scrape_normalizes_url(self, make_fetched_page):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(
            return_value=make_fetched_page("<title>Example</title>", "https://example.com")
        )

        document = await WebsiteScraper(fetcher=fetcher).scrape("example.com")

        fetcher.fetch.assert_awaited_once_with("https://example.com")
        assert document.url == "https://example.com"
        assert document.title == "Example"

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(side_effect=FetchError("Failed to scrape website: 404"))

        with pytest.raises(ScrapeError, match="404"):
            await WebsiteScraper(fetcher=fetcher).scrape("https://acme.io")

    @pytest.mark.asyncio
    async def test_empty_url_never_fetches(self):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock()

        with pytest.raises(ScrapeError, match="URL is required"):
            await WebsiteScraper(fetcher=fetcher).scrape("  ")

        fetcher.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_scrape_logs_completion(self, make_fetched_page, logfire_capture):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(return_value=make_fetched_page("<title>Hi</title>"))

        await WebsiteScraper(fetcher=fetcher).scrape("https://acme.io/")

        messages = [args[0] for level, args, _ in logfire_capture if level == "info"]
        assert "Starting website scrape" in messages
        assert "Website scrape completed" in messages

    def test_build_is_deterministic(self, make_fetched_page, landing_page_html):
        scraper = WebsiteScraper()
        fetched = make_fetched_page(landing_page_html)

        first = scraper.build_document("https://acme.io/", fetched)
        second = scraper.build_document("https://acme.io/", fetched)

        assert first == second

    def test_content_budget_is_configurable(self, make_fetched_page):
        scraper = WebsiteScraper(content_max_chars=10)

        document = scraper.build_document(
            "https://acme.io/", make_fetched_page("<body>abcdefghijklmnop</body>")
        )

        assert document.content == "abcdefghij"


class TestScrapeWebsite:
    """Test the scrape_website() entry point."""

    @pytest.mark.asyncio
    async def test_scrape_website(self, respx_mock, landing_page_html):
        respx_mock.get("https://acme.io").mock(
            return_value=httpx.Response(200, text=landing_page_html)
        )

        document = await scrape_website("acme.io")

        assert document.title == "Acme Widgets - Team Planning Software"
        assert document.url == "https://acme.io"
        assert document.performance_metrics.page_size == len(
            landing_page_html.encode("utf-8")
        )

    @pytest.mark.asyncio
    async def test_timeout_raises_without_partial_document(self, respx_mock):
        respx_mock.get("https://slow.acme.io").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )

        with pytest.raises(FetchError):
            await scrape_website("slow.acme.io")

    @pytest.mark.asyncio
    async def test_uses_settings(self, make_fetched_page):
        settings = MagicMock(
            scraper_timeout_seconds=3.0,
            scraper_max_redirects=1,
            content_max_chars=5,
        )
        fetch = AsyncMock(return_value=make_fetched_page("<body>abcdefgh</body>"))

        with (
            patch(
                "indiegrowth.services.website_scraper.get_settings",
                return_value=settings,
            ),
            patch(
                "indiegrowth.services.website_scraper.HttpxPageFetcher"
            ) as fetcher_cls,
        ):
            fetcher_cls.return_value.fetch = fetch
            document = await scrape_website("acme.io")

        fetcher_cls.assert_called_once_with(timeout=3.0, max_redirects=1)
        assert document.content == "abcde"
