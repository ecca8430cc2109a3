"""Shared pytest fixtures and configuration.

Fixture Categories:
1. HTML: landing_page_html, empty_page_html
2. Pipeline helpers: make_fetched_page, build_document
3. Infrastructure: respx_mock, logfire_capture, test_client
"""

import os
from unittest.mock import patch

import pytest

try:
    import respx
except ImportError:
    respx = None

try:
    import logfire
except ImportError:
    logfire = None

from indiegrowth.models.scraper_models import FetchedPage
from indiegrowth.services.website_scraper import WebsiteScraper

# Suppress "logfire not configured" warnings in tests
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    if respx is None:
        pytest.skip("respx not available")
    with respx.mock:
        yield respx


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    if logfire is None:
        pytest.skip("logfire not available")

    captured_logs = []

    original_info = logfire.info
    original_warning = logfire.warning
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_warning(*args, **kwargs):
        captured_logs.append(("warning", args, kwargs))
        return original_warning(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.warning", side_effect=capture_warning),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs


# =============================================================================
# HTML Fixtures
# =============================================================================


@pytest.fixture
def landing_page_html():
    """A realistic SaaS landing page touching every extractor."""
    return """<!DOCTYPE html>
<html lang="en-GB">
<head>
  <title>Acme Widgets - Team Planning Software</title>
  <meta name="description" content="Acme helps small product teams plan launches, track feedback and ship faster together.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="index, follow">
  <meta name="author" content="Acme Inc">
  <meta property="og:title" content="Acme Widgets">
  <meta property="og:description" content="Plan launches with your team.">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:site" content="@acme">
  <link rel="canonical" href="https://acme.io/">
  <link rel="icon" href="/favicon.ico">
  <script type="application/ld+json">{"@type": "Organization", "name": "Acme"}</script>
  <script type="application/ld+json">{not valid json</script>
  <script src="https://js.stripe.com/v3/"></script>
  <script>window.gtag = function() {};</script>
</head>
<body>
  <header>
    <div class="logo"><img src="/static/logo.png" alt="Acme logo"></div>
    <nav>
      <a href="/features">Features</a>
      <a href="/pricing">Pricing</a>
      <a href="/pricing">Pricing</a>
    </nav>
  </header>
  <main>
    <h1>Plan your next launch</h1>
    <h2>Why teams love Acme</h2>
    <h2>Features</h2>
    <h3>Pricing</h3>
    <h4>Ok</h4>
    <p>Acme is the best subscription software for teams who want amazing launches.</p>
    <p>Short one.</p>
    <ul class="features">
      <li>Shared launch calendar for everyone</li>
      <li>Feedback inbox with tagging</li>
      <li>Tiny</li>
    </ul>
    <ul class="benefits">
      <li>Ship twice as fast with less chaos</li>
    </ul>
    <div class="pricing">
      <div class="plan">Starter $9/month</div>
      <div class="plan">Contact sales</div>
    </div>
    <div class="testimonial">Acme completely changed how our team runs launches. - Jane</div>
    <img src="hero.jpg" alt="Hero image" width="1200px" height="600">
    <img src="data:image/png;base64,AAAA" alt="inline">
    <img src="/img/placeholder.png" alt="">
    <img src="https://cdn.acme.io/shot.png">
    <video><source src="https://cdn.acme.io/demo.mp4"></video>
    <iframe src="https://www.youtube.com/embed/abc123"></iframe>
    <a href="/docs/whitepaper.pdf">Whitepaper</a>
    <p>Contact us at hello@acme.io or sales@acme.io, or call (555) 123-4567.</p>
  </main>
  <footer>
    <a href="/privacy">Privacy</a>
    <a href="/terms">Terms</a>
    <a href="https://twitter.com/acme">Twitter</a>
    <a href="https://github.com/acme">GitHub</a>
    <a href="https://twitter.com/acme">Twitter again</a>
  </footer>
</body>
</html>
"""


@pytest.fixture
def empty_page_html():
    """A page on which no heuristic matches."""
    return "<html><body></body></html>"


# =============================================================================
# Pipeline Helpers
# =============================================================================


@pytest.fixture
def make_fetched_page():
    """Factory for FetchedPage values without any network call."""

    def _make(
        html: str,
        url: str = "https://acme.io/",
        headers: dict[str, str] | None = None,
        elapsed_ms: int = 42,
    ) -> FetchedPage:
        return FetchedPage(
            requested_url=url,
            final_url=url,
            html=html,
            status_code=200,
            page_size=len(html.encode("utf-8")),
            elapsed_ms=elapsed_ms,
            headers=headers or {},
        )

    return _make


@pytest.fixture
def build_document(make_fetched_page):
    """Run parse, extract, score and assemble over raw HTML."""

    def _build(html: str, url: str = "https://acme.io/", **kwargs):
        scraper = WebsiteScraper()
        return scraper.build_document(url, make_fetched_page(html, url, **kwargs))

    return _build


# =============================================================================
# HTTP Surface
# =============================================================================


@pytest.fixture
def test_client():
    """FastAPI TestClient with a fresh rate limiter."""
    from fastapi.testclient import TestClient

    from indiegrowth.main import app
    from indiegrowth.middleware.rate_limiter import reset_rate_limiter

    reset_rate_limiter()
    with patch("indiegrowth.main.setup_logfire"):
        with TestClient(app) as client:
            yield client
    app.dependency_overrides.clear()
    reset_rate_limiter()
