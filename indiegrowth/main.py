"""FastAPI application initialization."""

import os
from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from indiegrowth import __version__
from indiegrowth.api import health, scrape
from indiegrowth.config import get_settings
from indiegrowth.logging_config import setup_logfire


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    # Initialize Logfire for observability
    setup_logfire(app)

    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[FastApiIntegration()],
        )

    logfire.info(
        "Application startup complete",
        environment=settings.env,
        scraper_timeout_seconds=settings.scraper_timeout_seconds,
        scraper_max_redirects=settings.scraper_max_redirects,
    )

    yield

    logfire.info("Application shutdown complete")


app = FastAPI(
    title="Indiegrowth Scraper",
    description="Website scraping and content extraction for product marketing",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router, tags=["health"])
app.include_router(scrape.router, prefix="/api", tags=["scrape"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Indiegrowth Scraper API",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "indiegrowth.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV") == "local",
    )
