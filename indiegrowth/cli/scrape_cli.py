"""Typer-based scrape CLI."""

import os

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from indiegrowth.models.scraper_models import ScrapedDocument
from indiegrowth.services.fetcher import ScrapeError
from indiegrowth.services.website_scraper import scrape_website

_project_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_project_root / ".env")
load_dotenv(_project_root / ".env.local")

app = typer.Typer(help="Scrape a product website into a structured document.")


def _scrape_or_exit(url: str) -> ScrapedDocument:
    """Run the scrape, turning a ScrapeError into exit code 1."""
    try:
        return asyncio.run(scrape_website(url))
    except ScrapeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def scrape(
    url: str = typer.Argument(..., help="URL or bare host to scrape"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write JSON to this file instead of stdout"
    ),
    compact: bool = typer.Option(False, "--compact", help="Single-line JSON"),
):
    """Print the scraped document as JSON."""
    document = _scrape_or_exit(url)
    payload = json.dumps(
        document.to_json_dict(),
        indent=None if compact else 2,
        ensure_ascii=False,
    )

    if output is None:
        typer.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}")


@app.command()
def summary(url: str = typer.Argument(..., help="URL or bare host to scrape")):
    """Print headline metrics for a page."""
    document = _scrape_or_exit(url)

    typer.echo(typer.style(document.title, bold=True))
    typer.echo(f"URL:           {document.url}")
    typer.echo(f"SEO score:     {document.seo_score}/100")
    typer.echo(f"Quality:       {document.scrape_quality:.2f}")
    typer.echo(f"Completeness:  {document.completeness:.2f}")
    typer.echo(f"Sentiment:     {document.sentiment}")
    typer.echo(f"Business:      {document.business_model or '-'}")
    typer.echo(f"Industry:      {document.industry_category or '-'}")
    typer.echo(f"Technologies:  {', '.join(document.technologies) or '-'}")


if __name__ == "__main__":
    app()
