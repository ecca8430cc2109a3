"""Indiegrowth website scraping and content-extraction pipeline."""

__version__ = "0.3.0"
