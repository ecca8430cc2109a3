"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import logfire
from fastapi import FastAPI

from indiegrowth.config import get_settings


def setup_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation when an app is given (request/response tracing)
    - Pydantic instrumentation (model validation logging)
    - Environment-aware stdlib logging format
    """
    settings = get_settings()

    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        "send_to_logfire": "if-token-present",
    }
    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)

    if app is not None:
        logfire.instrument_fastapi(app)
    logfire.instrument_pydantic()

    log_level = settings.log_level.upper()

    if settings.env == "local":
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        # Logfire handles structured formatting
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(message)s",
        )


def mask_url(url: str | None, mask_char: str = "*") -> str:
    """
    Mask the query string of a URL before it is logged.

    Query strings on user-supplied URLs can carry tokens, so only the
    scheme, host and path are kept readable.

    Args:
        url: URL to mask
        mask_char: Character to use for masking

    Returns:
        URL with each query value replaced by mask characters
    """
    if not url:
        return ""

    try:
        parts = urlsplit(url)
    except ValueError:
        return mask_char * 8

    if not parts.query:
        return url

    masked_pairs = []
    for pair in parts.query.split("&"):
        key, sep, value = pair.partition("=")
        masked_pairs.append(f"{key}{sep}{mask_char * len(value)}" if sep else key)

    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, "&".join(masked_pairs), "")
    )
