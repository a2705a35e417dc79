"""Async HTTP utilities using httpx."""

from __future__ import annotations

import asyncio
import logging
import httpx
from typing import Optional
from config import settings
from .errors import NetworkError

_log = logging.getLogger(__name__)

UNAVAILABLE_MARKER = "service unavailable"


def build_client(timeout: float | None = None) -> httpx.AsyncClient:
    headers = {"User-Agent": settings.DEFAULT_USER_AGENT}
    return httpx.AsyncClient(
        headers=headers,
        timeout=timeout or settings.DEFAULT_TIMEOUT,
        follow_redirects=True,
    )


async def fetch(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float | None = None,
    retries: int | None = None,
    backoff: float | None = None,
) -> str:
    """GET `url` and return the body text.

    Raises NetworkError on transport failures, non-2xx statuses and pages
    reporting that the service is unavailable.
    """
    retries = retries if retries is not None else settings.DEFAULT_FETCH_RETRIES
    backoff = backoff if backoff is not None else settings.DEFAULT_BACKOFF_FACTOR
    close_client = False
    if client is None:
        client = build_client(timeout)
        close_client = True
    try:
        attempt = 0
        while True:
            attempt += 1
            try:
                _log.debug("GET %s (attempt %d)", url, attempt)
                resp = await client.get(url)
                resp.raise_for_status()
                text = resp.text
                if UNAVAILABLE_MARKER in text.lower():
                    raise NetworkError(
                        f"Service unavailable: {url}", context={"url": url}
                    )
                return text
            except httpx.InvalidURL as e:
                # Not an HTTPError; retrying cannot fix a malformed URL
                raise NetworkError(
                    f"Invalid page URL {url!r}: {e}", context={"url": url, "status": None}
                ) from e
            except (httpx.HTTPError, NetworkError) as e:
                if attempt > retries:
                    if isinstance(e, NetworkError):
                        raise
                    status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
                    raise NetworkError(
                        f"The page or website is not available after {attempt} attempts: {url}. "
                        f"Details: {e}",
                        context={"url": url, "status": status},
                    ) from e
                sleep_for = backoff * (2 ** (attempt - 1))
                _log.info(
                    "Attempt %d/%d failed for %s: %s. Retrying in %.1fs...",
                    attempt, retries + 1, url, e, sleep_for,
                )
                await asyncio.sleep(sleep_for)
    finally:
        if close_client:
            await client.aclose()
