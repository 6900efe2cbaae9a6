"""Spreadsheet export retrieval.

This module provides both async and sync fetch functions using httpx. The
payload is returned as text; parsing is left to :mod:`dre_extract.extractor`.

Functions
---------
fetch_text : Async fetch with httpx.AsyncClient
fetch_text_sync : Sync fetch with httpx.Client (for CLI scripts)

Notes
-----
Both functions follow redirects (Apps Script endpoints answer with a 302 to
the content host). A ``transport`` may be injected for testing.
"""

from __future__ import annotations

import httpx

from dre_extract.config import DRE_HTTP_TIMEOUT, setup_logging

# Module-level logger for download operations
logger = setup_logging(__name__)


async def fetch_text(
    url: str,
    request_timeout: float = DRE_HTTP_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Download the sheet export asynchronously.

    Parameters
    ----------
    url : str
        Export URL (supports redirects).
    request_timeout : float, optional
        HTTP request timeout in seconds.
    transport : httpx.AsyncBaseTransport, optional
        Custom transport, e.g. ``httpx.MockTransport`` in tests.

    Returns
    -------
    str
        Response body decoded as text.

    Raises
    ------
    httpx.HTTPError
        If HTTP request fails (4xx, 5xx, connection error).
    """
    logger.info("Fetching DRE export")
    logger.debug("URL: %s", url)

    async with httpx.AsyncClient(
        timeout=request_timeout,
        follow_redirects=True,
        transport=transport,
    ) as async_http:
        http_response = await async_http.get(url)
        http_response.raise_for_status()  # Raise on 4xx/5xx
        text = http_response.text

    logger.info("Fetched DRE export (%d chars)", len(text))
    return text


def fetch_text_sync(
    url: str,
    timeout: float = DRE_HTTP_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Download the sheet export using blocking I/O.

    Parameters
    ----------
    url : str
        Export URL (supports redirects).
    timeout : float, optional
        HTTP request timeout in seconds.
    transport : httpx.BaseTransport, optional
        Custom transport, e.g. ``httpx.MockTransport`` in tests.

    Returns
    -------
    str
        Response body decoded as text.

    Raises
    ------
    httpx.HTTPError
        If HTTP request fails (4xx, 5xx, connection error).
    """
    logger.info("Fetching DRE export")
    logger.debug("URL: %s", url)

    with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as sync_client:
        resp = sync_client.get(url)
        resp.raise_for_status()  # Raise on 4xx/5xx
        text = resp.text

    logger.info("Fetched DRE export (%d chars)", len(text))
    return text
