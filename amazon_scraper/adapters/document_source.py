"""
Document source adapter for the Amazon product scraper.
Fetches raw page markup over HTTP with browser-like, locale-aware headers.
"""
from typing import Optional, Protocol
from urllib.parse import urlparse

import httpx

from amazon_scraper.config import config
from amazon_scraper.utils.logger import LayerLogger

DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"

ACCEPT_LANGUAGES = (
    ("amazon.de", "de-DE,de;q=0.9,en;q=0.8"),
    ("amazon.fr", "fr-FR,fr;q=0.9,en;q=0.8"),
    ("amazon.it", "it-IT,it;q=0.9,en;q=0.8"),
    ("amazon.es", "es-ES,es;q=0.9,en;q=0.8"),
    ("amazon.co.jp", "ja-JP,ja;q=0.9,en;q=0.8"),
    ("amazon.co.uk", "en-GB,en;q=0.9"),
    ("amazon.ca", "en-CA,en;q=0.9,fr-CA;q=0.8"),
    ("amazon.com.br", "pt-BR,pt;q=0.9,en;q=0.8"),
    ("amazon.com.mx", "es-MX,es;q=0.9,en;q=0.8"),
    ("amazon.nl", "nl-NL,nl;q=0.9,en;q=0.8"),
    ("amazon.se", "sv-SE,sv;q=0.9,en;q=0.8"),
    ("amazon.com.au", "en-AU,en;q=0.9"),
    ("amazon.in", "en-IN,en;q=0.9,hi;q=0.8"),
)


class FetchError(Exception):
    """A page could not be fetched (transport error, timeout or bad status)."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DocumentSource(Protocol):
    """Anything that can turn a URL into raw markup."""

    async def fetch(self, url: str) -> str:
        ...


def accept_language_for(url: str) -> str:
    """Pick the Accept-Language header matching the marketplace in the URL."""
    host = urlparse(url).hostname or ""
    for domain, language in ACCEPT_LANGUAGES:
        if host == domain or host.endswith("." + domain):
            return language
    return DEFAULT_ACCEPT_LANGUAGE


class HTTPDocumentSource:
    """
    Fetch pages over HTTP.

    One httpx client is created lazily and reused for every fetch; close it
    with ``aclose()`` or use the source as an async context manager.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.logger = LayerLogger("document_source")
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def __aenter__(self) -> "HTTPDocumentSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_headers(self, url: str) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": accept_language_for(url),
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
            "Cache-Control": "max-age=0",
        }

    async def fetch(self, url: str) -> str:
        """
        Fetch raw markup for a URL.

        Args:
            url: The page URL to fetch

        Returns:
            The response body as text

        Raises:
            FetchError: On transport errors, timeouts and any non-200 status
        """
        self.logger.log_action("fetch_html", "started", url=url)

        try:
            response = await self.client.get(url, headers=self._get_headers(url))
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type=type(e).__name__,
                url=url
            )
            raise FetchError(f"request failed: {e}", url=url) from e

        if response.status_code != 200:
            self.logger.log_http_fetch(url, response.status_code, "bad_status")
            raise FetchError(
                f"received non-200 status code: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        html = response.text
        self.logger.log_http_fetch(
            url,
            response.status_code,
            "ok",
            content_length=len(html)
        )
        return html
