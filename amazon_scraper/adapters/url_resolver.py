"""
Product URL resolver.
Pulls the ASIN and marketplace domain out of an Amazon product URL.
"""
import re
from typing import Optional, Tuple

from amazon_scraper.config import config

ASIN_PATTERNS = [
    re.compile(r"amazon\.[a-z.]+/([A-Za-z0-9-]+/)?dp/([A-Z0-9]{10})"),
    re.compile(r"amazon\.[a-z.]+/gp/product/([A-Z0-9]{10})"),
    re.compile(r"amazon\.[a-z.]+/([A-Za-z0-9-]+/)?product/([A-Z0-9]{10})"),
    re.compile(r"amzn\.[a-z]+/([A-Z0-9]{10})"),  # Short URLs
]

DOMAIN_PATTERN = re.compile(r"https?://(?:www\.)?([a-zA-Z0-9.-]+)")


class UnresolvableProductError(ValueError):
    """The URL does not contain a recognisable product ID."""

    def __init__(self, url: str):
        super().__init__(f"Invalid Amazon URL or couldn't extract product ID: {url}")
        self.url = url


class MissingProductIdError(ValueError):
    """A fetch was requested without a product ID."""


def require_product_id(product_id: str) -> str:
    if not product_id:
        raise MissingProductIdError("product_id must not be empty")
    return product_id


def resolve_product(url: str) -> Tuple[str, str]:
    """
    Resolve a product URL into ``(product_id, domain)``.

    The product ID is empty when no pattern matches. The domain falls back
    to the configured default when the URL has no recognisable host.
    """
    domain_match = DOMAIN_PATTERN.search(url)
    domain = domain_match.group(1) if domain_match else config.DEFAULT_DOMAIN
    if "amazon." not in domain:
        # Short links (amzn.to) and unknown hosts use the default marketplace
        domain = config.DEFAULT_DOMAIN

    for pattern in ASIN_PATTERNS:
        match = pattern.search(url)
        if match:
            # The ASIN is always the last group
            return match.group(match.lastindex), domain
    return "", domain


def apply_region(domain: str, region: Optional[str]) -> str:
    """Override the marketplace domain; ``de`` becomes ``amazon.de``."""
    if not region:
        return domain
    region = region.strip().lower()
    if "amazon." in region:
        return region
    return "amazon." + region.lstrip(".")


def require_product(url: str, region: Optional[str] = None) -> Tuple[str, str]:
    """Resolve a URL, raising UnresolvableProductError when it has no ASIN."""
    product_id, domain = resolve_product(url)
    if not product_id:
        raise UnresolvableProductError(url)
    return product_id, apply_region(domain, region)
