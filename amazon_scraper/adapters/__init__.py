"""Adapters package initialization."""
from amazon_scraper.adapters.document_source import DocumentSource, FetchError, HTTPDocumentSource
from amazon_scraper.adapters.url_resolver import (
    MissingProductIdError,
    UnresolvableProductError,
    apply_region,
    require_product,
    require_product_id,
    resolve_product,
)

__all__ = [
    "DocumentSource",
    "FetchError",
    "HTTPDocumentSource",
    "MissingProductIdError",
    "UnresolvableProductError",
    "apply_region",
    "require_product",
    "require_product_id",
    "resolve_product",
]
