"""Layers package initialization."""
from amazon_scraper.layers.pagination import PaginationState, ReviewCollection, ReviewPaginator
from amazon_scraper.layers.scraper import AmazonScraper, ScrapeResult

__all__ = [
    "PaginationState",
    "ReviewCollection",
    "ReviewPaginator",
    "AmazonScraper",
    "ScrapeResult",
]
