"""Models package initialization."""
from amazon_scraper.models.product import ProductRecord, ReviewRecord, SortKey

__all__ = ["ProductRecord", "ReviewRecord", "SortKey"]
