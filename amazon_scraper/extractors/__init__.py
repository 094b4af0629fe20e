"""Extractors package initialization."""
from amazon_scraper.extractors.selectors import FIELD_RULES, FIELD_FALLBACKS, Locator, SelectorRule, extract_field
from amazon_scraper.extractors.rating import RatingDecoder, decode_rating
from amazon_scraper.extractors.reviews import extract_reviews
from amazon_scraper.extractors.product_page import extract_product, parse_document

__all__ = [
    "FIELD_RULES",
    "FIELD_FALLBACKS",
    "Locator",
    "SelectorRule",
    "extract_field",
    "RatingDecoder",
    "decode_rating",
    "extract_reviews",
    "extract_product",
    "parse_document",
]
