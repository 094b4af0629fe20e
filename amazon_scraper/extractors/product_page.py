"""
Product page extractor.
Turns one fetched product page into a partially filled ProductRecord.
"""
from typing import Optional, Union

from bs4 import BeautifulSoup

from amazon_scraper.extractors.rating import RatingDecoder, default_decoder
from amazon_scraper.extractors.selectors import extract_field
from amazon_scraper.models.product import ProductRecord
from amazon_scraper.utils.logger import LayerLogger

DETAIL_FIELDS = ("title", "price", "description")

logger = LayerLogger("page_field_extractor")


def parse_document(html: str) -> BeautifulSoup:
    """Parse raw markup into a queryable document."""
    return BeautifulSoup(html, "lxml")


def extract_product(
    document: Union[BeautifulSoup, str],
    decoder: Optional[RatingDecoder] = None,
    url: Optional[str] = None,
) -> ProductRecord:
    """
    Extract title, price, rating and description from a product page.

    Fields that no selector matches are left empty; the rating defaults
    to 0.0 when it cannot be decoded.
    """
    if isinstance(document, str):
        document = parse_document(document)
    decoder = decoder or default_decoder

    values = {name: extract_field(document, name) or "" for name in DETAIL_FIELDS}
    product = ProductRecord(**values, rating=decoder.decode(document))

    logger.log_extraction(
        source="product_page",
        fields_present=product.get_present_fields(),
        fields_missing=product.get_missing_fields(),
        url=url,
    )
    return product
