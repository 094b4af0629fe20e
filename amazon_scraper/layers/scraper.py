"""
Scraper layer for the Amazon product scraper.
Wires the document source, the extractors and the pagination controller
into the operations exposed to the CLI and the HTTP API.
"""
from dataclasses import dataclass
from typing import List, Optional, Union

from amazon_scraper.adapters.document_source import DocumentSource, FetchError, HTTPDocumentSource
from amazon_scraper.adapters.url_resolver import require_product, require_product_id
from amazon_scraper.extractors.product_page import extract_product, parse_document
from amazon_scraper.layers.pagination import ReviewCollection, ReviewPaginator
from amazon_scraper.models.product import ProductRecord, ReviewRecord, SortKey
from amazon_scraper.utils.logger import LayerLogger


def product_page_url(domain: str, product_id: str) -> str:
    return f"https://www.{domain}/dp/{product_id}"


@dataclass
class ScrapeResult:
    """Everything one scrape produced, including non-fatal fetch failures."""
    product_id: str
    domain: str
    product: ProductRecord
    reviews: List[ReviewRecord]
    product_error: Optional[FetchError] = None
    reviews_error: Optional[FetchError] = None


class AmazonScraper:
    """
    Scraper facade.

    This layer:
    - Fetches product and review pages through one document source
    - Never treats a missing field as an error
    - Reports fetch failures without discarding what was extracted
    """

    def __init__(
        self,
        source: Optional[DocumentSource] = None,
        paginator: Optional[ReviewPaginator] = None,
        review_delay: Optional[float] = None,
    ):
        self.logger = LayerLogger("scraper")
        self.source = source or HTTPDocumentSource()
        self.paginator = paginator or ReviewPaginator(self.source, delay=review_delay)

    async def __aenter__(self) -> "AmazonScraper":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self.source, "aclose", None)
        if close is not None:
            await close()

    async def fetch_product(self, product_id: str, domain: str) -> ProductRecord:
        """
        Fetch and extract product details (without reviews).

        Raises:
            MissingProductIdError: If ``product_id`` is empty
            FetchError: If the product page could not be fetched
        """
        require_product_id(product_id)
        url = product_page_url(domain, product_id)
        html = await self.source.fetch(url)
        return extract_product(parse_document(html), url=url)

    async def fetch_reviews(
        self,
        product_id: str,
        domain: str,
        count: int,
        sort: Union[str, SortKey, None] = SortKey.HELPFUL,
    ) -> ReviewCollection:
        """Collect up to ``count`` reviews; see ReviewPaginator.collect."""
        return await self.paginator.collect(product_id, domain, count, sort)

    async def scrape(
        self,
        url: str,
        details: bool = True,
        reviews: bool = True,
        count: int = 10,
        sort: Union[str, SortKey, None] = SortKey.HELPFUL,
        region: Optional[str] = None,
    ) -> ScrapeResult:
        """
        Resolve a product URL and fetch the requested parts.

        A product page failure leaves an empty ProductRecord; a review
        failure keeps the reviews collected before it.

        Raises:
            UnresolvableProductError: If the URL holds no product ID
        """
        product_id, domain = require_product(url, region)
        self.logger.log_action(
            "scrape",
            "started",
            url=url,
            product_id=product_id,
            domain=domain,
            details=details,
            reviews=reviews,
        )

        result = ScrapeResult(
            product_id=product_id,
            domain=domain,
            product=ProductRecord(),
            reviews=[],
        )

        if details:
            try:
                result.product = await self.fetch_product(product_id, domain)
            except FetchError as e:
                self.logger.log_fallback(
                    from_source="product_page",
                    to_source="empty_product",
                    reason=f"Error fetching product details: {str(e)}",
                    url=e.url,
                )
                result.product_error = e

        if reviews:
            collection = await self.fetch_reviews(product_id, domain, count, sort)
            result.reviews = collection.reviews
            result.reviews_error = collection.error
            if collection.error is not None:
                self.logger.log_fallback(
                    from_source="review_pages",
                    to_source="partial_reviews",
                    reason=f"Error fetching reviews: {str(collection.error)}",
                    collected=len(collection.reviews),
                )
            result.product = result.product.model_copy(update={"reviews": collection.reviews})

        self.logger.log_action(
            "scrape",
            "completed",
            product_id=product_id,
            fields_present=result.product.get_present_fields(),
            reviews=len(result.reviews),
        )
        return result
