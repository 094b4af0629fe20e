"""
Review pagination controller.

Walks review listing pages in increasing order, one fetch at a time,
until enough reviews are collected or the page ceiling is reached. A fetch
failure stops the walk but keeps everything collected so far.
"""
import asyncio
import math
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Union

from amazon_scraper.adapters.document_source import DocumentSource, FetchError
from amazon_scraper.adapters.url_resolver import require_product_id
from amazon_scraper.config import config
from amazon_scraper.extractors.product_page import parse_document
from amazon_scraper.extractors.reviews import extract_reviews
from amazon_scraper.models.product import ReviewRecord, SortKey
from amazon_scraper.utils.logger import LayerLogger

Sleep = Callable[[float], Awaitable[None]]

# Pages past this one are never fetched, whatever the configuration says
PAGE_CEILING = 10


@dataclass
class PaginationState:
    """Progress of one collection run."""
    requested_count: int
    sort_key: SortKey
    page_index: int = 1
    collected: List[ReviewRecord] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return max(self.requested_count - len(self.collected), 0)


@dataclass
class ReviewCollection:
    """Reviews gathered by a run, plus the fetch error that ended it, if any."""
    reviews: List[ReviewRecord]
    error: Optional[FetchError] = None
    pages_fetched: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def pages_needed(
    requested_count: int,
    per_page: int = config.REVIEWS_PER_PAGE,
    max_pages: int = PAGE_CEILING,
) -> int:
    """Pages required for ``requested_count`` reviews, capped at ``max_pages`` and PAGE_CEILING."""
    return min(math.ceil(requested_count / per_page), max_pages, PAGE_CEILING)


def review_page_url(domain: str, product_id: str, page: int, sort_key: SortKey) -> str:
    return (
        f"https://www.{domain}/product-reviews/{product_id}/"
        f"?pageNumber={page}&sortBy={sort_key.value}"
    )


class ReviewPaginator:
    """
    Collect reviews across listing pages.

    Args:
        source: Document source used for every page fetch
        delay: Seconds to wait between pages (not after the last one)
        sleep: Awaitable sleep function, replaceable in tests
        max_pages: Page ceiling per run, clamped to PAGE_CEILING
        per_page: Reviews a listing page holds
    """

    def __init__(
        self,
        source: DocumentSource,
        delay: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
        max_pages: Optional[int] = None,
        per_page: Optional[int] = None,
    ):
        self.source = source
        self.delay = delay if delay is not None else config.REVIEW_PAGE_DELAY
        self.sleep = sleep
        if max_pages is None:
            max_pages = config.MAX_REVIEW_PAGES
        self.max_pages = max(min(max_pages, PAGE_CEILING), 0)
        self.per_page = per_page if per_page is not None else config.REVIEWS_PER_PAGE
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")
        self.logger = LayerLogger("pagination_controller")

    async def collect(
        self,
        product_id: str,
        domain: str,
        requested_count: int,
        sort: Union[str, SortKey, None] = SortKey.HELPFUL,
    ) -> ReviewCollection:
        """
        Collect up to ``requested_count`` reviews.

        Returns:
            ReviewCollection; on a fetch failure it holds the reviews from
            the pages fetched before the failure together with the error

        Raises:
            MissingProductIdError: If ``product_id`` is empty
            ValueError: If ``requested_count`` is negative
        """
        require_product_id(product_id)
        if requested_count < 0:
            raise ValueError("requested_count must be >= 0")

        state = PaginationState(
            requested_count=requested_count,
            sort_key=SortKey.from_value(sort),
        )
        total_pages = pages_needed(requested_count, self.per_page, self.max_pages)
        pages_fetched = 0

        self.logger.log_action(
            "collect_reviews",
            "started",
            product_id=product_id,
            domain=domain,
            requested_count=requested_count,
            sort_key=state.sort_key.value,
            pages_planned=total_pages,
        )

        while state.page_index <= total_pages and len(state.collected) < state.requested_count:
            url = review_page_url(domain, product_id, state.page_index, state.sort_key)

            try:
                html = await self.source.fetch(url)
            except FetchError as e:
                self.logger.log_error(
                    f"Review page fetch failed: {str(e)}",
                    error_type="fetch_error",
                    url=url,
                    page=state.page_index,
                    collected=len(state.collected),
                )
                return ReviewCollection(state.collected, error=e, pages_fetched=pages_fetched)

            pages_fetched += 1
            page_reviews = extract_reviews(parse_document(html))
            state.collected.extend(page_reviews[:state.remaining])

            self.logger.log_action(
                "review_page",
                "completed",
                page=state.page_index,
                found=len(page_reviews),
                collected=len(state.collected),
            )

            is_final = state.page_index >= total_pages or state.remaining == 0
            state.page_index += 1
            if not is_final:
                await self.sleep(self.delay)

        self.logger.log_action(
            "collect_reviews",
            "completed",
            product_id=product_id,
            collected=len(state.collected),
            pages_fetched=pages_fetched,
        )
        return ReviewCollection(state.collected, pages_fetched=pages_fetched)
