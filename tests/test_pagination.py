"""
Tests for the review pagination controller.
"""
import pytest

from amazon_scraper.adapters.document_source import FetchError
from amazon_scraper.adapters.url_resolver import MissingProductIdError
from amazon_scraper.config import config
from amazon_scraper.layers.pagination import PAGE_CEILING, ReviewPaginator, pages_needed, review_page_url
from amazon_scraper.models.product import SortKey
from tests.factories import PagedReviewSource


@pytest.fixture
def paginator(paged_source, recording_sleep):
    return ReviewPaginator(paged_source, delay=0.5, sleep=recording_sleep)


class TestPagesNeeded:

    @pytest.mark.parametrize(
        "requested, expected",
        [(0, 0), (1, 1), (10, 1), (11, 2), (25, 3), (100, 10), (101, 10), (200, 10)],
    )
    def test_ceiling(self, requested, expected):
        assert pages_needed(requested, per_page=10, max_pages=10) == expected

    def test_larger_max_pages_is_clamped(self):
        assert pages_needed(500, per_page=10, max_pages=50) == PAGE_CEILING


class TestReviewPageUrl:

    def test_url_shape(self):
        url = review_page_url("amazon.de", "B08N5WRWNW", 3, SortKey.RECENT)
        assert url == "https://www.amazon.de/product-reviews/B08N5WRWNW/?pageNumber=3&sortBy=recent"


class TestCollect:

    async def test_three_pages_for_twenty_five(self, paginator, paged_source):
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 25, "recent")

        assert collection.ok
        assert paged_source.page_numbers() == [1, 2, 3]
        assert all("sortBy=recent" in url for url in paged_source.requested)
        assert len(collection.reviews) == 25
        assert [r.author for r in collection.reviews] == [f"Reviewer {i}" for i in range(25)]
        assert collection.pages_fetched == 3

    async def test_single_page_for_ten(self, paginator, paged_source):
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 10)

        assert paged_source.page_numbers() == [1]
        assert len(collection.reviews) == 10

    async def test_page_ceiling(self, paginator, paged_source):
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 200)

        assert len(paged_source.requested) == 10
        assert len(collection.reviews) == 100
        assert collection.ok

    async def test_failure_keeps_partial_results(self, recording_sleep):
        source = PagedReviewSource(fail_on={2})
        paginator = ReviewPaginator(source, delay=0, sleep=recording_sleep)

        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 30)

        assert not collection.ok
        assert isinstance(collection.error, FetchError)
        assert "pageNumber=2" in collection.error.url
        assert len(collection.reviews) == 10
        assert collection.pages_fetched == 1
        assert source.page_numbers() == [1, 2]

    async def test_failure_on_first_page(self, recording_sleep):
        source = PagedReviewSource(fail_on={1})
        collection = await ReviewPaginator(source, delay=0, sleep=recording_sleep).collect("X", "amazon.com", 10)

        assert collection.reviews == []
        assert collection.error is not None

    async def test_excess_reviews_on_last_page_dropped(self, paginator, paged_source):
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 13)

        assert paged_source.page_numbers() == [1, 2]
        assert len(collection.reviews) == 13
        assert collection.reviews[-1].author == "Reviewer 12"

    async def test_short_pages_do_not_end_collection(self, recording_sleep):
        source = PagedReviewSource(counts={1: 4, 2: 10, 3: 10})
        collection = await ReviewPaginator(source, delay=0, sleep=recording_sleep).collect("X", "amazon.com", 25)

        assert source.page_numbers() == [1, 2, 3]
        assert len(collection.reviews) == 24

    async def test_zero_requested_fetches_nothing(self, paginator, paged_source):
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 0)

        assert paged_source.requested == []
        assert collection.reviews == []
        assert collection.ok

    async def test_negative_count_rejected(self, paginator):
        with pytest.raises(ValueError):
            await paginator.collect("B08N5WRWNW", "amazon.com", -1)

    async def test_empty_product_id_fetches_nothing(self, paginator, paged_source):
        with pytest.raises(MissingProductIdError):
            await paginator.collect("", "amazon.com", 5)
        assert paged_source.requested == []

    async def test_unknown_sort_uses_helpful(self, paginator, paged_source):
        await paginator.collect("B08N5WRWNW", "amazon.com", 5, "bogus")
        assert "sortBy=helpful" in paged_source.requested[0]


class TestDelay:

    async def test_delay_between_pages_only(self, paginator, sleep_calls):
        await paginator.collect("B08N5WRWNW", "amazon.com", 25)
        assert sleep_calls == [0.5, 0.5]

    async def test_no_delay_for_single_page(self, paginator, sleep_calls):
        await paginator.collect("B08N5WRWNW", "amazon.com", 10)
        assert sleep_calls == []

    async def test_no_delay_after_failure(self, recording_sleep, sleep_calls):
        source = PagedReviewSource(fail_on={2})
        await ReviewPaginator(source, delay=1.0, sleep=recording_sleep).collect("X", "amazon.com", 30)
        assert sleep_calls == [1.0]


class TestPageCeiling:

    async def test_max_pages_above_ceiling_is_clamped(self, paged_source, recording_sleep):
        paginator = ReviewPaginator(paged_source, delay=0, sleep=recording_sleep, max_pages=20)
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 200)

        assert paged_source.page_numbers() == list(range(1, 11))
        assert len(collection.reviews) == 100

    async def test_configured_ceiling_is_clamped(self, monkeypatch, paged_source, recording_sleep):
        monkeypatch.setattr(config, "MAX_REVIEW_PAGES", 15)
        paginator = ReviewPaginator(paged_source, delay=0, sleep=recording_sleep)
        await paginator.collect("B08N5WRWNW", "amazon.com", 150)

        assert len(paged_source.requested) == 10

    async def test_lower_max_pages_is_honoured(self, paged_source, recording_sleep):
        paginator = ReviewPaginator(paged_source, delay=0, sleep=recording_sleep, max_pages=2)
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 50)

        assert paged_source.page_numbers() == [1, 2]
        assert len(collection.reviews) == 20

    async def test_zero_max_pages_fetches_nothing(self, paged_source, recording_sleep):
        paginator = ReviewPaginator(paged_source, delay=0, sleep=recording_sleep, max_pages=0)
        collection = await paginator.collect("B08N5WRWNW", "amazon.com", 30)

        assert paged_source.requested == []
        assert collection.reviews == []

    def test_zero_per_page_rejected(self, paged_source):
        with pytest.raises(ValueError):
            ReviewPaginator(paged_source, per_page=0)
