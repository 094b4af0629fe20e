import pytest

from amazon_scraper.extractors.product_page import parse_document
from tests.factories import PRODUCT_PAGE, PagedReviewSource


@pytest.fixture
def product_document():
    return parse_document(PRODUCT_PAGE)


@pytest.fixture
def paged_source():
    return PagedReviewSource()


@pytest.fixture
def sleep_calls():
    """Recorded delays, paired with the ``recording_sleep`` fixture."""
    return []


@pytest.fixture
def recording_sleep(sleep_calls):
    async def sleep(seconds: float) -> None:
        sleep_calls.append(seconds)
    return sleep
