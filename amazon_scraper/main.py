"""
Amazon Product Scraper - FastAPI Application
HTTP endpoints over the scraper layer.
"""
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from amazon_scraper.adapters.document_source import FetchError
from amazon_scraper.adapters.url_resolver import UnresolvableProductError, require_product
from amazon_scraper.config import config
from amazon_scraper.layers.scraper import AmazonScraper
from amazon_scraper.models.product import ProductRecord, ReviewRecord
from amazon_scraper.utils.logger import get_logger, set_trace_id


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await scraper.aclose()


# Initialize FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Amazon Product Scraper",
    description="Extracts product details and reviews from Amazon product pages",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

scraper = AmazonScraper()

logger = get_logger("main")


# Response models
class ProductResponse(BaseModel):
    """Response model for product details."""
    product_id: str
    domain: str
    product: ProductRecord
    trace_id: str


class ReviewsResponse(BaseModel):
    """Response model for reviews; ``error`` is set when collection stopped early."""
    product_id: str
    domain: str
    reviews: List[ReviewRecord]
    pages_fetched: int
    error: Optional[str] = None
    trace_id: str


class ScrapeResponse(BaseModel):
    """Response model for a full scrape."""
    product_id: str
    domain: str
    product: ProductRecord
    product_error: Optional[str] = None
    reviews_error: Optional[str] = None
    trace_id: str


def _resolve(url: str, region: Optional[str]):
    try:
        return require_product(url, region)
    except UnresolvableProductError as e:
        logger.warning("unresolvable_url", url=url)
        raise HTTPException(status_code=400, detail=str(e))


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/api/product", response_model=ProductResponse)
async def get_product(
    url: str = Query(..., description="Amazon product URL"),
    region: Optional[str] = Query(None, description="Marketplace override, e.g. de or amazon.co.uk"),
):
    """Fetch product details without reviews."""
    trace_id = set_trace_id()
    product_id, domain = _resolve(url, region)

    logger.info("product_request", url=url, product_id=product_id, domain=domain)

    try:
        product = await scraper.fetch_product(product_id, domain)
    except FetchError as e:
        logger.error("product_fetch_error", error=str(e), url=e.url, status_code=e.status_code)
        raise HTTPException(status_code=502, detail=str(e))

    return ProductResponse(product_id=product_id, domain=domain, product=product, trace_id=trace_id)


@app.get("/api/reviews", response_model=ReviewsResponse)
async def get_reviews(
    url: str = Query(..., description="Amazon product URL"),
    count: int = Query(10, ge=0, description="Number of reviews to fetch"),
    sort: str = Query("helpful", description="helpful, recent or rating"),
    region: Optional[str] = Query(None, description="Marketplace override"),
):
    """
    Fetch product reviews.

    A failure part way through is reported in ``error`` next to the
    reviews collected before it.
    """
    trace_id = set_trace_id()
    product_id, domain = _resolve(url, region)

    logger.info("reviews_request", url=url, product_id=product_id, count=count, sort=sort)

    collection = await scraper.fetch_reviews(product_id, domain, count, sort)
    return ReviewsResponse(
        product_id=product_id,
        domain=domain,
        reviews=collection.reviews,
        pages_fetched=collection.pages_fetched,
        error=str(collection.error) if collection.error else None,
        trace_id=trace_id,
    )


@app.get("/api/scrape", response_model=ScrapeResponse)
async def scrape_product(
    url: str = Query(..., description="Amazon product URL"),
    count: int = Query(10, ge=0, description="Number of reviews to fetch"),
    sort: str = Query("helpful", description="helpful, recent or rating"),
    region: Optional[str] = Query(None, description="Marketplace override"),
):
    """Fetch product details and reviews in one call."""
    trace_id = set_trace_id()

    try:
        result = await scraper.scrape(url, count=count, sort=sort, region=region)
    except UnresolvableProductError as e:
        logger.warning("unresolvable_url", url=url)
        raise HTTPException(status_code=400, detail=str(e))

    return ScrapeResponse(
        product_id=result.product_id,
        domain=result.domain,
        product=result.product,
        product_error=str(result.product_error) if result.product_error else None,
        reviews_error=str(result.reviews_error) if result.reviews_error else None,
        trace_id=trace_id,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
