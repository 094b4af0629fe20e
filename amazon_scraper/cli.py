"""
Command-line entry point for the Amazon product scraper.

    amazon-scraper [--details | --reviews] [--count N] [--sort KEY] [--region R] URL

Prints the product (with reviews) as indented JSON on stdout. Logs go to
stderr.
"""
import argparse
import asyncio
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

from amazon_scraper.adapters.url_resolver import UnresolvableProductError
from amazon_scraper.config import config
from amazon_scraper.layers.scraper import AmazonScraper
from amazon_scraper.models.product import SortKey
from amazon_scraper.utils.logger import get_logger, set_trace_id

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amazon-scraper",
        description="Extract product details and reviews from an Amazon product page.",
    )
    parser.add_argument("url", help="Amazon product URL")
    parser.add_argument("--details", action="store_true", help="Output only the product details")
    parser.add_argument("--reviews", action="store_true", help="Output only the product reviews")
    parser.add_argument("--count", type=int, default=10, help="Number of reviews to fetch (default: 10)")
    parser.add_argument(
        "--sort",
        default=SortKey.HELPFUL.value,
        help="Sort reviews by: helpful, recent, or rating (default: helpful)",
    )
    parser.add_argument("--region", default="", help="Override region/domain (e.g., amazon.de, amazon.co.uk)")
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help=f"Seconds to wait between review pages (default: {config.REVIEW_PAGE_DELAY})",
    )
    return parser


def load_env_files() -> None:
    for path in config.env_files():
        load_dotenv(path)


def render(result, details_only: bool, reviews_only: bool) -> str:
    if details_only:
        payload = result.product.details_only().model_dump()
    elif reviews_only:
        payload = [review.model_dump() for review in result.reviews]
    else:
        payload = result.product.model_dump()
    return json.dumps(payload, indent=2, ensure_ascii=False)


async def run(args: argparse.Namespace) -> int:
    details_only = args.details
    reviews_only = args.reviews and not args.details
    set_trace_id()

    async with AmazonScraper(review_delay=args.delay) as scraper:
        try:
            result = await scraper.scrape(
                args.url,
                details=not reviews_only,
                reviews=not details_only,
                count=args.count,
                sort=args.sort,
                region=args.region or None,
            )
        except UnresolvableProductError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    logger.info("product_resolved", domain=result.domain, product_id=result.product_id)
    if result.product_error:
        logger.warning("product_details_unavailable", error=str(result.product_error))
    if result.reviews_error:
        logger.warning("reviews_incomplete", error=str(result.reviews_error), collected=len(result.reviews))

    print(render(result, details_only, reviews_only))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.count < 0:
        print("Error: --count must be >= 0", file=sys.stderr)
        return 1
    load_env_files()
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
