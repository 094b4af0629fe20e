"""
Review listing extractor.

Review markup is stable within one listing page, so each review field has
exactly one locator and no fallback chain.
"""
from typing import List

from bs4 import Tag

from amazon_scraper.extractors.rating import parse_star_text
from amazon_scraper.extractors.selectors import Node, SelectorRule, by_class, by_hook
from amazon_scraper.models.product import ReviewRecord

REVIEW_BLOCK = by_hook("div", "review")
VERIFIED_BADGE = by_hook("span", "avp-badge")

REVIEW_RULES = {
    "author": SelectorRule(by_class("span", "a-profile-name")),
    "date": SelectorRule(by_hook("span", "review-date")),
    "rating": SelectorRule(by_hook("i", "review-star-rating")),
    "title": SelectorRule(by_hook("a", "review-title")),
    "content": SelectorRule(by_hook("span", "review-body")),
}


def extract_review(block: Tag) -> ReviewRecord:
    """Build one review from its block; missing parts stay empty."""
    values = {name: rule.apply(block) or "" for name, rule in REVIEW_RULES.items()}
    rating = parse_star_text(values.pop("rating"))
    return ReviewRecord(
        **values,
        rating=rating if rating is not None else 0.0,
        verified=VERIFIED_BADGE.find(block) is not None,
    )


def extract_reviews(document: Node) -> List[ReviewRecord]:
    """Extract every review block on a listing page, in document order."""
    return [extract_review(block) for block in REVIEW_BLOCK.find_all(document)]
