"""
Star rating decoder.

Product pages encode the average rating in several incompatible ways.
RatingDecoder tries each known encoding in order and keeps the first one
that yields a number; new encodings are added by appending a strategy.
"""
import re
from typing import Callable, List, Optional, Sequence

from bs4 import Tag

from amazon_scraper.extractors.selectors import Node, by_class, by_id
from amazon_scraper.utils.logger import LayerLogger

RatingStrategy = Callable[[Node], Optional[float]]

RATING_PHRASE = "out of 5 stars"
STAR_ICON_CLASSES = ("a-icon-star", "a-star-medium-4")

# a-star-4, a-star-4-5, a-star-4.5 and size-qualified a-star-medium-4-5
STAR_CLASS_PATTERN = re.compile(r"a-star-(?:[a-z]+-)?(\d)(?:[-.](\d+))?(?![\w.])")

logger = LayerLogger("rating_decoder")


def parse_star_text(text: Optional[str]) -> Optional[float]:
    """
    Parse text shaped like "4.5 out of 5 stars".

    Returns the leading number, or None when the text has another shape
    or the leading token is not numeric.
    """
    if not text or RATING_PHRASE not in text:
        return None
    token = text.strip().split(" ")[0]
    try:
        return float(token)
    except ValueError:
        return None


def parse_star_class(classes: Sequence[str]) -> Optional[float]:
    """Decode a class-encoded rating such as ``a-star-4-5`` into 4.5."""
    match = STAR_CLASS_PATTERN.search(" ".join(classes))
    if not match:
        return None
    try:
        major = float(match.group(1))
        minor = float("0." + match.group(2)) if match.group(2) else 0.0
    except ValueError:
        return None
    return major + minor


def _icon_elements(document: Node, class_name: str) -> List[Tag]:
    return by_class("i", class_name).find_all(document)


def popover_title_rating(document: Node) -> Optional[float]:
    """Rating from the title attribute of the review popover."""
    popover = by_id("span", "acrPopover").find(document)
    if popover is None:
        return None
    return parse_star_text(popover.get("title"))


def icon_text_rating(document: Node) -> Optional[float]:
    """Rating from the visible text of the first star icon."""
    for class_name in STAR_ICON_CLASSES:
        icons = _icon_elements(document, class_name)
        if icons:
            value = parse_star_text(icons[0].get_text())
            if value is not None:
                return value
    return None


def icon_class_rating(document: Node) -> Optional[float]:
    """Rating encoded in the class list of a star icon."""
    for class_name in STAR_ICON_CLASSES:
        for icon in _icon_elements(document, class_name):
            value = parse_star_class(icon.get("class") or [])
            if value is not None:
                return value
    return None


class RatingDecoder:
    """Decode a product rating by trying each known encoding in turn."""

    def __init__(self, strategies: Optional[List[RatingStrategy]] = None):
        self.strategies: List[RatingStrategy] = list(
            strategies
            if strategies is not None
            else [popover_title_rating, icon_text_rating, icon_class_rating]
        )

    def add_strategy(self, strategy: RatingStrategy) -> None:
        """Append an encoding, tried after the existing ones."""
        self.strategies.append(strategy)

    def decode(self, document: Node) -> float:
        for strategy in self.strategies:
            value = strategy(document)
            if value is not None:
                logger.log_decision(
                    decision="rating_decoded",
                    reason=strategy.__name__,
                    rating=value,
                )
                return value
        return 0.0


default_decoder = RatingDecoder()


def decode_rating(document: Node) -> float:
    """Decode the product rating, 0.0 when no encoding is present."""
    return default_decoder.decode(document)
