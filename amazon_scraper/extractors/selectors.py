"""
Selector strategies for product page fields.

Each field maps to an ordered tuple of SelectorRule. Rules are tried in
declared order and the first non-empty value wins, so the most current
markup shape is listed first. A rule whose node is missing simply yields
no value; that is how the extractor survives markup drift.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

from amazon_scraper.utils.logger import LayerLogger

Node = Union[BeautifulSoup, Tag]
Extractor = Callable[[Tag], Optional[str]]

CURRENCY_GLYPHS = "$£€¥₹"
BULLET_SEPARATOR = " • "

logger = LayerLogger("selector_strategy")


@dataclass(frozen=True)
class Locator:
    """A tag name plus an optional attribute-equality constraint."""
    tag: str
    attr: Optional[str] = None
    value: Optional[str] = None

    def _attrs(self) -> dict:
        if self.attr is None:
            return {}
        return {self.attr: self.value if self.value is not None else True}

    def find(self, root: Node) -> Optional[Tag]:
        return root.find(self.tag, attrs=self._attrs())

    def find_all(self, root: Node) -> list:
        return root.find_all(self.tag, attrs=self._attrs())


def by_id(tag: str, value: str) -> Locator:
    return Locator(tag, "id", value)


def by_class(tag: str, value: str) -> Locator:
    return Locator(tag, "class", value)


def by_hook(tag: str, value: str) -> Locator:
    return Locator(tag, "data-hook", value)


# Extractors: matched node -> optional text

def node_text(node: Tag) -> Optional[str]:
    """Full text content of the node."""
    return node.get_text()


def own_text(node: Tag) -> Optional[str]:
    """Text held directly by the node, ignoring nested elements."""
    return "".join(node.find_all(string=True, recursive=False))


def collapsed_text(node: Tag) -> Optional[str]:
    """Full text with every whitespace run folded into one space."""
    return re.sub(r"\s+", " ", node.get_text(separator=" "))


def attribute_text(name: str) -> Extractor:
    """Build an extractor reading one attribute of the node."""
    def extract(node: Tag) -> Optional[str]:
        value = node.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value
    return extract


@dataclass(frozen=True)
class SelectorRule:
    """
    One way of locating a field.

    When ``scope`` is set the locator is searched inside the first node
    matching ``scope`` instead of the whole document.
    """
    locator: Locator
    extractor: Extractor = node_text
    scope: Optional[Locator] = None

    def apply(self, document: Node) -> Optional[str]:
        """Return the stripped, non-empty value of this rule or None."""
        root = document
        if self.scope is not None:
            root = self.scope.find(document)
            if root is None:
                return None
        node = self.locator.find(root)
        if node is None:
            return None
        value = self.extractor(node)
        if not value:
            return None
        value = value.strip()
        return value or None


def _price_rules(locator: Locator) -> Tuple[SelectorRule, SelectorRule]:
    # The price container's own text first, then its offscreen child
    return (
        SelectorRule(locator, own_text),
        SelectorRule(by_class("span", "a-offscreen"), node_text, scope=locator),
    )


FIELD_RULES: Dict[str, Tuple[SelectorRule, ...]] = {
    "title": (
        SelectorRule(by_id("span", "productTitle")),
        SelectorRule(by_id("h1", "title")),
        SelectorRule(by_class("h1", "a-spacing-none")),
    ),
    "price": (
        *_price_rules(by_class("span", "a-price")),
        *_price_rules(by_class("span", "a-price a-text-price")),
        *_price_rules(by_id("span", "priceblock_ourprice")),
        *_price_rules(by_id("span", "priceblock_dealprice")),
        *_price_rules(by_id("span", "price")),
        *_price_rules(by_class("span", "a-color-price")),
    ),
    "description": (
        SelectorRule(by_id("div", "productDescription"), collapsed_text),
        SelectorRule(by_id("div", "dpx-product-description_feature_div"), collapsed_text),
        SelectorRule(by_id("div", "feature-bullets"), collapsed_text),
        SelectorRule(by_id("div", "dpx-feature-bullets_feature_div"), collapsed_text),
        SelectorRule(by_id("div", "bookDescription_feature_div"), collapsed_text),
        SelectorRule(by_id("div", "aplus"), collapsed_text),
    ),
}


def offscreen_currency_price(document: Node) -> Optional[str]:
    """First offscreen price whose text starts with a currency glyph."""
    for span in by_class("span", "a-offscreen").find_all(document):
        text = span.get_text().strip()
        if text and text[0] in CURRENCY_GLYPHS:
            return text
    return None


def bullet_point_description(document: Node) -> Optional[str]:
    """Join feature bullet points into a single description line."""
    bullets = []
    for item in by_class("li", "a-spacing-mini").find_all(document):
        text = item.get_text().strip()
        if text:
            bullets.append(text)
    return BULLET_SEPARATOR.join(bullets) or None


FIELD_FALLBACKS: Dict[str, Callable[[Node], Optional[str]]] = {
    "price": offscreen_currency_price,
    "description": bullet_point_description,
}


def extract_field(
    document: Node,
    field: str,
    rules: Optional[Tuple[SelectorRule, ...]] = None,
    fallback: Optional[Callable[[Node], Optional[str]]] = None,
) -> Optional[str]:
    """
    Extract one field by walking its fallback chain.

    Args:
        document: Parsed page
        field: Field name, used to look up the default rules and fallback
        rules: Override for the field's rule chain
        fallback: Override for the field's special-case fallback

    Returns:
        The first non-empty value, or None when nothing matched
    """
    if rules is None:
        rules = FIELD_RULES.get(field, ())
    if fallback is None:
        fallback = FIELD_FALLBACKS.get(field)

    for index, rule in enumerate(rules):
        value = rule.apply(document)
        if value:
            if index > 0:
                logger.log_decision(
                    decision="selector_matched",
                    reason="earlier selectors found no value",
                    field=field,
                    rule_index=index,
                    locator=f"{rule.locator.tag}[{rule.locator.attr}={rule.locator.value}]",
                )
            return value

    if fallback is not None:
        value = fallback(document)
        if value:
            value = value.strip()
        if value:
            logger.log_fallback(
                from_source="selector_chain",
                to_source=fallback.__name__,
                reason="no selector rule matched",
                field=field,
            )
            return value

    return None
