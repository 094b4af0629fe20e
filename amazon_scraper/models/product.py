"""
Product and review models for the Amazon product scraper.
Every text field is best-effort: an empty string means the markup did not
yield a value, which is a normal outcome rather than an error.
"""
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class SortKey(str, Enum):
    """Review listing sort order understood by the review pages."""
    HELPFUL = "helpful"
    RECENT = "recent"
    RATING = "rating"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "SortKey":
        """
        Map a caller-supplied sort string onto a sort key.

        Matching is case-insensitive. Anything unrecognised, including an
        empty string or None, maps to HELPFUL, so this never fails.
        """
        if isinstance(value, cls):
            return value
        normalized = (value or "").strip().lower()
        if normalized == cls.RECENT.value:
            return cls.RECENT
        if normalized == cls.RATING.value:
            return cls.RATING
        return cls.HELPFUL


class ReviewRecord(BaseModel):
    """A single customer review taken from a review listing page."""
    model_config = ConfigDict(frozen=True)

    author: str = ""
    date: str = ""
    rating: float = 0.0
    title: str = ""
    content: str = ""
    verified: bool = False


class ProductRecord(BaseModel):
    """Product details extracted from a product page."""
    title: str = ""
    price: str = ""
    rating: float = 0.0
    description: str = ""
    reviews: List[ReviewRecord] = Field(default_factory=list)

    def get_present_fields(self) -> List[str]:
        """Return names of detail fields that were extracted."""
        present = []
        if self.title:
            present.append("title")
        if self.price:
            present.append("price")
        if self.rating:
            present.append("rating")
        if self.description:
            present.append("description")
        return present

    def get_missing_fields(self) -> List[str]:
        """Return names of detail fields left empty."""
        present = self.get_present_fields()
        return [f for f in ("title", "price", "rating", "description") if f not in present]

    def details_only(self) -> "ProductRecord":
        """Return a copy without reviews."""
        return self.model_copy(update={"reviews": []})
