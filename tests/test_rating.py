"""
Tests for the star rating decoder.
"""
import pytest

from amazon_scraper.extractors.product_page import parse_document
from amazon_scraper.extractors.rating import (
    RatingDecoder,
    decode_rating,
    icon_class_rating,
    parse_star_class,
    parse_star_text,
)


def doc(body: str):
    return parse_document(f"<html><body>{body}</body></html>")


class TestParsing:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3.5 out of 5 stars", 3.5),
            ("  5.0 out of 5 stars ", 5.0),
            ("4 out of 5 stars", 4.0),
            ("N/A out of 5 stars", None),
            ("4,5 von 5 Sternen", None),
            ("", None),
            (None, None),
        ],
    )
    def test_star_text(self, text, expected):
        assert parse_star_text(text) == expected

    @pytest.mark.parametrize(
        "classes, expected",
        [
            (["a-icon", "a-icon-star", "a-star-4-5"], 4.5),
            (["a-icon", "a-icon-star", "a-star-5"], 5.0),
            (["a-icon", "a-star-3.5"], 3.5),
            (["a-icon", "a-star-medium-4"], 4.0),
            (["a-icon", "a-star-small-2-5"], 2.5),
            (["a-icon", "a-icon-star"], None),
            ([], None),
        ],
    )
    def test_star_class(self, classes, expected):
        assert parse_star_class(classes) == expected


class TestDecodeRating:

    def test_class_token_with_fraction(self):
        assert decode_rating(doc('<i class="a-icon a-icon-star a-star-4-5"></i>')) == 4.5

    def test_class_token_whole_number(self):
        assert decode_rating(doc('<i class="a-icon a-icon-star a-star-5"></i>')) == 5.0

    def test_popover_attribute(self):
        assert decode_rating(doc('<span id="acrPopover" title="3.5 out of 5 stars"></span>')) == 3.5

    def test_icon_visible_text(self):
        document = doc('<i class="a-icon a-icon-star"><span class="a-icon-alt">3.5 out of 5 stars</span></i>')
        assert decode_rating(document) == 3.5

    def test_nothing_decodable(self):
        assert decode_rating(doc("<p>No ratings yet</p>")) == 0.0

    def test_popover_beats_class_encoding(self):
        document = doc(
            '<span id="acrPopover" title="4.0 out of 5 stars"></span>'
            '<i class="a-icon a-icon-star a-star-2"></i>'
        )
        assert decode_rating(document) == 4.0

    def test_unparseable_popover_falls_through(self):
        document = doc(
            '<span id="acrPopover" title="N/A out of 5 stars"></span>'
            '<i class="a-icon a-icon-star a-star-3"></i>'
        )
        assert decode_rating(document) == 3.0

    def test_class_scan_skips_undecodable_icons(self):
        document = doc(
            '<i class="a-icon a-icon-star"></i>'
            '<i class="a-icon a-icon-star a-star-3-5"></i>'
            '<i class="a-icon a-icon-star a-star-1"></i>'
        )
        assert icon_class_rating(document) == 3.5
        assert decode_rating(document) == 3.5

    def test_medium_star_icon(self):
        assert decode_rating(doc('<i class="a-icon a-star-medium-4"></i>')) == 4.0


class TestRatingDecoder:

    def test_extra_strategy_runs_last(self):
        decoder = RatingDecoder()
        decoder.add_strategy(lambda document: 1.5)

        assert decoder.decode(doc("<p>empty</p>")) == 1.5
        assert decoder.decode(doc('<i class="a-icon a-icon-star a-star-4"></i>')) == 4.0

    def test_custom_strategy_list(self):
        decoder = RatingDecoder(strategies=[lambda document: None])
        assert decoder.decode(doc('<i class="a-icon a-icon-star a-star-4"></i>')) == 0.0
