"""Unit tests for text normalization utilities."""

from __future__ import annotations

import pytest

from radio_venus.utils.text_normalizer import (
    lastfm_slug,
    name_key,
    names_match,
    normalize_tag,
    rym_slug,
)

# ======================================================================
# name_key / normalize_tag
# ======================================================================


class TestNameKey:
    def test_case_and_whitespace(self) -> None:
        assert name_key("  Aphex   Twin ") == name_key("aphex twin") == "aphex twin"

    def test_casefold_and_nfkc(self) -> None:
        assert name_key("STRAßE") == name_key("strasse")
        assert name_key("ＡＢＢＡ") == "abba"

    def test_accents_are_kept(self) -> None:
        assert name_key("Björk") != name_key("Bjork")

    def test_normalize_tag(self) -> None:
        assert normalize_tag("  Dub Techno ") == "dub techno"


# ======================================================================
# Fuzzy name matching
# ======================================================================


class TestNamesMatch:
    def test_word_order_insensitive(self) -> None:
        assert names_match("Twin Aphex", "Aphex Twin")

    def test_below_threshold(self) -> None:
        assert not names_match("Burial", "Burial Hex")

    def test_names_match(self) -> None:
        assert names_match("Aphex Twin", "aphex  twin")
        assert names_match("The Knife", "Knife, The")
        assert not names_match("Prince", "Prince Charles")


# ======================================================================
# URL slugs
# ======================================================================


class TestSlugs:
    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Aphex Twin", "Aphex+Twin"),
            ("Sigur Rós", "Sigur+R%C3%B3s"),
            ("AC/DC", "AC%2FDC"),
        ],
    )
    def test_lastfm_slug(self, name: str, slug: str) -> None:
        assert lastfm_slug(name) == slug

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Aphex Twin", "aphex-twin"),
            ("Sigur Rós", "sigur-ros"),
            ("  !!!  ", ""),
            ("Godspeed You! Black Emperor", "godspeed-you-black-emperor"),
        ],
    )
    def test_rym_slug(self, name: str, slug: str) -> None:
        assert rym_slug(name) == slug
