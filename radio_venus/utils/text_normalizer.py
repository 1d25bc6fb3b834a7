"""Text normalization utilities for artist names and provider tags.

Three concerns live here:

1. **Name keys** -- the case-insensitive form of an artist name used as the
   primary dedup key everywhere in the canonical set.

2. **Fuzzy name matching** -- the birth-date registries search by free text
   and return the closest entities they know; rapidfuzz ``token_sort_ratio``
   decides whether a returned label is plausibly the artist we asked about.

3. **URL slugs** -- scrape targets (Last.fm, RateYourMusic) encode names in
   different ways.
"""

import re
import unicodedata
from urllib.parse import quote

from rapidfuzz import fuzz


def name_key(name: str) -> str:
    """Return the dedup key for an artist name.

    NFKC-normalizes, trims, collapses internal whitespace and casefolds,
    so "  Aphex  Twin" and "aphex twin" share one key.
    """
    normalized = unicodedata.normalize("NFKC", name).strip()
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized.casefold()


def normalize_tag(tag: str) -> str:
    """Trim and lowercase a raw provider tag."""
    return tag.strip().lower()


def names_match(a: str, b: str, threshold: float = 0.85) -> bool:
    """Return ``True`` if two artist names refer to the same act."""
    if name_key(a) == name_key(b):
        return True
    return fuzz.token_sort_ratio(name_key(a), name_key(b)) >= threshold * 100


def lastfm_slug(name: str) -> str:
    """Encode a name the way Last.fm builds ``/music/<name>`` paths."""
    return quote(name.strip().replace(" ", "+"), safe="+")


def rym_slug(name: str) -> str:
    """Encode a name the way RateYourMusic builds ``/artist/<slug>`` paths.

    Accents are stripped, runs of non-alphanumerics become a single hyphen.
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower())
    return slug.strip("-")
