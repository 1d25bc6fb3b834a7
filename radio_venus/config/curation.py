"""Curation constants shared by the resolvers and the verifier."""

from __future__ import annotations

import re

from radio_venus.models.taxonomy import GenreCategory

# Place/language words that show up when the authority matched a
# same-named artist from another scene.
GEO_NOISE_WORDS: tuple[str, ...] = (
    "lithuanian",
    "latvian",
    "estonian",
    "ukrainian",
    "polish",
    "czech",
    "slovak",
    "romanian",
    "bulgarian",
    "serbian",
    "croatian",
    "slovenian",
    "nordic",
    "norwegian",
    "swedish",
    "icelandic",
    "finnish",
    "danish",
    "japanese",
    "korean",
    "chinese",
    "oulu",
    "tallinn",
    "riga",
    "vilnius",
)

GEO_NOISE_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:" + "|".join(GEO_NOISE_WORDS) + r")\b", re.IGNORECASE
)

# Never removed by automated re-classification, only by hand.
PRESERVED_CATEGORIES: frozenset[GenreCategory] = frozenset(
    {
        GenreCategory.VALENTINE,
        GenreCategory.INTERCELESTIAL,
        GenreCategory.CLASSICAL,
    }
)

# Wikidata P106 occupations that mark an entity as a musician.
MUSIC_OCCUPATIONS: frozenset[str] = frozenset(
    {
        "Q639669",  # musician
        "Q177220",  # singer
        "Q36834",  # composer
        "Q183945",  # record producer
        "Q855091",  # guitarist
        "Q386854",  # drummer
        "Q488205",  # singer-songwriter
        "Q158852",  # conductor
        "Q753110",  # songwriter
        "Q584301",  # disc jockey
    }
)

# Wikidata P31 values for musical groups.
MUSIC_GROUP_TYPES: frozenset[str] = frozenset({"Q215380", "Q5741069"})

# Last.fm user tags that carry no genre signal.
LASTFM_NOISE_TAGS: frozenset[str] = frozenset({"seen live", "favorites", "favourite"})

# Earliest year accepted for unverified discovery candidates.
DISCOVERY_MIN_YEAR = 1940
