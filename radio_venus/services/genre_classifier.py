"""Two-stage genre tag classifier.

Raw provider tags are mapped onto the closed :class:`GenreCategory` and
:class:`Subgenre` vocabularies:

1. **Exact lookup** of the trimmed, lower-cased tag in the tag tables.
2. **Substring fallback** when there is no exact entry: every table key
   that contains the tag, or is contained in it, contributes its ids.

The fallback is permissive on purpose.  It produces the occasional false
positive ("pop" inside an unrelated compound tag); those are caught by the
verification report and human review rather than by tightening the match.

The classifier holds no state beyond the tables it was given, so the same
tags always classify the same way.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from radio_venus.config.taxonomy import GENRE_TABLE, SUBGENRE_TABLE
from radio_venus.models.taxonomy import GenreCategory, Subgenre
from radio_venus.utils.text_normalizer import normalize_tag


class GenreClassifier:
    """Map raw provider tags onto canonical categories and subgenres.

    Parameters
    ----------
    genre_table:
        Tag -> categories table.  Defaults to :data:`GENRE_TABLE`.
    subgenre_table:
        Tag -> subgenre table.  Defaults to :data:`SUBGENRE_TABLE`.
    """

    def __init__(
        self,
        genre_table: Mapping[str, tuple[GenreCategory, ...]] | None = None,
        subgenre_table: Mapping[str, Subgenre] | None = None,
    ) -> None:
        self._genre_table = dict(genre_table if genre_table is not None else GENRE_TABLE)
        self._subgenre_table = dict(
            subgenre_table if subgenre_table is not None else SUBGENRE_TABLE
        )

    # -- Public API -----------------------------------------------------------

    def classify(
        self, tags: Iterable[str]
    ) -> tuple[frozenset[GenreCategory], frozenset[Subgenre]]:
        """Return ``(categories, subgenres)`` for a sequence of raw tags."""
        tag_list = list(tags)
        return self.categories_for(tag_list), self.subgenres_for(tag_list)

    def categories_for(self, tags: Iterable[str]) -> frozenset[GenreCategory]:
        categories: set[GenreCategory] = set()
        for tag in tags:
            for hit in self._lookup(tag, self._genre_table):
                categories.update(hit)
        return frozenset(categories)

    def subgenres_for(self, tags: Iterable[str]) -> frozenset[Subgenre]:
        subgenres: set[Subgenre] = set()
        for tag in tags:
            subgenres.update(self._lookup(tag, self._subgenre_table))
        return frozenset(subgenres)

    def exact(self, tag: str) -> tuple[GenreCategory, ...] | None:
        """Return the categories for *tag* only if it is a table key."""
        return self._genre_table.get(normalize_tag(tag))

    # -- Internal helpers -----------------------------------------------------

    def _lookup(self, raw: str, table: Mapping[str, object]) -> list:
        tag = normalize_tag(raw)
        if not tag:
            return []
        if tag in table:
            return [table[tag]]
        return [value for key, value in table.items() if self._fallback_hit(tag, key)]

    def _fallback_hit(self, tag: str, key: str) -> bool:
        return key in tag or tag in key


def sort_categories(categories: Iterable[GenreCategory]) -> tuple[GenreCategory, ...]:
    """Return *categories* de-duplicated in enum declaration order."""
    wanted = set(categories)
    return tuple(c for c in GenreCategory if c in wanted)


def sort_subgenres(subgenres: Iterable[Subgenre]) -> tuple[Subgenre, ...]:
    wanted = set(subgenres)
    return tuple(s for s in Subgenre if s in wanted)
