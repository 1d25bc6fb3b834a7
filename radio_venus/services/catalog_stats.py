"""Coverage statistics for the canonical set.

Counts records per Venus sign, element and genre, builds the sign x genre
matrix and flags the thin spots: signs below 75% of the per-sign average
and genres below 50% of the per-genre average.  ``suggest_anchors`` picks
existing artists in weak signs as starting points for discovery.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from radio_venus.models.artist import ArtistRecord, Element, VenusSign
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.services.venus_calculator import calculate_venus


def _sign_of(record: ArtistRecord) -> VenusSign | None:
    if record.venus is not None:
        return record.venus.sign
    if record.birth_date is not None:
        return calculate_venus(record.birth_date).sign
    return None


@dataclass
class CatalogStats:
    total: int = 0
    with_media: int = 0
    with_backups: int = 0
    by_sign: dict[VenusSign, int] = field(default_factory=dict)
    by_element: dict[Element, int] = field(default_factory=dict)
    by_genre: dict[GenreCategory, int] = field(default_factory=dict)
    sign_genre: dict[VenusSign, dict[GenreCategory, int]] = field(default_factory=dict)
    weak_signs: list[VenusSign] = field(default_factory=list)
    weak_genres: list[GenreCategory] = field(default_factory=list)


def compute_stats(
    records: Sequence[ArtistRecord],
    weak_sign_ratio: float = 0.75,
    weak_genre_ratio: float = 0.5,
) -> CatalogStats:
    """Return distribution counts and gaps for *records*."""
    by_sign: Counter[VenusSign] = Counter()
    by_genre: Counter[GenreCategory] = Counter()
    sign_genre: dict[VenusSign, Counter[GenreCategory]] = {s: Counter() for s in VenusSign}

    for record in records:
        by_genre.update(record.genres)
        sign = _sign_of(record)
        if sign is None:
            continue
        by_sign[sign] += 1
        sign_genre[sign].update(record.genres)

    by_element: Counter[Element] = Counter()
    for sign, count in by_sign.items():
        by_element[sign.element] += count

    stats = CatalogStats(
        total=len(records),
        with_media=sum(1 for r in records if r.media_id),
        with_backups=sum(1 for r in records if r.backup_media_ids),
        by_sign={s: by_sign.get(s, 0) for s in VenusSign},
        by_element={e: by_element.get(e, 0) for e in Element},
        by_genre={g: by_genre.get(g, 0) for g in GenreCategory},
        sign_genre={s: dict(c) for s, c in sign_genre.items()},
    )

    placed = sum(by_sign.values())
    if placed:
        floor = placed / 12 * weak_sign_ratio
        stats.weak_signs = sorted(
            (s for s in VenusSign if by_sign.get(s, 0) < floor),
            key=lambda s: by_sign.get(s, 0),
        )

    # Curated labels are set by hand and would always look underrepresented.
    curated = (GenreCategory.VALENTINE, GenreCategory.INTERCELESTIAL)
    taxonomy = [g for g in GenreCategory if g not in curated]
    genre_avg = sum(by_genre.get(g, 0) for g in taxonomy) / len(taxonomy)
    if genre_avg:
        stats.weak_genres = sorted(
            (g for g in taxonomy if by_genre.get(g, 0) < genre_avg * weak_genre_ratio),
            key=lambda g: by_genre.get(g, 0),
        )
    return stats


def suggest_anchors(
    records: Sequence[ArtistRecord], stats: CatalogStats, per_sign: int = 8
) -> dict[VenusSign, list[str]]:
    """Artists in each weak sign that make good discovery seeds.

    Classical-only artists are left out: their similarity neighbourhoods
    are mostly other pre-1940 composers.
    """
    anchors: dict[VenusSign, list[str]] = {}
    for sign in stats.weak_signs:
        names = [
            r.name
            for r in records
            if _sign_of(r) is sign and r.genres != (GenreCategory.CLASSICAL,)
        ]
        anchors[sign] = names[:per_sign]
    return anchors


def _bar(value: int, maximum: int, width: int) -> str:
    filled = round(value / maximum * width) if maximum else 0
    return "#" * filled + "." * (width - filled)


def render_stats(stats: CatalogStats) -> str:
    """Plain-text dashboard for the terminal."""
    lines = [
        f"Radio Venus catalog: {stats.total} musicians",
        f"  media: {stats.with_media}/{stats.total}  backups: {stats.with_backups}/{stats.total}",
        "",
        "Venus sign distribution",
    ]
    max_sign = max(stats.by_sign.values(), default=0)
    for sign, count in stats.by_sign.items():
        lines.append(f"  {sign.glyph} {sign.value:<12} {_bar(count, max_sign, 25)} {count:>4}")

    lines += ["", "Element distribution"]
    for element, count in stats.by_element.items():
        lines.append(f"  {element.value:<6} {count:>4}")

    lines += ["", "Genre distribution"]
    max_genre = max(stats.by_genre.values(), default=0)
    for genre, count in sorted(stats.by_genre.items(), key=lambda item: -item[1]):
        lines.append(f"  {genre.label:<24} {_bar(count, max_genre, 20)} {count:>4}")

    if stats.weak_signs:
        lines += ["", "Underrepresented signs"]
        for sign in stats.weak_signs:
            genres = sorted(stats.sign_genre.get(sign, {}).items(), key=lambda item: -item[1])
            detail = "  ".join(f"{g.value}:{c}" for g, c in genres)
            lines.append(f"  {sign.value:<12} {stats.by_sign[sign]:>4}  | {detail}")
    if stats.weak_genres:
        lines += ["", "Underrepresented genres"]
        for genre in stats.weak_genres:
            lines.append(f"  {genre.label:<24} {stats.by_genre[genre]:>4}")
    return "\n".join(lines)
