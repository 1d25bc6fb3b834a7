"""Normalization of partial and placeholder birth dates.

Upstream sources disagree on how they express an unknown month or day:
``1991``, ``1991-00-00``, ``1991-03``, ``1991-03-00`` and Wikidata's
``+1991-00-00T00:00:00Z`` all occur.  Every form is turned into a concrete
calendar date that stays inside the known period:

- month unknown -> July 1 of the year
- day unknown   -> the 15th of the month

Both are flagged ``approx``.  An exact January 1 is flagged as well, since
most sources use it as a placeholder for "year known, rest unknown".

Prose dates scraped from web pages go through python-dateutil first
(:func:`parse_free_text_date`), which reduces them to one of the forms above.
"""

from __future__ import annotations

import datetime
import re

from dateutil import parser as dateutil_parser

from radio_venus.models.resolution import DatePrecision, NormalizedDate
from radio_venus.utils.errors import InvalidDateError

MIN_YEAR = 1600

# Optional leading sign and trailing time part cover the Wikidata form.
_DATE_RE = re.compile(
    r"^\s*\+?(?P<year>\d{4})"
    r"(?:-(?P<month>\d{1,2})"
    r"(?:-(?P<day>\d{1,2}))?)?"
    r"(?:T[\d:.]+Z?)?\s*$"
)


def normalize_birth_date(
    text: str | datetime.date,
    today: datetime.date | None = None,
    precision: DatePrecision | None = None,
) -> NormalizedDate:
    """Resolve *text* into a :class:`NormalizedDate`.

    Parameters
    ----------
    text:
        A date string in one of the supported forms, or a ``date``.
    today:
        Reference date for the upper year bound; defaults to today.
    precision:
        Explicit precision from the source (Wikidata reports one).  It can
        only lower the precision implied by the text, never raise it.

    Raises
    ------
    InvalidDateError
        For unparseable text, impossible calendar dates and years outside
        ``[1600, today.year]``.
    """
    today = today or datetime.date.today()

    if isinstance(text, datetime.date):
        year, month, day = text.year, text.month, text.day
    else:
        match = _DATE_RE.match(text or "")
        if match is None:
            raise InvalidDateError(f"Unrecognized date format: {text!r}")
        year = int(match.group("year"))
        month = int(match.group("month") or 0)
        day = int(match.group("day") or 0)

    if not MIN_YEAR <= year <= today.year:
        raise InvalidDateError(f"Implausible year {year} in {text!r}")

    if precision is DatePrecision.YEAR:
        month, day = 0, 0
    elif precision is DatePrecision.MONTH:
        day = 0

    if month == 0:
        return NormalizedDate(
            date=datetime.date(year, 7, 1), approx=True, precision=DatePrecision.YEAR
        )

    try:
        if day == 0:
            return NormalizedDate(
                date=datetime.date(year, month, 15), approx=True, precision=DatePrecision.MONTH
            )
        resolved = datetime.date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Impossible calendar date {text!r}: {exc}") from exc

    return NormalizedDate(
        date=resolved,
        approx=(month == 1 and day == 1),
        precision=DatePrecision.DAY,
    )


def is_plausible_year(
    year: int, min_year: int = MIN_YEAR, today: datetime.date | None = None
) -> bool:
    """Return ``True`` if *year* lies within ``[min_year, current year]``."""
    today = today or datetime.date.today()
    return min_year <= year <= today.year


# Two defaults that differ in every field: whatever the parsed text leaves
# out comes back different between the two parses.
_DEFAULT_EARLY = datetime.datetime(2000, 1, 1)
_DEFAULT_LATE = datetime.datetime(2001, 2, 2)
_FOUR_DIGIT_YEAR = re.compile(r"\b\d{4}\b")


def parse_free_text_date(text: str) -> str | None:
    """Parse a prose date into ``YYYY-MM-DD``, ``YYYY-MM`` or ``YYYY``.

    Handles the spellings scraped pages use: ``August 18, 1971``,
    ``Aug. 18, 1971``, ``18 August 1971``, ``Sept 1991``.  The returned
    form reflects the precision the text actually carried, so it can go
    straight into :func:`normalize_birth_date`.

    Returns ``None`` when the text holds no four-digit year or does not
    parse as a date.
    """
    if not _FOUR_DIGIT_YEAR.search(text or ""):
        return None
    try:
        early = dateutil_parser.parse(text, default=_DEFAULT_EARLY, fuzzy=True)
        late = dateutil_parser.parse(text, default=_DEFAULT_LATE, fuzzy=True)
    except (ValueError, OverflowError):
        return None

    if early.year != late.year:
        return None
    if early.month != late.month:
        return f"{early.year:04d}"
    if early.day != late.day:
        return f"{early.year:04d}-{early.month:02d}"
    return early.date().isoformat()
