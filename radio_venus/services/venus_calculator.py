"""Venus position calculator.

Pure functions: a birth date goes in, a :class:`VenusPosition` comes out.
The geocentric tropical ecliptic longitude of Venus comes from the Swiss
Ephemeris (``pyswisseph``) with the built-in Moshier ephemeris, so no data
files and no network access are needed and the result is fully
deterministic.

Birth times are almost never known for the artists in the catalog, so the
instant used is 12:00 UTC on the birth date.  Venus moves at most ~1.3°
per day, which keeps the error from an unknown time well under a degree.
"""

from __future__ import annotations

import datetime
import math

import swisseph as swe

from radio_venus.models.artist import SIGN_ELEMENTS, VenusPosition, VenusSign
from radio_venus.utils.errors import InvalidDateError

_SIGNS: tuple[VenusSign, ...] = tuple(VenusSign)
_NOON_UT = 12.0
_CALC_FLAGS = swe.FLG_MOSEPH


def _julian_day(moment: datetime.date | datetime.datetime) -> float:
    """Convert a date (noon UTC) or an aware/naive-UTC datetime to a Julian day."""
    if isinstance(moment, datetime.datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(datetime.timezone.utc)
        hour = moment.hour + moment.minute / 60.0 + moment.second / 3600.0
        return swe.julday(moment.year, moment.month, moment.day, hour)
    if isinstance(moment, datetime.date):
        return swe.julday(moment.year, moment.month, moment.day, _NOON_UT)
    raise InvalidDateError(f"Cannot compute a position for {moment!r}")


def _longitude(body: int, moment: datetime.date | datetime.datetime) -> float:
    jd = _julian_day(moment)
    result, _flags = swe.calc_ut(jd, body, _CALC_FLAGS)
    return result[0] % 360.0


def position_from_longitude(longitude: float) -> VenusPosition:
    """Map an ecliptic longitude in degrees onto sign, degree, decan and element.

    Parameters
    ----------
    longitude:
        Ecliptic longitude; any finite value is accepted and wrapped into
        ``[0, 360)``.

    Returns
    -------
    VenusPosition
        ``sign = SIGNS[floor(lon / 30) % 12]``, ``degree = lon % 30`` rounded
        to one decimal, ``decan = floor(degree / 10) + 1``.
    """
    if not math.isfinite(longitude):
        raise InvalidDateError(f"Longitude must be finite, got {longitude!r}")

    lon = longitude % 360.0
    sign = _SIGNS[int(lon // 30) % 12]
    raw_degree = lon % 30.0
    degree = round(raw_degree, 1)
    if degree >= 30.0:
        # 29.96 rounds up to 30.0, which would leave the sign
        degree = 29.9
    decan = min(int(raw_degree // 10) + 1, 3)
    return VenusPosition(
        sign=sign,
        degree=degree,
        decan=decan,
        element=SIGN_ELEMENTS[sign],
    )


def venus_longitude(moment: datetime.date | datetime.datetime) -> float:
    """Return the tropical geocentric ecliptic longitude of Venus in degrees."""
    return _longitude(swe.VENUS, moment)


def calculate_venus(moment: datetime.date | datetime.datetime) -> VenusPosition:
    """Return the Venus position for a birth date or instant.

    Raises
    ------
    InvalidDateError
        If *moment* is not a date or datetime.
    """
    return position_from_longitude(venus_longitude(moment))


def calculate_moon(moment: datetime.date | datetime.datetime) -> tuple[VenusSign, float]:
    """Return the Moon's sign and its phase angle (Moon minus Sun longitude).

    The phase angle is in ``[0, 360)``: 0 is new moon, 180 is full moon.
    """
    moon = _longitude(swe.MOON, moment)
    sun = _longitude(swe.SUN, moment)
    return _SIGNS[int(moon // 30) % 12], (moon - sun) % 360.0
