"""Unit tests for the Venus position calculator."""

from __future__ import annotations

import datetime

import pytest

from radio_venus.models.artist import Element, VenusSign
from radio_venus.services.venus_calculator import (
    calculate_moon,
    calculate_venus,
    position_from_longitude,
    venus_longitude,
)
from radio_venus.utils.errors import InvalidDateError

# Reference signs checked against published ephemerides.
KNOWN_POSITIONS = [
    ("Aphex Twin", datetime.date(1971, 8, 18), VenusSign.LEO),
    ("Frank Ocean", datetime.date(1987, 10, 28), VenusSign.SCORPIO),
    ("Thom Yorke", datetime.date(1968, 10, 7), VenusSign.SCORPIO),
    ("David Bowie", datetime.date(1947, 1, 8), VenusSign.SAGITTARIUS),
    ("Bjork", datetime.date(1965, 11, 21), VenusSign.CAPRICORN),
    ("Prince", datetime.date(1958, 6, 7), VenusSign.TAURUS),
    ("Kurt Cobain", datetime.date(1967, 2, 20), VenusSign.PISCES),
    ("Lana Del Rey", datetime.date(1985, 6, 21), VenusSign.TAURUS),
]


class TestPositionFromLongitude:
    def test_zero_is_start_of_aries(self) -> None:
        pos = position_from_longitude(0.0)
        assert pos.sign is VenusSign.ARIES
        assert pos.degree == 0.0
        assert pos.decan == 1
        assert pos.element is Element.FIRE

    def test_sign_degree_and_decan(self) -> None:
        # 145.3 = Leo (120..150), 25.3 degrees in, third decan
        pos = position_from_longitude(145.3)
        assert pos.sign is VenusSign.LEO
        assert pos.degree == pytest.approx(25.3)
        assert pos.decan == 3
        assert pos.element is Element.FIRE

    def test_second_decan(self) -> None:
        pos = position_from_longitude(40.0)
        assert pos.sign is VenusSign.TAURUS
        assert pos.decan == 2
        assert pos.element is Element.EARTH

    def test_wraps_past_360(self) -> None:
        assert position_from_longitude(365.0).sign is VenusSign.ARIES
        assert position_from_longitude(-5.0).sign is VenusSign.PISCES

    def test_degree_never_rounds_out_of_sign(self) -> None:
        pos = position_from_longitude(59.97)
        assert pos.sign is VenusSign.TAURUS
        assert pos.degree < 30.0
        assert pos.decan == 3

    @pytest.mark.parametrize(
        ("longitude", "sign", "decan"),
        [
            (0.0, VenusSign.ARIES, 1),
            (29.999, VenusSign.ARIES, 3),
            (30.0, VenusSign.TAURUS, 1),
            (329.999, VenusSign.AQUARIUS, 3),
            (330.0, VenusSign.PISCES, 1),
            (359.999, VenusSign.PISCES, 3),
        ],
    )
    def test_sign_boundaries(self, longitude: float, sign: VenusSign, decan: int) -> None:
        pos = position_from_longitude(longitude)
        assert pos.sign is sign
        assert pos.decan == decan
        assert 0.0 <= pos.degree < 30.0

    def test_non_finite_longitude_rejected(self) -> None:
        with pytest.raises(InvalidDateError):
            position_from_longitude(float("nan"))

    @pytest.mark.parametrize(
        "sign,element",
        [
            (VenusSign.ARIES, Element.FIRE),
            (VenusSign.CANCER, Element.WATER),
            (VenusSign.LIBRA, Element.AIR),
            (VenusSign.CAPRICORN, Element.EARTH),
        ],
    )
    def test_element_partition(self, sign: VenusSign, element: Element) -> None:
        pos = position_from_longitude(sign.ordinal * 30 + 15)
        assert pos.sign is sign
        assert pos.element is element


class TestCalculateVenus:
    @pytest.mark.parametrize("name,birth_date,expected", KNOWN_POSITIONS)
    def test_known_artists(self, name: str, birth_date: datetime.date, expected: VenusSign) -> None:
        assert calculate_venus(birth_date).sign is expected, name

    def test_is_deterministic(self) -> None:
        day = datetime.date(1971, 8, 18)
        assert calculate_venus(day) == calculate_venus(day)

    def test_date_uses_noon_utc(self) -> None:
        day = datetime.date(1987, 10, 28)
        noon = datetime.datetime(1987, 10, 28, 12, 0, tzinfo=datetime.timezone.utc)
        assert venus_longitude(day) == pytest.approx(venus_longitude(noon))

    def test_longitude_in_range(self) -> None:
        lon = venus_longitude(datetime.date(2000, 1, 1))
        assert 0.0 <= lon < 360.0

    def test_rejects_non_date(self) -> None:
        with pytest.raises(InvalidDateError):
            calculate_venus("1971-08-18")  # type: ignore[arg-type]


class TestCalculateMoon:
    def test_returns_sign_and_phase(self) -> None:
        sign, phase = calculate_moon(datetime.date(1971, 8, 18))
        assert isinstance(sign, VenusSign)
        assert 0.0 <= phase < 360.0
