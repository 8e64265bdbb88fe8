# ABOUTME: Contract tests for the deterministic UV estimation engine.
# ABOUTME: Validates base UV, forecast, sun window, and risk thresholds against pinned instants.

from datetime import datetime

import pytest

from src.estimation import (
    derive_base_uv,
    derive_sun_window,
    determine_risk_label,
    format_hour_label,
    generate_forecast,
    round_half_up,
)
from src.models import HourlyForecastEntry, RiskLevel

JUNE = datetime(2025, 6, 15, 13, 0)
DECEMBER = datetime(2025, 12, 15, 9, 0)

LOCATIONS = ["", "a", "San Francisco, CA", "Reykjavík", "東京", "x" * 500, "  Sydney  "]


class TestDeriveBaseUv:
    def test_single_character_in_june(self):
        """A one-letter location gets the full June seasonal boost.

        Implementation: "a" has char sum 97 -> 97/700*6+2 = 2.83, plus sin(pi/2)*3 = 3.
        Passing implies: Hash normalization and the seasonal term combine additively.
        """
        assert derive_base_uv("a", JUNE) == 5.8

    def test_single_character_in_december(self):
        """December's seasonal term is zero, leaving only the location pseudo-index.

        Implementation: sin(12/12 * pi) is ~0, so the result is the normalized hash alone.
        Passing implies: The month is read from the supplied instant, 1-based.
        """
        assert derive_base_uv("a", DECEMBER) == 2.8

    def test_empty_location_is_valid(self):
        """An empty location has char sum 0 and yields the floor value in December.

        Implementation: Passes "" with a December instant.
        Passing implies: Empty input is accepted and maps to the minimum pseudo-index.
        """
        assert derive_base_uv("", DECEMBER) == 2.0

    def test_ignores_case(self):
        """Location hashing is case-insensitive.

        Implementation: Compares upper- and lower-case spellings.
        Passing implies: The location is lowercased before hashing.
        """
        assert derive_base_uv("SAN FRANCISCO, CA", JUNE) == derive_base_uv("san francisco, ca", JUNE)

    def test_deterministic_within_a_month(self):
        """Same location and month give the same value regardless of day or hour.

        Implementation: Calls with two instants in June at different times.
        Passing implies: Only the month of the instant affects the result.
        """
        later = datetime(2025, 6, 28, 23, 59)
        for location in LOCATIONS:
            assert derive_base_uv(location, JUNE) == derive_base_uv(location, later)

    def test_always_within_bounds(self):
        """Base UV stays within [2, 11] for every month.

        Implementation: Sweeps a set of locations across all twelve months.
        Passing implies: The pseudo-index plus seasonal boost never escapes the scale.
        """
        for month in range(1, 13):
            now = datetime(2025, month, 1)
            for location in LOCATIONS:
                assert 2.0 <= derive_base_uv(location, now) <= 11.0

    def test_rounded_to_one_decimal(self):
        """Base UV has at most one decimal place.

        Implementation: Checks the value times 10 is integral.
        Passing implies: The result is rounded for display.
        """
        value = derive_base_uv("San Francisco, CA", JUNE)
        assert round(value * 10) == pytest.approx(value * 10)


class TestGenerateForecast:
    def test_returns_eight_entries(self):
        """Forecast covers the next eight hours.

        Implementation: Generates a forecast from a mid-range base UV.
        Passing implies: The forecast length is fixed at 8.
        """
        forecast = generate_forecast(6.5, JUNE)
        assert len(forecast) == 8
        assert all(isinstance(entry, HourlyForecastEntry) for entry in forecast)

    def test_uv_follows_sine_curve(self):
        """UV starts at 40% of base and peaks at the midpoint hour.

        Implementation: base 10 -> index 0 is 10*0.4, index 2 is 10*(0.4+sin(pi/4)), index 4 is 10*1.4.
        Passing implies: The modifier is sin(i/8 * pi) and values are rounded to 1 decimal.
        """
        forecast = generate_forecast(10, JUNE)
        assert forecast[0].uv == 4.0
        assert forecast[2].uv == 11.1
        assert forecast[4].uv == 14.0
        assert max(entry.uv for entry in forecast) == forecast[4].uv

    def test_hour_labels_start_at_now(self):
        """Labels are consecutive 12-hour clock hours from the supplied instant.

        Implementation: Generates at 1pm.
        Passing implies: Labels are computed from now + i hours.
        """
        labels = [entry.hour for entry in generate_forecast(5, JUNE)]
        assert labels == ["1pm", "2pm", "3pm", "4pm", "5pm", "6pm", "7pm", "8pm"]

    def test_hour_labels_wrap_past_midnight(self):
        """Labels roll over from pm to am across midnight.

        Implementation: Generates at 10pm.
        Passing implies: Midnight is rendered as "12am".
        """
        labels = [entry.hour for entry in generate_forecast(5, datetime(2025, 6, 15, 22, 30))]
        assert labels[:4] == ["10pm", "11pm", "12am", "1am"]

    def test_uv_never_negative(self):
        """Every forecast value is non-negative.

        Implementation: Uses base UV 0.
        Passing implies: The lower clamp holds.
        """
        assert all(entry.uv >= 0 for entry in generate_forecast(0, JUNE))


class TestDeriveSunWindow:
    def test_single_character(self):
        """Sunrise and sunset follow from the position-weighted hash.

        Implementation: "a" hashes to 97 -> sunrise 5 + 97/60 h, sunset 17 + 97/60 h.
        Passing implies: Both times are derived and formatted as 12-hour clock strings.
        """
        window = derive_sun_window("a", JUNE)
        assert window.sunrise == "6:37 AM"
        assert window.sunset == "6:37 PM"

    def test_position_weighting(self):
        """Later characters weigh more than earlier ones.

        Implementation: "ab" hashes to 97*1 + 98*2 = 293.
        Passing implies: Each char code is multiplied by its 1-based position.
        """
        window = derive_sun_window("ab", JUNE)
        assert window.sunrise == "5:53 AM"
        assert window.sunset == "6:53 PM"

    def test_empty_location(self):
        """An empty location gives the earliest sunrise and sunset.

        Implementation: Hash 0 -> 5:00 and 17:00.
        Passing implies: Empty input is accepted.
        """
        window = derive_sun_window("", JUNE)
        assert window.sunrise == "5:00 AM"
        assert window.sunset == "5:00 PM"


class TestDetermineRiskLabel:
    @pytest.mark.parametrize(
        ("uv", "label"),
        [
            (0, RiskLevel.LOW),
            (2.9, RiskLevel.LOW),
            (3.0, RiskLevel.MODERATE),
            (5.9, RiskLevel.MODERATE),
            (6.0, RiskLevel.HIGH),
            (7.9, RiskLevel.HIGH),
            (8.0, RiskLevel.VERY_HIGH),
            (10.9, RiskLevel.VERY_HIGH),
            (11.0, RiskLevel.EXTREME),
            (14.0, RiskLevel.EXTREME),
        ],
    )
    def test_thresholds(self, uv, label):
        """Risk bands use exclusive upper boundaries.

        Implementation: Checks values on and just below each boundary.
        Passing implies: A value exactly on a boundary belongs to the higher band.
        """
        assert determine_risk_label(uv) == label

    def test_display_value(self):
        """Very High keeps its spaced display name.

        Implementation: Reads the enum value.
        Passing implies: The label renders as written on the page.
        """
        assert determine_risk_label(9).value == "Very High"


class TestFormatting:
    def test_round_half_up_breaks_ties_upward(self):
        """Exact ties round up, unlike Python's round().

        Implementation: 0.25 and 2.5 are exactly representable ties.
        Passing implies: Display rounding does not use banker's rounding.
        """
        assert round_half_up(0.25) == 0.3
        assert round_half_up(2.5, 0) == 3.0

    def test_hour_label_noon(self):
        """Noon is rendered as "12pm".

        Implementation: Formats a 12:00 instant.
        Passing implies: The 12-hour conversion maps hour 12 to 12, not 0.
        """
        assert format_hour_label(datetime(2025, 6, 15, 12, 0)) == "12pm"
