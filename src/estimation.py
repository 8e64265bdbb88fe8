# ABOUTME: Deterministic UV estimation from a location string and the current date.
# ABOUTME: Computes base UV index, an 8-hour forecast, sunrise/sunset times, and the risk label.

import math
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from src.models import HourlyForecastEntry, RiskLevel, SunWindow

FORECAST_HOURS = 8
MAX_UV = 11.0

# (exclusive upper bound, label) in ascending order; anything above the last bound is Extreme
RISK_THRESHOLDS = (
    (3, RiskLevel.LOW),
    (6, RiskLevel.MODERATE),
    (8, RiskLevel.HIGH),
    (11, RiskLevel.VERY_HIGH),
)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to `digits` decimals, breaking ties upward on the exact binary value."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def derive_base_uv(location: str, now: datetime) -> float:
    """Estimate the base UV index for a location in the month of `now`.

    The location contributes a pseudo-index in [2, 8) from its character codes and the
    month adds a seasonal boost of up to 3, capped at 11.
    """
    char_sum = sum(ord(c) for c in location.lower())
    normalized = (char_sum % 700) / 700 * 6 + 2
    seasonal_boost = math.sin((now.month / 12) * math.pi)
    return round_half_up(min(normalized + seasonal_boost * 3, MAX_UV))


def generate_forecast(base_uv: float, now: datetime) -> list[HourlyForecastEntry]:
    """Build the UV forecast for the next 8 hours starting at `now`."""
    entries = []
    for i in range(FORECAST_HOURS):
        modifier = math.sin((i / FORECAST_HOURS) * math.pi)
        uv = max(round_half_up(base_uv * (0.4 + modifier)), 0)
        entries.append(HourlyForecastEntry(hour=format_hour_label(now + timedelta(hours=i)), uv=uv))
    return entries


def derive_sun_window(location: str, now: datetime) -> SunWindow:
    """Estimate sunrise and sunset for a location on the date of `now`."""
    position_hash = sum(ord(c) * index for index, c in enumerate(location, start=1))
    sunrise_hour = 5 + (position_hash % 120) / 60
    sunset_hour = 17 + (position_hash % 180) / 60
    return SunWindow(
        sunrise=format_clock_time(_at_decimal_hour(now, sunrise_hour)),
        sunset=format_clock_time(_at_decimal_hour(now, sunset_hour)),
    )


def determine_risk_label(uv: float) -> RiskLevel:
    for upper_bound, label in RISK_THRESHOLDS:
        if uv < upper_bound:
            return label
    return RiskLevel.EXTREME


def format_hour_label(moment: datetime) -> str:
    """Format the hour of `moment` as a compact 12-hour label, e.g. "3pm" or "12am"."""
    suffix = "am" if moment.hour < 12 else "pm"
    return f"{moment.hour % 12 or 12}{suffix}"


def format_clock_time(moment: datetime) -> str:
    """Format `moment` as a 12-hour clock time, e.g. "6:37 AM"."""
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{moment.hour % 12 or 12}:{moment.minute:02d} {suffix}"


def _at_decimal_hour(now: datetime, decimal_hours: float) -> datetime:
    """Return the instant on the date of `now` at a fractional hour, minutes rounded."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(minutes=round(decimal_hours * 60))
