# ABOUTME: Converts exposure session time into effective UV and estimated vitamin D3 gain.
# ABOUTME: Also provides goal progress percentage and session clock formatting.

from src.models import ExposureGain
from src.presets import ClothingPreset, SunscreenPreset, clothing_attenuation, sunscreen_attenuation

# IU of vitamin D3 produced per minute of exposure at effective UV index 1
IU_PER_UV_MINUTE = 5


def calculate_exposure_gain(
    elapsed_seconds: float,
    base_uv: float,
    clothing: ClothingPreset | str,
    sunscreen: SunscreenPreset | str,
) -> ExposureGain:
    """Estimate the vitamin D3 gain of an exposure session.

    The gain is linear in minutes and effective UV and is never clamped; callers round it
    only when displaying or accumulating it.
    """
    minutes = elapsed_seconds / 60
    effective_uv = base_uv * clothing_attenuation(clothing) * sunscreen_attenuation(sunscreen)
    vitamin_gain = effective_uv * minutes * IU_PER_UV_MINUTE
    return ExposureGain(effective_uv=effective_uv, vitamin_gain=vitamin_gain)


def progress_percentage(progress: float, goal: float) -> float:
    """Share of the daily goal reached, capped at 100."""
    if goal <= 0:
        return 100.0 if progress > 0 else 0.0
    return min(progress / goal * 100, 100.0)


def format_session_clock(seconds: int) -> str:
    """Format elapsed seconds as HH:MM:SS."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
