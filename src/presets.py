# ABOUTME: Static clothing and sunscreen preset tables.
# ABOUTME: Maps each preset to its display label and UV attenuation multiplier.

from enum import StrEnum
from typing import NamedTuple


class ClothingPreset(StrEnum):
    MINIMAL = "minimal"
    LIGHT = "light"
    MODERATE = "moderate"
    COVERED = "covered"


class SunscreenPreset(StrEnum):
    NONE = "none"
    SPF15 = "spf15"
    SPF30 = "spf30"
    SPF50 = "spf50"


class Preset(NamedTuple):
    """Display label and attenuation multiplier in (0, 1], where 1 means no attenuation."""

    label: str
    attenuation: float


CLOTHING_PRESETS: dict[ClothingPreset, Preset] = {
    ClothingPreset.MINIMAL: Preset("Minimal (shorts & tee)", 1.0),
    ClothingPreset.LIGHT: Preset("Light layers", 0.8),
    ClothingPreset.MODERATE: Preset("Moderate coverage", 0.6),
    ClothingPreset.COVERED: Preset("Mostly covered", 0.4),
}

SUNSCREEN_PRESETS: dict[SunscreenPreset, Preset] = {
    SunscreenPreset.NONE: Preset("No sunscreen", 1.0),
    SunscreenPreset.SPF15: Preset("SPF 15", 0.6),
    SunscreenPreset.SPF30: Preset("SPF 30", 0.4),
    SunscreenPreset.SPF50: Preset("SPF 50", 0.2),
}


def clothing_attenuation(clothing: ClothingPreset | str) -> float:
    return CLOTHING_PRESETS[ClothingPreset(clothing)].attenuation


def sunscreen_attenuation(sunscreen: SunscreenPreset | str) -> float:
    return SUNSCREEN_PRESETS[SunscreenPreset(sunscreen)].attenuation


def preset_options() -> dict[str, list[dict]]:
    """List presets in display order for selection controls."""
    return {
        "clothing": [{"value": k.value, "label": p.label} for k, p in CLOTHING_PRESETS.items()],
        "sunscreen": [{"value": k.value, "label": p.label} for k, p in SUNSCREEN_PRESETS.items()],
    }
