# ABOUTME: Pydantic BaseModels for the persisted tracker record and derived dashboard data.
# ABOUTME: Defines structured types for UV estimates, exposure sessions, and vitamin D progress.

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.presets import ClothingPreset, SunscreenPreset

STORAGE_KEY = "uv-tracker-state-v1"


class CamelModel(BaseModel):
    """Base model that serializes with the camelCase keys the page and the durable slot use."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RiskLevel(StrEnum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"
    EXTREME = "Extreme"


class SessionPhase(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class PersistedState(CamelModel):
    """The durable user record, stored whole under a single storage key."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    location: str = "San Francisco, CA"
    clothing: ClothingPreset = ClothingPreset.LIGHT
    sunscreen: SunscreenPreset = SunscreenPreset.SPF30
    vitamin_goal: int | float = 1000
    vitamin_progress: int = 250


class HourlyForecastEntry(CamelModel):
    """Estimated UV index for one upcoming hour."""

    hour: str
    uv: float


class SunWindow(CamelModel):
    """Estimated sunrise and sunset as 12-hour clock strings."""

    sunrise: str
    sunset: str


class ExposureGain(CamelModel):
    """Attenuated UV index and the vitamin D3 gain (IU) it produces over a session."""

    effective_uv: float
    vitamin_gain: float


class SessionSnapshot(CamelModel):
    """Live view of the exposure session timer and its running gain estimate."""

    active: bool
    phase: SessionPhase
    elapsed_seconds: int
    clock: str
    effective_uv: float
    vitamin_gain: float


class Dashboard(CamelModel):
    """Everything the page renders, derived from the persisted state and the current time."""

    state: PersistedState
    base_uv: float
    risk: RiskLevel
    forecast: list[HourlyForecastEntry] = []
    sun_window: SunWindow
    session: SessionSnapshot
    progress_percentage: float
