# ABOUTME: Explicit state holder for the UV tracker, owning persisted state and the session timer.
# ABOUTME: Exposes every user action and derives the dashboard from the state and the current time.

import logging
import math
from collections.abc import Callable
from datetime import datetime

from src.deps import TrackerDeps
from src.estimation import derive_base_uv, derive_sun_window, determine_risk_label, generate_forecast, round_half_up
from src.exposure import calculate_exposure_gain, format_session_clock, progress_percentage
from src.models import Dashboard, PersistedState, SessionSnapshot
from src.presets import ClothingPreset, SunscreenPreset

logger = logging.getLogger(__name__)

PROGRESS_STEP = 100


def coerce_number(raw) -> int | float:
    """Read a numeric form value, treating blank or non-numeric input as 0.

    Whole numbers come back as int so they serialize without a trailing ".0".
    """
    if isinstance(raw, bool):
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return int(value) if value.is_integer() else value


class UvTracker:
    """Coordinates the persistence gateway and session timer behind the page's actions.

    The clock is read here only and threaded into the estimation functions, so tests can
    pin it by passing a fixed `clock`.
    """

    def __init__(self, deps: TrackerDeps, clock: Callable[[], datetime] = datetime.now):
        self.gateway = deps.gateway
        self.timer = deps.timer
        self.clock = clock

    @property
    def ready(self) -> bool:
        return self.gateway.ready

    @property
    def state(self) -> PersistedState:
        return self.gateway.state

    def load(self) -> PersistedState:
        state = self.gateway.load()
        logger.info("Tracker ready for %r", state.location)
        return state

    def close(self) -> None:
        self.timer.close()

    def base_uv(self) -> float:
        return derive_base_uv(self.state.location, self.clock())

    def dashboard(self) -> Dashboard:
        """Derive everything the page shows from the current state and time."""
        now = self.clock()
        state = self.state
        base_uv = derive_base_uv(state.location, now)
        gain = calculate_exposure_gain(self.timer.elapsed_seconds, base_uv, state.clothing, state.sunscreen)
        return Dashboard(
            state=state,
            base_uv=base_uv,
            risk=determine_risk_label(base_uv),
            forecast=generate_forecast(base_uv, now),
            sun_window=derive_sun_window(state.location, now),
            session=SessionSnapshot(
                active=self.timer.active,
                phase=self.timer.phase,
                elapsed_seconds=self.timer.elapsed_seconds,
                clock=format_session_clock(self.timer.elapsed_seconds),
                effective_uv=gain.effective_uv,
                vitamin_gain=gain.vitamin_gain,
            ),
            progress_percentage=progress_percentage(state.vitamin_progress, state.vitamin_goal),
        )

    def set_location(self, location: str) -> PersistedState:
        return self.gateway.update_state(location=location)

    def set_clothing(self, clothing: ClothingPreset | str) -> PersistedState:
        return self.gateway.update_state(clothing=clothing)

    def set_sunscreen(self, sunscreen: SunscreenPreset | str) -> PersistedState:
        return self.gateway.update_state(sunscreen=sunscreen)

    def set_goal(self, raw) -> PersistedState:
        return self.gateway.update_state(vitamin_goal=coerce_number(raw))

    def update_profile(self, **changes) -> PersistedState:
        """Apply several profile edits as one validated merge and a single write.

        A `vitamin_goal` entry is coerced like form input. Raises ValidationError, with
        nothing changed, if any value is invalid.
        """
        if "vitamin_goal" in changes:
            changes["vitamin_goal"] = coerce_number(changes["vitamin_goal"])
        return self.gateway.update_state(**changes)

    def increment_progress(self) -> PersistedState:
        return self.gateway.update_state(vitamin_progress=self.state.vitamin_progress + PROGRESS_STEP)

    def decrement_progress(self) -> PersistedState:
        return self.gateway.update_state(vitamin_progress=max(self.state.vitamin_progress - PROGRESS_STEP, 0))

    def reset_progress(self) -> PersistedState:
        return self.gateway.update_state(vitamin_progress=0)

    def start_session(self) -> bool:
        return self.timer.start()

    def stop_session(self) -> float | None:
        """Stop the running session and add its gain to progress.

        Returns the committed gain in IU, or None when no session was running.
        """
        elapsed = self.timer.stop()
        if elapsed is None:
            return None
        state = self.state
        gain = calculate_exposure_gain(elapsed, self.base_uv(), state.clothing, state.sunscreen)
        progress = int(round_half_up(state.vitamin_progress + gain.vitamin_gain, 0))
        self.gateway.update_state(vitamin_progress=progress)
        logger.info("Session of %ds added %.1f IU", elapsed, gain.vitamin_gain)
        return gain.vitamin_gain

    def reset_session(self) -> None:
        self.timer.reset()
