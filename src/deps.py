# ABOUTME: Dependency container for the tracker using Pydantic BaseModel.
# ABOUTME: Builds the storage-backed persistence gateway and the session timer from environment config.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from src.persistence import FileStorage, PersistenceGateway
from src.session import SessionTimer

load_dotenv()

DEFAULT_DATA_DIR = ".uv-tracker"
DEFAULT_TICK_SECONDS = 1.0


class TrackerDeps(BaseModel):
    """Collaborators injected into the tracker and the web app."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    gateway: PersistenceGateway
    timer: SessionTimer


def create_tracker_deps(data_dir: str | None = None, tick_seconds: float | None = None) -> TrackerDeps:
    """Create tracker dependencies backed by a JSON file storage directory.

    Falls back to UV_TRACKER_DATA_DIR and UV_TRACKER_TICK_SECONDS from the environment.
    """
    if data_dir is None:
        data_dir = os.environ.get("UV_TRACKER_DATA_DIR", DEFAULT_DATA_DIR)
    if tick_seconds is None:
        tick_seconds = float(os.environ.get("UV_TRACKER_TICK_SECONDS", DEFAULT_TICK_SECONDS))
    return TrackerDeps(
        gateway=PersistenceGateway(FileStorage(data_dir)),
        timer=SessionTimer(interval=tick_seconds),
    )
