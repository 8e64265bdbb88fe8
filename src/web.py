# ABOUTME: ASGI web entry point for the UV tracker page and its JSON API.
# ABOUTME: Creates a Starlette app with a readiness gate middleware and lifespan-managed state load.

import json
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from src.deps import TrackerDeps, create_tracker_deps
from src.page import LOADING_HTML, render_page
from src.presets import preset_options
from src.tracker import UvTracker

logger = logging.getLogger(__name__)

_LOADING_BODY = json.dumps({"status": "loading"}).encode()

# Request body key -> PersistedState field accepted by PATCH /api/state
_EDITABLE_FIELDS = {
    "location": "location",
    "clothing": "clothing",
    "sunscreen": "sunscreen",
    "vitaminGoal": "vitamin_goal",
}


class ReadinessGateMiddleware:
    """ASGI middleware that holds back interactive content until saved state has loaded.

    Until the tracker's one-time load finishes, API requests get a 503 and the page gets a
    self-refreshing placeholder, so default values never flash before the real ones.
    """

    def __init__(self, app, tracker: UvTracker):
        self.app = app
        self.tracker = tracker

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or self.tracker.ready:
            await self.app(scope, receive, send)
            return
        if scope["path"].startswith("/api/"):
            await self._send(send, 503, b"application/json", _LOADING_BODY)
        else:
            await self._send(send, 200, b"text/html; charset=utf-8", LOADING_HTML.encode())

    async def _send(self, send, status: int, content_type: bytes, body: bytes):
        headers = [[b"content-type", content_type], [b"content-length", str(len(body)).encode()]]
        await send({"type": "http.response.start", "status": status, "headers": headers})
        await send({"type": "http.response.body", "body": body})


def _tracker(request: Request) -> UvTracker:
    return request.app.state.tracker


def _dashboard_response(tracker: UvTracker) -> JSONResponse:
    return JSONResponse(tracker.dashboard().model_dump(mode="json", by_alias=True))


async def index(request: Request) -> HTMLResponse:
    return HTMLResponse(render_page())


async def get_dashboard(request: Request) -> JSONResponse:
    return _dashboard_response(_tracker(request))


async def get_presets(request: Request) -> JSONResponse:
    return JSONResponse(preset_options())


async def update_state(request: Request) -> JSONResponse:
    """Apply edits to location, clothing, sunscreen, or the vitamin goal."""
    tracker = _tracker(request)
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return JSONResponse({"detail": "Request body must be JSON"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"detail": "Request body must be a JSON object"}, status_code=400)

    changes = {name: body[key] for key, name in _EDITABLE_FIELDS.items() if key in body}
    if changes:
        tracker.update_profile(**changes)
    return _dashboard_response(tracker)


async def progress_action(request: Request) -> JSONResponse:
    tracker = _tracker(request)
    actions = {
        "increment": tracker.increment_progress,
        "decrement": tracker.decrement_progress,
        "reset": tracker.reset_progress,
    }
    action = actions.get(request.path_params["action"])
    if action is None:
        return JSONResponse({"detail": "Unknown action"}, status_code=404)
    action()
    return _dashboard_response(tracker)


async def session_action(request: Request) -> JSONResponse:
    tracker = _tracker(request)
    actions = {
        "start": tracker.start_session,
        "stop": tracker.stop_session,
        "reset": tracker.reset_session,
    }
    action = actions.get(request.path_params["action"])
    if action is None:
        return JSONResponse({"detail": "Unknown action"}, status_code=404)
    action()
    return _dashboard_response(tracker)


async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected update to %s: %d validation error(s)", request.url.path, exc.error_count())
    return JSONResponse({"detail": exc.errors(include_url=False, include_context=False)}, status_code=422)


def create_app(deps: TrackerDeps | None = None, tracker: UvTracker | None = None):
    """Build the ASGI app around one tracker; state loads at startup and the timer closes at shutdown."""
    if tracker is None:
        tracker = UvTracker(deps or create_tracker_deps())

    @asynccontextmanager
    async def lifespan(app):
        tracker.load()
        try:
            yield
        finally:
            tracker.close()

    routes = [
        Route("/", index),
        Route("/api/dashboard", get_dashboard),
        Route("/api/presets", get_presets),
        Route("/api/state", update_state, methods=["PATCH"]),
        Route("/api/progress/{action:str}", progress_action, methods=["POST"]),
        Route("/api/session/{action:str}", session_action, methods=["POST"]),
    ]
    inner = Starlette(routes=routes, lifespan=lifespan, exception_handlers={ValidationError: validation_error})
    inner.state.tracker = tracker
    return ReadinessGateMiddleware(inner, tracker)


app = create_app()


def main() -> None:
    logging.basicConfig(level=os.environ.get("UV_TRACKER_LOG_LEVEL", "INFO"))
    uvicorn.run(
        app,
        host=os.environ.get("UV_TRACKER_HOST", "127.0.0.1"),
        port=int(os.environ.get("UV_TRACKER_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
