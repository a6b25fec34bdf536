"""HTTP API for the greeter.

Serves ``GET /api/greet`` and ``GET /api/stats`` with aiohttp, plus the built frontend from
``SERVER.STATIC_DIR``. Every response carries permissive CORS headers so the frontend dev
server can call the API from another origin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from aiohttp import web

from core.errors import ConfigurationError, TranslationError
from core.shared_data import SharedData
from models.greeting_models import GreetingRequest, GreetingResponse
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from config.loader import Config
    from core.greeter import GreetingEngine
    from models.stats_models import Stats

__all__: list[str] = ["SHARED_DATA_KEY", "build_app", "create_app", "run_server"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

SHARED_DATA_KEY: Final[web.AppKey[SharedData]] = web.AppKey("shared_data", SharedData)

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

type Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Add CORS headers to every response and answer preflight requests directly."""
    if request.method == "OPTIONS":
        return web.Response(status=200, headers=CORS_HEADERS)

    try:
        response: web.StreamResponse = await handler(request)
    except web.HTTPException as err:
        err.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


async def handle_greet(request: web.Request) -> web.Response:
    """``GET /api/greet?name=<recipient>&language=<code>``."""
    greeting_request = GreetingRequest(
        recipient=request.query.get("name", ""),
        language=request.query.get("language", ""),
    )
    if not greeting_request.is_complete:
        raise web.HTTPBadRequest(text="Missing name or language parameter")

    shared: SharedData = request.app[SHARED_DATA_KEY]
    try:
        engine: GreetingEngine = shared.new_engine()
    except ConfigurationError as err:
        raise web.HTTPInternalServerError(text=f"Failed to create greeter: {err}") from err

    try:
        greeting, stats = await engine.greet(greeting_request.recipient, greeting_request.language)
    except TranslationError as err:
        logger.error("Greeting in '%s' failed: %s", greeting_request.language, err)
        raise web.HTTPInternalServerError(text=f"Failed to get greeting: {err}") from err

    await shared.stats_aggregator.merge(stats)

    response = GreetingResponse(greeting=greeting)
    if stats.has_activity:
        response.stats = stats
        logger.info(
            "Stats: calls=%d, chars=%d, cost=%.5f, hits=%d",
            stats.api_calls,
            stats.chars_sent,
            stats.cost_estimate,
            stats.cache_hits,
        )
    return web.json_response(response.to_dict())


async def handle_stats(request: web.Request) -> web.Response:
    """``GET /api/stats``: totals across every greeting served by this process."""
    shared: SharedData = request.app[SHARED_DATA_KEY]
    total: Stats = await shared.stats_aggregator.snapshot()
    return web.json_response(total.to_dict())


def _add_static_routes(app: web.Application, static_dir: Path) -> None:
    index: Path = static_dir / "index.html"

    async def handle_index(_request: web.Request) -> web.FileResponse:
        if not index.is_file():
            raise web.HTTPNotFound
        return web.FileResponse(index)

    app.router.add_get("/", handle_index)
    app.router.add_static("/", static_dir)
    logger.info("Serving static files from '%s'", static_dir)


async def _close_shared_data(app: web.Application) -> None:
    await app[SHARED_DATA_KEY].close()


def create_app(shared: SharedData) -> web.Application:
    """Build the web application around an initialised SharedData.

    Static files are served only if ``SERVER.STATIC_DIR`` exists; API routes are registered first
    so they take precedence.
    """
    app = web.Application(middlewares=[cors_middleware])
    app[SHARED_DATA_KEY] = shared
    app.router.add_get("/api/greet", handle_greet)
    app.router.add_get("/api/stats", handle_stats)

    static_dir: Path = FileUtils.resolve_path(shared.config.SERVER.STATIC_DIR)
    if static_dir.is_dir():
        _add_static_routes(app, static_dir)
    else:
        logger.warning("Static directory '%s' not found, frontend is not served", static_dir)

    app.on_cleanup.append(_close_shared_data)
    return app


async def build_app(config: Config) -> web.Application:
    """Initialise SharedData and build the application.

    Raises:
        ConfigurationError: If the configuration is incomplete.
    """
    shared = SharedData(config)
    await shared.async_init()
    return create_app(shared)


def run_server(config: Config) -> None:
    """Serve the API until interrupted.

    Raises:
        ConfigurationError: If the configuration is incomplete; the server does not start.
    """
    host: str = config.SERVER.HOST
    port: int = config.SERVER.PORT
    logger.info("Server starting on http://localhost:%d", port)
    web.run_app(build_app(config), host=host, port=port)
