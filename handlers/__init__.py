"""HTTP handlers for the greeter.

This package provides the aiohttp application that exposes the greeting engine as a JSON API
and serves the frontend.
"""

from handlers.api import SHARED_DATA_KEY, build_app, create_app, run_server

__all__: list[str] = ["SHARED_DATA_KEY", "build_app", "create_app", "run_server"]
