#!/usr/bin/env python3
"""
hostdash FastAPI application factory.

The lifespan handler starts the poller when the app starts serving and
stops it (timer and chart resources) on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ..api.metrics_client import MetricsApiClient
from ..api.routes.dashboard_routes import UI_DIR, create_dashboard_routes
from ..dashboard import DashboardController
from ..tasks.poller import DashboardPoller, DashboardState
from .config import DashboardConfig

logger = logging.getLogger("hostdash.server")


def create_app(config: DashboardConfig, client: Optional[MetricsApiClient] = None) -> FastAPI:
    """Create the dashboard app with its poller, state and routes."""
    if client is None:
        client = MetricsApiClient(
            config.api_url,
            config.api_key,
            timeout=config.request_timeout,
            verify_tls=config.verify_tls,
        )

    state = DashboardState()
    dashboard_controller = DashboardController()
    poller = DashboardPoller(config, client, state, on_stop=dashboard_controller.release_chart)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        poller.start()
        try:
            yield
        finally:
            await poller.stop()

    app = FastAPI(title="hostdash", lifespan=lifespan)
    app.state.config = config
    app.state.dashboard_state = state
    app.state.poller = poller
    app.state.dashboard_controller = dashboard_controller

    app.mount("/static", StaticFiles(directory=str(UI_DIR / "static")), name="static")
    app.include_router(create_dashboard_routes(config, state, dashboard_controller))

    logger.debug("app created for host '%s'", config.hostname)
    return app
