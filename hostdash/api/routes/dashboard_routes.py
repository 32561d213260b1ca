#!/usr/bin/env python3
"""
Dashboard Routes - Web UI and Template Rendering
"""

import logging
import time
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ...core.config import DashboardConfig
from ...dashboard import DashboardController
from ...dashboard.config import LOADING_TEXT, PAGE_TITLE
from ...tasks.poller import DashboardState

logger = logging.getLogger("hostdash.server")

UI_DIR = Path(__file__).resolve().parents[2] / "ui"


def create_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=[str(UI_DIR / "pages"), str(UI_DIR / "components"), str(UI_DIR)])


def _error_context(request: Request, error: Exception) -> dict:
    return {
        "request": request,
        "page_title": PAGE_TITLE,
        "loading_text": LOADING_TEXT,
        "error": str(error),
        "loading": False,
        "snapshot": None,
        "hostname": None,
        "chart": None,
        "table_rows": [],
    }


def create_dashboard_routes(config: DashboardConfig, state: DashboardState,
                            dashboard_controller: DashboardController) -> APIRouter:
    """Create dashboard and web UI routes."""
    router = APIRouter()
    templates = create_templates()
    refresh_seconds = max(1, int(round(config.interval)))

    @router.get("/", response_class=HTMLResponse)
    @router.get("/dashboard", response_class=HTMLResponse)
    def dashboard_main(request: Request):
        """Main dashboard page - banner, loading indicator, chart and table."""
        logger.debug("Rendering main dashboard")
        try:
            dashboard_data = dashboard_controller.get_dashboard_data(state)
        except Exception as e:
            logger.error(f"Dashboard error: {e}")
            dashboard_data = _error_context(request, e)
        dashboard_data["request"] = request
        dashboard_data["refresh_seconds"] = refresh_seconds
        return templates.TemplateResponse(request, "dashboard.html", dashboard_data)

    @router.get("/dashboard/refresh", response_class=HTMLResponse)
    def dashboard_refresh(request: Request):
        """Re-render the metrics panel via htmx."""
        try:
            dashboard_data = dashboard_controller.get_dashboard_data(state)
        except Exception as e:
            logger.error(f"Dashboard refresh error: {e}")
            dashboard_data = _error_context(request, e)
        dashboard_data["request"] = request
        return templates.TemplateResponse(request, "metrics_panel.html", dashboard_data)

    @router.get("/health")
    def health_check():
        """Poller status as JSON."""
        return {
            "status": "healthy",
            "timestamp": int(time.time()),
            "hostname": config.hostname,
            "has_snapshot": state.snapshot is not None,
            "loading": state.loading,
            "error": state.error,
        }

    return router
