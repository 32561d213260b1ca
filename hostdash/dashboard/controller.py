"""
Dashboard Controller

Turns the poller state into template data: error banner, loading indicator,
Chart.js bar chart config and the detail table. Everything is returned as
plain Python structures so it can be tested without a browser.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ..api.schemas import MetricSnapshot
from ..tasks.poller import DashboardState
from ..web.template_helpers import (
    format_gb,
    format_http_date,
    format_mb,
    format_number,
    format_percent,
    usage_percent,
)
from .config import (
    CHART_BORDER_WIDTH,
    CHART_CATEGORIES,
    CHART_COLORS,
    CHART_DATASET_LABEL,
    CHART_FILL_ALPHA,
    LOADING_TEXT,
    PAGE_TITLE,
    TABLE_ROWS,
    rgba,
)

logger = logging.getLogger("hostdash.dashboard")


class DashboardController:
    """Builds dashboard template data from the current state."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        # chart config for the snapshot it was built from
        self._chart: Optional[Dict[str, Any]] = None
        self._chart_snapshot: Optional[MetricSnapshot] = None

    def get_dashboard_data(self, state: DashboardState) -> Dict[str, Any]:
        """Template context for the page and the refresh fragment."""
        snapshot = state.snapshot
        data = {
            "page_title": PAGE_TITLE,
            "loading_text": LOADING_TEXT,
            "error": state.error,
            "loading": state.loading,
            "snapshot": snapshot,
            "hostname": None,
            "chart": None,
            "table_rows": [],
        }
        if snapshot is not None:
            data["hostname"] = snapshot.hostname
            data["chart"] = self.get_chart_config(snapshot)
            data["table_rows"] = self.get_table_rows(snapshot)
        return data

    def get_derived_values(self, snapshot: MetricSnapshot) -> Dict[str, Optional[float]]:
        """Presentation values computed from the raw snapshot."""
        return {
            "memory_percent": usage_percent(snapshot.memory_used, snapshot.memory_total),
            "disk_percent": usage_percent(snapshot.disk_used, snapshot.disk_total),
        }

    def get_table_rows(self, snapshot: MetricSnapshot, now: Optional[float] = None) -> List[Dict[str, str]]:
        """
        Ten parameter/value rows for the detail table.

        "Last Updated" is the render time, not the server timestamp.
        """
        derived = self.get_derived_values(snapshot)
        values = {
            "cpu_load": f"{format_number(snapshot.cpu_load)}%",
            "memory_used": format_gb(snapshot.memory_used),
            "memory_total": format_gb(snapshot.memory_total),
            "memory_percent": format_percent(derived["memory_percent"]),
            "disk_used": format_gb(snapshot.disk_used),
            "disk_total": format_gb(snapshot.disk_total),
            "disk_percent": format_percent(derived["disk_percent"]),
            "net_rx": format_mb(snapshot.net_rx),
            "net_tx": format_mb(snapshot.net_tx),
            "last_updated": format_http_date(self._clock() if now is None else now),
        }
        return [{"parameter": label, "value": values[key]} for label, key in TABLE_ROWS]

    def get_chart_config(self, snapshot: MetricSnapshot) -> Dict[str, Any]:
        """Chart.js bar chart config; reused while the snapshot is unchanged."""
        if self._chart is not None and self._chart_snapshot is snapshot:
            return self._chart

        derived = self.get_derived_values(snapshot)
        self._chart = {
            "type": "bar",
            "data": {
                "labels": list(CHART_CATEGORIES),
                "datasets": [
                    {
                        "label": CHART_DATASET_LABEL,
                        "data": [
                            snapshot.cpu_load,
                            derived["memory_percent"],
                            derived["disk_percent"],
                            snapshot.net_rx,
                            snapshot.net_tx,
                        ],
                        "backgroundColor": [rgba(c, CHART_FILL_ALPHA) for c in CHART_COLORS],
                        "borderColor": [rgba(c, 1) for c in CHART_COLORS],
                        "borderWidth": CHART_BORDER_WIDTH,
                    }
                ],
            },
            "options": {
                "scales": {"y": {"beginAtZero": True}},
                "plugins": {"title": {"display": True, "text": f"Metrics for {snapshot.hostname}"}},
            },
        }
        self._chart_snapshot = snapshot
        return self._chart

    def release_chart(self) -> None:
        """Drop the cached chart config."""
        if self._chart is not None:
            logger.debug("releasing chart for %s", self._chart_snapshot.hostname)
        self._chart = None
        self._chart_snapshot = None
