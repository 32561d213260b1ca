"""
Dashboard Configuration

Chart categories, colours and table layout for the dashboard page.
"""

from typing import Tuple

PAGE_TITLE = "Server Metrics Dashboard"
LOADING_TEXT = "Fetching metrics..."

CHART_DATASET_LABEL = "Metrics"

# Bar chart categories in display order. Three percentages and two raw
# byte counters share one y axis.
CHART_CATEGORIES = [
    "CPU Load (%)",
    "Memory Usage (%)",
    "Disk Usage (%)",
    "Net RX (bytes)",
    "Net TX (bytes)",
]

# RGB per category; fill uses CHART_FILL_ALPHA, border is opaque
CHART_COLORS = [
    (75, 192, 192),
    (255, 99, 132),
    (54, 162, 235),
    (255, 206, 86),
    (153, 102, 255),
]
CHART_FILL_ALPHA = 0.6
CHART_BORDER_WIDTH = 1

# Detail table rows: (parameter label, formatter key)
TABLE_ROWS = [
    ("CPU Load", "cpu_load"),
    ("Memory Used", "memory_used"),
    ("Memory Total", "memory_total"),
    ("Memory Usage", "memory_percent"),
    ("Disk Used", "disk_used"),
    ("Disk Total", "disk_total"),
    ("Disk Usage", "disk_percent"),
    ("Network RX", "net_rx"),
    ("Network TX", "net_tx"),
    ("Last Updated", "last_updated"),
]


def rgba(color: Tuple[int, int, int], alpha: float) -> str:
    """CSS rgba() string for an RGB triple, e.g. rgba(75, 192, 192, 0.6)."""
    r, g, b = color
    return f"rgba({r}, {g}, {b}, {alpha})"
