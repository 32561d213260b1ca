"""
hostdash Dashboard Module

Chart and table preparation for the dashboard page.
All presentation values are derived in Python; the page only draws them.
"""

from .controller import DashboardController

__all__ = ["DashboardController"]
