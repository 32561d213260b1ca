"""
hostdash - single-host metrics dashboard

Polls a remote metrics API for one host and renders the latest snapshot
as a bar chart and a detail table.
"""

__version__ = "1.0.0"
