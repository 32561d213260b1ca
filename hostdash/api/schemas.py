#!/usr/bin/env python3
"""
hostdash API Schemas - Pydantic Models for the metrics API responses
"""

from pydantic import BaseModel


class MetricSnapshot(BaseModel):
    """One server-reported set of host resource metrics."""
    id: int
    hostname: str
    cpu_load: float
    memory_used: int
    memory_total: int
    disk_used: int
    disk_total: int
    net_rx: int
    net_tx: int
    timestamp: str  # server-assigned; display uses render time instead


class MetricsResponse(BaseModel):
    data: MetricSnapshot
