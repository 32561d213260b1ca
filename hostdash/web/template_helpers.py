#!/usr/bin/env python3
"""
Template Helpers for hostdash Dashboard
"""

import math
import time
from email.utils import formatdate

BYTES_PER_MB = 1024 ** 2
BYTES_PER_GB = 1024 ** 3

NO_VALUE = "—"


def format_number(value):
    """Format a number the way a browser prints it (42.0 -> '42', 42.5 -> '42.5')."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def format_gb(bytes_value):
    """Format raw bytes as gigabytes with two decimals."""
    return f"{bytes_value / BYTES_PER_GB:.2f} GB"


def format_mb(bytes_value):
    """Format raw bytes as megabytes with two decimals."""
    return f"{bytes_value / BYTES_PER_MB:.2f} MB"


def format_percent(value):
    """Format a percentage with two decimals; None renders as a dash."""
    if value is None:
        return NO_VALUE
    return f"{value:.2f}%"


def usage_percent(used, total):
    """used / total * 100, or None when total is zero."""
    if not total:
        return None
    return used / total * 100


def format_http_date(timestamp=None):
    """RFC 1123 date in GMT, e.g. 'Mon, 19 Oct 2026 12:00:00 GMT'."""
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)

