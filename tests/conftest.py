"""Pytest configuration and shared fixtures"""
import socket
import threading

import pytest
from unittest.mock import Mock

from hostdash.api.metrics_client import MetricsApiClient
from hostdash.api.schemas import MetricSnapshot
from hostdash.core.config import DashboardConfig


# Real-world API response for a host at 50% memory and 10% disk
SAMPLE_PAYLOAD = {
    "data": {
        "id": 1017,
        "hostname": "h1",
        "cpu_load": 42.5,
        "memory_used": 2147483648,     # 2 GB
        "memory_total": 4294967296,    # 4 GB
        "disk_used": 10737418240,      # 10 GB
        "disk_total": 107374182400,    # 100 GB
        "net_rx": 1048576,             # 1 MB
        "net_tx": 2097152,             # 2 MB
        "timestamp": "2026-10-19T12:00:00Z"
    }
}


@pytest.fixture
def sample_payload():
    """Fresh copy of the sample API response"""
    return {"data": dict(SAMPLE_PAYLOAD["data"])}


@pytest.fixture
def sample_snapshot(sample_payload):
    """Parsed snapshot for the sample host"""
    return MetricSnapshot(**sample_payload["data"])


@pytest.fixture
def config():
    """Config pointing at a fake metrics API with a short poll interval"""
    return DashboardConfig(
        api_url="http://metrics.test",
        hostname="h1",
        api_key="secret-token",
        interval=0.05,
    )


@pytest.fixture
def fake_client(sample_snapshot):
    """Metrics API client that always returns the sample snapshot"""
    client = Mock(spec=MetricsApiClient)
    client.get_snapshot.return_value = sample_snapshot
    return client


@pytest.fixture
def stalling_error_server():
    """
    Local HTTP server that answers 500 and then stalls half-way through the body.

    Yields (base_url, expected_body). The rest of the body is sent after ~0.6s.
    """
    body = b"boom" + b"-" * 16
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    release = threading.Event()

    def serve():
        conn, _ = listener.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(
                b"HTTP/1.1 500 Internal Server Error\r\n"
                b"Content-Type: text/plain\r\n"
                b"Content-Length: %d\r\n"
                b"Connection: close\r\n\r\n" % len(body)
                + body[:4]
            )
            release.wait(0.6)
            conn.sendall(body[4:])

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{listener.getsockname()[1]}", body.decode("ascii")

    release.set()
    thread.join(2)
    listener.close()
