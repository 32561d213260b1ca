"""
HTTP client for the remote metrics API.

Reads the latest metric snapshot for one host with a static bearer token.
"""

import json
import ssl
from typing import Any, Dict, Optional
from urllib.error import HTTPError
from urllib.parse import quote
from urllib.request import Request, urlopen

from pydantic import ValidationError

from .schemas import MetricSnapshot, MetricsResponse

ERROR_BODY_EXCERPT = 200


class MetricsApiError(Exception):
    """Raised when the metrics API answers with a body we cannot use."""


class MetricsApiClient:
    """Client for the metrics API."""

    def __init__(self, api_url: str, api_key: str, timeout: float = 10, verify_tls: bool = True):
        """
        Initialize metrics API client.

        Args:
            api_url: Base URL of the metrics API (e.g., https://metrics:8080)
            api_key: Bearer token sent with every request
            timeout: Request timeout in seconds
            verify_tls: Verify server certificates for HTTPS URLs
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._ssl_context = self._create_ssl_context(verify_tls)

    def _create_ssl_context(self, verify_tls: bool) -> ssl.SSLContext:
        ssl_context = ssl.create_default_context()
        if not verify_tls:
            # self-signed metrics servers
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        return ssl_context

    def get_json(self, endpoint: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Make an authenticated GET request.

        Args:
            endpoint: API endpoint path
            headers: Optional additional headers

        Returns:
            Response data as dictionary

        Raises:
            HTTPError: On HTTP errors; `body_excerpt` holds the start of the error body
            URLError: On connection errors
            MetricsApiError: On a body that is not valid JSON
        """
        url = f"{self.api_url}{endpoint}"
        hdrs = {"Authorization": f"Bearer {self.api_key}", "Accept": "application/json"}
        hdrs.update(headers or {})
        req = Request(url, headers=hdrs, method="GET")

        ssl_context = self._ssl_context if url.startswith("https://") else None

        try:
            with urlopen(req, timeout=self.timeout, context=ssl_context) as resp:
                raw = resp.read()
        except HTTPError as e:
            # read the error body here, on the caller's thread, and release the socket
            e.body_excerpt = self._read_error_body(e)
            raise
        try:
            text = raw.decode("utf-8")
            return json.loads(text) if text else {}
        except ValueError as e:
            raise MetricsApiError(f"invalid JSON from {url}: {e}") from e

    @staticmethod
    def _read_error_body(error: HTTPError) -> str:
        try:
            return error.read(ERROR_BODY_EXCERPT).decode("utf-8", errors="replace")
        except Exception:
            return str(error)
        finally:
            error.close()

    def get_snapshot(self, hostname: str) -> MetricSnapshot:
        """
        Get the latest metric snapshot for a host.

        Returns:
            Parsed MetricSnapshot from the response's "data" object

        Raises:
            HTTPError, URLError: On transport errors
            MetricsApiError: When the body does not match the expected schema
        """
        data = self.get_json(f"/api/metrics/{quote(hostname, safe='')}")
        try:
            return MetricsResponse.model_validate(data).data
        except ValidationError as e:
            raise MetricsApiError(f"unexpected metrics payload: {e.error_count()} validation error(s)") from e
