"""
Thin wrapper around httpx for the outbound calls this job makes.

The repository and the alert service only ever need "GET a URL" and
"POST JSON to a URL", so that is all this exposes. Keeping it narrow makes
it easy to hand in a client built on httpx.MockTransport for tests.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger("http_client")

DEFAULT_TIMEOUT = 30.0


class HttpClientWrapper:
    """
    Owns one httpx.Client and forwards GET/POST calls to it.

    Example:
        with HttpClientWrapper(timeout=10) as http_client:
            response = http_client.get("https://orders.example.com/api/orders")
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the wrapper.

        Args:
            client: Pre-built httpx client. When omitted a new one is created
                    and owned (closed) by this wrapper.
            timeout: Request timeout in seconds for a client created here.
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def get(self, url: str) -> httpx.Response:
        """Send a GET request to the given URL."""
        logger.debug(f"GET {url}")
        response = self._client.get(url)
        logger.debug(f"GET {url} -> {response.status_code}")
        return response

    def post(self, url: str, json: Any) -> httpx.Response:
        """Send a POST request with a JSON body to the given URL."""
        logger.debug(f"POST {url}")
        response = self._client.post(url, json=json)
        logger.debug(f"POST {url} -> {response.status_code}")
        return response

    def close(self) -> None:
        """Close the underlying client if this wrapper created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpClientWrapper":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
