"""
Shared pytest fixtures for the delivered-item alert tests.

HTTP is never real: outbound calls go through httpx.MockTransport into a
FakeUpstream that plays the orders API, the update API and the alert API.
"""

import json
from pathlib import Path

import httpx
import pytest

from common.http_client import HttpClientWrapper
from common.models import Order, OrderItem
from common.settings import ApiSettings, AppSettings


ORDERS_URL = "https://orders.test/api/orders"
UPDATE_URL = "https://orders.test/api/update"
ALERT_URL = "https://alerts.test/api/alerts"


class FakeUpstream:
    """
    In-process stand-in for the three remote endpoints.

    Tweak the status attributes or failing_items to simulate failures, then
    inspect updated_orders / alert_messages after the run.
    """

    def __init__(self):
        self.orders_payload: object = []
        self.orders_status = 200
        self.update_status = 200
        self.alert_status = 200
        self.failing_items: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.updated_orders: list[dict] = []
        self.alert_messages: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if request.method == "GET" and url == ORDERS_URL:
            if isinstance(self.orders_payload, bytes):
                return httpx.Response(self.orders_status, content=self.orders_payload)
            return httpx.Response(self.orders_status, json=self.orders_payload)

        if request.method == "POST" and url == UPDATE_URL:
            self.updated_orders.append(json.loads(request.content))
            return httpx.Response(self.update_status)

        if request.method == "POST" and url == ALERT_URL:
            message = json.loads(request.content)["Message"]
            self.alert_messages.append(message)
            if any(f"Item: {description}," in message for description in self.failing_items):
                return httpx.Response(500)
            return httpx.Response(self.alert_status)

        return httpx.Response(404)

    def requests_to(self, method: str, url: str) -> list[httpx.Request]:
        """Requests received for one endpoint."""
        return [r for r in self.requests if r.method == method and str(r.url) == url]


@pytest.fixture
def orders_url() -> str:
    """GET endpoint listing all orders."""
    return ORDERS_URL


@pytest.fixture
def update_url() -> str:
    """POST endpoint persisting one order."""
    return UPDATE_URL


@pytest.fixture
def alert_url() -> str:
    """POST endpoint receiving delivered item alerts."""
    return ALERT_URL


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fresh fake upstream for each test."""
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream):
    """HttpClientWrapper routed into the fake upstream."""
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    wrapper = HttpClientWrapper(client=client)
    yield wrapper
    client.close()


@pytest.fixture
def settings() -> AppSettings:
    """Settings pointing at the fake upstream URLs."""
    return AppSettings(
        api_settings=ApiSettings(
            orders_api_url=ORDERS_URL,
            update_api_url=UPDATE_URL,
            alert_api_url=ALERT_URL,
        ),
    )


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory holding a minimal appsettings.json."""
    (tmp_path / "appsettings.json").write_text(json.dumps({
        "ApiSettings": {
            "OrdersApiUrl": ORDERS_URL,
            "UpdateApiUrl": UPDATE_URL,
            "AlertApiUrl": ALERT_URL,
        },
        "LogLevel": "Information",
    }))
    return tmp_path


# =============================================================================
# Order Fixtures
# =============================================================================

@pytest.fixture
def mixed_order() -> Order:
    """
    ORDER-1: one delivered item followed by one in-progress item.
    """
    return Order(
        order_id="ORDER-1",
        items=[
            OrderItem(description="Item1", status="Delivered", delivery_notification=0),
            OrderItem(description="Item2", status="InProgress", delivery_notification=0),
        ],
    )


@pytest.fixture
def mixed_order_wire() -> dict:
    """ORDER-1 as the orders API serves it."""
    return {
        "OrderId": "ORDER-1",
        "Items": [
            {"Description": "Item1", "Status": "Delivered", "DeliveryNotification": 0},
            {"Description": "Item2", "Status": "InProgress", "DeliveryNotification": 0},
        ],
    }
