"""
Alert service: posts delivered-item alerts to the alert API.

Design decisions:
- Argument problems (empty order id, missing item) raise ValueError - they
  are programming errors, not delivery failures
- Delivery failures (non-2xx, transport errors) come back as a failed
  AlertResult so the caller decides what to do with them
- One attempt per call, no retries
"""

import logging
from typing import Optional

import httpx

from common.http_client import HttpClientWrapper
from common.models import OrderItem
from common.templates import render_alert_message
from order_alerts.models import AlertPayload, AlertResult

logger = logging.getLogger("alert_service")


class AlertService:
    """
    Sends one alert per delivered item to the configured alert API.

    Example:
        service = AlertService(http_client, "https://alerts.example.com/api/alerts")
        result = service.send_alert("ORD-1", item)
    """

    def __init__(self, http_client: HttpClientWrapper, alert_api_url: str):
        if http_client is None:
            raise ValueError("http_client is required")
        if not alert_api_url or not alert_api_url.strip():
            raise ValueError("Alert API URL can not be blank")

        self.http_client = http_client
        self.alert_api_url = alert_api_url

    def send_alert(self, order_id: str, item: Optional[OrderItem]) -> AlertResult:
        """
        Send an alert for a delivered item.

        Args:
            order_id: Id of the order the item belongs to
            item: The delivered item; its current counter is reported

        Returns:
            AlertResult describing the outcome

        Raises:
            ValueError: If order_id is empty or item is None
        """
        if not order_id:
            raise ValueError("OrderId cannot be null or empty")
        if item is None:
            raise ValueError("item is required")

        logger.info(f"Sending alert for order {order_id} with item {item.description}")

        message = render_alert_message(order_id, item)
        payload = AlertPayload(message=message)

        try:
            response = self.http_client.post(
                self.alert_api_url,
                json=payload.model_dump(by_alias=True),
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send alert for order {order_id}: {e}")
            return AlertResult(
                success=False,
                order_id=order_id,
                description=item.description,
                message=message,
                error=f"Failed to send alert for order {order_id}: {e}",
            )

        if not response.is_success:
            logger.error(
                f"Failed to send alert for order {order_id}. "
                f"Status code: {response.status_code}"
            )
            return AlertResult(
                success=False,
                order_id=order_id,
                description=item.description,
                message=message,
                status_code=response.status_code,
                error=f"Failed to send alert for order {order_id}",
            )

        return AlertResult(
            success=True,
            order_id=order_id,
            description=item.description,
            message=message,
            status_code=response.status_code,
        )
