"""
Order repository backed by the orders API.

Reads the current order list with a GET and writes one updated order back
with a POST.

Design decisions:
- A non-2xx on fetch, or a body that is not a JSON array, means "nothing
  to process" and yields an empty list
- Transport errors on fetch are raised - the pass cannot run without orders
- Array entries that do not look like orders raise a ValidationError
- Any failure on update is raised
"""

import logging
from typing import Optional

from common.http_client import HttpClientWrapper
from common.models import Order

logger = logging.getLogger("order_repository")


class OrderRepository:
    """
    Fetches and persists orders through the orders API.

    Example:
        repository = OrderRepository(http_client, orders_url, update_url)
        for order in repository.fetch_orders():
            ...
    """

    def __init__(
        self,
        http_client: HttpClientWrapper,
        orders_api_url: str,
        update_api_url: str,
    ):
        if http_client is None:
            raise ValueError("http_client is required")
        if not orders_api_url or not orders_api_url.strip():
            raise ValueError("Orders API URL can not be blank")
        if not update_api_url or not update_api_url.strip():
            raise ValueError("Update API URL can not be blank")

        self.http_client = http_client
        self.orders_api_url = orders_api_url
        self.update_api_url = update_api_url

    def fetch_orders(self) -> list[Order]:
        """
        Fetch all orders.

        Returns:
            Orders in the order the API listed them; empty when the API
            answered with an error status or an unusable body.
        """
        response = self.http_client.get(self.orders_api_url)
        if not response.is_success:
            logger.warning(
                f"Orders API returned status {response.status_code}, nothing to process"
            )
            return []

        try:
            data = response.json()
        except ValueError:
            logger.warning("Orders API returned a body that is not JSON, nothing to process")
            return []

        if not isinstance(data, list):
            logger.warning("Orders API did not return a JSON array, nothing to process")
            return []

        return [Order.model_validate(entry) for entry in data]

    def update_order(self, order: Optional[Order]) -> None:
        """
        Persist one order.

        Raises:
            ValueError: If order is None
            httpx.HTTPError: If the request fails or returns a non-2xx status
        """
        if order is None:
            raise ValueError("order is required")

        response = self.http_client.post(self.update_api_url, json=order.to_wire())
        response.raise_for_status()
        logger.debug(f"Order {order.order_id} persisted ({len(order.items)} items)")
