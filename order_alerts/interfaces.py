"""
Collaborator contracts used by the order processor.

Any object with these methods can be handed to OrderProcessor; the
concrete HTTP-backed versions live in repository.py and alert_service.py.
"""

from typing import Protocol

from common.models import Order, OrderItem
from order_alerts.models import AlertResult


class OrderSource(Protocol):
    """Where orders come from and where updated orders go back to."""

    def fetch_orders(self) -> list[Order]:
        """
        Fetch the current set of orders.

        Returns an empty list when there is nothing to process. Retrieval
        failures are raised, not swallowed.
        """
        ...

    def update_order(self, order: Order) -> None:
        """Persist one updated order. Raises if the write fails."""
        ...


class AlertNotifier(Protocol):
    """Sends a delivered-item alert."""

    def send_alert(self, order_id: str, item: OrderItem) -> AlertResult:
        """
        Send one alert.

        Raises:
            ValueError: If order_id is empty or item is None.
        """
        ...
