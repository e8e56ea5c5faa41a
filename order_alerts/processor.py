"""
Order processor: one notification pass over all orders.

The processor is the only place with decision logic:
1. Fetch all orders from the order source
2. For every delivered item, ask the alert notifier to send an alert
3. Bump the item's delivery notification counter when the alert succeeded
4. Persist each order immediately after it has been processed

Design decisions:
- Strictly sequential: orders in fetch order, items in sequence order
- Stateless between calls - nothing about an order is kept after persisting
- A failed alert only affects its own item; the pass carries on
- Fetch and persist failures are not caught here and end the pass

Known quirk (kept on purpose for compatibility with the existing job):
when an alert fails, the item is left OUT of the persisted order instead of
being written back unchanged. This looks like an accident of the
"build a new list, append on success" shape rather than a product decision.
Confirm with the product owner before changing it.
"""

import logging

from common.models import Order, OrderItem
from order_alerts.interfaces import AlertNotifier, OrderSource
from order_alerts.models import AlertResult

logger = logging.getLogger("order_processor")


class OrderProcessor:
    """
    Drives the delivered-item alert workflow.

    Example:
        processor = OrderProcessor(order_repository, alert_service)
        processor.process_orders()
    """

    def __init__(self, order_repository: OrderSource, alert_service: AlertNotifier):
        """
        Initialize the processor.

        Raises:
            ValueError: If either collaborator is missing.
        """
        if order_repository is None:
            raise ValueError("order_repository is required")
        if alert_service is None:
            raise ValueError("alert_service is required")

        self.order_repository = order_repository
        self.alert_service = alert_service

    def process_orders(self) -> None:
        """
        Run one notification pass.

        Fetches once, then processes and persists orders one at a time in
        the order the source returned them. An empty fetch does nothing.
        """
        orders = self.order_repository.fetch_orders()

        for order in orders:
            processed_order = self.process_order(order)
            self.order_repository.update_order(processed_order)

    def process_order(self, order: Order) -> Order:
        """
        Send alerts for the delivered items of one order.

        Returns a new order with the same id and the resulting item sequence:
        non-delivered items unchanged, alerted items with their counter
        incremented, failed items dropped.
        """
        updated_items: list[OrderItem] = []

        for item in order.items:
            if not item.is_delivered():
                updated_items.append(item)
                continue

            if not self._send_alert(order.order_id, item):
                continue

            updated_items.append(item.with_notification_sent())
            logger.info(
                f"Successfully processed alert for order {order.order_id}, "
                f"item {item.description}"
            )

        return order.with_items(updated_items)

    def _send_alert(self, order_id: str, item: OrderItem) -> bool:
        """Send one alert and report whether it succeeded, logging failures."""
        try:
            result: AlertResult = self.alert_service.send_alert(order_id, item)
        except Exception as e:
            logger.error(
                f"Failed to send alert for order {order_id}, item {item.description}: {e}",
                exc_info=True,
            )
            return False

        if not result.success:
            logger.error(
                f"Failed to send alert for order {order_id}, item {item.description}: "
                f"{result.error}"
            )
            return False

        return True
