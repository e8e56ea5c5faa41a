"""
Alert message template.

The alerting endpoint receives a single human readable line per delivered
item. The counter rendered is the value *before* this alert is counted.
"""

from common.models import OrderItem


ALERT_MESSAGE_TEMPLATE = (
    "Alert for delivered item: Order {order_id}, Item: {description}, "
    "Delivery Notifications: {delivery_notification}"
)


def render_alert_message(order_id: str, item: OrderItem) -> str:
    """Render the alert message for one delivered item."""
    return ALERT_MESSAGE_TEMPLATE.format(
        order_id=order_id,
        description=item.description,
        delivery_notification=item.delivery_notification,
    )
