"""
Domain models for the delivered-item alert job.

An order is fetched from the orders API, walked item by item, and written
back with updated delivery notification counters.

Design decisions:
- Using Pydantic for validation and serialization
- Models are frozen - an update produces a new instance via model_copy()
- The wire format uses PascalCase keys (OrderId, Items, ...); reading
  accepts any key casing, writing always emits PascalCase
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_pascal


DELIVERED_STATUS = "delivered"


def match_field_keys(model: type[BaseModel], data: Any) -> Any:
    """
    Rebind incoming keys to field aliases ignoring case and underscores.

    The orders API is not strict about key casing, so "orderId", "OrderId"
    and "order_id" must all land on the same field.
    """
    if not isinstance(data, dict):
        return data

    lookup = {}
    for name, field in model.model_fields.items():
        alias = field.alias or name
        lookup[alias.lower()] = alias
        lookup[name.replace("_", "").lower()] = alias

    matched = {}
    for key, value in data.items():
        if isinstance(key, str):
            key = lookup.get(key.replace("_", "").lower(), key)
        matched[key] = value
    return matched


class OrderItem(BaseModel):
    """
    A single line entry within an order.

    The status is free-form text coming from the orders API; only a
    case-insensitive "delivered" triggers an alert.
    """
    description: str = Field(..., description="Human readable item description")
    status: str = Field(..., description="Fulfillment status as reported upstream")
    delivery_notification: int = Field(
        default=0,
        ge=0,
        description="How many delivery alerts have been sent for this item"
    )

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_pascal,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return match_field_keys(cls, data)

    def is_delivered(self) -> bool:
        """Check whether the status equals "delivered", ignoring case."""
        return self.status.lower() == DELIVERED_STATUS

    def with_notification_sent(self) -> "OrderItem":
        """Return a copy with the delivery notification counter bumped by one."""
        return self.model_copy(
            update={"delivery_notification": self.delivery_notification + 1}
        )


class Order(BaseModel):
    """
    Order entity as served by the orders API.

    The item sequence is significant: processing keeps items in the order
    they were fetched.
    """
    order_id: str = Field(..., min_length=1, description="Unique order identifier")
    items: list[OrderItem] = Field(
        default_factory=list,
        description="Items in this order"
    )

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_pascal,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return match_field_keys(cls, data)

    def with_items(self, items: list[OrderItem]) -> "Order":
        """Return a copy of this order carrying a new item sequence."""
        return self.model_copy(update={"items": list(items)})

    def get_delivered_items(self) -> list[OrderItem]:
        """Items that would trigger an alert."""
        return [item for item in self.items if item.is_delivered()]

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the PascalCase keys the orders API expects."""
        return self.model_dump(mode="json", by_alias=True)
