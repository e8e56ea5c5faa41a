"""
Models for talking to the alerting endpoint.

Design decisions:
- AlertPayload is the request body, serialized with the PascalCase key
  the alert API expects ({"Message": "..."})
- AlertResult is returned by every send attempt instead of raising, so the
  processor can inspect the outcome and decide to skip-and-continue
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class AlertPayload(BaseModel):
    """Request body POSTed to the alert API."""
    message: str = Field(..., description="Human readable alert line")

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


@dataclass
class AlertResult:
    """
    Result of one alert attempt.

    Captures success/failure and enough context to identify the item.
    """
    success: bool
    order_id: str
    description: str
    message: str
    status_code: Optional[int] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
