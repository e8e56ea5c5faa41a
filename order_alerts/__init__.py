"""
Delivered-item alert workflow.

This package implements the notification pass:
- OrderRepository fetches orders from and persists them to the orders API
- AlertService posts one alert per delivered item
- OrderProcessor walks the orders and decides what to alert and persist
"""

from order_alerts.alert_service import AlertService
from order_alerts.factory import create_processor
from order_alerts.models import AlertPayload, AlertResult
from order_alerts.processor import OrderProcessor
from order_alerts.repository import OrderRepository

__all__ = [
    "AlertService",
    "create_processor",
    "AlertPayload",
    "AlertResult",
    "OrderProcessor",
    "OrderRepository",
]
