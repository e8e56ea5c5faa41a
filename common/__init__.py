"""
Shared infrastructure for the delivered-item alert job.

This package contains the pieces both the CLI and the HTTP app rely on:
- Domain models (Order, OrderItem)
- The alert message template
- Layered settings loading
- The outbound HTTP client wrapper
"""

from common.models import Order, OrderItem
from common.templates import render_alert_message
from common.settings import ApiSettings, AppSettings, load_settings
from common.http_client import HttpClientWrapper

__all__ = [
    "Order",
    "OrderItem",
    "render_alert_message",
    "ApiSettings",
    "AppSettings",
    "load_settings",
    "HttpClientWrapper",
]
