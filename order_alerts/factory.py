"""
Explicit wiring of the processor and its collaborators.

There is no service container: the entry points build an HttpClientWrapper,
then call create_processor() with the loaded settings.
"""

from common.http_client import HttpClientWrapper
from common.settings import AppSettings
from order_alerts.alert_service import AlertService
from order_alerts.processor import OrderProcessor
from order_alerts.repository import OrderRepository


def create_processor(settings: AppSettings, http_client: HttpClientWrapper) -> OrderProcessor:
    """
    Build an OrderProcessor for the configured endpoints.

    The caller owns http_client and is responsible for closing it.

    Raises:
        ValueError: If a required endpoint URL is blank.
    """
    api = settings.api_settings
    order_repository = OrderRepository(
        http_client,
        orders_api_url=api.orders_api_url,
        update_api_url=api.update_api_url,
    )
    alert_service = AlertService(http_client, alert_api_url=api.alert_api_url)
    return OrderProcessor(order_repository, alert_service)
