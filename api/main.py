"""
FastAPI application that runs notification passes on demand.

Useful when the job is driven by a scheduler that can only make HTTP calls.

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import httpx
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

from common.http_client import HttpClientWrapper
from common.settings import get_settings
from order_alerts.factory import create_processor
from order_alerts.processor import OrderProcessor

logger = logging.getLogger("api")

# Module-level instances, built lazily from settings on first request
_http_client: Optional[HttpClientWrapper] = None
_processor: Optional[OrderProcessor] = None


def get_processor() -> OrderProcessor:
    """Get the processor, wiring it from settings on first use."""
    global _http_client, _processor
    if _processor is None:
        try:
            settings = get_settings()
            logging.getLogger().setLevel(settings.log_level.upper())
            http_client = HttpClientWrapper(timeout=settings.request_timeout)
            try:
                _processor = create_processor(settings, http_client)
            except ValueError:
                http_client.close()
                raise
            _http_client = http_client
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Cannot configure order processor: {e}")
            raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    return _processor


def reset_api_state(processor: Optional[OrderProcessor] = None) -> None:
    """Reset API state (for testing)."""
    global _http_client, _processor
    if _http_client is not None:
        _http_client.close()
    _http_client = None
    _processor = processor


class ProcessResponse(BaseModel):
    """Result of one notification pass."""
    request_id: str
    status: str
    completed_at: datetime


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting delivered-item alert API")
    yield
    reset_api_state()
    logger.info("Shutting down")


app = FastAPI(
    title="Delivered Item Alerts",
    description="Runs the delivered-item alert pass over all orders on demand.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "delivered-item-alerts"}


@app.post("/process", response_model=ProcessResponse, tags=["Alerts"])
def process_orders(processor: OrderProcessor = Depends(get_processor)) -> ProcessResponse:
    """
    Run one notification pass over all orders.

    Per-item alert failures do not fail the request. A failure to fetch or
    persist orders stops the pass and is reported as 502.
    """
    request_id = str(uuid4())
    logger.info(f"Notification pass {request_id} started")

    try:
        processor.process_orders()
    except httpx.HTTPError as e:
        logger.error(f"Notification pass {request_id} failed: {e}")
        raise HTTPException(status_code=502, detail=f"Orders API request failed: {e}")
    except ValidationError as e:
        logger.error(f"Notification pass {request_id} failed: {e}")
        raise HTTPException(status_code=502, detail="Orders API returned malformed orders")

    logger.info(f"Notification pass {request_id} completed")
    return ProcessResponse(
        request_id=request_id,
        status="completed",
        completed_at=datetime.now(timezone.utc),
    )
