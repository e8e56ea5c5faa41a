"""
HTTP trigger for the delivered-item alert job.

This package provides a small FastAPI application that exposes:
- A health check
- An endpoint that runs one notification pass on demand
"""

from api.main import app

__all__ = ["app"]
