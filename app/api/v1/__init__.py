"""API v1: JSON endpoints for equipment and equipment files."""

from app.api.v1.router import api_router

__all__ = ["api_router"]
