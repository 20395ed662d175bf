"""Shared utilities: request context, logging setup, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import get_request_id, reset_request_id, set_request_id
from app.shared.utils import ensure_utc, from_timestamp_utc, generate_cuid, http_date

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "generate_cuid",
    "get_request_id",
    "http_date",
    "reset_request_id",
    "set_request_id",
]
