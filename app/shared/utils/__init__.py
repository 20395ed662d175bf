"""Shared utilities: datetime and ID generators."""

from app.shared.utils.datetime import ensure_utc, from_timestamp_utc, http_date
from app.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "generate_cuid",
    "http_date",
]
