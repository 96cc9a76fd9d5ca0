"""Shared request helpers for API routes."""
import logging
from datetime import datetime, timezone
from typing import Optional, Sized

from wellbeing_engine.errors import InvalidInput

from .config import get_settings

log = logging.getLogger(__name__)


def check_record_limit(records: Sized, field: str) -> None:
    """Reject request bodies carrying more records than max_records."""
    limit = get_settings().max_records
    if len(records) > limit:
        log.warning(f"[API] Rejected {len(records)} {field} (limit {limit})")
        raise InvalidInput(f"Too many {field}: {len(records)} (max {limit})", field=field)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Read timestamps sent without an offset as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
