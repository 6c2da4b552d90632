"""
api.deps
========

FastAPI dependency providers and small request helpers.

The HTTP layer is the only place allowed to read the wall clock: when a
request body carries no ``now``, :pyfunc:`reference_date` /
:pyfunc:`reference_time` fill it in before the core is called.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException

from franchise_ops.errors import InvalidRecord
from franchise_ops.portfolio import FranchiseRegistry
from franchise_ops.settings import Settings, settings

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Return application settings."""
    return settings


@lru_cache
def get_registry() -> FranchiseRegistry:
    """Singleton in-memory franchise registry (persists across requests)."""
    return FranchiseRegistry()


def reference_date(now: Optional[date]) -> date:
    return now if now is not None else date.today()


def reference_time(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


def invalid_record(exc: InvalidRecord) -> HTTPException:
    """Translate a rejected record into a 422 response."""
    logger.error(f"Invalid record: {exc}")
    return HTTPException(status_code=422, detail={"field": exc.field, "message": str(exc)})
