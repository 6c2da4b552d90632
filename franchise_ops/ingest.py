"""
franchise_ops.ingest
====================

Validation of raw rows (as they come out of the data store or an HTTP body)
into the plain records of :pymod:`franchise_ops.models`.

The stored ``terminated`` flag shows up as a bool, as ``"yes"``/``"no"`` or
as ``"true"``/``"false"``; :pyfunc:`parse_flag` is the one place that turns it
into a bool so the resolvers only ever see booleans.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .allocation import canonical_channel
from .models import (
    CampaignRecord,
    CampaignStatus,
    ContractRecord,
    PaymentLogEntry,
    PaymentRecord,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

_TRUE = {"yes", "true", "1", "y", "on"}
_FALSE = {"no", "false", "0", "n", "off", ""}


def parse_flag(value: Any) -> bool:
    """
    Coerce a tri-state stored flag into a bool.

    ``None`` means "never set" and reads as False.  Unrecognised strings raise
    :class:`ValueError` so bad data surfaces at ingestion time.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"cannot interpret {value!r} as a boolean flag")


def channel_map(raw: Mapping[str, Any]) -> Dict[str, float]:
    """
    Canonicalise a stored channel → percentage mapping.

    Keys are stripped and lower-cased; when two keys collide the later one
    wins.  Values are converted to float.
    """
    result: Dict[str, float] = {}
    for name, value in raw.items():
        key = canonical_channel(str(name))
        if key in result:
            logger.warning(f"Duplicate channel {key!r} in stored distribution; keeping the later value")
        result[key] = float(value)
    return result


# ---------------------------------------------------------------------
# Row models
# ---------------------------------------------------------------------
class ContractRow(BaseModel):
    """A ``franchise_contracts`` row."""
    start_date: Optional[date] = None
    duration_years: int
    terminated: bool = False
    termination_date: Optional[date] = None
    royalty_amount: float = 0.0
    marketing_amount: float = 0.0
    annual_increase: float = 0.0
    grace_period_months: int = Field(0, ge=0)

    @field_validator("terminated", mode="before")
    @classmethod
    def _coerce_terminated(cls, value: Any) -> bool:
        return parse_flag(value)

    def to_record(self) -> ContractRecord:
        return ContractRecord(
            start_date=self.start_date,
            duration_years=self.duration_years,
            terminated=self.terminated,
            termination_date=self.termination_date,
            royalty_amount=self.royalty_amount,
            marketing_amount=self.marketing_amount,
            annual_increase=self.annual_increase,
            grace_period_months=self.grace_period_months,
        )


class PaymentLogRow(BaseModel):
    """A ``payment_logs`` row."""
    created_at: datetime
    status: PaymentStatus
    amount: Optional[float] = None
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    def to_entry(self) -> PaymentLogEntry:
        return PaymentLogEntry(
            created_at=self.created_at,
            status=self.status,
            amount=self.amount,
            payment_date=self.payment_date,
            payment_method=self.payment_method,
            notes=self.notes,
        )


class PaymentRow(BaseModel):
    """A ``royalty_payments`` row with its log entries attached."""
    due_date: Optional[date] = None
    payment_date: Optional[date] = None
    status: Optional[PaymentStatus] = None
    logs: List[PaymentLogRow] = Field(default_factory=list)
    amount: float = 0.0
    royalty_amount: float = 0.0
    marketing_amount: float = 0.0

    def to_record(self) -> PaymentRecord:
        return PaymentRecord(
            due_date=self.due_date,
            payment_date=self.payment_date,
            explicit_status=self.status,
            logs=[log.to_entry() for log in self.logs],
            amount=self.amount,
            royalty_amount=self.royalty_amount,
            marketing_amount=self.marketing_amount,
        )


class CampaignRow(BaseModel):
    """A ``marketing_actions`` row (only the fields the core needs)."""
    status: CampaignStatus
    start_date: date
    end_date: date
    name: Optional[str] = None

    def to_record(self) -> CampaignRecord:
        return CampaignRecord(
            status=self.status,
            start_date=self.start_date,
            end_date=self.end_date,
            name=self.name,
        )
