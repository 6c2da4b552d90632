"""
franchise_ops.lifecycle
=======================

Status derivation for contracts, royalty payments and marketing campaigns.

Every resolver is a total, side-effect-free function of the record and the
reference time ``now``; nothing in here reads the system clock.  Records
that break a data-integrity rule are rejected with
:class:`~franchise_ops.errors.InvalidRecord` rather than guessed at.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence, Union

from .dates import DateLike, as_date, as_datetime
from .errors import InvalidRecord
from .models import (
    CampaignRecord,
    CampaignStatus,
    ContractRecord,
    ContractStatus,
    ContractType,
    PaymentRecord,
    PaymentStatus,
)
from .settings import settings

logger = logging.getLogger(__name__)

KINDS = ("contract", "payment", "campaign")

_DAY = timedelta(days=1)


@dataclass
class CampaignDisplay:
    """Explicit campaign status plus the derived day counts."""
    status: CampaignStatus
    day_count: int
    days_remaining: int


@dataclass
class StatusResolution:
    """Result of :pyfunc:`resolve_status`: the status and its derived fields."""
    kind: str
    status: Union[ContractStatus, PaymentStatus, CampaignStatus]
    end_date: Optional[date] = None
    day_count: Optional[int] = None
    days_remaining: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "status": self.status.value,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "day_count": self.day_count,
            "days_remaining": self.days_remaining,
        }


# ---------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------
def validate_contract(record: ContractRecord) -> None:
    if record.start_date is None:
        logger.warning("Rejecting contract without start date")
        raise InvalidRecord("contract has no start date", field="start_date")
    duration = record.duration_years
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidRecord(f"duration_years must be a positive integer, got {duration!r}",
                            field="duration_years")


def validate_payment(record: PaymentRecord) -> None:
    if record.due_date is None:
        logger.warning("Rejecting payment without due date")
        raise InvalidRecord("payment has no due date", field="due_date")


# ---------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------
def resolve_contract_status(record: ContractRecord, now: DateLike) -> ContractStatus:
    """
    Terminated contracts stay terminated whatever their dates; otherwise a
    contract is expired only once ``now`` is strictly after its end date.

    >>> resolve_contract_status(ContractRecord(date(2020, 1, 1), 5), date(2025, 1, 1))
    <ContractStatus.ACTIVE: 'active'>
    """
    validate_contract(record)
    if record.terminated:
        return ContractStatus.TERMINATED
    if as_date(now) > record.end_date:
        return ContractStatus.EXPIRED
    return ContractStatus.ACTIVE


def resolve_contract_types(contracts: Sequence[ContractRecord]) -> List[ContractType]:
    """First contract in the caller's sequence is initial, the rest renewals."""
    return [ContractType.INITIAL if i == 0 else ContractType.RENEWAL
            for i in range(len(contracts))]


def suggest_renewal_start(record: ContractRecord) -> date:
    """Day after the termination date, or after the natural end date."""
    validate_contract(record)
    if record.terminated and record.termination_date is not None:
        return record.termination_date + _DAY
    return record.end_date + _DAY


def franchise_status(contracts: Sequence[ContractRecord], now: DateLike) -> Optional[ContractStatus]:
    """Status of the last contract in the sequence, ``None`` without contracts."""
    if not contracts:
        return None
    return resolve_contract_status(contracts[-1], now)


# ---------------------------------------------------------------------
# Royalty payments
# ---------------------------------------------------------------------
def resolve_payment_status(
    record: PaymentRecord,
    now: DateLike,
    grace_window_days: int,
    pending_window_days: int = 0,
) -> PaymentStatus:
    """
    Derive a payment's status; the first matching rule wins:

    1. a payment date, a stored ``paid`` or a latest log entry of ``paid``
       → PAID (final);
    2. due date still ahead → UPCOMING;
    3. inside ``[due, due + grace_window_days)`` → GRACE;
    4. inside ``[due, due + pending_window_days)`` → PENDING;
    5. otherwise → LATE.
    """
    validate_payment(record)
    if record.is_paid():
        return PaymentStatus.PAID

    today = as_date(now)
    due = record.due_date
    if today < due:
        return PaymentStatus.UPCOMING
    if today < due + timedelta(days=grace_window_days):
        return PaymentStatus.GRACE
    if today < due + timedelta(days=pending_window_days):
        return PaymentStatus.PENDING
    return PaymentStatus.LATE


# ---------------------------------------------------------------------
# Campaigns
# ---------------------------------------------------------------------
def resolve_campaign_display(record: CampaignRecord, now: DateLike) -> CampaignDisplay:
    """Pass the status through and add inclusive day count and days left."""
    day_count = max(1, (as_date(record.end_date) - as_date(record.start_date)).days + 1)
    left = (as_datetime(record.end_date) - as_datetime(now)) / _DAY
    return CampaignDisplay(
        status=record.status,
        day_count=day_count,
        days_remaining=max(0, math.ceil(left)),
    )


# ---------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------
def resolve_status(
    kind: str,
    record: Union[ContractRecord, PaymentRecord, CampaignRecord],
    now: DateLike,
    *,
    grace_window_days: Optional[int] = None,
    pending_window_days: Optional[int] = None,
) -> StatusResolution:
    """
    Resolve *record* according to *kind* (``"contract"``, ``"payment"`` or
    ``"campaign"``) and bundle the derived fields with the status.

    Payment windows default to :pydata:`franchise_ops.settings.settings`.
    """
    if kind == "contract":
        status = resolve_contract_status(record, now)
        return StatusResolution(kind, status, end_date=record.end_date)

    if kind == "payment":
        if grace_window_days is None:
            grace_window_days = settings.grace_window_days
        if pending_window_days is None:
            pending_window_days = settings.pending_window_days
        status = resolve_payment_status(record, now, grace_window_days, pending_window_days)
        return StatusResolution(kind, status)

    if kind == "campaign":
        display = resolve_campaign_display(record, now)
        return StatusResolution(
            kind,
            display.status,
            end_date=as_date(record.end_date),
            day_count=display.day_count,
            days_remaining=display.days_remaining,
        )

    raise ValueError(f"unknown record kind {kind!r}; expected one of {', '.join(KINDS)}")
