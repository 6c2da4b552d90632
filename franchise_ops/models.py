

"""
franchise_ops.models
====================

Dataclasses and enums for the records the dashboard hands to the decision
core: channel shares, franchise contracts, royalty payments (with their
append-only log) and marketing campaigns.  These objects carry **no**
external-library dependencies; validation of raw rows happens earlier, in
:pymod:`franchise_ops.ingest`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from .dates import add_years


class ContractStatus(Enum):
    """Lifecycle states for a franchise contract."""
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"

    def __str__(self) -> str:        # wire value, e.g. "active"
        return self.value


class ContractType(Enum):
    """Position of a contract in a franchise's sequence."""
    INITIAL = "initial"
    RENEWAL = "renewal"

    def __str__(self) -> str:
        return self.value


class PaymentStatus(Enum):
    """Lifecycle states for a royalty payment."""
    PENDING = "pending"
    UPCOMING = "upcoming"
    LATE = "late"
    GRACE = "grace"
    PAID = "paid"

    def __str__(self) -> str:
        return self.value


class CampaignStatus(Enum):
    """Explicit marketing-action states (never derived)."""
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


@dataclass
class ChannelShare:
    """One named slice of a marketing budget, in percent."""
    name: str
    percentage: float


@dataclass
class ContractRecord:
    """
    One contract period of a franchise.

    Parameters
    ----------
    start_date : datetime.date | None
        First day of the contract.  ``None`` is accepted here and rejected
        by the resolver.
    duration_years : int
        Contract length in whole years (must be > 0).
    terminated : bool, default=False
        Already normalised flag; raw ``"yes"``/``"no"`` strings are parsed
        in :pymod:`franchise_ops.ingest`.
    termination_date : datetime.date | None
        Effective termination date, if any.
    royalty_amount, marketing_amount : float
        Monthly amounts billed during the first contract year.
    annual_increase : float
        Yearly increase of both amounts, in percent.
    grace_period_months : int
        Number of leading months scheduled as ``grace``.
    """
    start_date: Optional[date]
    duration_years: int
    terminated: bool = False
    termination_date: Optional[date] = None
    royalty_amount: float = 0.0
    marketing_amount: float = 0.0
    annual_increase: float = 0.0
    grace_period_months: int = 0

    @property
    def end_date(self) -> date:
        """Termination date when terminated, else start + duration."""
        if self.terminated and self.termination_date is not None:
            return self.termination_date
        return add_years(self.start_date, self.duration_years)


@dataclass
class PaymentLogEntry:
    """Single row of a payment's append-only history."""
    created_at: datetime
    status: PaymentStatus
    amount: Optional[float] = None
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class PaymentRecord:
    """
    A scheduled royalty obligation.

    ``explicit_status`` is whatever the store currently holds; the log, when
    present, is authoritative over it, except that a stored ``paid`` is never
    undone by an older log entry.
    """
    due_date: Optional[date]
    payment_date: Optional[date] = None
    explicit_status: Optional[PaymentStatus] = None
    logs: List[PaymentLogEntry] = field(default_factory=list)
    amount: float = 0.0
    royalty_amount: float = 0.0
    marketing_amount: float = 0.0

    def latest_status(self) -> Optional[PaymentStatus]:
        """Status of the most recent log entry, else ``explicit_status``."""
        if not self.logs:
            return self.explicit_status
        # max() keeps the first of equal keys; reversed() makes the later entry win
        latest = max(reversed(self.logs), key=lambda entry: entry.created_at)
        return latest.status

    def is_paid(self) -> bool:
        """Paid once a payment date, a stored ``paid`` or a latest ``paid`` log exists."""
        return (
            self.payment_date is not None
            or self.explicit_status is PaymentStatus.PAID
            or self.latest_status() is PaymentStatus.PAID
        )


@dataclass
class CampaignRecord:
    """A marketing action with an explicit status and a date span."""
    status: CampaignStatus
    start_date: date
    end_date: date
    name: Optional[str] = None


@dataclass
class Franchise:
    """A franchisee with its ordered contract sequence and related rows."""
    name: str
    contracts: List[ContractRecord] = field(default_factory=list)
    payments: List[PaymentRecord] = field(default_factory=list)
    campaigns: List[CampaignRecord] = field(default_factory=list)

    @property
    def slug(self) -> str:
        return self.name.lower().replace(" ", "-")
