"""
franchise_ops.royalties
=======================

Royalty-tab calculations built on the payment resolver: the monthly payment
schedule generated when a contract is signed or renewed, the headline
statistics cards, and the yearly marketing budget.

Payments whose stored status is ``grace`` are the contractual grace months
written by :pyfunc:`generate_payment_schedule`; they are treated as waived
and left out of every total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .allocation import round_half_up
from .dates import DateLike, add_months, add_years, as_date, range_within, within, year_bounds
from .lifecycle import resolve_payment_status, validate_contract
from .models import CampaignRecord, ContractRecord, PaymentRecord, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass
class ScheduledPayment:
    """One month of a generated payment schedule."""
    due_date: date
    royalty_amount: float
    marketing_amount: float
    amount: float
    status: PaymentStatus

    def to_record(self) -> PaymentRecord:
        return PaymentRecord(
            due_date=self.due_date,
            explicit_status=self.status,
            amount=self.amount,
            royalty_amount=self.royalty_amount,
            marketing_amount=self.marketing_amount,
        )


@dataclass
class RoyaltyStats:
    total_due: float
    pending_payments: int
    late_payments: int
    collection_rate: int


@dataclass
class MarketingBudget:
    budget: float
    spent: float
    remaining: float


def is_waived(record: PaymentRecord) -> bool:
    """True for a scheduled grace month that was never paid."""
    return not record.is_paid() and record.latest_status() is PaymentStatus.GRACE


def generate_payment_schedule(contract: ContractRecord) -> List[ScheduledPayment]:
    """
    Build the monthly royalty schedule for *contract*.

    Payments fall on the contract's start day every month (clamped to the
    month's last day) until the natural end date.  The first
    ``grace_period_months`` are scheduled as GRACE, the rest as UPCOMING, and
    both amounts grow by ``annual_increase`` percent every twelve months.
    """
    validate_contract(contract)
    start = contract.start_date
    end = add_years(start, contract.duration_years)
    factor = 1 + contract.annual_increase / 100

    royalty, marketing = contract.royalty_amount, contract.marketing_amount
    schedule: List[ScheduledPayment] = []
    month = 0
    due = start
    while due < end:
        status = PaymentStatus.GRACE if month < contract.grace_period_months else PaymentStatus.UPCOMING
        schedule.append(ScheduledPayment(
            due_date=due,
            royalty_amount=round(royalty, 2),
            marketing_amount=round(marketing, 2),
            amount=round(royalty + marketing, 2),
            status=status,
        ))
        month += 1
        if month % 12 == 0:
            royalty *= factor
            marketing *= factor
        due = add_months(start, month)

    logger.debug(f"Scheduled {len(schedule)} payments from {start} to {end}")
    return schedule


def compute_royalty_stats(
    payments: Sequence[PaymentRecord],
    now: DateLike,
    grace_window_days: int,
    pending_window_days: int = 0,
) -> RoyaltyStats:
    """
    Figures for the royalty statistics cards.

    * total due: unpaid amounts due before the same day next month;
    * pending: UPCOMING payments due before that date;
    * late: LATE payments;
    * collection rate: paid share (percent) of the payments due this month.
    """
    today = as_date(now)
    horizon = add_months(today, 1)

    total_due = 0.0
    pending = late = 0
    month_total = month_paid = 0
    for record in payments:
        if is_waived(record):
            continue
        status = resolve_payment_status(record, now, grace_window_days, pending_window_days)
        due = record.due_date
        if status is not PaymentStatus.PAID and due < horizon:
            total_due += record.amount
        if status is PaymentStatus.UPCOMING and due < horizon:
            pending += 1
        if status is PaymentStatus.LATE:
            late += 1
        if (due.year, due.month) == (today.year, today.month):
            month_total += 1
            if status is PaymentStatus.PAID:
                month_paid += 1

    rate = round_half_up(month_paid * 100 / month_total) if month_total else 0
    return RoyaltyStats(
        total_due=round(total_due, 2),
        pending_payments=pending,
        late_payments=late,
        collection_rate=rate,
    )


def marketing_budget(
    payments: Iterable[PaymentRecord],
    now: DateLike,
    grace_window_days: int,
    pending_window_days: int = 0,
    year: Optional[int] = None,
) -> MarketingBudget:
    """
    Marketing fund collected from royalties: the budget is every non-waived
    payment's marketing share, the spent part the paid ones.  *year*
    restricts both to payments due in that calendar year.
    """
    budget = spent = 0.0
    for record in payments:
        if is_waived(record):
            continue
        status = resolve_payment_status(record, now, grace_window_days, pending_window_days)
        if year is not None and not within(record.due_date, *year_bounds(year)):
            continue
        budget += record.marketing_amount
        if status is PaymentStatus.PAID:
            spent += record.marketing_amount
    return MarketingBudget(
        budget=round(budget, 2),
        spent=round(spent, 2),
        remaining=round(budget - spent, 2),
    )


def campaigns_in_year(campaigns: Iterable[CampaignRecord], year: int) -> List[CampaignRecord]:
    """Campaigns that start and end inside *year*."""
    first, last = year_bounds(year)
    return [c for c in campaigns if range_within(c.start_date, c.end_date, first, last)]
