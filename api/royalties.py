"""
api.royalties
=============

Royalty tab endpoints: statistics cards, marketing budget and the payment
schedule generated for a new or renewed contract.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from franchise_ops.errors import InvalidRecord
from franchise_ops.ingest import CampaignRow, ContractRow, PaymentRow
from franchise_ops.royalties import (
    campaigns_in_year,
    compute_royalty_stats,
    generate_payment_schedule,
    marketing_budget,
)
from franchise_ops.settings import Settings
from .deps import get_settings, invalid_record, reference_date

router = APIRouter(prefix="/royalties", tags=["royalties"])

logger = logging.getLogger(__name__)


class PaymentsRequest(BaseModel):
    payments: List[PaymentRow]
    now: Optional[date] = None
    year: Optional[int] = Field(None, ge=1900, le=9999)


class ScheduleRequest(BaseModel):
    contract: ContractRow


class CampaignsRequest(BaseModel):
    campaigns: List[CampaignRow]
    year: int = Field(..., ge=1900, le=9999)


@router.post("/stats")
def royalty_stats(data: PaymentsRequest, settings: Settings = Depends(get_settings)):
    records = [row.to_record() for row in data.payments]
    try:
        stats = compute_royalty_stats(
            records,
            reference_date(data.now),
            settings.grace_window_days,
            settings.pending_window_days,
        )
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return asdict(stats)


@router.post("/budget")
def royalty_budget(data: PaymentsRequest, settings: Settings = Depends(get_settings)):
    records = [row.to_record() for row in data.payments]
    try:
        budget = marketing_budget(
            records,
            reference_date(data.now),
            settings.grace_window_days,
            settings.pending_window_days,
            year=data.year,
        )
    except InvalidRecord as exc:
        raise invalid_record(exc)
    return asdict(budget)


@router.post("/schedule")
def payment_schedule(data: ScheduleRequest):
    try:
        schedule = generate_payment_schedule(data.contract.to_record())
    except InvalidRecord as exc:
        raise invalid_record(exc)
    logger.info(f"Generated {len(schedule)} scheduled payments")
    return [
        {
            "due_date": p.due_date.isoformat(),
            "royalty_amount": p.royalty_amount,
            "marketing_amount": p.marketing_amount,
            "amount": p.amount,
            "status": p.status.value,
        }
        for p in schedule
    ]


@router.post("/campaigns")
def yearly_campaigns(data: CampaignsRequest):
    """Marketing actions that run entirely within *year*."""
    records = [row.to_record() for row in data.campaigns]
    return [
        {
            "name": c.name,
            "status": c.status.value,
            "start_date": c.start_date.isoformat(),
            "end_date": c.end_date.isoformat(),
        }
        for c in campaigns_in_year(records, data.year)
    ]
